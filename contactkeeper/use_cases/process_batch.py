"""
ProcessBatchUseCase - Top-level orchestrator.

Connects to the CRM, pulls the contacts due for verification, verifies
them one at a time, writes results back in chunks, summarizes the run and
saves the report artifact.
"""

import asyncio
import logging
import time
import uuid
from dataclasses import dataclass, field
from typing import Awaitable, Callable, List, Optional

from ..domain.entities.batch_outcome import BatchOutcome
from ..domain.entities.report_summary import ReportSummary
from ..domain.entities.verification_result import VerificationResult
from ..domain.interfaces.i_crm_repository import ICrmRepository
from ..domain.interfaces.i_report_writer import IReportWriter
from ..infrastructure.rate_limiter import RateLimiter
from .persist_results import PersistResultsUseCase
from .summarize_results import SummarizeResultsUseCase
from .verify_contact import VerifyContactUseCase

logger = logging.getLogger(__name__)

_SEP = "=" * 70


@dataclass
class ProcessBatchRequest:
    limit: int = 10
    months: int = 6
    dry_run: bool = False
    batch_id: str = field(default_factory=lambda: str(uuid.uuid4()))


@dataclass
class ProcessBatchResponse:
    batch_id: str
    results: List[VerificationResult] = field(default_factory=list)
    outcome: BatchOutcome = field(default_factory=BatchOutcome)
    summary: ReportSummary = field(default_factory=ReportSummary)
    report_path: Optional[str] = None
    throttled_calls: int = 0


class ProcessBatchUseCase:
    """
    Orchestrates a full verification run.
    - A CRM connection failure aborts the run before any verification
    - Contacts are processed sequentially, with a courtesy pause between them
    - Per-contact and per-write failures are recorded, never fatal
    """

    def __init__(
        self,
        repository: ICrmRepository,
        verify_use_case: VerifyContactUseCase,
        persist_use_case: PersistResultsUseCase,
        summarize_use_case: SummarizeResultsUseCase,
        rate_limiter: RateLimiter,
        report_writer: Optional[IReportWriter] = None,
        contact_delay_seconds: float = 0.0,
        sleep: Callable[[float], Awaitable[None]] = asyncio.sleep,
    ):
        self.repository = repository
        self.verify = verify_use_case
        self.persist = persist_use_case
        self.summarize = summarize_use_case
        self.rate_limiter = rate_limiter
        self.report_writer = report_writer
        self.contact_delay_seconds = contact_delay_seconds
        self._sleep = sleep

    async def execute(self, request: ProcessBatchRequest) -> ProcessBatchResponse:
        batch_id = request.batch_id
        tag = f"[Batch:{batch_id[:8]}]"
        wall_start = time.time()

        logger.info(_SEP)
        logger.info(f"{tag} *** VERIFICATION RUN STARTING ***")
        logger.info(
            f"{tag} limit={request.limit} | months={request.months} | "
            f"dry_run={request.dry_run} | mode={self.verify.mode}"
        )
        logger.info(_SEP)

        # ── Connect & load contacts (failures here are fatal) ─────────────
        await self.repository.check_connection()
        await self.rate_limiter.throttle()
        contacts = await self.repository.get_contacts_for_verification(
            limit=request.limit, months=request.months
        )
        total = len(contacts)
        logger.info(f"{tag} Loaded {total} contact(s) to verify")

        if total == 0:
            logger.warning(f"{tag} No contacts found that need verification")
            return ProcessBatchResponse(
                batch_id=batch_id,
                outcome=BatchOutcome(dry_run=request.dry_run),
                throttled_calls=self.rate_limiter.call_count,
            )

        for idx, contact in enumerate(contacts):
            logger.debug(
                f"{tag} {idx + 1}. {contact.name} ({contact.company_name}) - "
                f"last verified: {contact.last_verified or 'never'}"
            )

        # ── Sequential verification ─────────────────────────────────────────
        results: List[VerificationResult] = []
        for idx, contact in enumerate(contacts):
            if idx > 0 and self.contact_delay_seconds > 0:
                await self._sleep(self.contact_delay_seconds)

            logger.info(f"{tag} [{idx + 1}/{total}] Processing: {contact.name!r}")
            result = await self.verify.execute(contact)
            results.append(result)

            confidence = (
                f" ({result.confidence * 100:.0f}% confidence)"
                if result.confidence is not None
                else ""
            )
            logger.info(f"{tag} [{idx + 1}/{total}] {result.status.value}{confidence}")

        # ── Write back, summarize, save report ───────────────────────────
        outcome = await self.persist.execute(results, dry_run=request.dry_run)
        summary = self.summarize.execute(results)

        report_path = None
        if self.report_writer is not None:
            try:
                report_path = self.report_writer.save(results, summary, outcome)
            except Exception as e:
                logger.error(f"{tag} Failed to save report: {e!r}", exc_info=True)

        total_elapsed = time.time() - wall_start
        logger.info(_SEP)
        logger.info(f"{tag} *** VERIFICATION RUN COMPLETE ***")
        logger.info(
            f"{tag} processed={total} | written={outcome.success_count} | "
            f"write_errors={outcome.error_count} | "
            f"throttled_calls={self.rate_limiter.call_count} | "
            f"elapsed={total_elapsed:.2f}s"
        )
        if outcome.errors:
            logger.error(f"{tag} ── WRITE ERROR SUMMARY ──")
            for err in outcome.errors:
                logger.error(f"{tag}   {err}")
        logger.info(_SEP)

        return ProcessBatchResponse(
            batch_id=batch_id,
            results=results,
            outcome=outcome,
            summary=summary,
            report_path=report_path,
            throttled_calls=self.rate_limiter.call_count,
        )
