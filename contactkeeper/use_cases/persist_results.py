"""
PersistResultsUseCase - writes verification results back to the CRM.

Results are written in fixed-size chunks: every write of a chunk runs
concurrently, and the next chunk starts only when the whole chunk is done.
The rate limiter is paid once per chunk. A failed write is recorded and
never affects its siblings or later chunks.
"""

import asyncio
import logging
from datetime import date
from typing import Callable, List, Optional, Sequence

from ..domain.entities.batch_outcome import BatchOutcome
from ..domain.entities.verification_result import VerificationResult
from ..domain.interfaces.i_crm_repository import ICrmRepository
from ..infrastructure.rate_limiter import RateLimiter

logger = logging.getLogger(__name__)

DEFAULT_BATCH_SIZE = 10


def chunked(items: Sequence, size: int) -> List[Sequence]:
    return [items[i : i + size] for i in range(0, len(items), size)]


class PersistResultsUseCase:
    def __init__(
        self,
        repository: ICrmRepository,
        rate_limiter: RateLimiter,
        batch_size: int = DEFAULT_BATCH_SIZE,
        today: Callable[[], date] = date.today,
    ):
        self.repository = repository
        self.rate_limiter = rate_limiter
        self.batch_size = max(1, int(batch_size))
        self._today = today

    async def execute(
        self, results: Sequence[VerificationResult], dry_run: bool = False
    ) -> BatchOutcome:
        outcome = BatchOutcome(dry_run=dry_run)

        if dry_run:
            outcome.success_count = len(results)
            logger.info(f"[Persist] DRY RUN — {len(results)} result(s) not written to the CRM")
            return outcome

        verified_on = self._today()
        chunks = chunked(list(results), self.batch_size)
        for index, chunk in enumerate(chunks, start=1):
            await self.rate_limiter.throttle()
            logger.debug(f"[Persist] Chunk {index}/{len(chunks)} ({len(chunk)} write(s))")
            errors = await asyncio.gather(
                *[self._write_one(result, verified_on) for result in chunk]
            )
            for error in errors:
                if error is None:
                    outcome.record_success()
                else:
                    outcome.record_error(error)

        if outcome.error_count:
            logger.warning(
                f"[Persist] Updated {outcome.success_count} contact(s) "
                f"with {outcome.error_count} error(s)"
            )
        else:
            logger.info(f"[Persist] Updated all {outcome.success_count} contact(s)")
        return outcome

    async def _write_one(
        self, result: VerificationResult, verified_on: date
    ) -> Optional[str]:
        """Returns None on success, otherwise the error message."""
        try:
            await self.repository.update_verification(
                contact_id=result.contact_id,
                status=result.status,
                notes=result.notes,
                verified_on=verified_on,
                source_url=result.source_url,
            )
        except Exception as e:
            message = f"Failed to update {result.contact_name}: {e}"
            logger.error(f"[Persist] {message}")
            return message
        logger.debug(f"[Persist] Updated {result.contact_name!r} → {result.status.value}")
        return None
