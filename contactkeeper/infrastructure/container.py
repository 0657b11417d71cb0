"""
Dependency Injection Container.
Wires all adapters to their interfaces and composes use cases.
This is the ONLY place that knows about concrete implementations.
"""

from .config import Config
from .rate_limiter import RateLimiter
from ..adapters.camoufox_browser_adapter import CamoufoxBrowserAdapter
from ..adapters.dns_email_domain_adapter import DnsEmailDomainAdapter
from ..adapters.json_report_adapter import JsonReportAdapter
from ..adapters.search_engines import default_engines
from ..adapters.supabase_adapter import SupabaseAdapter
from ..use_cases.assess_data_quality import AssessDataQualityUseCase
from ..use_cases.classify_match import ClassifyMatchUseCase
from ..use_cases.persist_results import PersistResultsUseCase
from ..use_cases.process_batch import ProcessBatchUseCase
from ..use_cases.search_contact import SearchContactUseCase
from ..use_cases.summarize_results import SummarizeResultsUseCase
from ..use_cases.update_contact import UpdateContactUseCase
from ..use_cases.verify_contact import MODE_SEARCH, VerifyContactUseCase


class Container:
    """
    Composes the full application object graph for one run.
    The rate limiter is created here once and shared by every outbound call.
    """

    def __init__(self, config: Config):
        self.config = config
        self.rate_limiter = RateLimiter(min_interval_ms=config.min_request_delay_ms)

        # ── Adapters (Ports & Adapters layer) ─────────────────────────────
        self.repository = SupabaseAdapter(
            url=config.supabase_url,
            key=config.supabase_service_key,
        )
        self.browser = CamoufoxBrowserAdapter(headless=config.browser_headless)
        self.engines = default_engines(self.browser)
        self.email_gateway = (
            DnsEmailDomainAdapter(rate_limiter=self.rate_limiter)
            if config.email_validation
            else None
        )
        self.report_writer = JsonReportAdapter(report_dir=config.report_dir)

        # ── Use Cases (Application layer) ──────────────────────────────────
        self.search_use_case = SearchContactUseCase(
            engines=self.engines,
            rate_limiter=self.rate_limiter,
        )
        self.classify_use_case = ClassifyMatchUseCase()
        self.assess_use_case = AssessDataQualityUseCase(email_gateway=self.email_gateway)
        self.verify_use_case = VerifyContactUseCase(
            search=self.search_use_case,
            classifier=self.classify_use_case,
            assessor=self.assess_use_case,
            mode=config.verification_mode,
        )
        self.persist_use_case = PersistResultsUseCase(
            repository=self.repository,
            rate_limiter=self.rate_limiter,
            batch_size=config.batch_size,
        )
        self.summarize_use_case = SummarizeResultsUseCase()
        self.update_use_case = UpdateContactUseCase(repository=self.repository)
        self.process_batch_use_case = ProcessBatchUseCase(
            repository=self.repository,
            verify_use_case=self.verify_use_case,
            persist_use_case=self.persist_use_case,
            summarize_use_case=self.summarize_use_case,
            rate_limiter=self.rate_limiter,
            report_writer=self.report_writer,
            contact_delay_seconds=(
                config.contact_delay_seconds
                if config.verification_mode == MODE_SEARCH
                else 0.0
            ),
        )

    async def close(self) -> None:
        await self.browser.close()
