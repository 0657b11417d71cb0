"""
Tests for ProcessBatchUseCase — the full verification run.

Uses real use cases wired to mocked engines and a mocked repository, so the
whole pipeline runs in memory.
"""

from unittest.mock import AsyncMock, MagicMock

import pytest

from contactkeeper.domain.entities.verification_result import VerificationStatus
from contactkeeper.domain.interfaces.i_crm_repository import CrmConnectionError
from contactkeeper.use_cases.assess_data_quality import AssessDataQualityUseCase
from contactkeeper.use_cases.classify_match import ClassifyMatchUseCase
from contactkeeper.use_cases.persist_results import PersistResultsUseCase
from contactkeeper.use_cases.process_batch import ProcessBatchRequest, ProcessBatchUseCase
from contactkeeper.use_cases.search_contact import SearchContactUseCase
from contactkeeper.use_cases.summarize_results import SummarizeResultsUseCase
from contactkeeper.use_cases.verify_contact import MODE_QUALITY, MODE_SEARCH, VerifyContactUseCase
from tests.conftest import NOW, make_candidate, make_contact, make_engine


def build_use_case(
    repository,
    rate_limiter,
    engines=None,
    mode=MODE_SEARCH,
    report_writer=None,
    contact_delay_seconds=0.0,
    sleep=None,
    batch_size=10,
) -> ProcessBatchUseCase:
    search = SearchContactUseCase(engines or [], rate_limiter=rate_limiter, jitter_range=(0.0, 0.0))
    verify = VerifyContactUseCase(
        search=search,
        classifier=ClassifyMatchUseCase(),
        assessor=AssessDataQualityUseCase(now=lambda: NOW),
        mode=mode,
    )
    kwargs = {}
    if sleep is not None:
        kwargs["sleep"] = sleep
    return ProcessBatchUseCase(
        repository=repository,
        verify_use_case=verify,
        persist_use_case=PersistResultsUseCase(repository, rate_limiter, batch_size=batch_size),
        summarize_use_case=SummarizeResultsUseCase(),
        rate_limiter=rate_limiter,
        report_writer=report_writer,
        contact_delay_seconds=contact_delay_seconds,
        **kwargs,
    )


def contacts(n):
    return [make_contact(name=f"Person {chr(65 + i)}ndrews", contact_id=f"c-{i}") for i in range(n)]


# ─────────────────────────────────────────────────────────────────────────────
# Loading
# ─────────────────────────────────────────────────────────────────────────────


@pytest.mark.asyncio
class TestLoading:
    async def test_connection_failure_aborts_run(self, mock_repository, rate_limiter):
        mock_repository.check_connection.side_effect = CrmConnectionError("bad key")
        use_case = build_use_case(mock_repository, rate_limiter)

        with pytest.raises(CrmConnectionError):
            await use_case.execute(ProcessBatchRequest())

        mock_repository.get_contacts_for_verification.assert_not_called()
        mock_repository.update_verification.assert_not_called()

    async def test_request_limit_and_months_forwarded(self, mock_repository, rate_limiter):
        use_case = build_use_case(mock_repository, rate_limiter)
        await use_case.execute(ProcessBatchRequest(limit=25, months=3))
        mock_repository.get_contacts_for_verification.assert_awaited_once_with(limit=25, months=3)

    async def test_no_contacts_is_a_normal_empty_run(self, mock_repository, rate_limiter):
        writer = MagicMock()
        use_case = build_use_case(mock_repository, rate_limiter, report_writer=writer)
        response = await use_case.execute(ProcessBatchRequest())

        assert response.results == []
        assert response.summary.total_processed == 0
        assert response.report_path is None
        writer.save.assert_not_called()
        mock_repository.update_verification.assert_not_called()


# ─────────────────────────────────────────────────────────────────────────────
# Verification & write-back
# ─────────────────────────────────────────────────────────────────────────────


@pytest.mark.asyncio
class TestRun:
    async def test_every_contact_yields_one_result_when_all_searches_fail(
        self, mock_repository, rate_limiter
    ):
        mock_repository.get_contacts_for_verification.return_value = contacts(4)
        engines = [
            make_engine("google", error=RuntimeError("blocked")),
            make_engine("bing", error=RuntimeError("blocked")),
        ]
        use_case = build_use_case(mock_repository, rate_limiter, engines=engines)
        response = await use_case.execute(ProcessBatchRequest())

        assert len(response.results) == 4
        assert [r.contact_id for r in response.results] == ["c-0", "c-1", "c-2", "c-3"]
        assert all(r.status == VerificationStatus.UNKNOWN for r in response.results)
        assert mock_repository.update_verification.await_count == 4
        assert response.summary.counts_by_status == {"UNKNOWN": 4}

    async def test_confirmed_results_written_with_source_url(self, mock_repository, rate_limiter):
        mock_repository.get_contacts_for_verification.return_value = [make_contact(contact_id="c-1")]
        engines = [make_engine("google", [make_candidate()])]
        use_case = build_use_case(mock_repository, rate_limiter, engines=engines)
        response = await use_case.execute(ProcessBatchRequest())

        assert response.results[0].status == VerificationStatus.CONFIRMED
        kwargs = mock_repository.update_verification.await_args.kwargs
        assert kwargs["contact_id"] == "c-1"
        assert kwargs["source_url"] == "https://www.linkedin.com/in/janesmith"

    async def test_dry_run_writes_nothing(self, mock_repository, rate_limiter):
        mock_repository.get_contacts_for_verification.return_value = contacts(3)
        use_case = build_use_case(mock_repository, rate_limiter, mode=MODE_QUALITY)
        response = await use_case.execute(ProcessBatchRequest(dry_run=True))

        assert response.outcome.dry_run is True
        assert response.outcome.success_count == 3
        mock_repository.update_verification.assert_not_called()

    async def test_write_failures_are_reported_not_raised(self, mock_repository, rate_limiter):
        mock_repository.get_contacts_for_verification.return_value = contacts(2)
        mock_repository.update_verification.side_effect = RuntimeError("timeout")
        use_case = build_use_case(mock_repository, rate_limiter, mode=MODE_QUALITY)
        response = await use_case.execute(ProcessBatchRequest())

        assert response.outcome.error_count == 2
        assert len(response.results) == 2

    async def test_throttled_calls_counts_load_searches_and_writes(self, mock_repository, rate_limiter):
        mock_repository.get_contacts_for_verification.return_value = contacts(3)
        engines = [make_engine("google", []), make_engine("bing", [])]
        use_case = build_use_case(mock_repository, rate_limiter, engines=engines, batch_size=2)
        response = await use_case.execute(ProcessBatchRequest())

        # 1 load + 3 contacts x 2 engines + 2 write chunks
        assert response.throttled_calls == 1 + 6 + 2


# ─────────────────────────────────────────────────────────────────────────────
# Pacing
# ─────────────────────────────────────────────────────────────────────────────


@pytest.mark.asyncio
class TestContactDelay:
    async def test_delay_between_contacts_only(self, mock_repository, rate_limiter):
        mock_repository.get_contacts_for_verification.return_value = contacts(3)
        sleep = AsyncMock()
        use_case = build_use_case(
            mock_repository, rate_limiter, contact_delay_seconds=3.0, sleep=sleep
        )
        await use_case.execute(ProcessBatchRequest())

        assert sleep.await_count == 2
        sleep.assert_awaited_with(3.0)

    async def test_no_delay_when_disabled(self, mock_repository, rate_limiter):
        mock_repository.get_contacts_for_verification.return_value = contacts(3)
        sleep = AsyncMock()
        use_case = build_use_case(mock_repository, rate_limiter, sleep=sleep)
        await use_case.execute(ProcessBatchRequest())
        sleep.assert_not_called()


# ─────────────────────────────────────────────────────────────────────────────
# Report
# ─────────────────────────────────────────────────────────────────────────────


@pytest.mark.asyncio
class TestReport:
    async def test_report_saved_with_run_data(self, mock_repository, rate_limiter):
        mock_repository.get_contacts_for_verification.return_value = contacts(2)
        writer = MagicMock()
        writer.save.return_value = "/tmp/verification-report-1.json"
        use_case = build_use_case(mock_repository, rate_limiter, mode=MODE_QUALITY, report_writer=writer)
        response = await use_case.execute(ProcessBatchRequest())

        assert response.report_path == "/tmp/verification-report-1.json"
        results, summary, outcome = writer.save.call_args.args
        assert len(results) == 2
        assert summary.total_processed == 2
        assert outcome.success_count == 2

    async def test_report_failure_does_not_fail_run(self, mock_repository, rate_limiter):
        mock_repository.get_contacts_for_verification.return_value = contacts(1)
        writer = MagicMock()
        writer.save.side_effect = OSError("disk full")
        use_case = build_use_case(mock_repository, rate_limiter, mode=MODE_QUALITY, report_writer=writer)
        response = await use_case.execute(ProcessBatchRequest())

        assert response.report_path is None
        assert len(response.results) == 1
