"""
Tests for the DI Container.

The Supabase client and the browser are patched so the container can be built
without credentials, network or a Firefox install. The goal is to verify that
Container wires up the full object graph around a single rate limiter.
"""

from unittest.mock import AsyncMock, MagicMock, patch

import pytest

from contactkeeper.infrastructure.config import Config


# ─────────────────────────────────────────────────────────────────────────────
# Helpers
# ─────────────────────────────────────────────────────────────────────────────

FAKE_CONFIG = Config(
    supabase_url="https://fake.supabase.co",
    supabase_service_key="fake-service-key",
    min_request_delay_ms=500,
    batch_size=4,
)


def make_container(config=FAKE_CONFIG):
    """Build a Container with all network-touching adapters patched."""
    with patch("contactkeeper.infrastructure.container.SupabaseAdapter") as mock_sb:
        with patch("contactkeeper.infrastructure.container.CamoufoxBrowserAdapter") as mock_browser:
            mock_sb.return_value = MagicMock()
            mock_browser.return_value = MagicMock()

            from contactkeeper.infrastructure.container import Container
            container = Container(config)

    return container


# ─────────────────────────────────────────────────────────────────────────────
# Container wiring
# ─────────────────────────────────────────────────────────────────────────────


class TestContainerWiring:
    def test_engines_in_priority_order(self):
        container = make_container()
        assert [e.name for e in container.engines] == ["google", "bing", "duckduckgo"]

    def test_single_rate_limiter_shared(self):
        container = make_container()
        limiter = container.rate_limiter
        assert limiter.min_interval_seconds == 0.5
        assert container.search_use_case.rate_limiter is limiter
        assert container.persist_use_case.rate_limiter is limiter
        assert container.process_batch_use_case.rate_limiter is limiter

    def test_batch_size_from_config(self):
        container = make_container()
        assert container.persist_use_case.batch_size == 4

    def test_email_validation_off_by_default(self):
        container = make_container()
        assert container.email_gateway is None
        assert container.assess_use_case.email_gateway is None

    def test_email_validation_on(self):
        container = make_container(FAKE_CONFIG.with_overrides(email_validation=True))
        assert container.email_gateway is not None
        assert container.email_gateway.rate_limiter is container.rate_limiter
        assert container.assess_use_case.email_gateway is container.email_gateway

    def test_contact_delay_only_in_search_mode(self):
        search = make_container(FAKE_CONFIG)
        quality = make_container(FAKE_CONFIG.with_overrides(verification_mode="quality"))
        assert search.process_batch_use_case.contact_delay_seconds == 3.0
        assert quality.process_batch_use_case.contact_delay_seconds == 0.0
        assert quality.verify_use_case.mode == "quality"

    def test_report_writer_uses_report_dir(self):
        container = make_container(FAKE_CONFIG.with_overrides(report_dir="/tmp/out"))
        assert str(container.report_writer.report_dir) == "/tmp/out"


@pytest.mark.asyncio
class TestContainerClose:
    async def test_close_shuts_browser(self):
        container = make_container()
        container.browser.close = AsyncMock()
        await container.close()
        container.browser.close.assert_awaited_once()
