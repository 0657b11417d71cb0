"""
CamoufoxBrowserAdapter - Implements IBrowserGateway.
Renders search result pages in CamoUFox, a hardened Firefox driven through
Playwright that resists the fingerprinting search engines use to block bots.

Requires: pip install camoufox[geoip] && python -m camoufox fetch
"""

import asyncio
import contextlib
import logging
from contextlib import AsyncExitStack
from typing import Optional

from camoufox.async_api import AsyncCamoufox
from playwright.async_api import Error as PlaywrightError

from ..domain.interfaces.i_browser_gateway import (
    NAVIGATION_TIMEOUT_SECONDS,
    IBrowserGateway,
)

logger = logging.getLogger(__name__)

# Extra time allowed for reading the DOM after navigation settles
CONTENT_GRACE_SECONDS = 5.0


class CamoufoxBrowserAdapter(IBrowserGateway):
    """
    One browser per run, started lazily on first navigation.
    Each fetch uses a fresh page that is closed afterwards.
    """

    def __init__(self, headless: bool = True):
        self.headless = headless
        self._browser = None
        self._stack: Optional[AsyncExitStack] = None
        self._lock = asyncio.Lock()

    async def fetch_html(
        self, url: str, timeout_seconds: float = NAVIGATION_TIMEOUT_SECONDS
    ) -> str:
        browser = await self._ensure_browser()
        return await asyncio.wait_for(
            self._render(browser, url, timeout_seconds),
            timeout=timeout_seconds + CONTENT_GRACE_SECONDS,
        )

    async def _render(self, browser, url: str, timeout_seconds: float) -> str:
        page = await browser.new_page()
        try:
            await page.goto(
                url, wait_until="networkidle", timeout=timeout_seconds * 1000
            )
            html = await page.content()
            logger.debug(f"[Browser] {url} → {len(html):,} bytes")
            return html
        finally:
            with contextlib.suppress(PlaywrightError):
                await page.close()

    async def _ensure_browser(self):
        async with self._lock:
            if self._browser is None:
                logger.info(f"[Browser] Launching CamoUFox (headless={self.headless})")
                stack = AsyncExitStack()
                self._browser = await stack.enter_async_context(
                    AsyncCamoufox(headless=self.headless)
                )
                self._stack = stack
        return self._browser

    async def close(self) -> None:
        if self._stack is not None:
            stack, self._stack, self._browser = self._stack, None, None
            with contextlib.suppress(PlaywrightError):
                await stack.aclose()
            logger.debug("[Browser] Closed")
