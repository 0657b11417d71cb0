"""
IBrowserGateway - Port: headless browser automation.
Implementations load a page, wait for the network to settle and hand back HTML.
"""

from abc import ABC, abstractmethod

NAVIGATION_TIMEOUT_SECONDS = 15.0


class IBrowserGateway(ABC):
    """Port for rendering search result pages."""

    @abstractmethod
    async def fetch_html(
        self, url: str, timeout_seconds: float = NAVIGATION_TIMEOUT_SECONDS
    ) -> str:
        """
        Navigate to `url`, wait for network idle and return the page HTML.
        Raises on navigation failure or timeout.
        """
        pass

    async def close(self) -> None:
        """Release browser resources. Safe to call more than once."""
        return None
