"""
RateLimiter - process-wide spacing of outbound operations.

One instance is created per run and passed explicitly to everything that
talks to the outside world (search navigations, MX lookups, CRM writes).
"""

import asyncio
import logging
import time
from typing import Awaitable, Callable, Optional

logger = logging.getLogger(__name__)

DEFAULT_MIN_INTERVAL_MS = 1000


class RateLimiter:
    """
    Enforces a minimum interval between consecutive `throttle()` returns.
    Waiters are served in arrival order; the lock is held across the sleep so
    two overlapping callers can never return closer together than the interval.
    """

    def __init__(
        self,
        min_interval_ms: float = DEFAULT_MIN_INTERVAL_MS,
        clock: Callable[[], float] = time.monotonic,
        sleep: Callable[[float], Awaitable[None]] = asyncio.sleep,
    ):
        self.min_interval_seconds = max(float(min_interval_ms), 0.0) / 1000.0
        self._clock = clock
        self._sleep = sleep
        self._lock = asyncio.Lock()
        self._last_call: Optional[float] = None
        self.call_count = 0

    async def throttle(self) -> None:
        async with self._lock:
            if self._last_call is not None:
                wait = self._last_call + self.min_interval_seconds - self._clock()
                if wait > 0:
                    logger.debug(f"[RateLimit] Sleeping {wait:.3f}s")
                    await self._sleep(wait)
            self._last_call = self._clock()
            self.call_count += 1
