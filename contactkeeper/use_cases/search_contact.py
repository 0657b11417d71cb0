"""
SearchContactUseCase - ordered multi-engine search with fallback.

Tries each search engine in priority order until one yields at least one
profile candidate. Engine failures (timeouts, navigation errors, missing
selectors) are local to that engine: they are logged and the next engine
is tried. Running out of engines is a normal "nothing found" outcome.
"""

import asyncio
import logging
import random
from typing import Awaitable, Callable, List, Optional, Sequence, Tuple

from ..domain.entities.contact import UNKNOWN_COMPANY
from ..domain.entities.search_candidate import PROFILE_NETWORK_DOMAIN, SearchCandidate
from ..domain.interfaces.i_search_engine import ISearchEngine
from ..infrastructure.rate_limiter import RateLimiter

logger = logging.getLogger(__name__)

MAX_CANDIDATES = 5
JITTER_RANGE_SECONDS = (1.0, 3.0)
# Upper bound for one engine attempt, navigation timeout included
ATTEMPT_TIMEOUT_SECONDS = 30.0


def build_profile_query(person_name: str, company_name: Optional[str] = None) -> str:
    """`"name" "company" site:linkedin.com/in`, company omitted when unknown."""
    parts = [f'"{person_name.strip()}"']
    if company_name and company_name.strip() and company_name.strip() != UNKNOWN_COMPANY:
        parts.append(f'"{company_name.strip()}"')
    parts.append(f"site:{PROFILE_NETWORK_DOMAIN}/in")
    return " ".join(parts)


class SearchContactUseCase:
    def __init__(
        self,
        engines: Sequence[ISearchEngine],
        rate_limiter: Optional[RateLimiter] = None,
        jitter_range: Tuple[float, float] = JITTER_RANGE_SECONDS,
        max_candidates: int = MAX_CANDIDATES,
        attempt_timeout: float = ATTEMPT_TIMEOUT_SECONDS,
        sleep: Callable[[float], Awaitable[None]] = asyncio.sleep,
    ):
        self.engines = list(engines)
        self.rate_limiter = rate_limiter
        self.jitter_range = jitter_range
        self.max_candidates = max_candidates
        self.attempt_timeout = attempt_timeout
        self._sleep = sleep

    async def execute(
        self, person_name: str, company_name: Optional[str] = None
    ) -> List[SearchCandidate]:
        query = build_profile_query(person_name, company_name)
        logger.info(f"[Search] {person_name!r} @ {company_name!r} | query={query!r}")

        for engine in self.engines:
            try:
                await self._pace()
                candidates = await asyncio.wait_for(
                    engine.attempt(query), timeout=self.attempt_timeout
                )
            except asyncio.TimeoutError:
                logger.warning(
                    f"[Search] {engine.name} timed out for {person_name!r} — trying next engine"
                )
                continue
            except Exception as e:
                logger.warning(
                    f"[Search] {engine.name} failed for {person_name!r}: {e!r} — trying next engine"
                )
                continue

            if candidates:
                logger.info(
                    f"[Search] {engine.name} returned {len(candidates)} candidate(s) for {person_name!r}"
                )
                return list(candidates[: self.max_candidates])

            logger.debug(f"[Search] {engine.name} found nothing for {person_name!r}")

        logger.info(f"[Search] All engines exhausted for {person_name!r} — no candidates")
        return []

    async def _pace(self) -> None:
        if self.rate_limiter is not None:
            await self.rate_limiter.throttle()
        low, high = self.jitter_range
        if high > 0:
            await self._sleep(random.uniform(low, high))
