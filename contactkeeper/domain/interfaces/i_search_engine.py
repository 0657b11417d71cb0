"""
ISearchEngine - Port: one public search backend.
Engines are tried in priority order by SearchContactUseCase.
"""

from abc import ABC, abstractmethod
from typing import List

from ..entities.search_candidate import SearchCandidate


class ISearchEngine(ABC):
    name: str = "engine"

    @abstractmethod
    async def attempt(self, query: str) -> List[SearchCandidate]:
        """Run `query` and return every profile candidate found on the page."""
        pass
