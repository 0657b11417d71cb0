"""
SearchCandidate - an unconfirmed profile reference pulled from a result page.
Transient: produced per search attempt and never persisted.
"""

from dataclasses import dataclass

# Professional network whose public profiles are searched for
PROFILE_NETWORK_DOMAIN = "linkedin.com"


@dataclass(frozen=True)
class SearchCandidate:
    title: str
    url: str
    snippet: str = ""

    @property
    def text(self) -> str:
        """Title and snippet combined, the text a name match is checked against."""
        return f"{self.title} {self.snippet}".strip()
