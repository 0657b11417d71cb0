"""
ClassifyMatchUseCase - decides what a set of search candidates says about a contact.

Best-effort heuristic, not identity resolution: only the first candidate is
considered, the name is matched token by token against its title and snippet,
and the company must appear in the snippet.
"""

import logging
import re
from dataclasses import dataclass
from typing import List, Optional, Sequence

from ..domain.entities.contact import UNKNOWN_COMPANY
from ..domain.entities.search_candidate import SearchCandidate
from ..domain.entities.verification_result import VerificationStatus

logger = logging.getLogger(__name__)

_TOKEN_RE = re.compile(r"[a-z0-9]+")

NOTES_NOT_FOUND = "Could not find contact"
NOTES_UNCONFIRMED = "Found results but could not confirm match"


@dataclass(frozen=True)
class MatchClassification:
    status: VerificationStatus
    notes: str
    source_url: Optional[str] = None


def _normalize(text: Optional[str]) -> str:
    return " ".join((text or "").lower().split())


def name_tokens(text: Optional[str]) -> List[str]:
    """Lowercase alphanumeric tokens longer than one character."""
    return [t for t in _TOKEN_RE.findall(_normalize(text)) if len(t) > 1]


def name_matches(contact_name: str, text: str) -> bool:
    tokens = name_tokens(contact_name)
    if not tokens:
        return False
    candidate_tokens = set(name_tokens(text))
    return all(
        any(token in other or other in token for other in candidate_tokens)
        for token in tokens
    )


def company_matches(company_name: Optional[str], snippet: str) -> bool:
    company = _normalize(company_name)
    if not company or company == UNKNOWN_COMPANY.lower():
        return False
    return company in _normalize(snippet)


class ClassifyMatchUseCase:
    def execute(
        self,
        contact_name: str,
        company_name: Optional[str],
        candidates: Sequence[SearchCandidate],
    ) -> MatchClassification:
        if not candidates:
            logger.debug(f"[Classify] {contact_name!r}: no candidates")
            return MatchClassification(VerificationStatus.UNKNOWN, NOTES_NOT_FOUND)

        best = candidates[0]
        name_ok = name_matches(contact_name, best.text)
        company_ok = company_matches(company_name, best.snippet)
        logger.debug(
            f"[Classify] {contact_name!r} vs {best.url} | name={name_ok} company={company_ok}"
        )

        if name_ok and company_ok:
            return MatchClassification(
                VerificationStatus.CONFIRMED,
                f"Found matching profile: {best.title}",
                best.url,
            )
        if name_ok:
            return MatchClassification(
                VerificationStatus.OUTDATED,
                f"Person found but may have changed companies: {best.title}",
                best.url,
            )
        return MatchClassification(VerificationStatus.UNKNOWN, NOTES_UNCONFIRMED)
