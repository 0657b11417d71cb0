"""
VerificationResult - the sole output artifact of verifying one contact.
"""

from dataclasses import dataclass
from enum import Enum
from typing import Optional, Tuple


class VerificationStatus(str, Enum):
    CONFIRMED = "CONFIRMED"
    OUTDATED = "OUTDATED"
    UNKNOWN = "UNKNOWN"
    NEEDS_REVIEW = "NEEDS_REVIEW"
    ERROR = "ERROR"


# Statuses an operator may set by hand on a single record
MANUAL_STATUSES = (
    VerificationStatus.CONFIRMED,
    VerificationStatus.OUTDATED,
    VerificationStatus.UNKNOWN,
    VerificationStatus.NEEDS_REVIEW,
)


@dataclass(frozen=True)
class VerificationResult:
    """
    Outcome of checking a single contact's currency.
    Created once per contact per run and never mutated afterwards.
    `confidence` is only produced by the data-quality path.
    """

    contact_id: str
    contact_name: str
    company: str
    status: VerificationStatus
    notes: str
    confidence: Optional[float] = None
    source_url: Optional[str] = None
    issues: Tuple[str, ...] = ()
    recommendations: Tuple[str, ...] = ()

    @property
    def has_email_issue(self) -> bool:
        return any("email" in issue.lower() for issue in self.issues)

    @property
    def is_error(self) -> bool:
        return self.status == VerificationStatus.ERROR
