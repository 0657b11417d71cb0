"""
Contact Entity - the CRM record being verified.
Owned by the CRM; this system only reads it and writes back derived fields.
"""

from dataclasses import dataclass
from datetime import date, datetime
from typing import Optional

UNKNOWN_COMPANY = "Unknown Company"

# Months are approximated as 30 days when measuring staleness
DAYS_PER_MONTH = 30


@dataclass
class Contact:
    """
    A CRM contact as returned by the verification query.
    Only name and identifier are guaranteed; everything else may be missing.
    """

    id: str
    name: str
    organization: Optional[str] = None
    title: Optional[str] = None
    email: Optional[str] = None
    last_verified: Optional[date] = None
    last_modified: Optional[datetime] = None

    @property
    def has_company(self) -> bool:
        return bool(self.organization and self.organization.strip())

    @property
    def company_name(self) -> str:
        """Organization name, or the placeholder used in results and reports."""
        return self.organization.strip() if self.has_company else UNKNOWN_COMPANY

    def months_since_modified(self, now: Optional[datetime] = None) -> Optional[float]:
        """Age of the record in (30-day) months, or None when never modified."""
        if self.last_modified is None:
            return None
        now = now or datetime.utcnow()
        modified = self.last_modified
        if modified.tzinfo is not None and now.tzinfo is None:
            modified = modified.replace(tzinfo=None)
        elapsed = now - modified
        return elapsed.total_seconds() / (60 * 60 * 24 * DAYS_PER_MONTH)
