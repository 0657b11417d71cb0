"""
ICrmRepository - Port: the CRM that owns the contact records.
The domain doesn't know whether that is Salesforce, Supabase or a spreadsheet.
"""

from abc import ABC, abstractmethod
from datetime import date
from typing import Dict, List, Optional

from ..entities.contact import Contact
from ..entities.verification_result import VerificationStatus


class CrmConnectionError(RuntimeError):
    """Raised when the CRM cannot be reached. Fatal for a run."""


class ICrmRepository(ABC):
    """Port for reading contacts and writing verification fields back."""

    @abstractmethod
    async def check_connection(self) -> None:
        """Raise CrmConnectionError if the CRM is unreachable."""
        pass

    @abstractmethod
    async def get_contacts_for_verification(
        self, limit: int = 10, months: int = 6
    ) -> List[Contact]:
        """
        Contacts never verified, or not verified within `months`,
        most recently modified first, at most `limit` of them.
        """
        pass

    @abstractmethod
    async def update_verification(
        self,
        contact_id: str,
        status: VerificationStatus,
        notes: str,
        verified_on: date,
        source_url: Optional[str] = None,
    ) -> None:
        """Write status, notes, verification date and (optionally) source URL."""
        pass

    @abstractmethod
    async def get_verification_stats(self) -> Dict[str, int]:
        """Number of contacts per stored verification status."""
        pass
