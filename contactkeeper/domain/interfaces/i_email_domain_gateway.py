"""
IEmailDomainGateway - Port: advisory email-domain validity check.
Implementations resolve mail-exchange records for the address's domain.
"""

from abc import ABC, abstractmethod
from dataclasses import dataclass
from typing import Optional


@dataclass
class EmailDomainResult:
    # None means the check was not performed
    valid: Optional[bool]
    reason: str


class IEmailDomainGateway(ABC):
    """Port for MX-based email domain validation."""

    @abstractmethod
    async def check_email(self, email: str) -> EmailDomainResult:
        """
        Never raises: lookup failures are reported as valid=False with a reason.
        """
        pass
