"""
UpdateContactUseCase - manual write of one contact's verification fields.
"""

import logging
from dataclasses import dataclass
from datetime import date
from typing import Callable, Optional

from ..domain.entities.verification_result import MANUAL_STATUSES, VerificationStatus
from ..domain.interfaces.i_crm_repository import ICrmRepository

logger = logging.getLogger(__name__)


@dataclass
class UpdateContactRequest:
    contact_id: str
    status: str
    notes: str = ""
    source_url: Optional[str] = None


class UpdateContactUseCase:
    def __init__(self, repository: ICrmRepository, today: Callable[[], date] = date.today):
        self.repository = repository
        self._today = today

    async def execute(self, request: UpdateContactRequest) -> VerificationStatus:
        try:
            status = VerificationStatus(request.status.strip().upper())
        except ValueError:
            status = None
        if status not in MANUAL_STATUSES:
            allowed = ", ".join(s.value for s in MANUAL_STATUSES)
            raise ValueError(f"Invalid status {request.status!r}; expected one of {allowed}")

        await self.repository.update_verification(
            contact_id=request.contact_id,
            status=status,
            notes=request.notes,
            verified_on=self._today(),
            source_url=request.source_url,
        )
        logger.info(f"[Update] {request.contact_id} → {status.value}")
        return status
