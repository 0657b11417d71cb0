"""
Tests for UpdateContactUseCase — manual status writes.
"""

from datetime import date

import pytest

from contactkeeper.domain.entities.verification_result import VerificationStatus
from contactkeeper.use_cases.update_contact import UpdateContactRequest, UpdateContactUseCase


@pytest.mark.asyncio
class TestUpdateContact:
    async def test_writes_normalized_status(self, mock_repository):
        use_case = UpdateContactUseCase(mock_repository, today=lambda: date(2025, 6, 1))
        status = await use_case.execute(
            UpdateContactRequest(contact_id="c-1", status=" outdated ", notes="Left in May")
        )

        assert status == VerificationStatus.OUTDATED
        mock_repository.update_verification.assert_awaited_once_with(
            contact_id="c-1",
            status=VerificationStatus.OUTDATED,
            notes="Left in May",
            verified_on=date(2025, 6, 1),
            source_url=None,
        )

    @pytest.mark.parametrize("status", ["ERROR", "GONE", ""])
    async def test_rejects_non_manual_status(self, mock_repository, status):
        use_case = UpdateContactUseCase(mock_repository)
        with pytest.raises(ValueError, match="Invalid status"):
            await use_case.execute(UpdateContactRequest(contact_id="c-1", status=status))
        mock_repository.update_verification.assert_not_called()
