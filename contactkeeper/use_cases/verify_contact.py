"""
VerifyContactUseCase - turns one Contact into exactly one VerificationResult.

Two paths:
  search   : multi-engine profile search, then match classification
  quality  : intrinsic data-quality assessment, no external search

Any exception raised along the way is converted into an ERROR result so
the contact is never dropped from the run.
"""

import logging
from typing import Optional

from ..domain.entities.contact import Contact
from ..domain.entities.verification_result import VerificationResult, VerificationStatus
from .assess_data_quality import AssessDataQualityUseCase
from .classify_match import ClassifyMatchUseCase, MatchClassification
from .search_contact import SearchContactUseCase

logger = logging.getLogger(__name__)

MODE_SEARCH = "search"
MODE_QUALITY = "quality"


def error_result(
    contact: Contact, error: Exception, confidence: Optional[float] = None
) -> VerificationResult:
    return VerificationResult(
        contact_id=contact.id,
        contact_name=contact.name,
        company=contact.company_name,
        status=VerificationStatus.ERROR,
        notes=f"Error during verification: {error}",
        confidence=confidence,
        issues=("Processing error occurred",),
        recommendations=("Manual review required",),
    )


class VerifyContactUseCase:
    """
    Dependencies injected via constructor. The mode picks the path for
    every contact of the run.
    """

    def __init__(
        self,
        search: SearchContactUseCase,
        classifier: ClassifyMatchUseCase,
        assessor: AssessDataQualityUseCase,
        mode: str = MODE_SEARCH,
    ):
        if mode not in (MODE_SEARCH, MODE_QUALITY):
            raise ValueError(f"Unknown verification mode: {mode!r}")
        self.search = search
        self.classifier = classifier
        self.assessor = assessor
        self.mode = mode

    async def execute(self, contact: Contact) -> VerificationResult:
        try:
            if self.mode == MODE_QUALITY:
                return await self.assessor.execute(contact)
            return await self._verify_by_search(contact)
        except Exception as e:
            logger.error(
                f"[Verify] Error processing {contact.name!r} @ {contact.company_name!r} "
                f"(mode={self.mode}): {e!r}",
                exc_info=True,
            )
            # The data-quality path always reports a score, so failures score zero
            confidence = 0.0 if self.mode == MODE_QUALITY else None
            return error_result(contact, e, confidence=confidence)

    async def verify_by_name(
        self, contact_name: str, company_name: Optional[str] = None
    ) -> MatchClassification:
        """Search and classify a person that isn't loaded from the CRM."""
        candidates = await self.search.execute(contact_name, company_name)
        return self.classifier.execute(contact_name, company_name, candidates)

    async def _verify_by_search(self, contact: Contact) -> VerificationResult:
        classification = await self.verify_by_name(contact.name, contact.organization)
        logger.info(
            f"[Verify] {contact.name!r} → {classification.status.value} | "
            f"source={classification.source_url!r}"
        )
        return VerificationResult(
            contact_id=contact.id,
            contact_name=contact.name,
            company=contact.company_name,
            status=classification.status,
            notes=classification.notes,
            source_url=classification.source_url,
        )
