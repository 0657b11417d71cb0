"""
AssessDataQualityUseCase - verification without external search.

Scores a contact on its intrinsic CRM fields (plus an optional MX check of
the email domain). Starts at 0.8 confidence and status GOOD; every issue
found costs a fixed penalty and adds a recommendation.
"""

import logging
from datetime import datetime
from typing import Callable, List, Optional

from ..domain.entities.contact import Contact
from ..domain.entities.verification_result import VerificationResult, VerificationStatus
from ..domain.interfaces.i_email_domain_gateway import IEmailDomainGateway

logger = logging.getLogger(__name__)

BASE_CONFIDENCE = 0.8
PENALTY_NAME = 0.3
PENALTY_COMPANY = 0.2
PENALTY_TITLE = 0.1
PENALTY_EMAIL = 0.2
PENALTY_STALE = 0.1

STALE_AFTER_MONTHS = 12
REVIEW_MAX_ISSUES = 2
REVIEW_MIN_CONFIDENCE = 0.5

QUALITY_GOOD = "GOOD"
QUALITY_FAIR = "FAIR"
QUALITY_POOR = "POOR"


class _Assessment:
    """Accumulator for one contact's issues, recommendations and score."""

    def __init__(self):
        self.quality = QUALITY_GOOD
        self.confidence = BASE_CONFIDENCE
        self.issues: List[str] = []
        self.recommendations: List[str] = []

    def add_issue(
        self, issue: str, recommendation: str, penalty: float, quality: Optional[str] = None
    ) -> None:
        self.issues.append(issue)
        self.recommendations.append(recommendation)
        # Two decimals keeps 0.8 - 0.2 - 0.1 exactly 0.5
        self.confidence = round(self.confidence - penalty, 2)
        # The most recent labelled issue sets the label
        if quality:
            self.quality = quality

    @property
    def clamped_confidence(self) -> float:
        return max(0.0, min(1.0, self.confidence))

    def status(self) -> VerificationStatus:
        if not self.issues:
            return VerificationStatus.CONFIRMED
        if len(self.issues) <= REVIEW_MAX_ISSUES and self.clamped_confidence > REVIEW_MIN_CONFIDENCE:
            return VerificationStatus.NEEDS_REVIEW
        return VerificationStatus.OUTDATED

    def notes(self) -> str:
        parts = [f"Data quality assessment: {self.quality}."]
        if self.issues:
            parts.append(f"Issues found: {', '.join(self.issues)}.")
        if self.recommendations:
            parts.append(f"Recommendations: {', '.join(self.recommendations)}.")
        parts.append(f"Confidence score: {self.clamped_confidence * 100:.0f}%.")
        return " ".join(parts)


class AssessDataQualityUseCase:
    def __init__(
        self,
        email_gateway: Optional[IEmailDomainGateway] = None,
        now: Callable[[], datetime] = datetime.utcnow,
    ):
        # No gateway means email validation is switched off
        self.email_gateway = email_gateway
        self._now = now

    async def execute(self, contact: Contact) -> VerificationResult:
        logger.debug(f"[Quality] Assessing {contact.name!r}")
        a = _Assessment()

        if not contact.name or len(contact.name.strip()) < 2:
            a.add_issue(
                "Name is missing or too short",
                "Add the contact's full name",
                PENALTY_NAME,
                QUALITY_POOR,
            )

        if not contact.has_company:
            a.add_issue(
                "No company information available",
                "Link the contact to a company account",
                PENALTY_COMPANY,
                QUALITY_FAIR,
            )

        if not (contact.title and contact.title.strip()):
            a.add_issue(
                "Job title is missing",
                "Add job title for better identification",
                PENALTY_TITLE,
            )

        if contact.email:
            if self.email_gateway is not None:
                check = await self.email_gateway.check_email(contact.email)
                if check.valid is False:
                    a.add_issue(
                        f"Email issue: {check.reason}",
                        "Confirm the contact's current email address",
                        PENALTY_EMAIL,
                        QUALITY_FAIR,
                    )
                elif check.valid is True:
                    a.recommendations.append("Email domain appears valid")
        else:
            a.recommendations.append("Consider adding email address")

        months = contact.months_since_modified(self._now())
        if months is not None and months > STALE_AFTER_MONTHS:
            a.add_issue(
                f"Contact not updated in {int(months)} months",
                "Consider reaching out to verify current information",
                PENALTY_STALE,
            )

        status = a.status()
        logger.info(
            f"[Quality] {contact.name!r} → {status.value} | "
            f"quality={a.quality} | issues={len(a.issues)} | "
            f"confidence={a.clamped_confidence:.2f}"
        )
        return VerificationResult(
            contact_id=contact.id,
            contact_name=contact.name,
            company=contact.company_name,
            status=status,
            notes=a.notes(),
            confidence=a.clamped_confidence,
            issues=tuple(a.issues),
            recommendations=tuple(a.recommendations),
        )
