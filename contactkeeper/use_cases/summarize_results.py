"""
SummarizeResultsUseCase - counts, average confidence and insights for a run.
Insights come from a fixed set of threshold rules, so the same results
always produce the same report.
"""

import logging
from typing import Sequence

from ..domain.entities.report_summary import ReportSummary
from ..domain.entities.verification_result import VerificationResult, VerificationStatus

logger = logging.getLogger(__name__)

LOW_CONFIDENCE_THRESHOLD = 0.7


class SummarizeResultsUseCase:
    def execute(self, results: Sequence[VerificationResult]) -> ReportSummary:
        counts = {}
        for status in VerificationStatus:
            n = sum(1 for r in results if r.status == status)
            if n:
                counts[status.value] = n

        confidences = [r.confidence for r in results if r.confidence is not None]
        average = round(sum(confidences) / len(confidences), 4) if confidences else None

        summary = ReportSummary(
            counts_by_status=counts,
            total_processed=len(results),
            average_confidence=average,
        )
        summary.insights = self._insights(results, summary)
        logger.debug(f"[Report] counts={counts} average_confidence={average}")
        return summary

    @staticmethod
    def _insights(results: Sequence[VerificationResult], summary: ReportSummary) -> list:
        insights = []
        counts = summary.counts_by_status

        needs_review = counts.get(VerificationStatus.NEEDS_REVIEW.value, 0)
        if needs_review > 0:
            insights.append(
                f"{needs_review} contacts need manual review for data quality issues"
            )

        outdated = counts.get(VerificationStatus.OUTDATED.value, 0)
        if outdated > 0:
            insights.append(
                f"{outdated} contacts are likely outdated and may need outreach"
            )

        if summary.average_confidence is not None and summary.average_confidence < LOW_CONFIDENCE_THRESHOLD:
            insights.append(
                "Overall data quality is below optimal - consider data enrichment services"
            )

        email_issues = sum(1 for r in results if r.has_email_issue)
        if email_issues > 0:
            insights.append(f"{email_issues} contacts have email-related issues")

        errors = counts.get(VerificationStatus.ERROR.value, 0)
        if errors > 0:
            insights.append(
                f"{errors} contacts failed verification and should be retried"
            )

        return insights
