"""
IReportWriter - Port: durable, timestamped audit trail of a run.
"""

from abc import ABC, abstractmethod
from typing import List

from ..entities.batch_outcome import BatchOutcome
from ..entities.report_summary import ReportSummary
from ..entities.verification_result import VerificationResult


class IReportWriter(ABC):
    @abstractmethod
    def save(
        self,
        results: List[VerificationResult],
        summary: ReportSummary,
        outcome: BatchOutcome,
    ) -> str:
        """Persist the report and return where it was written."""
        pass
