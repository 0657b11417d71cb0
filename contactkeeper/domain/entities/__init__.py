from .contact import Contact, UNKNOWN_COMPANY
from .search_candidate import SearchCandidate
from .verification_result import VerificationResult, VerificationStatus
from .batch_outcome import BatchOutcome
from .report_summary import ReportSummary

__all__ = [
    "Contact",
    "UNKNOWN_COMPANY",
    "SearchCandidate",
    "VerificationResult",
    "VerificationStatus",
    "BatchOutcome",
    "ReportSummary",
]
