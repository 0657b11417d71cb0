"""
ReportSummary - aggregate view of a verification run.
Rendered on the console and embedded in the saved report artifact.
"""

from dataclasses import dataclass, field
from typing import Dict, List, Optional

_RULE = "=" * 60


@dataclass
class ReportSummary:
    counts_by_status: Dict[str, int] = field(default_factory=dict)
    total_processed: int = 0
    average_confidence: Optional[float] = None
    insights: List[str] = field(default_factory=list)

    def percentage(self, status: str) -> float:
        if self.total_processed == 0:
            return 0.0
        return round(self.counts_by_status.get(status, 0) * 100.0 / self.total_processed, 1)

    def format_summary(self) -> str:
        """Generate the human-readable summary block."""
        lines = ["VERIFICATION SUMMARY", _RULE]
        for status, count in self.counts_by_status.items():
            lines.append(
                f"{status:<15}: {count:>3} contacts ({self.percentage(status):>5.1f}%)"
            )
        lines.append(_RULE)
        lines.append(f"Total processed: {self.total_processed}")
        if self.average_confidence is not None:
            lines.append(f"Average confidence: {self.average_confidence * 100:.1f}%")
        if self.insights:
            lines.append("")
            lines.append("INSIGHTS & RECOMMENDATIONS")
            lines.extend(f"• {insight}" for insight in self.insights)
        return "\n".join(lines)
