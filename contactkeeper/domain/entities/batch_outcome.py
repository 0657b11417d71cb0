"""
BatchOutcome - tally of a write-back run, consumed by the report.
"""

from dataclasses import dataclass, field
from typing import List


@dataclass
class BatchOutcome:
    success_count: int = 0
    error_count: int = 0
    errors: List[str] = field(default_factory=list)
    dry_run: bool = False

    @property
    def total(self) -> int:
        return self.success_count + self.error_count

    def record_success(self) -> None:
        self.success_count += 1

    def record_error(self, message: str) -> None:
        self.error_count += 1
        self.errors.append(message)
