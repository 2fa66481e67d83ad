from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any

"""SubmissionRecord model for the shift ledger.

A SubmissionRecord is the canonical in-memory form of one shift-completion
submission. It is produced by the normalizer on the write path and by the row
codec on the read path, and serialises to the camelCase JSON shape the
dashboard consumes.
"""

__all__ = [
    "SubmissionRecord",
]


@dataclass(frozen=True)
class SubmissionRecord:
    """One shift-completion submission.

    Invariant: total_tasks >= completed_count >= 0.
    completion_rate is a fraction in [0, 1] or an integer percent in [0, 100]
    depending on the deployment's rate mode.
    """
    date: str  # YYYY-MM-DD
    housekeeper: str = ""
    shift: str = ""  # Morning / Middle / Evening (not enforced)
    completed_count: int = 0
    total_tasks: int = 0
    completion_rate: float | int = 0
    submitted_at: str = ""  # ISO 8601
    incomplete_list: tuple[str, ...] = field(default_factory=tuple)

    def to_dict(self) -> dict[str, Any]:
        """Serialize to the dashboard JSON shape (camelCase keys)."""
        return {
            "date": self.date,
            "housekeeper": self.housekeeper,
            "shift": self.shift,
            "completedCount": self.completed_count,
            "totalTasks": self.total_tasks,
            "completionRate": self.completion_rate,
            "submittedAt": self.submitted_at,
            "incompleteList": list(self.incomplete_list),
        }
