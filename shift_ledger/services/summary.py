from __future__ import annotations

from collections.abc import Sequence

from ..codec.rate import rate
from ..models.config_models import RateMode
from ..models.submission_record import SubmissionRecord

"""Summary line rendering for the dashboard read path.

Format:
SUMMARY records={n} housekeepers={h} completed={c} total={t} avg_rate={r}

avg_rate is the pooled rate sum(completed) / sum(total) in the deployment's
rate mode, so it is not skewed by short shifts.
"""


def _format_rate(value: float | int) -> str:
    if isinstance(value, int) or value == int(value):
        return str(int(value))
    return f"{value:.4f}".rstrip("0").rstrip(".")


def render_summary_line(records: Sequence[SubmissionRecord], mode: RateMode = RateMode.FRACTION) -> str:
    """Render a SUMMARY line for decoded records.

    Examples:
        >>> r = SubmissionRecord(date="2024-05-01", housekeeper="Alex",
        ...                      completed_count=3, total_tasks=4, completion_rate=0.75)
        >>> render_summary_line([r])
        'SUMMARY records=1 housekeepers=1 completed=3 total=4 avg_rate=0.75'
    """
    completed = sum(r.completed_count for r in records)
    total = sum(r.total_tasks for r in records)
    housekeepers = {r.housekeeper for r in records if r.housekeeper}

    return (
        f"SUMMARY records={len(records)} "
        f"housekeepers={len(housekeepers)} "
        f"completed={completed} "
        f"total={total} "
        f"avg_rate={_format_rate(rate(completed, total, mode))}"
    )
