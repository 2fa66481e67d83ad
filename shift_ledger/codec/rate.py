from __future__ import annotations

from decimal import ROUND_HALF_UP, Decimal

from ..models.config_models import RateMode

"""Completion rate calculation.

The rate is always derived from the resolved counts, never taken from the
caller. RateMode is fixed per deployment so the completionRate column keeps
one meaning over time.
"""

__all__ = [
    "rate",
]


def rate(completed: int, total: int, mode: RateMode | str = RateMode.FRACTION) -> float | int:
    """Return the completion rate for ``completed`` out of ``total``.

    Args:
        completed: Completed task count
        total: Total task count
        mode: RateMode (or its string value)

    Returns:
        FRACTION: float in [0, 1], full precision
        PERCENT: int in [0, 100], rounded half away from zero
        ``total <= 0`` yields 0 in either mode.

    Raises:
        ValueError: If ``mode`` is not a known RateMode
    """
    mode = RateMode(mode)
    if total <= 0:
        return 0.0 if mode is RateMode.FRACTION else 0
    completed = min(max(completed, 0), total)

    if mode is RateMode.FRACTION:
        return completed / total

    # Decimal so that 12.5 -> 13 and not banker's rounding
    percent = (Decimal(completed) * 100 / Decimal(total)).quantize(Decimal(1), rounding=ROUND_HALF_UP)
    return int(percent)
