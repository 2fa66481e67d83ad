from __future__ import annotations

import logging
import math
from collections.abc import Mapping
from datetime import UTC, date, datetime
from typing import Any

from ..models.config_models import CodecConfig
from ..models.submission_record import SubmissionRecord
from .list_field import split_delimited
from .rate import rate

"""Submission payload normalization.

The form is the only producer of payloads, so normalization favours
availability: every field is resolved independently and anything missing,
mistyped or malformed is replaced by a default. ``normalize`` never raises.
"""

__all__ = [
    "normalize",
    "iso_timestamp",
]

logger = logging.getLogger(__name__)

# Payload keys accepted for the incomplete task list, in lookup order
INCOMPLETE_KEYS = ("incomplete", "incompleteList", "incompleteTasks")


def iso_timestamp(moment: datetime) -> str:
    """Format an aware datetime as ISO 8601 UTC with a 'Z' suffix."""
    return moment.astimezone(UTC).isoformat().replace("+00:00", "Z")


def _finite_number(value: Any) -> float | int | None:
    # bool is an int subclass but never a count
    if isinstance(value, bool) or not isinstance(value, (int, float)):
        return None
    if isinstance(value, float) and not math.isfinite(value):
        return None
    return value


def _text(value: Any) -> str:
    return value if isinstance(value, str) else ""


def _resolve_date(value: Any, now: datetime) -> str:
    if isinstance(value, str) and value:
        candidate = value.strip()[:10]
        try:
            return date.fromisoformat(candidate).isoformat()
        except ValueError:
            logger.debug(f"normalize: invalid date {value!r} -> default")
    return now.astimezone(UTC).date().isoformat()


def _resolve_incomplete(payload: Mapping[str, Any]) -> tuple[str, ...]:
    raw = None
    for key in INCOMPLETE_KEYS:
        if key in payload:
            raw = payload[key]
            break
    if isinstance(raw, (list, tuple)):
        items = []
        for item in raw:
            if isinstance(item, str):
                items.append(item.strip())
            elif _finite_number(item) is not None:
                items.append(str(item))
        return tuple(i for i in items if i)
    if isinstance(raw, str):
        return split_delimited(raw)
    if raw is not None:
        logger.debug(f"normalize: unsupported incomplete list {type(raw).__name__} -> []")
    return ()


def _resolve_completed(payload: Mapping[str, Any]) -> int:
    explicit = _finite_number(payload.get("completedCount"))
    if explicit is not None:
        return max(int(explicit), 0)
    completed = payload.get("completed")
    if isinstance(completed, (list, tuple)):
        return len(completed)
    return 0


def _resolve_total(payload: Mapping[str, Any], completed: int, incomplete: tuple[str, ...]) -> int:
    explicit = _finite_number(payload.get("totalTasks"))
    if explicit is None:
        return completed + len(incomplete)
    total = int(explicit)
    if total < completed:
        logger.debug(f"normalize: totalTasks {total} < completedCount {completed} -> raised")
    return max(total, completed)


def normalize(
    payload: Any,
    config: CodecConfig | None = None,
    now: datetime | None = None,
) -> SubmissionRecord:
    """Build a canonical SubmissionRecord from a raw form payload.

    Args:
        payload: Decoded JSON body. Anything that is not a mapping is treated as {}
        config: Codec settings (rate mode); defaults to CodecConfig()
        now: Normalization instant (aware datetime); defaults to the current UTC time

    Returns:
        SubmissionRecord with every field resolved. completionRate is always
        derived from the resolved counts; a caller-supplied value is ignored.
    """
    config = config or CodecConfig()
    now = now or datetime.now(UTC)
    if not isinstance(payload, Mapping):
        logger.debug(f"normalize: payload is {type(payload).__name__}, not a mapping -> {{}}")
        payload = {}

    incomplete = _resolve_incomplete(payload)
    completed = _resolve_completed(payload)
    total = _resolve_total(payload, completed, incomplete)
    submitted_at = payload.get("submittedAt")

    return SubmissionRecord(
        date=_resolve_date(payload.get("date"), now),
        housekeeper=_text(payload.get("housekeeper")),
        shift=_text(payload.get("shift")),
        completed_count=completed,
        total_tasks=total,
        completion_rate=rate(completed, total, config.rate_mode),
        submitted_at=submitted_at if isinstance(submitted_at, str) and submitted_at else iso_timestamp(now),
        incomplete_list=incomplete,
    )
