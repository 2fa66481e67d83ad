from __future__ import annotations

import json
import logging
import math
from collections.abc import Mapping, Sequence
from typing import Any

from ..models.submission_record import SubmissionRecord
from .list_field import decode_list, encode_list
from .schema import canonical_field_name

"""Record <-> row mapping.

encode_row always writes the canonical 8 columns. decode_row reads any schema
(canonical or a store header) and is total: short rows, unknown columns,
unparsable numbers and the deprecated single-cell JSON blob layout all decode
to a record instead of raising.
"""

__all__ = [
    "encode_row",
    "decode_row",
    "format_number",
]

logger = logging.getLogger(__name__)


def format_number(value: float | int) -> str:
    """Canonical cell text for a number (no locale, no trailing '.0').

    >>> format_number(3), format_number(0.75), format_number(1.0)
    ('3', '0.75', '1')
    """
    if isinstance(value, float) and value.is_integer():
        return str(int(value))
    return repr(value) if isinstance(value, float) else str(value)


def encode_row(record: SubmissionRecord) -> list[str]:
    """Map a record to the canonical column order."""
    return [
        record.date,
        record.housekeeper,
        record.shift,
        format_number(record.completed_count),
        format_number(record.total_tasks),
        format_number(record.completion_rate),
        record.submitted_at,
        encode_list(record.incomplete_list),
    ]


def _parse_number(value: Any) -> float | int | None:
    if isinstance(value, bool) or value is None:
        return None
    if isinstance(value, (int, float)):
        return value if not isinstance(value, float) or math.isfinite(value) else None
    text = str(value).strip()
    if not text:
        return None
    try:
        return int(text)
    except ValueError:
        pass
    try:
        number = float(text)
    except ValueError:
        return None
    return number if math.isfinite(number) else None


def _parse_count(value: Any) -> int:
    number = _parse_number(value)
    return max(int(number), 0) if number is not None else 0


def _cell_text(value: Any) -> str:
    if value is None:
        return ""
    if isinstance(value, float) and value.is_integer():
        return str(int(value))
    return str(value)


def _legacy_blob(row: Sequence[Any]) -> dict[str, Any] | None:
    """Return the payload of a single-cell JSON object row, if it is one."""
    if len(row) != 1 or not isinstance(row[0], str):
        return None
    text = row[0].strip()
    if not text.startswith("{"):
        return None
    try:
        parsed = json.loads(text)
    except (ValueError, RecursionError):
        return None
    return parsed if isinstance(parsed, dict) else None


def _build_record(fields: Mapping[str, Any]) -> SubmissionRecord:
    completed = _parse_count(fields.get("completedCount"))
    total = max(_parse_count(fields.get("totalTasks")), completed)
    completion_rate = _parse_number(fields.get("completionRate"))
    return SubmissionRecord(
        date=_cell_text(fields.get("date")),
        housekeeper=_cell_text(fields.get("housekeeper")),
        shift=_cell_text(fields.get("shift")),
        completed_count=completed,
        total_tasks=total,
        completion_rate=completion_rate if completion_rate is not None else 0,
        submitted_at=_cell_text(fields.get("submittedAt")),
        incomplete_list=decode_list(fields.get("incompleteList")),
    )


def decode_row(row: Sequence[Any], schema: Sequence[str]) -> SubmissionRecord:
    """Map a stored row back to a record using a positional schema.

    Args:
        row: Cell values as read from the store
        schema: Field names aligned to row positions (canonical or header)

    Returns:
        SubmissionRecord. Cells missing at the end of a short row decode as
        empty text / zero.
    """
    blob = _legacy_blob(row)
    if blob is not None:
        logger.debug("decode_row: single-column JSON blob row")
        source: list[tuple[Any, Any]] = list(blob.items())
    else:
        padded = list(row) + [None] * max(len(schema) - len(row), 0)
        source = list(zip(schema, padded))

    fields: dict[str, Any] = {}
    for name, value in source:
        canonical = canonical_field_name(name)
        # First occurrence wins when two headers alias the same field
        if canonical is not None and canonical not in fields:
            fields[canonical] = value
    return _build_record(fields)
