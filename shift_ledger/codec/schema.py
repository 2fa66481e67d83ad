from __future__ import annotations

import re
from collections.abc import Sequence
from typing import Any

"""Column schema resolution.

A schema is the ordered list of field names that row positions map to. The
read path either trusts the store's header row (so a re-ordered sheet keeps
decoding without a code change) or falls back to the canonical layout the
write path always produces.
"""

__all__ = [
    "CANONICAL_SCHEMA",
    "resolve_schema",
    "canonical_field_name",
]

CANONICAL_SCHEMA: tuple[str, ...] = (
    "date",
    "housekeeper",
    "shift",
    "completedCount",
    "totalTasks",
    "completionRate",
    "submittedAt",
    "incompleteList",
)

# Header spellings seen in hand-made sheets, keyed by lowercase alphanumerics
_ALIASES: dict[str, str] = {
    "completed": "completedCount",
    "tasksdone": "completedCount",
    "total": "totalTasks",
    "rate": "completionRate",
    "completion": "completionRate",
    "completionpercent": "completionRate",
    "timestamp": "submittedAt",
    "submitted": "submittedAt",
    "incomplete": "incompleteList",
    "incompletetasks": "incompleteList",
    "uncheckedtasks": "incompleteList",
}
_ALIASES.update({name.lower(): name for name in CANONICAL_SCHEMA})

_NON_ALNUM_RE = re.compile(r"[^0-9a-z]")


def canonical_field_name(name: Any) -> str | None:
    """Map a header cell to a canonical field name, or None if unknown.

    >>> canonical_field_name("Completed Count")
    'completedCount'
    >>> canonical_field_name("incomplete_tasks")
    'incompleteList'
    """
    key = _NON_ALNUM_RE.sub("", str(name).lower())
    return _ALIASES.get(key)


def resolve_schema(header_row: Sequence[Any] | None) -> tuple[str, ...]:
    """Return the schema used to decode rows.

    A non-empty header row is used verbatim, in its given order. Without one
    the canonical 8-column schema applies. A header whose cells are all blank
    counts as no header.
    """
    if not header_row:
        return CANONICAL_SCHEMA
    schema = tuple("" if c is None else str(c) for c in header_row)
    if not any(name.strip() for name in schema):
        return CANONICAL_SCHEMA
    return schema
