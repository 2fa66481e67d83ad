from __future__ import annotations

from collections.abc import Iterable, Sequence
from datetime import datetime
from typing import Any

from ..models.config_models import CodecConfig, SchemaSource
from ..models.submission_record import SubmissionRecord
from .normalizer import normalize
from .row_codec import decode_row, encode_row
from .schema import resolve_schema

"""Write and read entry points exposed to store-facing callers.

Both functions are pure: they touch no store, hold no state and never raise
on data. The caller owns the append / read calls around them.
"""

__all__ = [
    "normalize_and_encode",
    "decode_rows",
]


def normalize_and_encode(
    payload: Any,
    config: CodecConfig | None = None,
    now: datetime | None = None,
) -> list[str]:
    """Normalize a form payload and return the row to append."""
    return encode_row(normalize(payload, config, now))


def _is_blank(row: Sequence[Any]) -> bool:
    return all(c is None or str(c).strip() == "" for c in row)


def decode_rows(
    rows: Iterable[Sequence[Any]],
    header_row: Sequence[Any] | None = None,
    config: CodecConfig | None = None,
) -> list[SubmissionRecord]:
    """Decode stored data rows (header excluded) into records.

    The header row only shapes the schema when the deployment reads by
    header; with SchemaSource.FIXED the canonical layout is used regardless.
    Fully blank rows are skipped.
    """
    config = config or CodecConfig()
    header = header_row if config.schema_source is SchemaSource.HEADER else None
    schema = resolve_schema(header)
    return [decode_row(row, schema) for row in rows if not _is_blank(row)]
