from __future__ import annotations

import logging
from collections.abc import Sequence
from datetime import datetime
from typing import Any

from ..codec.pipeline import decode_rows, normalize_and_encode
from ..codec.schema import resolve_schema
from ..logging.error_log import ErrorLogBuffer
from ..models.config_models import CodecConfig, SchemaSource
from ..models.error_record import ErrorRecord
from ..models.submission_record import SubmissionRecord
from ..store.base import SheetStore, StoreError, StoreSnapshot

"""Submission service.

Glue between the pure codec and a store: one append per accepted submission
on the write path, one full read on the dashboard path. Store failures are
never dropped. The failed row goes to the error log and the caller gets a
SubmissionError.
"""

__all__ = [
    "SubmissionError",
    "SubmissionService",
    "dashboard_payload",
]

logger = logging.getLogger(__name__)


class SubmissionError(Exception):
    """A store operation failed; carries the row that was being written, if any."""

    def __init__(self, message: str, row: Sequence[str] | None = None) -> None:
        super().__init__(message)
        self.row = list(row) if row is not None else None


def dashboard_payload(schema: Sequence[str], records: Sequence[SubmissionRecord]) -> dict[str, Any]:
    """Build ``{"header": [...], "rows": [record dicts]}`` for the dashboard."""
    return {
        "header": list(schema),
        "rows": [r.to_dict() for r in records],
    }


class SubmissionService:
    def __init__(
        self,
        store: SheetStore,
        codec_config: CodecConfig | None = None,
        error_log: ErrorLogBuffer | None = None,
    ) -> None:
        self.store = store
        self.codec_config = codec_config or CodecConfig()
        self.error_log = error_log

    def append_row(self, row: Sequence[str]) -> None:
        """Append an already encoded row, logging and re-raising failures."""
        try:
            self.store.append(row)
        except StoreError as e:
            logger.error(f"append failed store={self.store.describe()}: {e}")
            if self.error_log is not None:
                self.error_log.append(
                    ErrorRecord.create(self.store.describe(), "APPEND_FAILED", str(e), list(row))
                )
                path = self.error_log.flush()
                logger.info(f"failed row saved to {path}")
            raise SubmissionError(f"could not store submission: {e}", row) from e

    def submit(self, payload: Any, now: datetime | None = None) -> list[str]:
        """Normalize, encode and append one payload. Returns the appended row.

        Raises:
            SubmissionError: If the store rejects the append
        """
        row = normalize_and_encode(payload, self.codec_config, now)
        self.append_row(row)
        logger.debug(f"appended row date={row[0]} housekeeper={row[1]!r}")
        return row

    def _snapshot(self) -> StoreSnapshot:
        try:
            return self.store.read_all()
        except StoreError as e:
            logger.error(f"read failed store={self.store.describe()}: {e}")
            raise SubmissionError(f"could not read submissions: {e}") from e

    def read(self) -> tuple[tuple[str, ...], list[SubmissionRecord]]:
        """Read every stored row and decode it.

        Returns:
            (schema used for decoding, records in store order)

        Raises:
            SubmissionError: If the store cannot be read
        """
        snapshot = self._snapshot()
        header = snapshot.header if self.codec_config.schema_source is SchemaSource.HEADER else None
        records = decode_rows(snapshot.rows, header, self.codec_config)
        return resolve_schema(header), records
