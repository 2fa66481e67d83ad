from __future__ import annotations

import logging
import threading
from collections.abc import Sequence
from pathlib import Path

import pandas as pd

from ..codec.schema import CANONICAL_SCHEMA
from .base import StoreError, StoreSnapshot

"""Excel workbook store.

The first row of the sheet is the header; every following row is one
submission. When no sheet name is configured the workbook's first sheet is
used, so a renamed tab keeps working. A new workbook (or an empty sheet) gets
the canonical header written ahead of the first appended row.

Appends rewrite the sheet in place (other sheets are preserved). This is
adequate for the single-writer volumes a shift form produces.
"""

__all__ = [
    "ExcelStore",
    "DEFAULT_SHEET_NAME",
]

logger = logging.getLogger(__name__)

DEFAULT_SHEET_NAME = "Sheet1"


def _trim_trailing_blanks(row: list[str]) -> list[str]:
    end = len(row)
    while end > 0 and row[end - 1] == "":
        end -= 1
    return row[:end]


class ExcelStore:
    def __init__(self, path: Path, sheet: str | None = None) -> None:
        self.path = Path(path)
        self.sheet = sheet
        self._lock = threading.Lock()

    def describe(self) -> str:
        return f"excel:{self.path}#{self.sheet or 'first'}"

    def _sheet_name(self, xls: pd.ExcelFile) -> str | None:
        names = [str(n) for n in xls.sheet_names]
        if self.sheet is not None:
            return self.sheet if self.sheet in names else None
        return names[0] if names else None

    def _read_cells(self) -> tuple[str, list[list[str]]]:
        """Return (sheet name to write, all rows including the header)."""
        if not self.path.exists():
            return self.sheet or DEFAULT_SHEET_NAME, []
        with pd.ExcelFile(self.path) as xls:
            name = self._sheet_name(xls)
            if name is None:
                return self.sheet or DEFAULT_SHEET_NAME, []
            # dtype=str + keep_default_na=False: cells come back as text, blanks as ""
            df = xls.parse(name, header=None, dtype=str, keep_default_na=False)
        rows = [_trim_trailing_blanks([str(v) for v in r]) for r in df.values.tolist()]
        return name, rows

    def read_all(self) -> StoreSnapshot:
        try:
            _, cells = self._read_cells()
        except Exception as e:
            raise StoreError(f"failed reading {self.describe()}: {e}") from e
        if not cells:
            return StoreSnapshot(header=None, rows=[])
        return StoreSnapshot(header=cells[0], rows=cells[1:])

    def append(self, row: Sequence[str]) -> None:
        with self._lock:
            try:
                name, cells = self._read_cells()
                if not cells:
                    logger.info(f"excel store: writing header to {self.path.name}!{name}")
                    cells = [list(CANONICAL_SCHEMA)]
                cells.append([str(c) for c in row])
                self._write(name, cells)
            except Exception as e:
                raise StoreError(f"failed appending to {self.describe()}: {e}") from e

    def _write(self, sheet_name: str, cells: list[list[str]]) -> None:
        df = pd.DataFrame(cells)
        self.path.parent.mkdir(parents=True, exist_ok=True)
        if self.path.exists():
            writer_args = {"mode": "a", "if_sheet_exists": "replace"}
        else:
            writer_args = {}
        with pd.ExcelWriter(self.path, engine="openpyxl", **writer_args) as writer:
            df.to_excel(writer, sheet_name=sheet_name, header=False, index=False)
            _store_formulas_as_text(writer.sheets[sheet_name])


def _store_formulas_as_text(worksheet) -> None:
    # openpyxl treats a leading "=" as a formula; cells must keep the raw text
    for row in worksheet.iter_rows():
        for cell in row:
            if isinstance(cell.value, str) and cell.value.startswith("="):
                cell.data_type = "s"
