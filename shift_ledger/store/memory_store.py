from __future__ import annotations

import threading
from collections.abc import Sequence

from .base import StoreSnapshot


class MemoryStore:
    """List-backed store for tests and dry runs."""

    def __init__(self, header: Sequence[str] | None = None, rows: Sequence[Sequence[str]] | None = None) -> None:
        self._header = list(header) if header is not None else None
        self._rows = [list(r) for r in rows or []]
        self._lock = threading.Lock()

    def describe(self) -> str:
        return "memory"

    def append(self, row: Sequence[str]) -> None:
        with self._lock:
            self._rows.append(list(row))

    def read_all(self) -> StoreSnapshot:
        with self._lock:
            header = list(self._header) if self._header is not None else None
            return StoreSnapshot(header=header, rows=[list(r) for r in self._rows])
