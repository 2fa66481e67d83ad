"""Backing store collaborators (append / read primitives)."""

from __future__ import annotations

from pathlib import Path

from ..models.config_models import StoreBackend, StoreConfig
from .base import SheetStore, StoreError, StoreSnapshot
from .memory_store import MemoryStore

__all__ = [
    "MemoryStore",
    "SheetStore",
    "StoreError",
    "StoreSnapshot",
    "build_store",
]


def build_store(config: StoreConfig) -> SheetStore:
    """Construct the store named by ``config.backend``.

    Excel and PostgreSQL backends are imported lazily so a memory-only run
    does not load pandas or psycopg2.
    """
    if config.backend is StoreBackend.MEMORY:
        return MemoryStore()
    if config.backend is StoreBackend.EXCEL:
        from .excel_store import ExcelStore
        if not config.path:
            raise ValueError("excel store requires a path")
        return ExcelStore(Path(config.path), sheet=config.sheet)
    if config.backend is StoreBackend.POSTGRES:
        from .postgres_store import PostgresStore
        if not config.dsn:
            raise ValueError("postgres store requires a dsn")
        return PostgresStore(config.dsn, table=config.table)
    raise ValueError(f"unsupported store backend: {config.backend}")
