from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum

"""Config dataclasses for the shift ledger.

These are built once at process start by config.loader and are read-only
afterwards. CodecConfig holds the two choices that used to drift between
deployments: how completion rate is expressed and where the column layout
comes from when reading.
"""

__all__ = [
    "RateMode",
    "SchemaSource",
    "StoreBackend",
    "CodecConfig",
    "StoreConfig",
    "LedgerConfig",
]


class RateMode(Enum):
    """Meaning of the completionRate column.

    - FRACTION: real number in [0, 1]
    - PERCENT: integer in [0, 100]
    """
    FRACTION = "fraction"
    PERCENT = "percent"


class SchemaSource(Enum):
    """Where the read path takes its column order from.

    - HEADER: the store's first row, verbatim
    - FIXED: the canonical 8-column schema
    """
    HEADER = "header"
    FIXED = "fixed"


class StoreBackend(Enum):
    MEMORY = "memory"
    EXCEL = "excel"
    POSTGRES = "postgres"


@dataclass(frozen=True)
class CodecConfig:
    """Deployment-wide codec settings."""
    rate_mode: RateMode = RateMode.FRACTION
    schema_source: SchemaSource = SchemaSource.HEADER


@dataclass(frozen=True)
class StoreConfig:
    """Backing store settings.

    Only the fields relevant to the chosen backend are used:
    path/sheet for EXCEL, dsn/table for POSTGRES.
    """
    backend: StoreBackend = StoreBackend.MEMORY
    path: str | None = None  # workbook path
    sheet: str | None = None  # None -> first sheet
    dsn: str | None = None
    table: str = "shift_submissions"


@dataclass(frozen=True)
class LedgerConfig:
    """Root configuration object."""
    codec: CodecConfig = field(default_factory=CodecConfig)
    store: StoreConfig = field(default_factory=StoreConfig)
