from __future__ import annotations

from collections.abc import Sequence
from dataclasses import dataclass, field
from typing import Protocol, runtime_checkable

"""Store collaborator interface.

A store is an append-only tabular backend. The codec never talks to it
directly; services call ``append`` once per accepted submission and
``read_all`` for the dashboard.

Delivery is at-least-once: there is no idempotency key, so a retried
submission may appear twice.
"""

__all__ = [
    "StoreError",
    "StoreSnapshot",
    "SheetStore",
]


class StoreError(Exception):
    """Raised by a store when an append or read cannot be completed."""


@dataclass(frozen=True)
class StoreSnapshot:
    """Everything a store holds: optional header row plus data rows."""
    header: list[str] | None = None
    rows: list[list[str]] = field(default_factory=list)


@runtime_checkable
class SheetStore(Protocol):
    """Append / read primitives consumed by the submission service."""

    def describe(self) -> str:
        """Short human-readable location, used in logs and error records."""
        ...

    def append(self, row: Sequence[str]) -> None:
        """Append one row. Raises StoreError on failure."""
        ...

    def read_all(self) -> StoreSnapshot:
        """Return the header row (if any) and all data rows. Raises StoreError."""
        ...
