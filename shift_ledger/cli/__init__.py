"""Command line interface (``python -m shift_ledger.cli``)."""

from .__main__ import main

__all__ = [
    "main",
]
