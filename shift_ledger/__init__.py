"""Shift ledger: shift-completion submissions <-> tabular store rows."""

from .codec.pipeline import decode_rows, normalize_and_encode
from .models.submission_record import SubmissionRecord

__all__ = [
    "SubmissionRecord",
    "decode_rows",
    "normalize_and_encode",
]

__version__ = "0.1.0"
