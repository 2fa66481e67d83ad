"""Domain models for the shift ledger.

This package contains the record, configuration and error-log models used
throughout the application.
"""

from .config_models import (
    CodecConfig,
    LedgerConfig,
    RateMode,
    SchemaSource,
    StoreBackend,
    StoreConfig,
)
from .error_record import ErrorRecord
from .submission_record import SubmissionRecord

__all__ = [
    # Configuration models
    "CodecConfig",
    "LedgerConfig",
    "RateMode",
    "SchemaSource",
    "StoreBackend",
    "StoreConfig",
    # Record models
    "ErrorRecord",
    "SubmissionRecord",
]
