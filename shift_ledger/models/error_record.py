from __future__ import annotations

import json
from dataclasses import asdict, dataclass, field
from datetime import UTC, datetime
from typing import Any

"""ErrorRecord model for the failed-append log.

A failed append keeps the encoded row it was trying to write, so the JSON
Lines error log doubles as a replay queue (see ``cli replay``).
"""

__all__ = [
    "ErrorRecord",
]


@dataclass(frozen=True)
class ErrorRecord:
    """Structured error record for JSON Lines logging.

    Attributes:
        timestamp: ISO8601 UTC timestamp with 'Z' suffix
        store: Store description (backend and location)
        error_type: Error classification in UPPER_SNAKE_CASE format
        message: Store error message
        row: The encoded row that could not be appended
    """
    timestamp: str  # ISO8601 UTC
    store: str
    error_type: str  # UPPER_SNAKE
    message: str
    row: list[str] = field(default_factory=list)

    @staticmethod
    def create(store: str, error_type: str, message: str, row: list[str] | None = None) -> ErrorRecord:
        """Create a new ErrorRecord with current UTC timestamp."""
        ts = datetime.now(UTC).isoformat().replace("+00:00", "Z")
        return ErrorRecord(
            timestamp=ts,
            store=store,
            error_type=error_type,
            message=message,
            row=list(row or []),
        )

    def to_json_line(self) -> str:
        """Serialize ErrorRecord to one JSON Lines entry."""
        return json.dumps(asdict(self), ensure_ascii=False)

    @staticmethod
    def from_json_line(line: str) -> ErrorRecord:
        """Parse one JSON Lines entry back into an ErrorRecord.

        Raises:
            ValueError: If the line is not a JSON object with the expected keys
        """
        data: Any = json.loads(line)
        if not isinstance(data, dict):
            raise ValueError("error log entry is not a JSON object")
        try:
            return ErrorRecord(
                timestamp=str(data["timestamp"]),
                store=str(data["store"]),
                error_type=str(data["error_type"]),
                message=str(data["message"]),
                row=[str(c) for c in data.get("row") or []],
            )
        except KeyError as e:
            raise ValueError(f"error log entry missing key: {e}") from e
