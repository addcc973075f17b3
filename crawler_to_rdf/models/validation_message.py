from __future__ import annotations

import json
from dataclasses import asdict, dataclass
from datetime import UTC, datetime

"""ValidationMessage model for the accumulated parser error report.

A ValidationMessage is produced for every layout or field problem found while
extracting a logbook document. Messages never abort extraction on their own;
they are collected in order and, if any exist, block graph construction.

row=None marks sheet-level messages (layout errors, header block errors).
The JSON Lines form uses a fixed key set:
timestamp, file, sheet, row, error_type, message
"""

__all__ = [
    "LAYOUT_ERROR",
    "FIELD_ERROR",
    "ValidationMessage",
]

LAYOUT_ERROR = "LAYOUT_ERROR"
FIELD_ERROR = "FIELD_ERROR"


@dataclass(frozen=True)
class ValidationMessage:
    """Structured validation message.

    Attributes:
        timestamp: ISO8601 UTC timestamp with 'Z' suffix
        file: Spreadsheet file name being processed
        sheet: Sheet name within the file
        row: 1-based spreadsheet row, None for sheet-level messages
        error_type: LAYOUT_ERROR or FIELD_ERROR
        message: Human readable description
    """
    timestamp: str  # ISO8601 UTC
    file: str
    sheet: str
    row: int | None
    error_type: str  # UPPER_SNAKE
    message: str

    @staticmethod
    def create(
        file: str, sheet: str, row: int | None, error_type: str, message: str
    ) -> ValidationMessage:
        """Create a new ValidationMessage stamped with the current UTC time."""
        ts = datetime.now(UTC).isoformat().replace("+00:00", "Z")
        return ValidationMessage(
            timestamp=ts,
            file=file,
            sheet=sheet,
            row=row,
            error_type=error_type,
            message=message,
        )

    def to_json_line(self) -> str:
        return json.dumps(asdict(self), ensure_ascii=False)

    def __str__(self) -> str:
        if self.row is None:
            return f"[Parser error] sheet {self.sheet}, {self.message}"
        return f"[Parser error] sheet {self.sheet} row {self.row}, {self.message}"
