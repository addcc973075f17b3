from __future__ import annotations

from datetime import UTC, datetime
from pathlib import Path

from ..models.validation_message import ValidationMessage

"""Validation message log (JSON Lines).

When a run aborts on validation messages, the full list is written to
`<log_dir>/errors-YYYYMMDD-HHMMSS.log` (UTC) in addition to the console
report, one JSON object per line with the fixed ValidationMessage keys.

The file name is fixed on first access; runs are serial, no locking.
"""

__all__ = [
    "ValidationMessage",
    "ErrorLogBuffer",
]

TIMESTAMP_FMT = "%Y%m%d-%H%M%S"


class ErrorLogBuffer:
    """In-memory buffer for validation messages. flush() appends JSON Lines."""

    def __init__(self, log_dir: str | Path = "./logs") -> None:
        self.log_dir = Path(log_dir)
        self._records: list[ValidationMessage] = []
        self._file_path: Path | None = None

    @property
    def file_path(self) -> Path:
        if self._file_path is None:
            stamp = datetime.now(UTC).strftime(TIMESTAMP_FMT)
            self._file_path = self.log_dir / f"errors-{stamp}.log"
        return self._file_path

    def extend(self, records: list[ValidationMessage]) -> None:
        self._records.extend(records)

    def __len__(self) -> int:  # pragma: no cover (trivial)
        return len(self._records)

    def flush(self) -> Path | None:
        """Write buffered messages; returns the log path, None if nothing was written."""
        if not self._records:
            return None
        fp = self.file_path
        fp.parent.mkdir(parents=True, exist_ok=True)
        with fp.open("a", encoding="utf-8") as f:
            for r in self._records:
                f.write(r.to_json_line() + "\n")
        self._records.clear()
        return fp
