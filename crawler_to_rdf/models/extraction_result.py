from __future__ import annotations

from dataclasses import dataclass, field
from datetime import datetime

from .records import ParsedSheet
from .validation_message import FIELD_ERROR, ValidationMessage

"""Accumulator and summary models for one crawler run.

ExtractionResult is threaded through the whole extraction pass: every sheet
that survives the layout checks is appended, every problem is appended as a
ValidationMessage. Nothing is raised for non-fatal problems.

RunSummary aggregates the counters printed in the SUMMARY line.
"""

__all__ = [
    "ExtractionResult",
    "RunSummary",
]


@dataclass
class ExtractionResult:
    """Sheets and validation messages gathered from one document."""
    file_name: str
    sheets: list[ParsedSheet] = field(default_factory=list)
    messages: list[ValidationMessage] = field(default_factory=list)
    sheet_count: int = 0  # sheets seen, including rejected ones

    @property
    def ok(self) -> bool:
        return not self.messages

    @property
    def entry_count(self) -> int:
        return sum(len(s.entries) for s in self.sheets)

    def add_error(
        self, sheet: str, message: str, *, row: int | None = None, error_type: str = FIELD_ERROR
    ) -> ValidationMessage:
        record = ValidationMessage.create(
            file=self.file_name,
            sheet=sheet,
            row=row,
            error_type=error_type,
            message=message,
        )
        self.messages.append(record)
        return record

    def add_sheet(self, sheet: ParsedSheet) -> None:
        self.sheets.append(sheet)


@dataclass(frozen=True)
class RunSummary:
    """Counters for the SUMMARY output line."""
    tool: str
    sheets: int  # sheets in the input document
    subjects: int  # distinct subjects written
    entries: int  # log entries written
    errors: int  # accumulated validation messages
    triples: int  # triples in the serialized graph (0 when aborted)
    start_time: datetime
    end_time: datetime
    elapsed_seconds: float
    output_path: str | None = None
