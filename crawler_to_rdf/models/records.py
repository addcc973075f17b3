from __future__ import annotations

from dataclasses import dataclass, field
from datetime import date, datetime
from enum import Enum

"""Logbook record models.

A logbook document holds one sheet per subject. Every sheet has a fixed header
block describing the subject (SubjectRecord) followed by one row per
experiment / diary event (LogEntry).

Records are immutable once extraction has produced them; the graph builder
consumes each of them exactly once.
"""

__all__ = [
    "TriState",
    "SubjectRecord",
    "LogEntry",
    "ParsedSheet",
]


class TriState(Enum):
    """yes / no / not filled in.

    The logbook flag columns (diet, initial weight) are optional, so an empty
    cell must stay distinguishable from an explicit "n".
    """
    YES = "y"
    NO = "n"
    UNSPECIFIED = ""

    def as_bool(self) -> bool | None:
        if self is TriState.YES:
            return True
        if self is TriState.NO:
            return False
        return None


@dataclass(frozen=True)
class SubjectRecord:
    """Header block of one sheet (cells C2..C8).

    Dates are None when the cell was empty or malformed; the corresponding
    validation message is recorded by the extractor.
    """
    subject_id: str
    sex: str
    date_of_birth: date | None
    date_of_withdrawal: date | None
    permit_number: str
    species: str = ""
    scientific_name: str = ""


@dataclass(frozen=True)
class LogEntry:
    """One data row below the header line."""
    row_number: int  # 1-based spreadsheet row
    project: str
    experiment: str
    experiment_date: datetime | None
    experimenter: str
    paradigm: str = ""
    paradigm_specifics: str = ""
    comment_experiment: str = ""
    comment_subject: str = ""
    feed: str = ""
    is_on_diet: TriState = TriState.UNSPECIFIED
    is_initial_weight: TriState = TriState.UNSPECIFIED
    weight: str | None = None  # numeric text, None = no weight recorded


@dataclass(frozen=True)
class ParsedSheet:
    """A SubjectRecord with the entries extracted from the same sheet."""
    sheet_name: str
    subject: SubjectRecord
    entries: list[LogEntry] = field(default_factory=list)
