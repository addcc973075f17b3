from __future__ import annotations

from collections.abc import Iterable
from datetime import date, datetime
from decimal import Decimal, InvalidOperation
from typing import Any

import pandas as pd

from ..models.records import SubjectRecord, TriState
from .reader import cell_text

"""Field parsers and record validators.

Parsers never raise for bad input: they return (value, error) where error is a
human readable message or None. The extractor decides where the message goes.

Date messages keep "missing" and "malformed" apart:
- empty cell        -> "<label> is missing"
- unparsable text   -> "invalid date format for <label> '<text>', expected '<pattern>'"
"""

__all__ = [
    "DATE_PATTERN",
    "DATETIME_PATTERN",
    "parse_date",
    "parse_datetime",
    "parse_weight",
    "parse_flag",
    "validate_subject",
    "missing_entry_fields",
]

# Display patterns (used in messages) and their strptime equivalents
DATE_PATTERN = "dd.MM.yyyy"
DATETIME_PATTERN = "dd.MM.yyyy HH:mm"
_STRPTIME = {
    DATE_PATTERN: "%d.%m.%Y",
    DATETIME_PATTERN: "%d.%m.%Y %H:%M",
}

VALID_SEX = ("m", "f")


def _date_error(label: str, text: str, pattern: str) -> str:
    if not text:
        return f"{label} is missing"
    return f"invalid date format for {label} '{text}', expected '{pattern}'"


def parse_datetime(raw: Any, label: str = "experiment date") -> tuple[datetime | None, str | None]:
    """Parse an experiment timestamp cell (pattern dd.MM.yyyy HH:mm).

    Cells typed as datetime by the spreadsheet engine are accepted without
    re-parsing. A date-only cell carries no time, so a plain `date` is
    rejected like the text "10.03.2022". xlsx stores date-only cells as
    midnight datetimes, which cannot be told apart from 00:00 and pass.
    """
    if isinstance(raw, pd.Timestamp):
        if pd.isna(raw):
            return None, _date_error(label, "", DATETIME_PATTERN)
        raw = raw.to_pydatetime()
    if isinstance(raw, datetime):
        return raw.replace(tzinfo=None, second=0, microsecond=0), None
    if isinstance(raw, date):
        return None, _date_error(label, raw.strftime(_STRPTIME[DATE_PATTERN]), DATETIME_PATTERN)
    text = cell_text(raw)
    try:
        return datetime.strptime(text, _STRPTIME[DATETIME_PATTERN]), None
    except ValueError:
        return None, _date_error(label, text, DATETIME_PATTERN)


def parse_date(raw: Any, label: str) -> tuple[date | None, str | None]:
    """Parse a subject date cell (pattern dd.MM.yyyy)."""
    if isinstance(raw, pd.Timestamp):
        if pd.isna(raw):
            return None, _date_error(label, "", DATE_PATTERN)
        raw = raw.to_pydatetime()
    if isinstance(raw, datetime):
        return raw.date(), None
    if isinstance(raw, date):
        return raw, None
    text = cell_text(raw)
    try:
        return datetime.strptime(text, _STRPTIME[DATE_PATTERN]).date(), None
    except ValueError:
        return None, _date_error(label, text, DATE_PATTERN)


def parse_weight(text: str) -> tuple[str | None, str | None]:
    """Validate a weight cell.

    Returns the weight text unchanged when numeric, None when the cell is empty.
    """
    text = text.strip()
    if not text:
        return None, None
    try:
        value = Decimal(text)
    except InvalidOperation:
        value = None
    if value is None or not value.is_finite():
        return None, f"invalid weight '{text}', expected a number"
    return text, None


def parse_flag(text: str) -> TriState:
    """Map a y/n flag cell to a TriState; anything else (including "Y") is UNSPECIFIED."""
    normalized = text.strip()
    if normalized == "y":
        return TriState.YES
    if normalized == "n":
        return TriState.NO
    return TriState.UNSPECIFIED


def validate_subject(record: SubjectRecord, date_errors: Iterable[str | None] = ()) -> list[str]:
    """Messages for the required fields of a subject header block.

    One message per problem so every problem can be fixed in one pass, in
    header order: ID, sex, dates, permit. Date problems come from parse_date
    and are passed in as date_errors (None entries are skipped).
    """
    messages: list[str] = []
    if not record.subject_id:
        messages.append("missing subject ID")
    if not record.sex:
        messages.append("missing subject sex")
    elif record.sex not in VALID_SEX:
        messages.append(f"invalid subject sex '{record.sex}', expected one of {list(VALID_SEX)}")
    messages.extend(e for e in date_errors if e is not None)
    if not record.permit_number:
        messages.append("missing permit number")
    return messages


def missing_entry_fields(project: str, experiment: str, date_text: str, experimenter: str) -> list[str]:
    """Names of the blank required entry fields.

    A malformed timestamp counts as present here; it gets its own message.
    """
    missing = []
    if not project:
        missing.append("project")
    if not experiment:
        missing.append("experiment")
    if not date_text:
        missing.append("timestamp")
    if not experimenter:
        missing.append("experimenter")
    return missing
