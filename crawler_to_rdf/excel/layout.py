from __future__ import annotations

import re

"""Fixed cell layout of the LKT logbook sheets.

The logbook template has no machine readable schema. Cell positions below are
the layout contract; the sentinel cell (A23 == "ImportID") is the only check
that the template version matches them.

Row numbers are 1-based as shown in the spreadsheet application.
"""

__all__ = [
    "HEADER_LINE",
    "HEADER_SENTINEL",
    "SENTINEL_COLUMN",
    "SUBJECT_CELLS",
    "ENTRY_COLUMNS",
    "column_index",
    "split_coordinate",
    "coordinate",
    "entry_coordinate",
]

# entry header line; data rows start directly below
HEADER_LINE = 23
HEADER_SENTINEL = "ImportID"
SENTINEL_COLUMN = "A"

# Subject header block (one subject per sheet)
SUBJECT_CELLS: dict[str, str] = {
    "subject_id": "C2",
    "sex": "C3",
    "date_of_birth": "C4",
    "date_of_withdrawal": "C5",
    "permit_number": "C6",
    "species": "C7",
    "scientific_name": "C8",
}

# Entry row columns
ENTRY_COLUMNS: dict[str, str] = {
    "experiment_date": "B",
    "paradigm": "C",
    "paradigm_specifics": "D",
    "is_on_diet": "E",
    "is_initial_weight": "F",
    "weight": "G",
    "comment_experiment": "H",
    "comment_subject": "I",
    "feed": "J",
    "project": "K",
    "experiment": "L",
    "experimenter": "M",
}

_COORD_RE = re.compile(r"^([A-Z]+)([1-9][0-9]*)$")


def column_index(letters: str) -> int:
    """Convert column letters to a 0-based index ("A" -> 0, "AA" -> 26)."""
    if not letters or not letters.isalpha():
        raise ValueError(f"invalid column letters: {letters!r}")
    idx = 0
    for ch in letters.upper():
        idx = idx * 26 + (ord(ch) - ord("A") + 1)
    return idx - 1


def split_coordinate(coord: str) -> tuple[int, int]:
    """Split "C2" into 0-based (row, column) indices."""
    m = _COORD_RE.match(coord.strip().upper())
    if m is None:
        raise ValueError(f"invalid cell coordinate: {coord!r}")
    letters, row = m.groups()
    return int(row) - 1, column_index(letters)


def coordinate(column: str, row: int) -> str:
    return f"{column}{row}"


def entry_coordinate(field_name: str, row: int) -> str:
    """Coordinate of an entry field in the given 1-based row."""
    return coordinate(ENTRY_COLUMNS[field_name], row)
