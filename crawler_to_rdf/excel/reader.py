from __future__ import annotations

from dataclasses import dataclass
from datetime import date, datetime
from pathlib import Path
from typing import Any

import pandas as pd

from .layout import split_coordinate

"""Spreadsheet reader.

Reads every sheet of an .ods / .xlsx document with pandas (header=None, all
cells kept as the engine delivers them) and exposes fixed-coordinate access.

The pandas engine is chosen from the file extension: odf for .ods, openpyxl
for .xlsx.

String NA markers ("NA", "n/a", ...) are kept verbatim: a logbook comment of
"NA" is text, not a missing value.
"""

__all__ = [
    "SpreadsheetReadError",
    "Sheet",
    "read_spreadsheet",
    "cell_text",
]


class SpreadsheetReadError(Exception):
    """Raised when the input document cannot be opened or parsed."""


def _is_blank(value: Any) -> bool:
    if value is None:
        return True
    if isinstance(value, str):
        return value.strip() == ""
    try:
        return bool(pd.isna(value))
    except (TypeError, ValueError):
        return False


def cell_text(value: Any) -> str:
    """Text form of a raw cell value ("" for blank cells).

    Integral floats are rendered without the ".0" the engines add for numeric
    cells; dates use the logbook display patterns.
    """
    if _is_blank(value):
        return ""
    if isinstance(value, str):
        return value.strip()
    if isinstance(value, bool):
        return str(value)
    if isinstance(value, datetime):
        if value.hour == 0 and value.minute == 0 and value.second == 0:
            return value.strftime("%d.%m.%Y")
        return value.strftime("%d.%m.%Y %H:%M")
    if isinstance(value, date):
        return value.strftime("%d.%m.%Y")
    if isinstance(value, float) and value.is_integer():
        return str(int(value))
    return str(value).strip()


@dataclass
class Sheet:
    """One sheet of the document with random cell access."""
    name: str
    frame: pd.DataFrame

    @property
    def row_count(self) -> int:
        return int(self.frame.shape[0])

    @property
    def column_count(self) -> int:
        return int(self.frame.shape[1])

    def value(self, coord: str) -> Any:
        """Raw cell value, None outside the used range."""
        row, col = split_coordinate(coord)
        if row >= self.row_count or col >= self.column_count:
            return None
        raw = self.frame.iat[row, col]
        return None if _is_blank(raw) else raw

    def text(self, coord: str) -> str:
        return cell_text(self.value(coord))


def read_spreadsheet(path: Path) -> list[Sheet]:
    """Read all sheets of a spreadsheet document in workbook order.

    Raises:
        SpreadsheetReadError: file missing, not a spreadsheet, or corrupt
    """
    try:
        xls = pd.ExcelFile(path)
    except FileNotFoundError as e:
        raise SpreadsheetReadError(f"input file not found: {path}") from e
    except Exception as e:  # engine specific errors (zipfile.BadZipFile, odf errors, ...)
        raise SpreadsheetReadError(f"cannot read spreadsheet {path}: {e}") from e

    sheets: list[Sheet] = []
    try:
        with xls:
            for name in xls.sheet_names:
                df = xls.parse(name, header=None, dtype=object, keep_default_na=False)
                sheets.append(Sheet(name=str(name), frame=df))
    except Exception as e:
        raise SpreadsheetReadError(f"cannot read spreadsheet {path}: {e}") from e
    return sheets
