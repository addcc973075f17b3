# Shared pytest fixtures
from __future__ import annotations
import tempfile
from pathlib import Path
from typing import Any, Callable

import pandas as pd
import pytest

from crawler_to_rdf.excel.layout import ENTRY_COLUMNS, HEADER_LINE, SUBJECT_CELLS, column_index, split_coordinate
from crawler_to_rdf.excel.reader import Sheet
from crawler_to_rdf.logging.init import reset_logging

# columns A..M
SHEET_WIDTH = column_index("M") + 1

DEFAULT_SUBJECT = {
    "subject_id": "S1",
    "sex": "m",
    "date_of_birth": "01.02.2022",
    "date_of_withdrawal": "01.02.2023",
    "permit_number": "P-1",
    "species": "rat",
    "scientific_name": "Rattus norvegicus",
}

DEFAULT_ENTRIES = [
    {
        "experiment_date": "10.03.2022 09:30",
        "paradigm": "maze",
        "is_on_diet": "y",
        "is_initial_weight": "n",
        "weight": "250",
        "feed": "pellets",
        "project": "ProjA",
        "experiment": "Exp1",
        "experimenter": "Alice",
    },
    {
        "experiment_date": "11.03.2022 10:00",
        "project": "ProjA",
        "experiment": "Exp2",
        "experimenter": "Alice",
    },
]


def logbook_rows(
    subject: dict[str, Any] | None = None,
    entries: list[dict[str, Any]] | None = None,
    sentinel: str = "ImportID",
) -> list[list[Any]]:
    """Rows of one logbook sheet (row 1 = title, A23 = sentinel, data from 24)."""
    subject = DEFAULT_SUBJECT if subject is None else subject
    entries = DEFAULT_ENTRIES if entries is None else entries
    rows: list[list[Any]] = [[None] * SHEET_WIDTH for _ in range(HEADER_LINE)]
    rows[0][0] = "Logbook"
    for name, coord in SUBJECT_CELLS.items():
        r, c = split_coordinate(coord)
        rows[r][c - 1] = name
        rows[r][c] = subject.get(name)
    header = rows[HEADER_LINE - 1]
    header[0] = sentinel
    for name, col in ENTRY_COLUMNS.items():
        header[column_index(col)] = name
    for i, entry in enumerate(entries, start=1):
        row: list[Any] = [None] * SHEET_WIDTH
        row[0] = i
        for name, value in entry.items():
            row[column_index(ENTRY_COLUMNS[name])] = value
        rows.append(row)
    return rows


def make_sheet(name: str = "S1", rows: list[list[Any]] | None = None) -> Sheet:
    """In-memory Sheet (no file IO)."""
    rows = logbook_rows() if rows is None else rows
    return Sheet(name=name, frame=pd.DataFrame(rows, dtype=object))


def write_workbook(path: Path, sheets: dict[str, list[list[Any]]]) -> Path:
    with pd.ExcelWriter(path, engine="openpyxl") as writer:
        for sheet_name, rows in sheets.items():
            pd.DataFrame(rows).to_excel(writer, sheet_name=sheet_name, header=False, index=False)
    return path


@pytest.fixture(autouse=True)
def _clean_logging():
    # handler は sys.stdout を setup 時に掴むので、テスト毎に作り直す
    reset_logging()
    yield
    reset_logging()


@pytest.fixture()
def temp_workdir(monkeypatch) -> Path:
    with tempfile.TemporaryDirectory() as d:
        p = Path(d)
        (p / "config").mkdir()
        (p / "data").mkdir()
        (p / "logs").mkdir()
        monkeypatch.chdir(p)
        monkeypatch.delenv("CRAWLER_CONFIG", raising=False)
        yield p


@pytest.fixture()
def sample_config_yaml() -> str:
    return """default_format: ntriples
instance_namespace: "http://example.org/lab#"
weight_unit: kg
error_log_dir: ./logs
progress: false
"""


@pytest.fixture()
def write_config(temp_workdir: Path, sample_config_yaml: str) -> Path:
    cfg = temp_workdir / "config" / "crawler.yml"
    cfg.write_text(sample_config_yaml, encoding="utf-8")
    return cfg


@pytest.fixture()
def logbook_file(temp_workdir: Path) -> Callable[..., Path]:
    """Factory writing a logbook workbook into data/.

    logbook_file()                             -> one valid sheet "S1"
    logbook_file("x.xlsx", {"A": rows, ...})   -> custom sheets
    """
    def _make(name: str = "logbook.xlsx", sheets: dict[str, list[list[Any]]] | None = None) -> Path:
        if sheets is None:
            sheets = {"S1": logbook_rows()}
        return write_workbook(temp_workdir / "data" / name, sheets)
    return _make


@pytest.fixture()
def make_rows() -> Callable[..., list[list[Any]]]:
    """logbook_rows(subject=None, entries=None, sentinel="ImportID")"""
    return logbook_rows


@pytest.fixture()
def sheet_factory() -> Callable[..., Sheet]:
    """make_sheet(name="S1", rows=None)"""
    return make_sheet
