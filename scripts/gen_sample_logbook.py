#!/usr/bin/env python3
"""Sample logbook generation script.

Generates synthetic LKT logbook documents (.ods or .xlsx) for manual testing and
timing of the lkt crawler. Every sheet follows the logbook template:
- Row 1: Title row
- Rows 2-8: Subject header block (labels in column B, values in column C)
- Row 23: Entry header line, "ImportID" in A23
- Row 24+: Entry rows

Use --broken N to inject N invalid entry rows per sheet (missing values,
malformed dates) for checking the error report.
"""
from __future__ import annotations

import argparse
import sys
from pathlib import Path
from typing import Any

import numpy as np
import pandas as pd

from crawler_to_rdf.excel.layout import (
    ENTRY_COLUMNS,
    HEADER_LINE,
    HEADER_SENTINEL,
    SUBJECT_CELLS,
    column_index,
    split_coordinate,
)

SHEET_WIDTH = column_index("M") + 1

PROJECTS = ["Navigation", "Timing", "Place cells", "Habituation"]
PARADIGMS = ["virtual maze", "open field", "linear track", "interval timing"]
EXPERIMENTERS = ["Alice Meyer", "Bob Schulz", "Carla Weber"]
FEEDS = ["pellets", "sunflower seeds", "standard chow", ""]


def generate_entries(rng: np.random.Generator, rows: int, broken: int) -> list[dict[str, Any]]:
    """Entry rows for one subject; the first `broken` rows are invalid."""
    start = pd.Timestamp("2023-01-02 09:00")
    entries: list[dict[str, Any]] = []
    for i in range(rows):
        when = start + pd.Timedelta(days=i, minutes=int(rng.integers(0, 8 * 60)))
        entry: dict[str, Any] = {
            "experiment_date": when.strftime("%d.%m.%Y %H:%M"),
            "paradigm": str(rng.choice(PARADIGMS)),
            "is_on_diet": str(rng.choice(["y", "n", ""])),
            "is_initial_weight": "y" if i == 0 else "",
            "weight": round(float(rng.uniform(180, 320)), 1) if rng.random() < 0.7 else "",
            "feed": str(rng.choice(FEEDS)),
            "project": str(rng.choice(PROJECTS)),
            "experiment": f"session {i + 1}",
            "experimenter": str(rng.choice(EXPERIMENTERS)),
        }
        if i < broken:
            if i % 2 == 0:
                entry["project"] = ""
                entry["experimenter"] = ""
            else:
                entry["experiment_date"] = when.strftime("%Y-%m-%d")
        entries.append(entry)
    return entries


def build_sheet_rows(subject: dict[str, str], entries: list[dict[str, Any]], title: str) -> list[list[Any]]:
    """Full cell grid of one logbook sheet."""
    rows: list[list[Any]] = [[""] * SHEET_WIDTH for _ in range(HEADER_LINE)]
    rows[0][0] = title
    for name, coord in SUBJECT_CELLS.items():
        r, c = split_coordinate(coord)
        rows[r][c - 1] = name.replace("_", " ")
        rows[r][c] = subject.get(name, "")
    header = rows[HEADER_LINE - 1]
    header[0] = HEADER_SENTINEL
    for name, col in ENTRY_COLUMNS.items():
        header[column_index(col)] = name.replace("_", " ")
    for i, entry in enumerate(entries, start=1):
        row: list[Any] = [""] * SHEET_WIDTH
        row[0] = i
        for name, value in entry.items():
            row[column_index(ENTRY_COLUMNS[name])] = value
        rows.append(row)
    return rows


def create_logbook(
    output_path: Path,
    subjects: int,
    rows: int,
    broken: int = 0,
    title: str = "LKT Logbook",
    seed: int = 42,
) -> None:
    """Write a logbook with one sheet per subject.

    The pandas engine follows the extension (.ods -> odf, .xlsx -> openpyxl).
    """
    rng = np.random.default_rng(seed)
    engine = "odf" if output_path.suffix.lower() == ".ods" else "openpyxl"
    output_path.parent.mkdir(parents=True, exist_ok=True)

    with pd.ExcelWriter(output_path, engine=engine) as writer:
        for n in range(1, subjects + 1):
            subject_id = f"R{n:03d}"
            subject = {
                "subject_id": subject_id,
                "sex": str(rng.choice(["m", "f"])),
                "date_of_birth": "01.06.2022",
                "date_of_withdrawal": "01.06.2024",
                "permit_number": f"55.2-1-54-2532-{100 + n}",
                "species": "rat",
                "scientific_name": "Rattus norvegicus",
            }
            sheet_rows = build_sheet_rows(subject, generate_entries(rng, rows, broken), title)
            pd.DataFrame(sheet_rows).to_excel(writer, sheet_name=subject_id, header=False, index=False)

    print(f"Created logbook: {output_path}")
    print(f"  Sheets: {subjects}")
    print(f"  Entry rows per sheet: {rows} ({broken} invalid)")


def main() -> int:
    """Main CLI interface for sample logbook generation."""
    parser = argparse.ArgumentParser(
        description="Generate synthetic LKT logbook documents",
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog="""
Examples:
  # 3 subjects, 20 entries each
  %(prog)s sample.ods

  # Larger xlsx document
  %(prog)s large.xlsx --subjects 40 --rows 500

  # Document with 2 invalid rows per sheet
  %(prog)s broken.ods --broken 2
        """,
    )
    parser.add_argument("output", type=Path, help="Output .ods or .xlsx file path")
    parser.add_argument("--subjects", type=int, default=3, help="Number of subject sheets (default: 3)")
    parser.add_argument("--rows", type=int, default=20, help="Entry rows per sheet (default: 20)")
    parser.add_argument("--broken", type=int, default=0, help="Invalid entry rows per sheet (default: 0)")
    parser.add_argument("--title", default="LKT Logbook", help="Title for first row")
    parser.add_argument("--seed", type=int, default=42, help="Random seed (default: 42)")
    args = parser.parse_args()

    if args.output.suffix.lower() not in (".ods", ".xlsx"):
        print("Error: output must end in .ods or .xlsx", file=sys.stderr)
        return 1
    if args.subjects <= 0 or args.rows < 0:
        print("Error: --subjects must be positive and --rows non-negative", file=sys.stderr)
        return 1
    if not 0 <= args.broken <= args.rows:
        print("Error: --broken must be between 0 and --rows", file=sys.stderr)
        return 1

    try:
        create_logbook(args.output, args.subjects, args.rows, args.broken, args.title, args.seed)
    except OSError as e:
        print(f"\nError generating logbook: {e}", file=sys.stderr)
        return 1
    return 0


if __name__ == "__main__":
    raise SystemExit(main())
