from __future__ import annotations

import logging
from collections.abc import Iterable

from ..models.extraction_result import ExtractionResult
from ..models.records import LogEntry, ParsedSheet, SubjectRecord
from ..models.validation_message import FIELD_ERROR, LAYOUT_ERROR
from .fields import (
    missing_entry_fields,
    parse_date,
    parse_datetime,
    parse_flag,
    parse_weight,
    validate_subject,
)
from .layout import (
    HEADER_LINE,
    HEADER_SENTINEL,
    SENTINEL_COLUMN,
    SUBJECT_CELLS,
    coordinate,
    entry_coordinate,
)
from .reader import Sheet

"""Record extraction and layout validation for LKT logbook sheets.

Per sheet:
1. Layout check: row count >= HEADER_LINE, otherwise the sheet holds no data.
2. Sentinel check: A23 must read "ImportID"; a mismatch means the columns are
   shifted and nothing in the sheet can be trusted.
3. Subject header block (C2..C8) -> SubjectRecord.
4. Rows HEADER_LINE+1 .. row_count -> LogEntry (blank rows skipped).

Every problem goes into the ExtractionResult passed in; only I/O errors (raised
by the reader before we get here) abort a run.
"""

__all__ = [
    "NO_VALID_DATA",
    "check_layout",
    "extract_subject",
    "extract_entry",
    "extract_sheet",
    "extract_document",
]

logger = logging.getLogger(__name__)

NO_VALID_DATA = "sheet contains no valid data"


def check_layout(sheet: Sheet) -> str | None:
    """Return a layout error message, or None when the sheet can be parsed."""
    if sheet.row_count < HEADER_LINE:
        return NO_VALID_DATA
    sentinel = sheet.text(coordinate(SENTINEL_COLUMN, HEADER_LINE))
    if sentinel != HEADER_SENTINEL:
        return (
            f"header entry '{HEADER_SENTINEL}' not found at required cell "
            f"{SENTINEL_COLUMN}{HEADER_LINE} (found '{sentinel}')"
        )
    return None


def extract_subject(sheet: Sheet, result: ExtractionResult) -> SubjectRecord:
    """Read the subject header block, recording one message per problem."""
    birth, birth_error = parse_date(sheet.value(SUBJECT_CELLS["date_of_birth"]), "date of birth")
    withdrawal, withdrawal_error = parse_date(
        sheet.value(SUBJECT_CELLS["date_of_withdrawal"]), "date of withdrawal"
    )
    record = SubjectRecord(
        subject_id=sheet.text(SUBJECT_CELLS["subject_id"]),
        sex=sheet.text(SUBJECT_CELLS["sex"]),
        date_of_birth=birth,
        date_of_withdrawal=withdrawal,
        permit_number=sheet.text(SUBJECT_CELLS["permit_number"]),
        species=sheet.text(SUBJECT_CELLS["species"]),
        scientific_name=sheet.text(SUBJECT_CELLS["scientific_name"]),
    )
    for msg in validate_subject(record, (birth_error, withdrawal_error)):
        result.add_error(sheet.name, msg)
    return record


def extract_entry(sheet: Sheet, row: int, result: ExtractionResult) -> LogEntry | None:
    """Build the LogEntry for one row.

    Returns None for blank rows (silently) and for invalid rows (after
    recording their messages).
    """
    def text(name: str) -> str:
        return sheet.text(entry_coordinate(name, row))

    project = text("project")
    experiment = text("experiment")
    experimenter = text("experimenter")
    raw_date = sheet.value(entry_coordinate("experiment_date", row))
    date_text = text("experiment_date")

    # 空行: 必須4項目すべて空ならエラーにしない
    if not (project or experiment or date_text or experimenter):
        return None

    errors: list[str] = []
    missing = missing_entry_fields(project, experiment, date_text, experimenter)
    if missing:
        errors.append(f"missing value: {' '.join(missing)}")

    experiment_date = None
    if date_text:
        experiment_date, date_error = parse_datetime(raw_date)
        if date_error is not None:
            errors.append(date_error)

    weight, weight_error = parse_weight(text("weight"))
    if weight_error is not None:
        errors.append(weight_error)

    if errors:
        for msg in errors:
            result.add_error(sheet.name, msg, row=row, error_type=FIELD_ERROR)
        return None

    return LogEntry(
        row_number=row,
        project=project,
        experiment=experiment,
        experiment_date=experiment_date,
        experimenter=experimenter,
        paradigm=text("paradigm"),
        paradigm_specifics=text("paradigm_specifics"),
        comment_experiment=text("comment_experiment"),
        comment_subject=text("comment_subject"),
        feed=text("feed"),
        is_on_diet=parse_flag(text("is_on_diet")),
        is_initial_weight=parse_flag(text("is_initial_weight")),
        weight=weight,
    )


def extract_sheet(sheet: Sheet, result: ExtractionResult) -> ParsedSheet | None:
    """Extract one sheet into the accumulator.

    A sheet failing the layout checks contributes exactly one LAYOUT_ERROR and
    nothing else.
    """
    result.sheet_count += 1
    layout_error = check_layout(sheet)
    if layout_error is not None:
        result.add_error(sheet.name, layout_error, error_type=LAYOUT_ERROR)
        logger.debug("sheet=%s rejected: %s", sheet.name, layout_error)
        return None

    subject = extract_subject(sheet, result)
    entries: list[LogEntry] = []
    for row in range(HEADER_LINE + 1, sheet.row_count + 1):
        entry = extract_entry(sheet, row, result)
        if entry is not None:
            entries.append(entry)

    parsed = ParsedSheet(sheet_name=sheet.name, subject=subject, entries=entries)
    result.add_sheet(parsed)
    logger.info("sheet=%s subject=%s entries=%d", sheet.name, subject.subject_id, len(entries))
    return parsed


def extract_document(sheets: Iterable[Sheet], file_name: str, progress=None) -> ExtractionResult:
    """Run extraction over all sheets of a document.

    Args:
        sheets: Sheets in workbook order
        file_name: Source file name used in the messages
        progress: optional SheetProgress (tqdm wrapper) notified per sheet
    """
    result = ExtractionResult(file_name=file_name)
    for sheet in sheets:
        if progress is not None:
            progress.start_sheet(sheet.name)
        before = len(result.messages)
        extract_sheet(sheet, result)
        if progress is not None:
            progress.finish_sheet(success=len(result.messages) == before)
    if result.sheet_count == 0:
        result.add_error(
            "<FILE_LEVEL>", f"file {file_name} does not contain data sheets", error_type=LAYOUT_ERROR
        )
    return result
