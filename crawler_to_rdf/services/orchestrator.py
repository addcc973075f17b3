from __future__ import annotations

import logging
from datetime import UTC, datetime
from pathlib import Path

from ..crawlers.base import Crawler
from ..excel.reader import SpreadsheetReadError
from ..logging.error_log import ErrorLogBuffer
from ..models.extraction_result import RunSummary
from ..models.validation_message import ValidationMessage
from ..rdf.service import SerializationError, normalize_format, read_graph, write_graph

"""Run orchestration for the CLI tools.

run_crawler():
1. Normalize the output format (unsupported -> UnsupportedFormatError, nothing read yet)
2. Extract the whole document (unreadable -> ProcessingError)
3. Validate; any message aborts before graph construction (all or nothing)
4. Build the graph and write it (unwritable -> ProcessingError)

convert_rdf() re-serializes an existing RDF file into another format.
"""

__all__ = [
    "ProcessingError",
    "run_crawler",
    "convert_rdf",
]

logger = logging.getLogger(__name__)


class ProcessingError(Exception):
    """Fatal error: unreadable input or unwritable output."""


def _elapsed(start: datetime) -> tuple[datetime, float]:
    end = datetime.now(UTC)
    return end, (end - start).total_seconds()


def run_crawler(
    crawler: Crawler,
    input_path: Path,
    output_path: Path,
    fmt: str,
    error_log: ErrorLogBuffer | None = None,
) -> tuple[RunSummary, list[ValidationMessage]]:
    """Run one crawler over one input file.

    Returns:
        (summary, messages). messages non-empty means no output was written.

    Raises:
        UnsupportedFormatError: fmt is not a supported output format
        ProcessingError: input unreadable or output unwritable
    """
    fmt = normalize_format(fmt)
    start_time = datetime.now(UTC)

    logger.info("Parsing input file %s ...", input_path)
    try:
        result = crawler.extract(input_path)
    except SpreadsheetReadError as e:
        raise ProcessingError(str(e)) from e

    messages = crawler.validate(result)
    if messages:
        if error_log is not None:
            error_log.extend(messages)
            try:
                log_path = error_log.flush()
                logger.info("validation messages written to %s", log_path)
            except OSError as e:
                # console report is authoritative; the JSON log is a copy
                logger.warning("could not write error log: %s", e)
        end_time, elapsed = _elapsed(start_time)
        summary = RunSummary(
            tool=crawler.name,
            sheets=result.sheet_count,
            subjects=len({s.subject.subject_id for s in result.sheets}),
            entries=result.entry_count,
            errors=len(messages),
            triples=0,
            start_time=start_time,
            end_time=end_time,
            elapsed_seconds=elapsed,
        )
        return summary, messages

    graph = crawler.build_graph(result, source=input_path.name)
    try:
        write_graph(graph, output_path, fmt)
    except SerializationError as e:
        raise ProcessingError(str(e)) from e

    end_time, elapsed = _elapsed(start_time)
    summary = RunSummary(
        tool=crawler.name,
        sheets=result.sheet_count,
        subjects=len({s.subject.subject_id for s in result.sheets}),
        entries=result.entry_count,
        errors=0,
        triples=len(graph),
        start_time=start_time,
        end_time=end_time,
        elapsed_seconds=elapsed,
        output_path=str(output_path),
    )
    return summary, []


def convert_rdf(input_path: Path, output_path: Path, fmt: str) -> RunSummary:
    """Convert an RDF file into another supported format."""
    fmt = normalize_format(fmt)
    start_time = datetime.now(UTC)
    logger.info("Reading input file %s ...", input_path)
    try:
        graph = read_graph(input_path)
        write_graph(graph, output_path, fmt)
    except SerializationError as e:
        raise ProcessingError(str(e)) from e
    end_time, elapsed = _elapsed(start_time)
    return RunSummary(
        tool="conv",
        sheets=0,
        subjects=0,
        entries=0,
        errors=0,
        triples=len(graph),
        start_time=start_time,
        end_time=end_time,
        elapsed_seconds=elapsed,
        output_path=str(output_path),
    )
