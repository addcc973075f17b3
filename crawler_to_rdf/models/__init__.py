"""Domain models for the logbook -> RDF crawler.

This package contains the record, message and result classes shared by the
extraction, graph building and CLI layers.
"""

from .config_models import CrawlerConfig
from .extraction_result import ExtractionResult, RunSummary
from .records import LogEntry, ParsedSheet, SubjectRecord, TriState
from .validation_message import FIELD_ERROR, LAYOUT_ERROR, ValidationMessage

__all__ = [
    # Configuration models
    "CrawlerConfig",
    # Record models
    "SubjectRecord",
    "LogEntry",
    "ParsedSheet",
    "TriState",
    # Result models
    "ExtractionResult",
    "RunSummary",
    "ValidationMessage",
    "LAYOUT_ERROR",
    "FIELD_ERROR",
]
