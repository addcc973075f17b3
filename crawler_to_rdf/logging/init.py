from __future__ import annotations

import logging
import sys

"""Logging initialization with labeled prefixes.

All CLI output goes through one application logger writing to stdout:

    INFO Parsing input file...
    WARN ...
    ERROR [Parser error] sheet S1 row 24, missing value: project
    SUMMARY tool=lkt sheets=1 ...

Library modules log via logging.getLogger(__name__); those loggers live under
"crawler_to_rdf" and propagate to the handler installed here.
"""

__all__ = [
    "LOGGER_NAME",
    "SUMMARY_LEVEL",
    "LabeledFormatter",
    "setup_logging",
    "get_logger",
    "log_summary",
    "set_debug",
    "reset_logging",
]

LOGGER_NAME = "crawler_to_rdf"

# Custom SUMMARY level (between INFO=20 and WARNING=30)
SUMMARY_LEVEL = 25

_logger: logging.Logger | None = None


class LabeledFormatter(logging.Formatter):
    """Formatter producing "<LABEL> <message>" lines."""

    LEVEL_LABELS = {
        logging.DEBUG: "DEBUG",
        logging.INFO: "INFO",
        logging.WARNING: "WARN",
        logging.ERROR: "ERROR",
        logging.CRITICAL: "CRITICAL",
        SUMMARY_LEVEL: "SUMMARY",
    }

    def format(self, record: logging.LogRecord) -> str:
        level_label = self.LEVEL_LABELS.get(record.levelno, record.levelname)
        return f"{level_label} {record.getMessage()}"


def setup_logging() -> logging.Logger:
    """Configure the application logger (idempotent).

    Returns:
        The "crawler_to_rdf" logger with a single stdout handler
    """
    global _logger

    if _logger is not None:
        return _logger

    logging.addLevelName(SUMMARY_LEVEL, "SUMMARY")

    logger = logging.getLogger(LOGGER_NAME)
    logger.setLevel(logging.INFO)

    for handler in logger.handlers[:]:
        logger.removeHandler(handler)

    # sys.stdout is looked up now so pytest's capsys replacement is honoured
    handler = logging.StreamHandler(sys.stdout)
    handler.setLevel(logging.DEBUG)
    handler.setFormatter(LabeledFormatter())
    logger.addHandler(handler)

    # no duplicate output through the root logger
    logger.propagate = False

    _logger = logger
    return logger


def get_logger() -> logging.Logger:
    if _logger is None:
        return setup_logging()
    return _logger


def set_debug(enabled: bool = True) -> None:
    """Switch the application logger between DEBUG and INFO."""
    get_logger().setLevel(logging.DEBUG if enabled else logging.INFO)


def log_summary(message: str) -> None:
    """Log a message at SUMMARY level (message without the "SUMMARY " prefix)."""
    get_logger().log(SUMMARY_LEVEL, message)


def reset_logging() -> None:
    """Reset the global logger state. Mainly for testing purposes."""
    global _logger
    if _logger is not None:
        for handler in _logger.handlers[:]:
            _logger.removeHandler(handler)
    _logger = None
