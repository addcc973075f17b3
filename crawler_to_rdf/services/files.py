from __future__ import annotations

from collections.abc import Iterable
from pathlib import Path

"""Input file checks used by the CLI tools before any parsing starts."""

__all__ = [
    "check_file",
    "check_file_type",
]


def check_file(path: str | Path) -> bool:
    """True if path exists and is a regular file."""
    return Path(path).is_file()


def check_file_type(path: str | Path, extensions: Iterable[str]) -> bool:
    """True if the file extension is one of extensions (case-insensitive, no dot)."""
    suffix = Path(path).suffix
    if not suffix:
        return False
    allowed = {e.lower().lstrip(".") for e in extensions}
    return suffix[1:].lower() in allowed
