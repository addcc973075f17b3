from __future__ import annotations

import sys
from typing import Any

from tqdm import tqdm
from tqdm.std import tqdm as TqdmType

"""Sheet progress display with tqdm (TTY only).

Extraction of large logbooks (dozens of subject sheets) takes a few seconds;
the bar shows which sheet is being parsed. In non-TTY environments (CI, piped
output) no bar is created so the labeled log lines stay clean.
"""

__all__ = [
    "SheetProgress",
    "is_tty_enabled",
]


def is_tty_enabled() -> bool:
    """True if stdout is a TTY and progress should be displayed."""
    return sys.stdout.isatty()


class SheetProgress:
    """Progress bar over the sheets of one document.

    Used as a context manager around extract_document().
    """

    def __init__(self, total_sheets: int, *, description: str = "Parsing sheets", enabled: bool = True) -> None:
        self.total_sheets = total_sheets
        self.description = description
        self.current_sheet = 0
        self.failed_sheets = 0

        self.enabled = enabled and is_tty_enabled()
        self.pbar: TqdmType[Any] | None
        if self.enabled:
            self.pbar = tqdm(
                total=total_sheets,
                desc=description,
                unit="sheet",
                leave=False,
                ncols=80,
                ascii=True,
            )
        else:
            self.pbar = None

    def start_sheet(self, sheet_name: str) -> None:
        self.current_sheet += 1
        if self.pbar is not None:
            self.pbar.set_description(f"{self.description} ({sheet_name})")

    def finish_sheet(self, success: bool = True) -> None:
        if not success:
            self.failed_sheets += 1
        if self.pbar is not None:
            self.pbar.update(1)
            self.pbar.set_postfix(errors=self.failed_sheets)
            self.pbar.set_description(self.description)

    def close(self) -> None:
        if self.pbar is not None:
            self.pbar.close()
            self.pbar = None

    def __enter__(self) -> SheetProgress:
        return self

    def __exit__(self, exc_type: Any, exc_val: Any, exc_tb: Any) -> None:
        self.close()
