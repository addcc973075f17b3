from __future__ import annotations

from ..models.extraction_result import RunSummary

"""SUMMARY line rendering for crawler runs.

Format:
SUMMARY tool={tool} sheets={n} subjects={n} entries={n} errors={n} triples={n} elapsed_sec={x}
"""


def _format_seconds(value: float) -> str:
    if value == 0:
        return "0"
    if value == int(value):
        return str(int(value))
    if value < 0.01:
        # avoid scientific notation for very small numbers
        return f"{value:.6f}".rstrip("0").rstrip(".")
    return f"{value:.3f}".rstrip("0").rstrip(".")


def render_summary_line(summary: RunSummary) -> str:
    """Render the SUMMARY line for a finished (or aborted) run.

    Examples:
        >>> from datetime import datetime, timezone
        >>> t = datetime(2024, 1, 1, tzinfo=timezone.utc)
        >>> s = RunSummary(tool="lkt", sheets=2, subjects=2, entries=10, errors=0,
        ...                triples=120, start_time=t, end_time=t, elapsed_seconds=1.5)
        >>> render_summary_line(s)
        'SUMMARY tool=lkt sheets=2 subjects=2 entries=10 errors=0 triples=120 elapsed_sec=1.5'
    """
    return (
        f"SUMMARY tool={summary.tool} "
        f"sheets={summary.sheets} "
        f"subjects={summary.subjects} "
        f"entries={summary.entries} "
        f"errors={summary.errors} "
        f"triples={summary.triples} "
        f"elapsed_sec={_format_seconds(summary.elapsed_seconds)}"
    )
