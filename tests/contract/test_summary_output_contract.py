from __future__ import annotations

import re

from crawler_to_rdf.cli import main as cli_main

"""SUMMARY 行フォーマット契約テスト"""

SUMMARY_PATTERN = re.compile(
    r"^SUMMARY\s+tool=(\S+)\s+sheets=([0-9]+)\s+subjects=([0-9]+)\s+entries=([0-9]+)\s+"
    r"errors=([0-9]+)\s+triples=([0-9]+)\s+elapsed_sec=([0-9]+\.?[0-9]*)$"
)


def _summary_lines(out: str) -> list[str]:
    return [line for line in out.splitlines() if line.startswith("SUMMARY")]


def test_summary_pattern_example_line():
    line = "SUMMARY tool=lkt sheets=2 subjects=2 entries=14 errors=0 triples=187 elapsed_sec=0.84"
    assert SUMMARY_PATTERN.match(line), "SUMMARY line should match contract regex"


def test_summary_line_on_success(logbook_file, capsys):
    assert cli_main(["lkt", "-i", str(logbook_file())]) == 0
    lines = _summary_lines(capsys.readouterr().out)
    assert len(lines) == 1
    m = SUMMARY_PATTERN.match(lines[0])
    assert m
    assert m.group(1) == "lkt"
    assert m.group(4) == "2"  # entries
    assert m.group(5) == "0"  # errors
    assert int(m.group(6)) > 0  # triples


def test_summary_line_on_validation_failure(logbook_file, make_rows, capsys):
    src = logbook_file(sheets={"S1": make_rows(entries=[{"project": "P"}])})
    assert cli_main(["lkt", "-i", str(src)]) == 2
    lines = _summary_lines(capsys.readouterr().out)
    assert len(lines) == 1
    m = SUMMARY_PATTERN.match(lines[0])
    assert m
    assert m.group(5) == "1"
    assert m.group(6) == "0"


def test_no_summary_line_on_fatal_error(temp_workdir, capsys):
    assert cli_main(["lkt", "-i", "missing.ods"]) == 1
    assert _summary_lines(capsys.readouterr().out) == []
