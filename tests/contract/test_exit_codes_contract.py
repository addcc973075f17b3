from __future__ import annotations

from pathlib import Path
from unittest.mock import patch

from crawler_to_rdf.cli import main as cli_main

"""Exit code contract tests.

0 = output written, 1 = fatal (arguments, config, format, input, output),
2 = validation errors in the document (nothing written).
"""


def test_exit_code_success(logbook_file, temp_workdir: Path, capsys):
    code = cli_main(["lkt", "-i", str(logbook_file())])
    assert code == 0
    assert "ERROR" not in capsys.readouterr().out


def test_exit_code_unsupported_format_before_reading(logbook_file, temp_workdir: Path, capsys):
    src = logbook_file()
    with patch("crawler_to_rdf.crawlers.lkt.read_spreadsheet") as mock_read:
        code = cli_main(["lkt", "-i", str(src), "-f", "csv"])
    out = capsys.readouterr().out
    assert code == 1
    mock_read.assert_not_called()
    errors = [line for line in out.splitlines() if line.startswith("ERROR")]
    assert errors == ["ERROR unsupported output format 'csv', use one of: TTL, RDF/XML, NTRIPLES, JSON-LD"]
    assert not list((temp_workdir / "data").glob("*_out.*"))


def test_exit_code_unsupported_format_with_missing_input(temp_workdir: Path, capsys):
    # 形式エラーが入力ファイル検査より先
    code = cli_main(["lkt", "-i", "missing.ods", "-f", "turtle"])
    out = capsys.readouterr().out
    assert code == 1
    assert "unsupported output format 'turtle'" in out
    assert "does not exist" not in out


def test_exit_code_validation_errors(logbook_file, make_rows, temp_workdir: Path, capsys):
    src = logbook_file(sheets={
        "S1": make_rows(entries=[{"project": "P"}]),
        "S2": make_rows(sentinel="Import"),
    })
    code = cli_main(["lkt", "-i", str(src)])
    out = capsys.readouterr().out
    assert code == 2
    assert "ERROR [Parser error] sheet S1 row 24, missing value: experiment timestamp experimenter" in out
    assert "ERROR [Parser error] sheet S2, header entry 'ImportID' not found at required cell A23" in out
    assert "There are parser errors present" in out
    # 全か無か: 出力ファイルは作らない
    assert not (temp_workdir / "data" / "logbook_out.ttl").exists()


def test_exit_code_fatal_unreadable_input(temp_workdir: Path, capsys):
    bad = temp_workdir / "data" / "broken.ods"
    bad.write_bytes(b"not a spreadsheet")
    code = cli_main(["lkt", "-i", str(bad)])
    assert code == 1
    assert "ERROR cannot read spreadsheet" in capsys.readouterr().out


def test_exit_code_fatal_unwritable_output(logbook_file, temp_workdir: Path, capsys):
    code = cli_main(["lkt", "-i", str(logbook_file()), "-o", str(temp_workdir / "no_dir" / "out")])
    assert code == 1
    assert "ERROR could not write output file" in capsys.readouterr().out


def test_exit_code_fatal_bad_config(logbook_file, temp_workdir: Path, capsys):
    (temp_workdir / "config" / "crawler.yml").write_text("unknown_key: 1\n", encoding="utf-8")
    code = cli_main(["lkt", "-i", str(logbook_file())])
    assert code == 1
    assert "ERROR config: config validation failed" in capsys.readouterr().out
