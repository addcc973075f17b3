from __future__ import annotations

import argparse
import sys
from pathlib import Path

from dotenv import load_dotenv

from ..config.loader import ConfigError, load_config, resolve_config_path
from ..crawlers import default_registry
from ..logging.error_log import ErrorLogBuffer
from ..logging.init import log_summary, set_debug, setup_logging
from ..rdf.service import (
    RDF_EXTENSIONS,
    RDF_FORMATS,
    UnsupportedFormatError,
    normalize_format,
    output_path_for,
)
from ..services.files import check_file, check_file_type
from ..services.orchestrator import ProcessingError, convert_rdf, run_crawler
from ..services.summary import render_summary_line

"""CLI entrypoint.

    crawler-to-rdf lkt  -i logbook.ods [-o out] [-f TTL|RDF/XML|NTRIPLES|JSON-LD]
    crawler-to-rdf conv -i graph.ttl   [-o out] [-f ...]

Exit codes:
    0  output written
    1  fatal: bad arguments, config, unsupported format, missing/unreadable input,
       unwritable output
    2  validation errors in the input document (nothing written)
"""

EXIT_SUCCESS = 0
EXIT_FATAL = 1
EXIT_VALIDATION_FAILED = 2

CONVERTER_TOOL = "conv"


class UsageError(Exception):
    """Command line could not be parsed."""


class _ArgumentParser(argparse.ArgumentParser):
    # argparse exits with status 2 on usage errors, which would collide with
    # EXIT_VALIDATION_FAILED
    def error(self, message: str) -> None:  # type: ignore[override]
        raise UsageError(f"{self.prog}: {message}")


def _load_env_file(path: Path, override: bool = True) -> None:
    """Load .env (CRAWLER_CONFIG etc.) into the process environment."""
    if path.exists():
        load_dotenv(dotenv_path=path, override=override)


def _add_common_options(p: argparse.ArgumentParser, in_help: str) -> None:
    p.add_argument("-i", "--in-file", required=True, help=in_help)
    p.add_argument(
        "-o",
        "--out-file",
        help="Path and name of the output file. Files with the same name will be overwritten. "
        "Default: [inputFileName]_out.[ext]",
    )
    p.add_argument(
        "-f",
        "--out-format",
        help=f"Format of the RDF file that will be written ({', '.join(RDF_FORMATS)}). "
        "Default: TTL or default_format from the config file",
    )
    p.add_argument("--config", help="YAML config file (default: config/crawler.yml if present)")
    p.add_argument("--debug", action="store_true", help="Enable debug logging")


def _parse_args(argv: list[str], tools: dict[str, str]) -> argparse.Namespace:
    p = _ArgumentParser(prog="crawler-to-rdf", description="Convert lab metadata files to RDF")
    sub = p.add_subparsers(dest="tool", metavar="tool", required=True)
    for name, description in tools.items():
        _add_common_options(
            sub.add_parser(name, help=description), "Input file that's supposed to be parsed"
        )
    _add_common_options(
        sub.add_parser(CONVERTER_TOOL, help="Convert an RDF file into a different RDF format"),
        "Input RDF file that's supposed to be converted",
    )
    return p.parse_args(argv)


def main(argv: list[str] | None = None) -> int:
    logger = setup_logging()

    # None のときのみシステム引数を読む ([] はテストからの明示的な空引数)
    if argv is None:
        argv = sys.argv[1:]

    _load_env_file(Path(".env"), override=True)

    registry = default_registry()
    tools = {name: registry.get(name).description for name in registry.names()}
    try:
        args = _parse_args(argv, tools)
    except UsageError as e:
        logger.error(str(e))
        logger.error(f"Currently available tools: {', '.join([*tools, CONVERTER_TOOL])}")
        return EXIT_FATAL
    except SystemExit as e:  # --help
        return int(e.code or 0)

    if args.debug:
        set_debug(True)
        logger.debug("debug mode enabled")

    config_path, required = resolve_config_path(args.config)
    try:
        cfg = load_config(config_path, required=required)
    except ConfigError as e:
        logger.error(f"config: {e}")
        return EXIT_FATAL

    # 出力形式は入力ファイルに触れる前に確定させる
    logger.info("Checking output format...")
    try:
        fmt = normalize_format(args.out_format or cfg.default_format)
    except UnsupportedFormatError as e:
        logger.error(str(e))
        return EXIT_FATAL

    input_path = Path(args.in_file)
    logger.info("Checking input file...")
    if not check_file(input_path):
        logger.error(f"Input file {input_path} does not exist.")
        return EXIT_FATAL

    if args.tool == CONVERTER_TOOL:
        allowed = list(RDF_EXTENSIONS.values())
    else:
        registry = default_registry(cfg)
        crawler = registry.get(args.tool)
        allowed = list(crawler.input_extensions)
    if not check_file_type(input_path, allowed):
        logger.error(
            f"Invalid input file type: {input_path}. Only the following file types are supported: {allowed}"
        )
        return EXIT_FATAL

    output_path = output_path_for(input_path, args.out_file, fmt)

    try:
        if args.tool == CONVERTER_TOOL:
            summary = convert_rdf(input_path, output_path, fmt)
            messages = []
        else:
            summary, messages = run_crawler(
                crawler, input_path, output_path, fmt, error_log=ErrorLogBuffer(cfg.error_log_dir)
            )
    except ProcessingError as e:
        logger.error(str(e))
        return EXIT_FATAL

    if messages:
        for m in messages:
            logger.error(str(m))
        logger.error("There are parser errors present. Please resolve them and run the program again.")
        log_summary(render_summary_line(summary)[len("SUMMARY "):])
        return EXIT_VALIDATION_FAILED

    logger.info(f"output written to {output_path}")
    log_summary(render_summary_line(summary)[len("SUMMARY "):])
    return EXIT_SUCCESS
