"""
Command line entry point.

    python -m statement_series parse REPORT.pdf [...] --json values.json
"""

import argparse
import logging
import sys
from typing import List, Optional

import structlog

from .config import get_settings
from .errors import StatementError
from .reconciliation import StatementOrchestrator
from .utils import format_report, write_json_values


def configure_logging(level: str) -> None:
    structlog.configure(
        wrapper_class=structlog.make_filtering_bound_logger(
            logging.getLevelName(level.upper())
        ),
        logger_factory=structlog.PrintLoggerFactory(file=sys.stderr),
    )


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="statement-series",
        description="Bank statement reports crawler",
    )
    commands = parser.add_subparsers(dest="command", required=True)
    parse = commands.add_parser("parse", help="parse PDF statement reports")
    parse.add_argument("files", nargs="*", help="PDF files to parse")
    parse.add_argument("--json", dest="json_path", help="path to JSON output file")
    return parser


def parse_command(files: List[str], json_path: Optional[str]) -> None:
    if not files:
        raise StatementError("no PDF file specified")
    result = StatementOrchestrator().extract_file_values(files)
    for document in result.documents:
        print(format_report(document.values))
    for failure in result.failures:
        print(f"error: {failure.path}: {failure.error}", file=sys.stderr)
    if json_path:
        write_json_values(result.values, json_path)
    result.raise_for_failures()


def main(argv: Optional[List[str]] = None) -> int:
    args = build_parser().parse_args(argv)
    configure_logging(get_settings().log_level)
    try:
        if args.command == "parse":
            parse_command(args.files, args.json_path)
    except (StatementError, OSError) as e:
        print(f"error: {e}", file=sys.stderr)
        return 1
    return 0


if __name__ == "__main__":
    sys.exit(main())
