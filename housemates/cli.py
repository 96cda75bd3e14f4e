"""
Command-line entry point.

    housemates INPUT_FILE [--capacity N] [--rounding half_up|half_even] [--log-level LEVEL]

Reads commands from INPUT_FILE, one per line, and prints each result to
stdout. Logs go to stderr.

Exit codes: 0 on success, 1 when the input file is missing or unreadable,
2 when the configuration is invalid.
"""

import argparse
import sys
from pathlib import Path
from typing import Optional, Sequence

import structlog
from pydantic import ValidationError

from housemates import __version__
from housemates.activity import configure_logging
from housemates.config import LedgerSettings, LoggingSettings, get_settings
from housemates.models.ledger import RoundingMode
from housemates.orchestrator import create_app_components

log = structlog.get_logger("housemates.cli")


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="housemates",
        description="Track residents and shared expenses from a command file.",
    )
    parser.add_argument(
        "input_file",
        nargs="?",
        help="File with one command per line",
    )
    parser.add_argument(
        "--capacity",
        type=int,
        default=None,
        help="Maximum number of residents (default: HOUSEMATES_HOUSE_CAPACITY or 3)",
    )
    parser.add_argument(
        "--rounding",
        choices=[mode.value for mode in RoundingMode],
        default=None,
        help="How expense shares are rounded (default: HOUSEMATES_SHARE_ROUNDING or half_up)",
    )
    parser.add_argument(
        "--log-level",
        default=None,
        help="Log level for stderr (default: LOG_LEVEL or WARNING)",
    )
    parser.add_argument("--version", action="version", version=f"%(prog)s {__version__}")
    return parser


def main(argv: Optional[Sequence[str]] = None) -> int:
    args = build_parser().parse_args(argv)

    if not args.input_file:
        print("Please provide an input file.", file=sys.stderr)
        return 1

    ledger_overrides = {}
    if args.capacity is not None:
        ledger_overrides["house_capacity"] = args.capacity
    if args.rounding is not None:
        ledger_overrides["share_rounding"] = args.rounding
    logging_overrides = {}
    if args.log_level is not None:
        logging_overrides["level"] = args.log_level

    try:
        ledger_settings = LedgerSettings(**ledger_overrides)
        logging_settings = LoggingSettings(**logging_overrides)
        app_settings = get_settings().app
    except ValidationError as e:
        print(f"Invalid configuration: {e}", file=sys.stderr)
        return 2

    configure_logging(logging_settings)

    path = Path(args.input_file)
    try:
        lines = path.read_text(encoding=app_settings.input_encoding).splitlines()
    except (OSError, UnicodeDecodeError) as e:
        log.error("input_unreadable", path=str(path), error=str(e))
        print(f"Cannot read input file {path}: {e}", file=sys.stderr)
        return 1

    session = create_app_components(ledger_settings)
    log.info(
        "session_started",
        path=str(path),
        lines=len(lines),
        capacity=ledger_settings.house_capacity,
        rounding=ledger_settings.share_rounding.value,
        correlation_id=str(session.correlation_id),
    )

    for output in session.process_lines(lines):
        print(output)

    return 0


if __name__ == "__main__":
    sys.exit(main())
