"""Command line entry point.

Usage:
    greenbutton-csv input.xml [output.csv] [--profile interval]

Without an output path the CSV goes to stdout.
"""

from __future__ import annotations

import argparse
import sys
from typing import Sequence

from . import exceptions
from .logging_config import configure_logging
from .pipeline import convert_to_csv
from .profiles import PROFILES
from .canon import DEFAULT_PROFILE


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="greenbutton-csv",
        description="Convert a Green Button (ESPI) XML export to CSV interval rows.",
    )
    parser.add_argument("input", help="ESPI Atom feed XML file")
    parser.add_argument("output", nargs="?", help="CSV file to write (default: stdout)")
    parser.add_argument(
        "--profile",
        choices=sorted(PROFILES),
        default=DEFAULT_PROFILE,
        help=f"Unit filter and column set (default: {DEFAULT_PROFILE})",
    )
    parser.add_argument(
        "--log-level",
        default="WARNING",
        choices=["DEBUG", "INFO", "WARNING", "ERROR"],
        help="Diagnostic log level on stderr (default: WARNING)",
    )
    parser.add_argument("--log-json", action="store_true", help="Log as JSON lines")
    return parser


def main(argv: Sequence[str] | None = None) -> int:
    """Run the converter.

    Returns:
        Process exit code.
    """
    args = build_parser().parse_args(argv)
    configure_logging(args.log_level, json=args.log_json)

    try:
        count, text = convert_to_csv(args.input, args.output, args.profile)
    except exceptions.GBError as e:
        print(f"error: {e}", file=sys.stderr)
        return 1

    if text is not None:
        sys.stdout.write(text)
    else:
        print(f"Wrote {count} rows to {args.output}", file=sys.stderr)
    return 0
