"""Command-line front door for duview.

Parses CLI options over the config-file defaults, sets up optional file
logging, and runs the interactive session.
"""

from __future__ import annotations

import argparse
import logging
import os
import sys
from dataclasses import replace
from pathlib import Path

from .byte_format import ByteFormat
from .config import Color, WalkOptions, load_walk_options
from .errors import DuviewError
from .interactive import run
from .tree_model import SortMode

LOG_FORMAT = "ts=%(asctime)s level=%(levelname)s logger=%(name)s msg=%(message)s"


def _non_negative_int(value: str) -> int:
    """argparse type for thread counts; ``0`` means one per CPU."""
    try:
        parsed = int(value)
    except ValueError as exc:
        raise argparse.ArgumentTypeError(f"invalid integer value: {value!r}") from exc
    if parsed < 0:
        raise argparse.ArgumentTypeError("value must be >= 0")
    return parsed


def configure_logging(log_file: Path | None) -> None:
    """Send ``duview`` logs to ``log_file``; stay silent without one."""
    logger = logging.getLogger("duview")
    logger.propagate = False
    for existing in list(logger.handlers):
        logger.removeHandler(existing)
        existing.close()
    if log_file is None:
        logger.addHandler(logging.NullHandler())
        return
    handler = logging.FileHandler(log_file, encoding="utf-8")
    handler.setFormatter(logging.Formatter(LOG_FORMAT))
    logger.addHandler(handler)
    logger.setLevel(logging.DEBUG)


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="duview",
        description="Browse disk usage of one or more paths interactively.",
    )
    parser.add_argument("paths", nargs="*", type=Path, help="Paths to scan. Defaults to the current directory.")
    parser.add_argument(
        "-t",
        "--threads",
        type=_non_negative_int,
        default=None,
        help="Scanner worker threads (0 = one per CPU).",
    )
    parser.add_argument(
        "-f",
        "--format",
        dest="byte_format",
        choices=[fmt.value for fmt in ByteFormat],
        default=None,
        help="Size display format.",
    )
    parser.add_argument(
        "--sort",
        choices=[mode.value for mode in SortMode],
        default=None,
        help="Initial sort order.",
    )
    parser.add_argument("--no-color", action="store_true", help="Disable color output.")
    parser.add_argument("--log-file", type=Path, default=None, help="Write debug logs to this file.")
    return parser


def options_from_args(args: argparse.Namespace, defaults: WalkOptions) -> WalkOptions:
    """Overlay explicitly passed flags on top of ``defaults``."""
    options = defaults
    if args.threads is not None:
        options = replace(options, threads=args.threads)
    if args.byte_format is not None:
        options = replace(options, byte_format=ByteFormat(args.byte_format))
    if args.sort is not None:
        options = replace(options, sorting=SortMode(args.sort))
    if args.no_color:
        options = replace(options, color=Color.NONE)
    return options


def main(argv: list[str] | None = None) -> None:
    """Parse CLI arguments and launch the browser.

    Scan and render failures exit with their message; a non-zero error
    count is reported on stderr after the terminal is restored.
    """
    args = build_parser().parse_args(argv)
    configure_logging(args.log_file)
    options = options_from_args(args, load_walk_options())
    paths = args.paths or [Path(".")]

    if not (os.isatty(sys.stdin.fileno()) and os.isatty(sys.stdout.fileno())):
        raise SystemExit("duview needs an interactive terminal.")

    try:
        result = run(options, paths)
    except DuviewError as exc:
        raise SystemExit(str(exc)) from exc

    if result.error_count:
        sys.stderr.write(f"{result.error_count} IO error(s) encountered while scanning.\n")


if __name__ == "__main__":
    main()
