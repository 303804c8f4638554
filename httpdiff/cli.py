"""httpdiff CLI.

Entry point for the ``httpdiff`` command-line tool.

Usage:
    httpdiff FILE1 FILE2 [--first N --second N] [--format text|json]
             [--facet NAME ...] [--no-color] [-v]

Without --first/--second the tool lists the records of both files and
prompts for a pair to compare, repeating until EOF or Ctrl-C.
"""

from __future__ import annotations

import argparse
import json
import logging
import sys
from typing import List

from .config import Settings
from .core.errors import RecordDecodeError, RecordReadError, RecordShapeError
from .core.tree import OrderedTree
from .extract import FACET_NAMES, FacetDiff, compare_records
from .records import describe_record, load_records
from .render import comparison_to_dict, format_comparison
from .version import HTTPDIFF_VERSION

logger = logging.getLogger(__name__)

EXIT_DIFFERENT = 1
EXIT_READ_ERROR = 2
EXIT_DECODE_ERROR = 3

# ---------------------------------------------------------------------------
# Helpers
# ---------------------------------------------------------------------------


def _load_or_exit(path: str) -> List[OrderedTree]:
    try:
        return load_records(path)
    except RecordReadError as exc:
        print(f"Error: {exc}", file=sys.stderr)
        sys.exit(EXIT_READ_ERROR)
    except RecordDecodeError as exc:
        print(f"Error: {exc}", file=sys.stderr)
        sys.exit(EXIT_DECODE_ERROR)


def _emit(results: List[FacetDiff], settings: Settings) -> None:
    if settings.output_format == "json":
        print(json.dumps(comparison_to_dict(results), indent=2, default=str))
    else:
        print(format_comparison(results, color=settings.color))


def _print_options(records: List[OrderedTree]) -> None:
    for idx, record in enumerate(records):
        try:
            label = describe_record(record)
        except RecordShapeError as exc:
            label = f"<{exc}>"
        print(f"[{idx}] {label}")
    print("")


def _get_selection(records: List[OrderedTree], prompt: str) -> OrderedTree:
    while True:
        raw = input(prompt).strip()
        try:
            idx = int(raw)
        except ValueError:
            print("Input must be an integer")
            continue
        if idx < 0 or idx >= len(records):
            print("Not a valid selection")
            continue
        return records[idx]


# ---------------------------------------------------------------------------
# Modes
# ---------------------------------------------------------------------------


def _run_interactive(
    records_a: List[OrderedTree], records_b: List[OrderedTree], settings: Settings
) -> None:
    try:
        while True:
            _print_options(records_a)
            _print_options(records_b)
            first = _get_selection(records_a, "First Choice => ")
            second = _get_selection(records_b, "Second Choice => ")
            try:
                results = compare_records(first, second, settings.facets)
            except RecordShapeError as exc:
                print(f"Error: {exc}", file=sys.stderr)
                continue
            _emit(results, settings)
    except (EOFError, KeyboardInterrupt):
        print("")


def _run_once(
    records_a: List[OrderedTree], records_b: List[OrderedTree], settings: Settings
) -> None:
    for idx, records, label in (
        (settings.first, records_a, "--first"),
        (settings.second, records_b, "--second"),
    ):
        if idx < 0 or idx >= len(records):
            print(
                f"Error: {label} {idx} is out of range (0..{len(records) - 1})",
                file=sys.stderr,
            )
            sys.exit(EXIT_READ_ERROR)

    try:
        results = compare_records(
            records_a[settings.first], records_b[settings.second], settings.facets
        )
    except RecordShapeError as exc:
        print(f"Error: {exc}", file=sys.stderr)
        sys.exit(EXIT_DECODE_ERROR)

    _emit(results, settings)

    if any(not r.patches.is_empty() for r in results):
        sys.exit(EXIT_DIFFERENT)


# ---------------------------------------------------------------------------
# Entry point
# ---------------------------------------------------------------------------


def _build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="httpdiff",
        description="httpdiff: order-aware diffing of captured HTTP request/response records",
    )
    parser.add_argument("file1", help="JSON file with the first list of records")
    parser.add_argument("file2", help="JSON file with the second list of records")
    parser.add_argument(
        "--first", type=int, default=None, help="Record index in FILE1 (skips the prompt)"
    )
    parser.add_argument(
        "--second", type=int, default=None, help="Record index in FILE2 (skips the prompt)"
    )
    parser.add_argument(
        "--format",
        choices=["json", "text"],
        default="text",
        help="Output format (default: text)",
    )
    parser.add_argument(
        "--facet",
        action="append",
        choices=FACET_NAMES,
        help="Only compare this facet (repeatable, default: all)",
    )
    parser.add_argument(
        "--no-color", action="store_true", help="Disable ANSI colour output"
    )
    parser.add_argument(
        "-v", "--verbose", action="store_true", help="Enable debug logging on stderr"
    )
    parser.add_argument(
        "--version", action="version", version=f"%(prog)s {HTTPDIFF_VERSION}"
    )
    return parser


def main(argv: list[str] | None = None) -> None:
    parser = _build_parser()
    args = parser.parse_args(argv)

    logging.basicConfig(
        level=logging.DEBUG if args.verbose else logging.WARNING,
        format="%(asctime)s - %(name)s - %(levelname)s - %(message)s",
        stream=sys.stderr,
    )

    if (args.first is None) != (args.second is None):
        parser.error("--first and --second must be given together")

    settings = Settings.from_args(args)
    logger.debug("Settings: %r", settings)

    records_a = _load_or_exit(args.file1)
    records_b = _load_or_exit(args.file2)

    if settings.interactive:
        _run_interactive(records_a, records_b, settings)
    else:
        _run_once(records_a, records_b, settings)


if __name__ == "__main__":
    main()
