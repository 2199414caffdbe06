"""Command line entry point: check a book's manifest, tree and links."""

from __future__ import annotations

import argparse
import logging
import sys
from pathlib import Path
from typing import Sequence

from booktree.config import (
    BOOKTREE_INDENT_UNIT,
    BOOKTREE_LOG_LEVEL,
    BOOKTREE_MANIFEST_NAME,
)
from booktree.exceptions import BooktreeError
from booktree.logging_config import configure_logging, get_logger
from booktree.output_formatter import (
    format_error_json,
    format_error_text,
    format_outline,
    format_report_json,
    format_report_text,
    format_summary,
)
from booktree.pipeline import CheckOptions, check_book

logger = get_logger(__name__)

EXIT_OK = 0
EXIT_FINDINGS = 1
EXIT_FATAL = 2


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="booktree",
        description="Build a book's document tree from its SUMMARY.md and check every chapter and cross-reference.",
    )
    parser.add_argument("root", type=Path, help="Repository root of the book")
    parser.add_argument(
        "--manifest",
        default=BOOKTREE_MANIFEST_NAME,
        help=f"Manifest path relative to the root (default: {BOOKTREE_MANIFEST_NAME})",
    )
    parser.add_argument(
        "--strict-cross-refs",
        action="store_true",
        help="Fail the run when any finding is reported",
    )
    parser.add_argument(
        "--format",
        choices=("text", "json"),
        default="text",
        help="Report serialization (default: text)",
    )
    parser.add_argument(
        "--indent-unit",
        type=int,
        default=BOOKTREE_INDENT_UNIT,
        help=f"Spaces per manifest nesting level (default: {BOOKTREE_INDENT_UNIT})",
    )
    parser.add_argument(
        "--report-unlisted",
        action="store_true",
        help="Also report content files the manifest does not reference",
    )
    parser.add_argument("--tree", action="store_true", help="Print the numbered outline")
    parser.add_argument(
        "-v",
        "--verbose",
        action="count",
        default=0,
        help="Increase log verbosity (-v info, -vv debug)",
    )
    return parser


def main(argv: Sequence[str] | None = None) -> int:
    parser = build_parser()
    args = parser.parse_args(argv)

    if args.verbose >= 2:
        configure_logging(logging.DEBUG)
    elif args.verbose == 1:
        configure_logging(logging.INFO)
    else:
        configure_logging(BOOKTREE_LOG_LEVEL)

    if not args.root.is_dir():
        parser.error(f"root is not a directory: {args.root}")
    if args.indent_unit < 1:
        parser.error("--indent-unit must be a positive integer")

    options = CheckOptions(
        manifest=args.manifest,
        indent_unit=args.indent_unit,
        strict_cross_refs=args.strict_cross_refs,
        report_unlisted=args.report_unlisted,
    )

    try:
        result = check_book(args.root, options)
    except BooktreeError as exc:
        logger.debug("Build stopped", exc_info=True)
        if args.format == "json":
            print(format_error_json(exc, manifest_path=args.manifest))
        else:
            print(format_error_text(exc, manifest_path=args.manifest), file=sys.stderr)
        return EXIT_FATAL

    if args.format == "json":
        print(format_report_json(result.tree, result.report, failed=result.failed))
    else:
        if args.tree:
            print(format_summary(result.tree, result.report))
            print()
            print(format_outline(result.tree))
        for line in format_report_text(result.report):
            print(line, file=sys.stderr)

    return EXIT_FINDINGS if result.failed else EXIT_OK


if __name__ == "__main__":
    sys.exit(main())
