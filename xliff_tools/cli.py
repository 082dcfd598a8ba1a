"""Command line front-end: ``xliff-tools lint`` and ``xliff-tools trim``."""

from __future__ import annotations

import argparse
import logging
import re
import sys
from typing import List, Optional

import config
from . import criteria
from .document import ParseError
from .linter import POLICIES, XliffLinter
from .trimmer import XliffTrimmer


def _criterion(value: str) -> criteria.MatchCriterion:
    try:
        return criteria.parse_criterion(value)
    except re.error as exc:
        raise argparse.ArgumentTypeError(f"invalid pattern {value!r}: {exc}")


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="xliff-tools",
        description="Lint translator notes in and trim entries from XLIFF files.",
    )
    sub = parser.add_subparsers(dest="command", required=True)

    lint = sub.add_parser("lint", help="report missing translator notes")
    lint.add_argument("path", help="XLIFF file to be examined")
    lint.add_argument(
        "--missing-comments",
        choices=POLICIES,
        default=config.MISSING_NOTE_POLICY,
        help="how to treat missing comments (default: %(default)s)",
    )

    trim = sub.add_parser(
        "trim",
        help="remove localizations from an XLIFF file",
        description="Values written as /pattern/ are regular expressions.",
    )
    trim.add_argument("path", help="XLIFF file to be trimmed")
    for flag, text in (
        ("--files", "entries originating from this file are removed"),
        ("--ids", "entries with this id are removed"),
        ("--text", "entries whose source matches are removed"),
        ("--comment", "entries whose note matches are removed"),
    ):
        trim.add_argument(flag, action="append", default=[], type=_criterion, help=text)
    return parser


def main(argv: Optional[List[str]] = None) -> int:
    args = build_parser().parse_args(argv)
    logging.basicConfig(level=getattr(logging, config.LOG_LEVEL), format="%(levelname)s:%(message)s")
    try:
        if args.command == "lint":
            report = XliffLinter(policy=args.missing_comments).lint_file(args.path)
            if report.missing_count and args.missing_comments == "error":
                return 1
        else:
            XliffTrimmer().trim_file(
                args.path, args.files, args.ids, args.text, args.comment
            )
    except (OSError, ParseError) as exc:
        logging.getLogger("xliff_tools").error("%s: %s", args.path, exc)
        return 2
    return 0


if __name__ == "__main__":  # pragma: no cover
    sys.exit(main())
