"""CLI entry point for the attention/triage engine.

Usage:
    attention-triage --version
    attention-triage evaluate case.json [--trace]
    cat case.json | attention-triage evaluate -

The outcome is printed to stdout as JSON; logs go to stderr.
"""

from __future__ import annotations

import argparse
import json
import sys
from typing import TYPE_CHECKING

import attention_triage
from attention_triage.config import get_settings
from attention_triage.domain.exceptions import PayloadError
from attention_triage.infrastructure.logging import setup_logging
from attention_triage.services.payload import parse_case
from attention_triage.services.triage import TriageService

if TYPE_CHECKING:
    from collections.abc import Sequence

EXIT_OK = 0
EXIT_INPUT_ERROR = 2


def _build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="attention-triage",
        description="Evaluate attention tier and suggestion for a screening case",
    )
    parser.add_argument(
        "--version",
        action="version",
        version=f"Attention Triage v{attention_triage.__version__}",
    )
    subparsers = parser.add_subparsers(dest="command")

    evaluate = subparsers.add_parser("evaluate", help="Evaluate one case payload")
    evaluate.add_argument(
        "case",
        help="Path to a case JSON file, or '-' to read from stdin",
    )
    evaluate.add_argument(
        "--trace",
        action="store_true",
        help="Include the fired-rule trace in the output",
    )
    return parser


def _read_case(source: str) -> object:
    if source == "-":
        return json.load(sys.stdin)
    with open(source, encoding="utf-8") as handle:
        return json.load(handle)


def _evaluate(args: argparse.Namespace) -> int:
    settings = get_settings()
    setup_logging(settings.logging, stream=sys.stderr)

    try:
        raw = _read_case(args.case)
    except (OSError, UnicodeDecodeError, json.JSONDecodeError) as e:
        print(f"ERROR: cannot read case: {e}", file=sys.stderr)
        return EXIT_INPUT_ERROR

    if not isinstance(raw, dict):
        print("ERROR: case payload must be a JSON object", file=sys.stderr)
        return EXIT_INPUT_ERROR

    try:
        case = parse_case(raw)
    except PayloadError as e:
        print(f"ERROR: invalid case: {e}", file=sys.stderr)
        return EXIT_INPUT_ERROR

    outcome = TriageService(settings.triage).assess_case(case)
    print(json.dumps(outcome.to_dict(include_trace=args.trace), ensure_ascii=False, indent=2))
    return EXIT_OK


def main(argv: Sequence[str] | None = None) -> int:
    """Main entry point for the Attention Triage CLI."""
    parser = _build_parser()
    args = parser.parse_args(argv)

    if args.command == "evaluate":
        return _evaluate(args)

    print(f"Attention Triage v{attention_triage.__version__}")
    print("Run with --help for usage information.")
    return EXIT_OK


if __name__ == "__main__":
    sys.exit(main())
