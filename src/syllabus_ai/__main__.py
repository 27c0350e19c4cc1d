"""Entry point for ``python -m syllabus_ai``.

Thin CLI adapter around the extraction pipeline: maps command-line input
to :meth:`~syllabus_ai.pipeline.ExtractionOrchestrator.process` and prints
the resulting envelope.  Uses stdlib :mod:`argparse`.

Exit codes:
    0 -- Events were extracted (possibly zero from the model).
    1 -- A failure envelope was printed: the pipeline failed, or the
         input file or configuration could not be loaded.
    2 -- Argument parsing error (handled by argparse).
"""

from __future__ import annotations

import argparse
import dataclasses
import sys
from datetime import date
from pathlib import Path

from syllabus_ai.config import ConfigError, load_settings
from syllabus_ai.log import setup_logging
from syllabus_ai.models.result import ResultEnvelope
from syllabus_ai.output import print_envelope
from syllabus_ai.pipeline import NO_INPUT, build_orchestrator


def _iso_date(value: str) -> date:
    try:
        return date.fromisoformat(value)
    except ValueError as exc:
        raise argparse.ArgumentTypeError(f"not an ISO date: {value!r}") from exc


def _report_failure(args: argparse.Namespace, error: str) -> int:
    """Print a failure envelope for an error caught before the pipeline runs."""
    print_envelope(ResultEnvelope.fail(error), fmt=args.format, pretty=args.pretty)
    return 1


def build_parser() -> argparse.ArgumentParser:
    """Build and return the CLI argument parser."""
    parser = argparse.ArgumentParser(
        prog="syllabus-ai",
        description="Extract dated events from a PDF syllabus or pasted text.",
    )
    parser.add_argument(
        "file",
        nargs="?",
        default=None,
        help="Path to a PDF document.",
    )
    parser.add_argument(
        "--text",
        type=str,
        default=None,
        help="Document text to analyse instead of a file ('-' reads stdin).",
    )
    parser.add_argument(
        "--reference-date",
        type=_iso_date,
        default=None,
        help="Date used to infer the academic year (default: today).",
    )
    parser.add_argument(
        "--format",
        choices=("json", "text"),
        default="json",
        help="Output format (default: json).",
    )
    parser.add_argument(
        "--pretty",
        action="store_true",
        default=False,
        help="Indent JSON output.",
    )
    parser.add_argument(
        "-v",
        "--verbose",
        action="store_true",
        default=False,
        help="Enable debug-level logging.",
    )
    return parser


def main(argv: list[str] | None = None) -> int:
    """Run the syllabus-ai CLI.

    Args:
        argv: Command-line arguments.  Defaults to ``sys.argv[1:]``.

    Returns:
        Exit code: ``0`` on success, ``1`` on error.
    """
    parser = build_parser()
    args = parser.parse_args(argv if argv is not None else sys.argv[1:])

    if args.file is None and args.text is None:
        parser.print_usage(sys.stderr)
        print("Error: provide a PDF file or --text", file=sys.stderr)
        return _report_failure(args, NO_INPUT)

    try:
        settings = load_settings()
    except ConfigError as exc:
        print(f"Error: {exc}", file=sys.stderr)
        return _report_failure(args, f"Configuration error: {exc}")

    try:
        setup_logging("DEBUG" if args.verbose else settings.log_level)
    except ValueError as exc:
        print(f"Error: {exc}", file=sys.stderr)
        return _report_failure(args, f"Configuration error: {exc}")

    if args.reference_date is not None:
        settings = dataclasses.replace(settings, reference_date=args.reference_date)

    manual_text = args.text
    if manual_text == "-":
        manual_text = sys.stdin.read()

    file_bytes: bytes | None = None
    filename: str | None = None
    if args.file is not None and not (manual_text and manual_text.strip()):
        path = Path(args.file)
        if not path.is_file():
            print(f"Error: File not found: {path}", file=sys.stderr)
            return _report_failure(args, f"File not found: {path}")
        try:
            file_bytes = path.read_bytes()
        except OSError as exc:
            print(f"Error: {exc}", file=sys.stderr)
            return _report_failure(args, f"Could not read file: {exc}")
        filename = path.name

    envelope = build_orchestrator(settings).process(
        manual_text=manual_text,
        file_bytes=file_bytes,
        filename=filename,
    )
    print_envelope(envelope, fmt=args.format, pretty=args.pretty)

    return 0 if envelope.success else 1


if __name__ == "__main__":
    raise SystemExit(main())
