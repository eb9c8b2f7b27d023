"""Command-line interface for the Plato transcript converter.

WHY: Transcripts live in files and pipes as often as in the editor.
The CLI exposes every registered conversion behind one command so a
transcript can be converted, or a model reply sanitized, from a shell
script or a terminal.

HOW: argparse takes a conversion key and an optional input path. The
input is read (file or stdin), decoded as JSON when the conversion reads
messages, passed to run_conversion(), and the result is written to
--output or stdout (JSON when the conversion writes messages).

RULES:
- Positional: conversion key (one of CONVERSIONS), input path ("-" = stdin)
- --assistant-name defaults to PLATO_ASSISTANT_NAME from the environment
- Converted output goes to stdout or --output; diagnostics to stderr
- ConversionError and invalid JSON exit with status 1 and "Error: ..."
- Python 3.9 compatible: no match/case, no X | Y unions at runtime
"""

from __future__ import annotations

import argparse
import json
import logging
import sys
from pathlib import Path
from typing import Any, List, Optional

from plato_converter.config import DEFAULT_ASSISTANT_NAME, LOG_LEVEL
from plato_converter.converters import CONVERSIONS, run_conversion
from plato_converter.errors import ConversionError

logger = logging.getLogger(__name__)


def _status(msg: str) -> None:
    """Print a status message to stderr so stdout stays pipeable."""
    print(msg, file=sys.stderr, flush=True)


def _read_input(source: str) -> str:
    """Read the whole input from a file path or stdin ("-")."""
    if source == "-":
        return sys.stdin.read()
    return Path(source).read_text(encoding="utf-8")


def _decode_input(raw: str, source_form: str) -> Any:
    """Decode raw input text into the value the conversion expects.

    RULES:
    - messages input is JSON; any JSON value is passed on, so the lenient
      handling of non-list input stays with the converter
    - every other form is passed through as text
    """
    if source_form == "messages":
        return json.loads(raw)
    return raw


def _encode_output(result: Any, target_form: str) -> str:
    if target_form == "messages":
        return json.dumps(result, indent=2, ensure_ascii=False) + "\n"
    return result


def _write_output(content: str, destination: Optional[str]) -> None:
    if destination is None:
        sys.stdout.write(content)
        sys.stdout.flush()
        return
    Path(destination).write_text(content, encoding="utf-8")
    _status("Saved: {}".format(destination))


def build_parser() -> argparse.ArgumentParser:
    """Build the argparse parser for the CLI.

    WHY: Separating parser construction from main() makes the CLI
    testable; tests can inspect the parser without running a conversion.
    """
    parser = argparse.ArgumentParser(
        prog="plato_converter",
        description="Convert dialogue transcripts between Plato HTML, Plato text "
                    "and chat messages, or sanitize model output into plain text.",
    )

    parser.add_argument(
        "conversion",
        choices=sorted(CONVERSIONS.keys()),
        help="Conversion to run.",
    )

    parser.add_argument(
        "input_file",
        nargs="?",
        default="-",
        help="Input file path, or '-' to read stdin (default: %(default)s).",
    )

    parser.add_argument(
        "--output",
        "-o",
        default=None,
        help="Write the result to this file instead of stdout.",
    )

    parser.add_argument(
        "--assistant-name",
        default=DEFAULT_ASSISTANT_NAME or None,
        help="Assistant speaker name for document-to-messages "
             "(default: PLATO_ASSISTANT_NAME).",
    )

    parser.add_argument(
        "--log-level",
        default=LOG_LEVEL,
        choices=["DEBUG", "INFO", "WARNING", "ERROR"],
        help="Diagnostic log level (default: %(default)s).",
    )

    return parser


def main(argv: Optional[List[str]] = None) -> None:
    """Entry point for the CLI.

    RULES:
    - argv=None means use sys.argv (normal CLI invocation)
    - Explicit argv is for testing
    """
    parser = build_parser()
    args = parser.parse_args(argv)

    logging.basicConfig(
        level=getattr(logging, args.log_level),
        format="%(levelname)s %(name)s: %(message)s",
        stream=sys.stderr,
    )

    conversion = CONVERSIONS[args.conversion]

    try:
        raw = _read_input(args.input_file)
    except OSError as exc:
        print("Error: Cannot read input: {}".format(exc), file=sys.stderr)
        sys.exit(1)

    try:
        value = _decode_input(raw, conversion.source)
    except json.JSONDecodeError as exc:
        print("Error: Input is not valid JSON: {}".format(exc), file=sys.stderr)
        sys.exit(1)

    logger.info("Running %s on %s", conversion.key, args.input_file)
    try:
        result = run_conversion(conversion.key, value, assistant_name=args.assistant_name)
    except ConversionError as exc:
        print("Error: {}".format(exc), file=sys.stderr)
        sys.exit(1)

    _write_output(_encode_output(result, conversion.target), args.output)


if __name__ == "__main__":
    main()
