# -*- coding: utf-8 -*-
"""Location: ./fragjson/cli.py
Copyright 2025
SPDX-License-Identifier: Apache-2.0
Authors: fragjson contributors

Command-line decoder.
Reads an index-compressed JSON document from a file or stdin, decodes it,
and writes the expanded JSON, pretty-printed, to a file or stdout.

Usage:
    fragjson --input encoded.txt --output decoded.json
    cat encoded.txt | fragjson --indent 2
"""

# Standard
import argparse
import json
import logging
from pathlib import Path
import sys
from typing import Any, List, Optional, TextIO

# Third-Party
from pydantic import ValidationError

# First-Party
from fragjson import __version__
from fragjson.config import get_settings, Settings
from fragjson.document import decode_stream
from fragjson.exceptions import FragmentDecodeError
from fragjson.utils.error_formatter import ErrorFormatter

logger = logging.getLogger(__name__)


class CLIError(Exception):
    """Base class for CLI-related errors."""


def create_parser() -> argparse.ArgumentParser:
    """Create the argument parser for the decoder.

    Returns:
        Configured argument parser
    """
    parser = argparse.ArgumentParser(prog="fragjson", description="Decode index-compressed JSON into fully expanded JSON")

    parser.add_argument("--version", "-V", action="version", version=f"fragjson {__version__}")
    parser.add_argument("--input", "-i", type=Path, help="Encoded JSON file (default: stdin)")
    parser.add_argument("--output", "-o", type=Path, help="Decoded JSON file (default: stdout)")
    parser.add_argument("--indent", type=int, help="Indentation of the printed JSON (default: 4)")
    parser.add_argument("--max-depth", type=int, help="Maximum reference/nesting depth before failing (default: 200)")
    parser.add_argument("--literal-numbers", action="store_true", help="Treat numbers as literal values instead of fragment indices")
    parser.add_argument("--log-level", choices=["DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"], help="Logging level (default: WARNING)")

    return parser


def build_settings(args: argparse.Namespace) -> Settings:
    """Merge command-line overrides into the configured settings.

    Args:
        args: Parsed command line arguments

    Returns:
        Settings: Settings for this run

    Raises:
        ValidationError: If an override is out of range
    """
    overrides: dict[str, Any] = {}
    if args.indent is not None:
        overrides["output_indent"] = args.indent
    if args.max_depth is not None:
        overrides["max_depth"] = args.max_depth
    if args.literal_numbers:
        overrides["numbers_as_indices"] = False
    if args.log_level:
        overrides["log_level"] = args.log_level

    if not overrides:
        return get_settings()
    return Settings(**overrides)


def write_json(value: Any, stream: TextIO, cfg: Settings) -> None:
    """Pretty-print a decoded value.

    Args:
        value: Decoded JSON value
        stream: Destination text stream
        cfg: Settings carrying the output options
    """
    stream.write(json.dumps(value, indent=cfg.output_indent, ensure_ascii=cfg.ensure_ascii))
    stream.write("\n")


def run(args: argparse.Namespace, cfg: Settings) -> None:
    """Decode the configured input and write the result.

    Args:
        args: Parsed command line arguments
        cfg: Settings for this run

    Raises:
        CLIError: If the input cannot be read as UTF-8 or an input or output file cannot be used
    """
    try:
        if args.input is not None:
            logger.info(f"Decoding {args.input}")
            with args.input.open("r", encoding="utf-8", newline="") as reader:
                decoded = decode_stream(reader, cfg)
        else:
            decoded = decode_stream(sys.stdin, cfg)
    except (OSError, UnicodeDecodeError) as e:
        raise CLIError(f"Failed to read input: {e}") from e

    try:
        if args.output is not None:
            with args.output.open("w", encoding="utf-8") as writer:
                write_json(decoded, writer, cfg)
            logger.info(f"Wrote decoded JSON to {args.output}")
        else:
            write_json(decoded, sys.stdout, cfg)
    except OSError as e:
        raise CLIError(f"Failed to write output: {e}") from e


def main(argv: Optional[List[str]] = None) -> int:
    """Main CLI entry point.

    Args:
        argv: Argument list (default: ``sys.argv[1:]``)

    Returns:
        int: Process exit status
    """
    parser = create_parser()
    args = parser.parse_args(argv)

    try:
        cfg = build_settings(args)
    except ValidationError as e:
        print(f"Invalid configuration: {ErrorFormatter.format_validation_error(e)['message']}", file=sys.stderr)
        return 1

    cfg.configure_logging()

    try:
        run(args, cfg)
    except FragmentDecodeError as e:
        print(f"Decoding failed: {ErrorFormatter.format_decode_error(e)['message']}", file=sys.stderr)
        return 1
    except CLIError as e:
        print(f"Decoding failed: {e}", file=sys.stderr)
        return 1
    except KeyboardInterrupt:
        print("\nOperation cancelled by user", file=sys.stderr)
        return 1

    return 0


if __name__ == "__main__":
    sys.exit(main())
