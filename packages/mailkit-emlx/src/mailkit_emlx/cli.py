"""Command-line entry point for the mailkit-emlx converter.

Usage:
    mailkit-emlx INPUT_DIR OUTPUT_DIR
    mailkit-emlx INPUT_DIR OUTPUT_DIR --ignore-errors
    mailkit-emlx INPUT_DIR OUTPUT_DIR --config converter.yaml --verbose
"""

from __future__ import annotations

import argparse
import logging
import sys
from typing import TextIO

from mailkit_emlx.batch import convert_all
from mailkit_emlx.config import EmlxConverterConfig
from mailkit_emlx.errors import EmlxConversionError
from mailkit_emlx.models import BatchResult, ConversionResult


class ConsoleObserver:
    """Print one progress line per file and every warning or failure to *stream*."""

    def __init__(self, stream: TextIO | None = None) -> None:
        self._stream = stream or sys.stderr
        self._total = 0
        self.current: str | None = None

    def on_start(self, total: int) -> None:
        self._total = total

    def on_file_start(self, file_path: str, index: int) -> None:
        self.current = file_path
        print(f"Converting [{index + 1}/{self._total}] {file_path}", file=self._stream)

    def on_warning(self, file_path: str, message: str) -> None:
        print(f"{file_path}: {message}", file=self._stream)

    def on_file_end(self, result: ConversionResult) -> None:
        if not result.success:
            for error in result.error_details:
                print(f"{self.current}: {error.message}", file=self._stream)

    def on_finish(self, result: BatchResult) -> None:
        print(
            f"Converted {result.files_converted} of {result.files_total} file(s)"
            + (f", {result.files_failed} failed" if result.files_failed else ""),
            file=self._stream,
        )


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="mailkit-emlx",
        description="Convert Apple Mail .emlx/.partial.emlx files to .eml, "
        "re-attaching externally stored attachments.",
    )
    parser.add_argument("input_dir", help="Directory searched recursively for .emlx files")
    parser.add_argument("output_dir", help="Directory receiving the .eml files")
    parser.add_argument(
        "--ignore-errors",
        "--ignoreErrors",
        dest="ignore_errors",
        action="store_true",
        help="Report missing attachments and broken files instead of aborting",
    )
    parser.add_argument(
        "--config",
        type=str,
        default=None,
        help="YAML or JSON file with converter settings",
    )
    parser.add_argument(
        "--verbose",
        action="store_true",
        help="Enable debug logging",
    )
    return parser


def main(argv: list[str] | None = None) -> int:
    args = build_parser().parse_args(argv)

    logging.basicConfig(
        level=logging.DEBUG if args.verbose else logging.WARNING,
        format="%(levelname)s %(name)s: %(message)s",
    )

    config = (
        EmlxConverterConfig.from_file(args.config) if args.config else EmlxConverterConfig()
    )
    error_tolerant = True if args.ignore_errors else None
    observer = ConsoleObserver()

    try:
        convert_all(
            args.input_dir,
            args.output_dir,
            error_tolerant,
            config=config,
            observer=observer,
        )
    except (EmlxConversionError, OSError) as exc:
        print(
            f"Encountered error when processing {observer.current or args.input_dir} "
            "-- run with '--ignore-errors' argument to avoid aborting the conversion.",
            file=sys.stderr,
        )
        print(f"Error: {exc}", file=sys.stderr)
        return 1
    return 0
