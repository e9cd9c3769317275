"""Batch driver: convert every container below a directory.

Each file is converted independently into ``<output_dir>/<stem>.eml``.  In
strict mode the first fatal error aborts the batch (after its partial output
has been removed); in error-tolerant mode the failure is recorded in that
file's result and the batch moves on.
"""

from __future__ import annotations

import logging
import os
import time
from pathlib import Path
from typing import BinaryIO

from mailkit_emlx.config import EmlxConverterConfig
from mailkit_emlx.converter import EmlxConverter
from mailkit_emlx.errors import EmlxConversionError, EmlxError, ErrorCode
from mailkit_emlx.models import BatchResult, ConversionResult
from mailkit_emlx.protocols import ConversionObserver, LoggingObserver

logger = logging.getLogger("mailkit_emlx")


def find_containers(input_dir: str, pattern: str = "**/*.emlx") -> list[str]:
    """Return container paths relative to *input_dir*, sorted."""
    root = Path(input_dir)
    return sorted(
        p.relative_to(root).as_posix() for p in root.glob(pattern) if p.is_file()
    )


def output_filename(file_path: str, suffix: str = ".eml") -> str:
    """Map ``.../123.partial.emlx`` to ``123.eml``."""
    name = os.path.basename(file_path)
    return name.split(".", 1)[0] + suffix


def convert_all(
    input_dir: str,
    output_dir: str,
    error_tolerant: bool | None = None,
    *,
    config: EmlxConverterConfig | None = None,
    observer: ConversionObserver | None = None,
) -> BatchResult:
    """Convert all containers under *input_dir* into *output_dir*.

    Parameters
    ----------
    input_dir:
        Directory searched recursively with ``config.input_pattern``.
    output_dir:
        Destination directory; created when missing.
    error_tolerant:
        Record missing attachments and fatal per-file errors instead of
        aborting.  Defaults to ``config.error_tolerant``.
    config:
        Converter configuration. Uses defaults when *None*.
    observer:
        Progress observer. Defaults to :class:`LoggingObserver`.

    Returns
    -------
    BatchResult
        One :class:`ConversionResult` per container, in processing order.

    Raises
    ------
    EmlxConversionError, OSError
        In strict mode, the first fatal per-file error.
    """
    start = time.monotonic()
    config = config or EmlxConverterConfig()
    observer = observer or LoggingObserver()
    converter = EmlxConverter(config)
    tolerant = config.error_tolerant if error_tolerant is None else error_tolerant

    files = find_containers(input_dir, config.input_pattern)
    os.makedirs(output_dir, exist_ok=True)

    batch = BatchResult(input_dir=input_dir, output_dir=output_dir)
    observer.on_start(len(files))

    for index, rel_path in enumerate(files):
        file_path = os.path.join(input_dir, rel_path)
        output_path = os.path.join(
            output_dir, output_filename(rel_path, config.output_suffix)
        )
        observer.on_file_start(rel_path, index)
        file_start = time.monotonic()

        try:
            with _open_output(output_path) as sink:
                result = converter.convert(file_path, sink, error_tolerant=tolerant)
        except (EmlxConversionError, OSError) as exc:
            if config.remove_failed_output:
                _discard(output_path)
            result = _failure_result(
                file_path, exc, time.monotonic() - file_start, config.parser_version
            )
            batch.results.append(result)
            observer.on_file_end(result)
            if not tolerant:
                raise
            continue

        result.output_path = output_path
        for message in result.warnings:
            observer.on_warning(rel_path, message)
        batch.results.append(result)
        observer.on_file_end(result)

    batch.processing_time_seconds = time.monotonic() - start
    observer.on_finish(batch)
    return batch


def _open_output(output_path: str) -> BinaryIO:
    try:
        return open(output_path, "wb")
    except OSError as exc:
        logger.error(
            "mailkit_emlx | file=%s | code=%s | detail=%s",
            output_path,
            ErrorCode.E_IO_FAILURE.value,
            exc,
        )
        raise


def _failure_result(
    file_path: str,
    exc: EmlxConversionError | OSError,
    elapsed: float,
    parser_version: str,
) -> ConversionResult:
    if isinstance(exc, EmlxConversionError):
        error = exc.error
    else:
        error = EmlxError(
            code=ErrorCode.E_IO_FAILURE,
            message=str(exc),
            stage="convert",
        )
    return ConversionResult(
        file_path=file_path,
        parser_version=parser_version,
        success=False,
        errors=[error.code.value],
        error_details=[error],
        processing_time_seconds=elapsed,
    )


def _discard(output_path: str) -> None:
    try:
        os.remove(output_path)
    except FileNotFoundError:
        pass
    except OSError as exc:
        logger.warning(
            "mailkit_emlx | file=%s | detail=could not remove partial output: %s",
            output_path,
            exc,
        )
