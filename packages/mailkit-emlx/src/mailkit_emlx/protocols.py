"""Observer protocol for batch conversions.

Defines ``ConversionObserver``, the interface through which the batch driver
reports progress, and ``LoggingObserver``, the default implementation that
writes to the package logger.
"""

from __future__ import annotations

import logging
from typing import Protocol, runtime_checkable

from mailkit_emlx.models import BatchResult, ConversionResult

logger = logging.getLogger("mailkit_emlx")


# ---------------------------------------------------------------------------
# Observer Protocol
# ---------------------------------------------------------------------------


@runtime_checkable
class ConversionObserver(Protocol):
    """Receives per-file start/end/warning events from the batch driver."""

    def on_start(self, total: int) -> None:
        """Called once with the number of files about to be converted."""
        ...

    def on_file_start(self, file_path: str, index: int) -> None:
        """Called before converting the *index*-th (0-based) file."""
        ...

    def on_warning(self, file_path: str, message: str) -> None:
        """Called for every warning of a converted file."""
        ...

    def on_file_end(self, result: ConversionResult) -> None:
        """Called after a file was converted or its failure recorded.

        A failed file arrives here only, with ``success`` unset and the cause
        in ``result.error_details``.
        """
        ...

    def on_finish(self, result: BatchResult) -> None:
        """Called once after the last file."""
        ...


# ---------------------------------------------------------------------------
# Default Implementation
# ---------------------------------------------------------------------------


class LoggingObserver:
    """Report batch progress through the ``mailkit_emlx`` logger."""

    def __init__(self) -> None:
        self._total = 0

    def on_start(self, total: int) -> None:
        self._total = total
        logger.info("mailkit_emlx | batch | files=%d", total)

    def on_file_start(self, file_path: str, index: int) -> None:
        logger.debug(
            "mailkit_emlx | batch | progress=%d/%d | file=%s",
            index + 1,
            self._total,
            file_path,
        )

    def on_warning(self, file_path: str, message: str) -> None:
        logger.warning("mailkit_emlx | file=%s | detail=%s", file_path, message)

    def on_file_end(self, result: ConversionResult) -> None:
        pass

    def on_finish(self, result: BatchResult) -> None:
        logger.info(
            "mailkit_emlx | batch | converted=%d | failed=%d | time=%.1fs",
            result.files_converted,
            result.files_failed,
            result.processing_time_seconds,
        )
