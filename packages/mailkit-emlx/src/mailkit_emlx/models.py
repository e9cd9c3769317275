"""Pydantic result models for the mailkit-emlx package."""

from __future__ import annotations

from pydantic import BaseModel

from mailkit_emlx.errors import EmlxError

__all__ = [
    "ConversionResult",
    "BatchResult",
]


# ---------------------------------------------------------------------------
# Per-file Result
# ---------------------------------------------------------------------------


class ConversionResult(BaseModel):
    """Outcome of converting one container file.

    ``warnings`` holds human-readable messages and is only populated in
    error-tolerant mode.  ``errors`` holds the code of a fatal failure when
    the batch driver recorded one instead of aborting.
    """

    file_path: str
    output_path: str | None = None
    parser_version: str | None = None
    success: bool = True
    attachments_embedded: int = 0
    attachments_missing: int = 0
    errors: list[str] = []
    warnings: list[str] = []
    error_details: list[EmlxError] = []
    warning_details: list[EmlxError] = []
    processing_time_seconds: float = 0.0


# ---------------------------------------------------------------------------
# Batch Result
# ---------------------------------------------------------------------------


class BatchResult(BaseModel):
    """Outcome of converting every container below an input directory."""

    input_dir: str
    output_dir: str
    results: list[ConversionResult] = []
    processing_time_seconds: float = 0.0

    @property
    def files_total(self) -> int:
        return len(self.results)

    @property
    def files_converted(self) -> int:
        return sum(1 for r in self.results if r.success)

    @property
    def files_failed(self) -> int:
        return sum(1 for r in self.results if not r.success)
