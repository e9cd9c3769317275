"""Error codes, structured error model and exceptions for mailkit-emlx.

``ErrorCode`` contains all emlx-specific error/warning codes plus the shared
codes from the core taxonomy.  ``EmlxError`` extends ``BaseConversionError``
with the narrowed ``code`` type and the affected MIME part.  The raisable
exceptions wrap an ``EmlxError`` so callers can both ``except`` them and
serialise what went wrong.
"""

from __future__ import annotations

from enum import Enum

from mailkit_core.errors import BaseConversionError


class ErrorCode(str, Enum):
    """Error codes for mailkit-emlx.

    Fatal codes use an ``E_`` prefix; warnings use ``W_``.
    Values equal their names for stable log/alerting strings.
    """

    # Emlx-specific fatal errors
    E_EMLX_MALFORMED_CONTAINER = "E_EMLX_MALFORMED_CONTAINER"
    E_EMLX_ATTACHMENT_NOT_FOUND = "E_EMLX_ATTACHMENT_NOT_FOUND"

    # Shared codes (reused from core taxonomy)
    E_IO_FAILURE = "E_IO_FAILURE"

    # Warnings (non-fatal)
    W_EMLX_ATTACHMENT_MISSING = "W_EMLX_ATTACHMENT_MISSING"
    W_EMLX_DIRECTORY_AMBIGUOUS = "W_EMLX_DIRECTORY_AMBIGUOUS"
    W_EMLX_PAYLOAD_TRUNCATED = "W_EMLX_PAYLOAD_TRUNCATED"
    W_MIME_UNTERMINATED = "W_MIME_UNTERMINATED"


class EmlxError(BaseConversionError):
    """Structured error for the emlx conversion pipeline.

    Narrows the ``code`` field to ``ErrorCode`` and records the dotted part
    number of the MIME node involved, when there is one.
    """

    code: ErrorCode  # type: ignore[assignment]
    part_number: str | None = None


class EmlxConversionError(Exception):
    """Raisable exception wrapping an :class:`EmlxError` data model.

    Convenience properties delegate to the underlying error model for
    common fields (``code``, ``message``, ``stage``, ``recoverable``).
    """

    default_code: ErrorCode = ErrorCode.E_IO_FAILURE
    default_stage: str | None = None

    def __init__(self, message: str, **kwargs: object) -> None:
        kwargs.setdefault("code", self.default_code)
        kwargs.setdefault("stage", self.default_stage)
        self.error = EmlxError(message=message, **kwargs)  # type: ignore[arg-type]
        super().__init__(self.error.message)

    @property
    def code(self) -> ErrorCode:
        return self.error.code

    @property
    def message(self) -> str:
        return self.error.message

    @property
    def stage(self) -> str | None:
        return self.error.stage

    @property
    def recoverable(self) -> bool:
        return self.error.recoverable


class MalformedContainerError(EmlxConversionError):
    """The container did not start with a decimal payload length."""

    default_code = ErrorCode.E_EMLX_MALFORMED_CONTAINER
    default_stage = "framing"


class AttachmentNotFoundError(EmlxConversionError):
    """No candidate file yielded the content of an external attachment."""

    default_code = ErrorCode.E_EMLX_ATTACHMENT_NOT_FOUND
    default_stage = "attachment"

    def __init__(
        self, message: str, tried: list[str] | None = None, **kwargs: object
    ) -> None:
        kwargs.setdefault("recoverable", True)
        super().__init__(message, **kwargs)
        self.tried = list(tried or [])
