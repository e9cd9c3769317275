"""Shared error codes and base error model for the mailkit framework.

``CoreErrorCode`` contains the error/warning codes common to all mailkit
packages.  ``BaseConversionError`` is a Pydantic model that each package
extends with its own location field (e.g. ``part_number`` for the emlx
converter).
"""

from __future__ import annotations

from enum import Enum

from pydantic import BaseModel


class CoreErrorCode(str, Enum):
    """Error codes shared across all mailkit packages.

    Each package maintains its own *complete* ``ErrorCode`` enum that includes
    both the shared codes here and package-specific codes.  Values equal their
    names so they are stable strings suitable for logs and alerting.
    """

    # I/O errors
    E_IO_FAILURE = "E_IO_FAILURE"

    # Warnings (non-fatal)
    W_MIME_UNTERMINATED = "W_MIME_UNTERMINATED"


class BaseConversionError(BaseModel):
    """Base structured error with code, message, and context.

    The ``code`` field is typed as ``str`` so it accepts any package-specific
    ``ErrorCode`` enum member.
    """

    code: str
    message: str
    stage: str | None = None
    recoverable: bool = False
