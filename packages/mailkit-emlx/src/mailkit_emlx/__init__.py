"""mailkit-emlx -- Apple Mail ``.emlx`` / ``.partial.emlx`` to ``.eml`` converter.

Re-exports all public types: converter, batch driver, config, models,
errors, framing decoder, attachment resolver and observers.
"""

from mailkit_emlx.attachments import AttachmentResolver
from mailkit_emlx.batch import convert_all, find_containers, output_filename
from mailkit_emlx.config import EmlxConverterConfig
from mailkit_emlx.converter import EmlxConverter, process_emlx
from mailkit_emlx.errors import (
    AttachmentNotFoundError,
    EmlxConversionError,
    EmlxError,
    ErrorCode,
    MalformedContainerError,
)
from mailkit_emlx.framing import EmlxFrameDecoder, decode_payload
from mailkit_emlx.models import BatchResult, ConversionResult
from mailkit_emlx.protocols import ConversionObserver, LoggingObserver
from mailkit_emlx.rewriter import ExternalAttachmentRewriter

__all__ = [
    # Converter
    "EmlxConverter",
    "process_emlx",
    # Batch
    "convert_all",
    "find_containers",
    "output_filename",
    # Config
    "EmlxConverterConfig",
    # Errors
    "ErrorCode",
    "EmlxError",
    "EmlxConversionError",
    "MalformedContainerError",
    "AttachmentNotFoundError",
    # Models
    "ConversionResult",
    "BatchResult",
    # Pipeline stages
    "EmlxFrameDecoder",
    "decode_payload",
    "AttachmentResolver",
    "ExternalAttachmentRewriter",
    # Observers
    "ConversionObserver",
    "LoggingObserver",
]
