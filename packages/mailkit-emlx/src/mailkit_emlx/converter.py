"""EmlxConverter -- per-file orchestrator of the mailkit-emlx pipeline.

Wires: container file -> framing decoder -> MIME splitter -> external
attachment rewriter -> MIME joiner -> output sink.  Every stage is a
generator pulling one chunk at a time, so neither the message nor an
attachment is held in memory as a whole.
"""

from __future__ import annotations

import logging
import os
import time
from contextlib import closing
from typing import BinaryIO

from mailkit_core.mime import join_message, split_message
from mailkit_core.streams import iter_chunks

from mailkit_emlx.attachments import AttachmentResolver
from mailkit_emlx.config import EmlxConverterConfig
from mailkit_emlx.errors import EmlxConversionError, ErrorCode
from mailkit_emlx.framing import decode_payload
from mailkit_emlx.models import ConversionResult
from mailkit_emlx.rewriter import ExternalAttachmentRewriter

logger = logging.getLogger("mailkit_emlx")


class EmlxConverter:
    """Convert single ``.emlx`` / ``.partial.emlx`` files to RFC 5322 bytes.

    Parameters
    ----------
    config:
        Converter configuration. Uses defaults when *None*.
    resolver:
        Attachment resolver. Built from *config* when *None*.
    """

    def __init__(
        self,
        config: EmlxConverterConfig | None = None,
        resolver: AttachmentResolver | None = None,
    ) -> None:
        self._config = config or EmlxConverterConfig()
        self._resolver = resolver or AttachmentResolver(self._config)

    @property
    def config(self) -> EmlxConverterConfig:
        return self._config

    def convert(
        self,
        file_path: str,
        sink: BinaryIO,
        error_tolerant: bool | None = None,
    ) -> ConversionResult:
        """Convert *file_path* and write the message to *sink*.

        Parameters
        ----------
        file_path:
            Path to the container file.
        sink:
            Binary writable object receiving the converted message.
        error_tolerant:
            Record missing attachments as warnings instead of failing.
            Defaults to ``config.error_tolerant``.

        Returns
        -------
        ConversionResult
            Warnings and attachment counters for the file.

        Raises
        ------
        MalformedContainerError
            If the container has no length line.
        AttachmentNotFoundError
            If an attachment is missing and the mode is strict.
        OSError
            On read/write failures outside attachment resolution.

        On any exception the bytes already written to *sink* are invalid.
        """
        start = time.monotonic()
        config = self._config
        tolerant = config.error_tolerant if error_tolerant is None else error_tolerant
        filename = os.path.basename(file_path)

        rewriter = ExternalAttachmentRewriter(
            container_path=file_path,
            resolver=self._resolver,
            marker_header=config.marker_header,
            error_tolerant=tolerant,
        )

        try:
            with open(file_path, "rb") as fh:
                payload = decode_payload(iter_chunks(fh, config.chunk_size))
                output = join_message(rewriter.rewrite(split_message(payload)))
                with closing(output):
                    for data in output:
                        sink.write(data)
        except EmlxConversionError as exc:
            logger.error(
                "mailkit_emlx | file=%s | code=%s | detail=%s",
                filename,
                exc.code.value,
                exc.message,
            )
            raise
        except OSError as exc:
            logger.error(
                "mailkit_emlx | file=%s | code=%s | detail=%s",
                filename,
                ErrorCode.E_IO_FAILURE.value,
                exc,
            )
            raise

        elapsed = time.monotonic() - start
        logger.info(
            "mailkit_emlx | file=%s | embedded=%d | missing=%d | "
            "warnings=%d | time=%.1fs",
            filename,
            rewriter.embedded,
            rewriter.missing,
            len(rewriter.warnings),
            elapsed,
        )

        return ConversionResult(
            file_path=file_path,
            parser_version=config.parser_version,
            success=True,
            attachments_embedded=rewriter.embedded,
            attachments_missing=rewriter.missing,
            warnings=rewriter.warnings,
            warning_details=rewriter.warning_details,
            processing_time_seconds=elapsed,
        )


def process_emlx(
    file_path: str,
    sink: BinaryIO,
    error_tolerant: bool = False,
    config: EmlxConverterConfig | None = None,
) -> list[str]:
    """Convert one container into *sink* and return its warning messages.

    The list is empty unless *error_tolerant* is set.
    """
    converter = EmlxConverter(config)
    return converter.convert(file_path, sink, error_tolerant=error_tolerant).warnings
