"""Locate and stream attachments that Mail.app stored outside the container.

A ``.partial.emlx`` placeholder part keeps its headers but not its body.
The body lives as a plain file in the container's own directory.  Its name
is taken from the part's Content-Disposition/Content-Type metadata when
present; otherwise the directory is expected to hold exactly one file
(ignoring ``.DS_Store``), because Mail.app falls back to a locale-specific
default name such as ``Mail-Anhang.jpeg`` for unnamed attachments.
"""

from __future__ import annotations

import logging
import os
from collections.abc import Iterator

from mailkit_core.mime import MessageNode
from mailkit_core.streams import iter_chunks

from mailkit_emlx.config import EmlxConverterConfig
from mailkit_emlx.errors import AttachmentNotFoundError, ErrorCode

logger = logging.getLogger("mailkit_emlx")


class AttachmentResolver:
    """Resolve placeholder nodes to attachment files and stream their bytes."""

    def __init__(self, config: EmlxConverterConfig | None = None) -> None:
        self._config = config or EmlxConverterConfig()

    @staticmethod
    def attachment_directory(container_path: str) -> str:
        return os.path.dirname(os.path.abspath(container_path))

    def candidate_filenames(self, container_path: str, node: MessageNode) -> list[str]:
        """Return the filenames to try, in priority order."""
        candidates: list[str] = []
        if node.filename:
            candidates.append(node.filename)
        discovered = self.filename_from_directory(self.attachment_directory(container_path))
        if discovered:
            candidates.append(discovered)
        return candidates

    def filename_from_directory(self, directory: str) -> str | None:
        """Return the only non-ignored entry of *directory*, or None."""
        try:
            entries = os.listdir(directory)
        except OSError as exc:
            logger.debug(
                "mailkit_emlx | code=%s | dir=%s | detail=cannot list directory: %s",
                ErrorCode.W_EMLX_DIRECTORY_AMBIGUOUS.value,
                directory,
                exc,
            )
            return None

        ignored = tuple(self._config.ignored_entries)
        files = sorted(e for e in entries if not (ignored and e.startswith(ignored)))
        if len(files) != 1:
            logger.debug(
                "mailkit_emlx | code=%s | dir=%s | detail=expected one file, found %d%s",
                ErrorCode.W_EMLX_DIRECTORY_AMBIGUOUS.value,
                directory,
                len(files),
                f" ({', '.join(files)})" if files else "",
            )
            return None
        return files[0]

    def open_attachment(self, container_path: str, node: MessageNode) -> Iterator[bytes]:
        """Stream the bytes of the first candidate file that can be opened.

        Candidates that cannot be opened are skipped silently.  Only one
        file is open at a time and it is closed before the generator ends.

        Raises
        ------
        AttachmentNotFoundError
            If no candidate could be opened, or the opened file failed
            while being read.
        """
        directory = self.attachment_directory(container_path)
        candidates = self.candidate_filenames(container_path, node)

        for name in candidates:
            path = os.path.join(directory, name)
            try:
                fh = open(path, "rb")
            except OSError as exc:
                logger.debug(
                    "mailkit_emlx | part=%s | file=%s | detail=cannot open: %s",
                    node.part_label,
                    path,
                    exc,
                )
                continue
            with fh:
                logger.debug(
                    "mailkit_emlx | part=%s | file=%s | detail=embedding attachment",
                    node.part_label,
                    path,
                )
                try:
                    yield from iter_chunks(fh, self._config.chunk_size)
                except OSError as exc:
                    raise AttachmentNotFoundError(
                        f"Could not read attachment file {name}: {exc}",
                        tried=[name],
                        part_number=node.part_label or None,
                    ) from exc
            return

        message = "Could not get attachment file"
        if candidates:
            message += f" (tried {', '.join(candidates)})"
        raise AttachmentNotFoundError(
            message, tried=candidates, part_number=node.part_label or None
        )
