"""Structural rewriter that splices external attachments back into a message."""

from __future__ import annotations

import logging
from collections.abc import Iterable, Iterator

from mailkit_core.mime import MessageNode, MimeEvent, Rewriter

from mailkit_emlx.attachments import AttachmentResolver
from mailkit_emlx.errors import AttachmentNotFoundError, EmlxError, ErrorCode

logger = logging.getLogger("mailkit_emlx")


class ExternalAttachmentRewriter:
    """Rewrite every placeholder node of one container.

    A placeholder node carries the marker header (``X-Apple-Content-Length``
    by default).  The header is removed and the node's body is replaced with
    the bytes of the attachment file.  With *error_tolerant* set, a missing
    attachment is recorded in :attr:`warnings` and the body is left empty;
    otherwise :class:`AttachmentNotFoundError` propagates.
    """

    def __init__(
        self,
        container_path: str,
        resolver: AttachmentResolver,
        marker_header: str = "X-Apple-Content-Length",
        error_tolerant: bool = False,
    ) -> None:
        self.container_path = container_path
        self.marker_header = marker_header
        self.error_tolerant = error_tolerant
        self.warnings: list[str] = []
        self.warning_details: list[EmlxError] = []
        self.embedded = 0
        self.missing = 0
        self._resolver = resolver
        self._rewriter = Rewriter(self.is_placeholder, self._replace_body)

    def is_placeholder(self, node: MessageNode) -> bool:
        return node.headers.has(self.marker_header)

    def rewrite(self, events: Iterable[MimeEvent]) -> Iterator[MimeEvent]:
        return self._rewriter.rewrite(events)

    def _replace_body(self, node: MessageNode) -> Iterator[bytes]:
        node.headers.remove(self.marker_header)
        return self._attachment_body(node)

    def _attachment_body(self, node: MessageNode) -> Iterator[bytes]:
        try:
            yield from self._resolver.open_attachment(self.container_path, node)
        except AttachmentNotFoundError as exc:
            self.missing += 1
            if not self.error_tolerant:
                raise
            logger.info(
                "mailkit_emlx | file=%s | part=%s | code=%s | detail=%s",
                self.container_path,
                node.part_label,
                ErrorCode.W_EMLX_ATTACHMENT_MISSING.value,
                exc.message,
            )
            self.warnings.append(exc.message)
            self.warning_details.append(
                EmlxError(
                    code=ErrorCode.W_EMLX_ATTACHMENT_MISSING,
                    message=exc.message,
                    stage="attachment",
                    recoverable=True,
                    part_number=node.part_label or None,
                )
            )
            return
        self.embedded += 1
