"""Streaming splitter: bytes in, :data:`MimeEvent` sequence out.

The splitter is line-oriented and keeps at most one incomplete line in
memory (long body lines are flushed once they exceed ``_LINE_FLUSH_SIZE``).
The line break in front of a boundary delimiter belongs to the delimiter,
so it is emitted with the boundary's :class:`RawChunk` and never as part of
the preceding leaf body.
"""

from __future__ import annotations

import logging
from collections.abc import Iterable, Iterator

from mailkit_core.errors import CoreErrorCode
from mailkit_core.mime.headers import Headers
from mailkit_core.mime.nodes import BodyChunk, MessageNode, MimeEvent, RawChunk

logger = logging.getLogger("mailkit_core")

_LINE_FLUSH_SIZE = 64 * 1024
_BLANK_LINES = (b"\r\n", b"\n")

_HEADER = "header"
_BODY = "body"


class _MultipartFrame:
    __slots__ = ("node", "delimiter", "close_delimiter", "children")

    def __init__(self, node: MessageNode) -> None:
        boundary = (node.boundary or "").encode("ascii", errors="surrogateescape")
        self.node = node
        self.delimiter = b"--" + boundary
        self.close_delimiter = self.delimiter + b"--"
        self.children = 0


class MessageSplitter:
    """Incremental splitter; call :meth:`feed` per chunk, then :meth:`close`."""

    def __init__(self) -> None:
        self._buffer = bytearray()
        self._state = _HEADER
        self._header_lines: list[bytes] = []
        self._header_parent: MessageNode | None = None
        self._header_part: tuple[int, ...] = ()
        self._body_node: MessageNode | None = None
        self._raw_owner: MessageNode | None = None
        self._pending_eol = b""
        self._mid_line = False
        self._frames: list[_MultipartFrame] = []
        self._closed = False

    def feed(self, chunk: bytes) -> list[MimeEvent]:
        if self._closed:
            raise ValueError("feed() called after close()")
        events: list[MimeEvent] = []
        self._buffer += chunk
        start = 0
        while True:
            end = self._buffer.find(b"\n", start)
            if end == -1:
                break
            self._process_line(bytes(self._buffer[start : end + 1]), events)
            start = end + 1
        del self._buffer[:start]

        if self._state == _BODY and len(self._buffer) > _LINE_FLUSH_SIZE:
            # Keep a trailing CR so a split CRLF stays a line ending.
            keep = 1 if self._buffer.endswith(b"\r") else 0
            flush = bytes(self._buffer[: len(self._buffer) - keep])
            del self._buffer[: len(flush)]
            self._emit_content(flush, events)
            self._mid_line = True
        return events

    def close(self) -> list[MimeEvent]:
        if self._closed:
            return []
        self._closed = True
        events: list[MimeEvent] = []
        if self._buffer:
            self._process_line(bytes(self._buffer), events)
            self._buffer.clear()
        if self._state == _HEADER and self._header_lines:
            self._finish_headers(b"", events)
        if self._body_node is not None and self._pending_eol:
            events.append(BodyChunk(self._body_node, self._pending_eol))
            self._pending_eol = b""
        if self._frames:
            logger.debug(
                "mailkit_core | code=%s | detail=%d multipart(s) not terminated",
                CoreErrorCode.W_MIME_UNTERMINATED.value,
                len(self._frames),
            )
        return events

    # ------------------------------------------------------------------
    # Line handling
    # ------------------------------------------------------------------

    def _process_line(self, line: bytes, events: list[MimeEvent]) -> None:
        if self._mid_line:
            # Remainder of an over-long line; cannot be a delimiter.
            self._mid_line = False
            self._emit_line(line, events)
            return

        if self._frames and line.startswith(b"--") and self._match_boundary(line, events):
            return

        if self._state == _HEADER:
            if line in _BLANK_LINES:
                self._finish_headers(line, events)
            else:
                self._header_lines.append(line)
            return

        self._emit_line(line, events)

    def _match_boundary(self, line: bytes, events: list[MimeEvent]) -> bool:
        marker = line.rstrip(b" \t\r\n")
        for depth in range(len(self._frames) - 1, -1, -1):
            frame = self._frames[depth]
            if marker == frame.delimiter:
                self._enter_boundary(depth, line, events, closing=False)
                return True
            if marker == frame.close_delimiter:
                self._enter_boundary(depth, line, events, closing=True)
                return True
        return False

    def _enter_boundary(
        self, depth: int, line: bytes, events: list[MimeEvent], closing: bool
    ) -> None:
        if self._state == _HEADER and self._header_lines:
            # Part ended without a blank line after its headers.
            self._finish_headers(b"", events)

        if depth < len(self._frames) - 1:
            logger.debug(
                "mailkit_core | code=%s | detail=%d nested multipart(s) closed by outer boundary",
                CoreErrorCode.W_MIME_UNTERMINATED.value,
                len(self._frames) - 1 - depth,
            )
            del self._frames[depth + 1 :]

        frame = self._frames[depth]
        events.append(RawChunk(self._pending_eol + line, frame.node))
        self._pending_eol = b""
        self._body_node = None

        if closing:
            self._frames.pop()
            self._state = _BODY
            self._raw_owner = frame.node
        else:
            frame.children += 1
            self._state = _HEADER
            self._header_parent = frame.node
            self._header_part = frame.node.part_number + (frame.children,)

    def _finish_headers(self, terminator: bytes, events: list[MimeEvent]) -> None:
        node = MessageNode(
            Headers(self._header_lines, terminator),
            part_number=self._header_part,
            parent=self._header_parent,
        )
        self._header_lines = []
        events.append(node)

        if node.is_multipart:
            self._frames.append(_MultipartFrame(node))
            self._state = _BODY
            self._body_node = None
            self._raw_owner = node
        elif node.is_embedded_message:
            self._state = _HEADER
            self._header_parent = node
            self._header_part = node.part_number + (1,)
        else:
            self._state = _BODY
            self._body_node = node
            self._pending_eol = b""

    def _emit_line(self, line: bytes, events: list[MimeEvent]) -> None:
        if self._body_node is None:
            events.append(RawChunk(line, self._raw_owner))
            return
        if line.endswith(b"\r\n"):
            content, eol = line[:-2], b"\r\n"
        elif line.endswith(b"\n"):
            content, eol = line[:-1], b"\n"
        else:
            content, eol = line, b""
        self._emit_content(content, events)
        self._pending_eol = eol

    def _emit_content(self, content: bytes, events: list[MimeEvent]) -> None:
        if self._body_node is None:
            if content:
                events.append(RawChunk(content, self._raw_owner))
            return
        data = self._pending_eol + content
        self._pending_eol = b""
        if data:
            events.append(BodyChunk(self._body_node, data))


def split_message(chunks: Iterable[bytes]) -> Iterator[MimeEvent]:
    """Lazily split a chunked byte stream into :data:`MimeEvent` objects."""
    splitter = MessageSplitter()
    for chunk in chunks:
        yield from splitter.feed(chunk)
    yield from splitter.close()
