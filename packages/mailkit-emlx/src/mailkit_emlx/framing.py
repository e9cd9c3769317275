"""Framing decoder for the ``.emlx`` container format.

An emlx file stores the byte length of the message payload on its first
line, followed by the payload itself and a trailing XML property list::

    1234\\n
    <1234 bytes of RFC 5322 message>
    <?xml version="1.0" encoding="UTF-8"?> ...

:class:`EmlxFrameDecoder` strips the length line and the plist epilogue
from a chunked byte stream without buffering the payload.
"""

from __future__ import annotations

import logging
import re
from collections.abc import Iterable, Iterator

from mailkit_emlx.errors import ErrorCode, MalformedContainerError

logger = logging.getLogger("mailkit_emlx")

# Digits, then whitespace up to and including the first line break.
_LENGTH_PREFIX = re.compile(rb"^(\d+)(?:[ \t]*(?:\r\n|\n|\r)|[ \t]+)")

_PLIST_START = b"<?xml"


class EmlxFrameDecoder:
    """Incremental decoder; call :meth:`feed` per chunk, then :meth:`close`.

    Some containers terminate the final MIME boundary with a single ``-``
    directly in front of the plist.  When the payload ends that way and is
    followed by ``<?xml``, one ``-`` is appended so the closing delimiter
    reads ``--``.  The check looks across chunk boundaries.
    """

    def __init__(self) -> None:
        self.bytes_to_read: int | None = None
        self.bytes_read = 0
        self.finished = False
        self._tail = b""
        self._lookahead: bytearray | None = None

    def feed(self, chunk: bytes) -> bytes:
        if self.finished or not chunk:
            return b""
        if self._lookahead is not None:
            return self._resolve_lookahead(self._lookahead, chunk)

        if self.bytes_to_read is None:
            # The length line must arrive in the first chunk; it is not
            # buffered across chunks.
            match = _LENGTH_PREFIX.match(chunk)
            if match is None:
                raise MalformedContainerError(
                    "Invalid structure; content did not start with payload length"
                )
            self.bytes_to_read = int(match.group(1))
            offset = match.end()
        else:
            offset = 0

        end = min(offset + self.bytes_to_read - self.bytes_read, len(chunk))
        payload = chunk[offset:end]
        self.bytes_read += len(payload)
        self._tail = (self._tail + payload)[-2:]

        if self.bytes_read < self.bytes_to_read:
            return payload
        if self._tail.endswith(b"-") and not self._tail.endswith(b"--"):
            lookahead = self._lookahead = bytearray()
            return payload + self._resolve_lookahead(lookahead, chunk[end:])
        self.finished = True
        return payload

    def close(self) -> bytes:
        """Signal end of input; returns any bytes still owed downstream."""
        if self.bytes_to_read is None:
            raise MalformedContainerError(
                "Invalid structure; content did not start with payload length"
            )
        if self.bytes_read < self.bytes_to_read:
            logger.warning(
                "mailkit_emlx | code=%s | detail=payload ended after %d of %d bytes",
                ErrorCode.W_EMLX_PAYLOAD_TRUNCATED.value,
                self.bytes_read,
                self.bytes_to_read,
            )
        self._lookahead = None
        self.finished = True
        return b""

    def _resolve_lookahead(self, lookahead: bytearray, data: bytes) -> bytes:
        lookahead += data[: len(_PLIST_START) - len(lookahead)]
        if not _PLIST_START.startswith(bytes(lookahead)):
            self._lookahead = None
            self.finished = True
            return b""
        if len(lookahead) < len(_PLIST_START):
            return b""
        self._lookahead = None
        self.finished = True
        return b"-"


def decode_payload(chunks: Iterable[bytes]) -> Iterator[bytes]:
    """Yield the payload of a chunked emlx container.

    Stops pulling from *chunks* as soon as the payload is complete.

    Raises
    ------
    MalformedContainerError
        If the input does not start with a decimal length line.
    """
    decoder = EmlxFrameDecoder()
    for chunk in chunks:
        data = decoder.feed(chunk)
        if data:
            yield data
        if decoder.finished:
            return
    data = decoder.close()
    if data:
        yield data
