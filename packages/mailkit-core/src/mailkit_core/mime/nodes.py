"""Event types produced by the streaming splitter.

A split message is an ordered sequence of three kinds of events:

- :class:`MessageNode` -- a header block; starts a (sub-)message or part.
- :class:`BodyChunk` -- bytes of a leaf node's body.
- :class:`RawChunk` -- structural bytes owned by a multipart node
  (preamble, boundary delimiter lines, epilogue).

Concatenating the serialised events in order reproduces the input.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Union

from mailkit_core.mime.headers import Headers

_IDENTITY_ENCODINGS = ("", "7bit", "8bit", "binary")


class MessageNode:
    """A header block plus the position of its body in the message tree.

    Attributes derived from the headers (content type, boundary, filename,
    transfer encoding) are captured when the node is created; later header
    edits do not change them.
    """

    def __init__(
        self,
        headers: Headers,
        part_number: tuple[int, ...] = (),
        parent: MessageNode | None = None,
    ) -> None:
        self.headers = headers
        self.part_number = part_number
        self.parent = parent

        msg = headers.as_message()
        self.content_type: str = msg.get_content_type()
        self.boundary: str | None = msg.get_boundary()
        self.filename: str | None = msg.get_filename()
        self.transfer_encoding: str = (
            str(msg.get("Content-Transfer-Encoding", "")).strip().lower()
        )
        self.line_ending: bytes = headers.line_ending()

    def __repr__(self) -> str:
        return (
            f"MessageNode(part_number={self.part_number!r}, "
            f"content_type={self.content_type!r})"
        )

    @property
    def part_label(self) -> str:
        """Dotted part number, e.g. ``"1.1.2"``; empty for the root."""
        return ".".join(str(n) for n in self.part_number)

    @property
    def is_multipart(self) -> bool:
        return self.content_type.startswith("multipart/") and bool(self.boundary)

    @property
    def is_embedded_message(self) -> bool:
        """True for an unencoded ``message/rfc822`` part whose body is a message."""
        return (
            self.content_type == "message/rfc822"
            and self.transfer_encoding in _IDENTITY_ENCODINGS
        )

    def is_within(self, ancestor: MessageNode) -> bool:
        """True when *ancestor* is this node or one of its parents."""
        node: MessageNode | None = self
        while node is not None:
            if node is ancestor:
                return True
            node = node.parent
        return False


@dataclass
class BodyChunk:
    """Bytes belonging to the body of a leaf *node*."""

    node: MessageNode
    data: bytes


@dataclass
class RawChunk:
    """Structural bytes; *node* is the owning multipart (None at top level)."""

    data: bytes
    node: MessageNode | None = field(default=None)


MimeEvent = Union[MessageNode, BodyChunk, RawChunk]
