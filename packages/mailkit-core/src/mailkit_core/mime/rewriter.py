"""Selective node rewriting over a :data:`MimeEvent` stream."""

from __future__ import annotations

from collections.abc import Callable, Iterable, Iterator

from mailkit_core.mime.encoders import encode_body
from mailkit_core.mime.nodes import BodyChunk, MessageNode, MimeEvent, RawChunk

NodeMatcher = Callable[[MessageNode], bool]
BodyHandler = Callable[[MessageNode], Iterable[bytes]]


class Rewriter:
    """Replace the body of every node selected by *matcher*.

    For a selected node, ``handler(node)`` is called *before* the node is
    passed downstream, so header edits made in the call are serialised.  It
    returns an iterable of decoded body bytes that is re-encoded with the
    node's Content-Transfer-Encoding and emitted as the new body.  The node's
    original body (and, for embedded messages, its whole subtree) is consumed
    and discarded here; callers never see it.  Every other event passes
    through untouched and in order.
    """

    def __init__(self, matcher: NodeMatcher, handler: BodyHandler) -> None:
        self._matcher = matcher
        self._handler = handler

    def rewrite(self, events: Iterable[MimeEvent]) -> Iterator[MimeEvent]:
        stream = iter(events)
        lookahead: MimeEvent | None = None
        while True:
            if lookahead is not None:
                event, lookahead = lookahead, None
            else:
                event = next(stream, None)
                if event is None:
                    return

            if not (isinstance(event, MessageNode) and self._matcher(event)):
                yield event
                continue

            node = event
            body = self._handler(node)
            yield node

            lookahead = self._drain(node, stream)

            last = b""
            for data in encode_body(body, node.transfer_encoding, node.line_ending):
                if data:
                    last = data[-1:]
                    yield BodyChunk(node, data)

            if (
                isinstance(lookahead, RawChunk)
                and last
                and last != b"\n"
                and not lookahead.data.startswith((b"\r\n", b"\n"))
            ):
                yield RawChunk(node.line_ending, lookahead.node)

    @staticmethod
    def _drain(node: MessageNode, stream: Iterator[MimeEvent]) -> MimeEvent | None:
        """Discard events of *node*'s subtree; return the first event after it."""
        for event in stream:
            owner = event if isinstance(event, MessageNode) else event.node
            if owner is None or not owner.is_within(node):
                return event
        return None
