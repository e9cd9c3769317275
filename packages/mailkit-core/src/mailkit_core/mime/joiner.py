"""Re-serialise a :data:`MimeEvent` stream into bytes."""

from __future__ import annotations

from collections.abc import Iterable, Iterator

from mailkit_core.mime.nodes import MessageNode, MimeEvent


def join_message(events: Iterable[MimeEvent]) -> Iterator[bytes]:
    for event in events:
        data = event.headers.to_bytes() if isinstance(event, MessageNode) else event.data
        if data:
            yield data
