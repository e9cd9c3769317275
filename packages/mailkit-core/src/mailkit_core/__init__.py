"""mailkit-core -- Shared primitives for the mailkit framework.

Re-exports all public types: errors, the streaming MIME engine
and chunked stream helpers.
"""

from mailkit_core.errors import BaseConversionError, CoreErrorCode
from mailkit_core.mime import (
    BodyChunk,
    Headers,
    MessageNode,
    MessageSplitter,
    MimeEvent,
    RawChunk,
    Rewriter,
    encode_body,
    join_message,
    split_message,
)
from mailkit_core.streams import DEFAULT_CHUNK_SIZE, iter_chunks

__all__ = [
    # Errors
    "CoreErrorCode",
    "BaseConversionError",
    # MIME engine
    "Headers",
    "MessageNode",
    "BodyChunk",
    "RawChunk",
    "MimeEvent",
    "MessageSplitter",
    "split_message",
    "Rewriter",
    "join_message",
    "encode_body",
    # Streams
    "DEFAULT_CHUNK_SIZE",
    "iter_chunks",
]
