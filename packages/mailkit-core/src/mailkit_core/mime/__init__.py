"""Streaming MIME structure engine: split, rewrite and join.

``split_message`` turns a chunked byte stream into an ordered sequence of
events, ``Rewriter`` substitutes the bodies of selected nodes, and
``join_message`` turns the events back into bytes.  Untouched content is
reproduced byte for byte.
"""

from mailkit_core.mime.encoders import encode_body
from mailkit_core.mime.headers import Headers
from mailkit_core.mime.joiner import join_message
from mailkit_core.mime.nodes import BodyChunk, MessageNode, MimeEvent, RawChunk
from mailkit_core.mime.rewriter import Rewriter
from mailkit_core.mime.splitter import MessageSplitter, split_message

__all__ = [
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
]
