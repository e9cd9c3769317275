"""Chunked reading helpers shared by the mailkit packages."""

from __future__ import annotations

from collections.abc import Iterator
from typing import BinaryIO

DEFAULT_CHUNK_SIZE = 64 * 1024


def iter_chunks(fileobj: BinaryIO, chunk_size: int = DEFAULT_CHUNK_SIZE) -> Iterator[bytes]:
    """Yield successive non-empty reads of at most *chunk_size* bytes."""
    while True:
        chunk = fileobj.read(chunk_size)
        if not chunk:
            return
        yield chunk
