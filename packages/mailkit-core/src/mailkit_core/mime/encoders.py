"""Streaming Content-Transfer-Encoding encoders.

Each encoder consumes decoded body chunks and yields encoded chunks without
holding more than one input chunk (plus a small carry) in memory.  Output
does not add a trailing line break; the delimiter that follows a body supplies it.
"""

from __future__ import annotations

import binascii
from collections.abc import Iterable, Iterator

# 57 input bytes encode to one 76-column base64 line.
_BASE64_LINE_INPUT = 57


def encode_body(
    chunks: Iterable[bytes],
    transfer_encoding: str = "",
    line_ending: bytes = b"\r\n",
) -> Iterator[bytes]:
    """Encode *chunks* according to *transfer_encoding*.

    ``base64`` and ``quoted-printable`` are encoded; every other value
    (``7bit``, ``8bit``, ``binary``, empty, unknown) passes bytes through.
    """
    encoding = transfer_encoding.strip().lower()
    if encoding == "base64":
        return encode_base64(chunks, line_ending)
    if encoding == "quoted-printable":
        return encode_quoted_printable(chunks, line_ending)
    return (chunk for chunk in chunks if chunk)


def encode_base64(chunks: Iterable[bytes], line_ending: bytes = b"\r\n") -> Iterator[bytes]:
    carry = b""
    first = True
    for chunk in chunks:
        carry += chunk
        usable = len(carry) - len(carry) % _BASE64_LINE_INPUT
        if not usable:
            continue
        lines = [
            binascii.b2a_base64(carry[i : i + _BASE64_LINE_INPUT], newline=False)
            for i in range(0, usable, _BASE64_LINE_INPUT)
        ]
        carry = carry[usable:]
        encoded = line_ending.join(lines)
        yield encoded if first else line_ending + encoded
        first = False
    if carry:
        encoded = binascii.b2a_base64(carry, newline=False)
        yield encoded if first else line_ending + encoded


def encode_quoted_printable(
    chunks: Iterable[bytes], line_ending: bytes = b"\r\n"
) -> Iterator[bytes]:
    """Encode line by line; input line breaks become *line_ending*."""
    carry = b""
    first = True
    for chunk in chunks:
        carry += chunk
        if b"\n" not in carry:
            continue
        complete, carry = carry.rsplit(b"\n", 1)
        lines = [_qp_line(line, line_ending) for line in complete.split(b"\n")]
        encoded = line_ending.join(lines)
        yield encoded if first else line_ending + encoded
        first = False
    if carry or not first:
        encoded = _qp_line(carry, line_ending)
        yield encoded if first else line_ending + encoded


def _qp_line(line: bytes, line_ending: bytes) -> bytes:
    if line.endswith(b"\r"):
        line = line[:-1]
    # b2a_qp emits bare "\n" for its soft line breaks.
    return binascii.b2a_qp(line).replace(b"=\n", b"=" + line_ending)
