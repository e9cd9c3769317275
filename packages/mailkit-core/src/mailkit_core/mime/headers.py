"""Byte-exact header block of a single MIME node.

The block is kept as the original list of header fields (each field being
its first line plus any folded continuation lines) so that re-serialising an
untouched node reproduces the input exactly.  Parameter parsing is delegated
to the stdlib ``email`` package.
"""

from __future__ import annotations

import email.message
import email.policy
from email.parser import BytesHeaderParser

_FOLD_PREFIXES = (b" ", b"\t")


class Headers:
    """Ordered, case-insensitive view over a raw header block."""

    def __init__(self, lines: list[bytes] | None = None, terminator: bytes = b"") -> None:
        self._fields: list[bytes] = []
        self.terminator = terminator
        for line in lines or []:
            if self._fields and line.startswith(_FOLD_PREFIXES):
                self._fields[-1] += line
            else:
                self._fields.append(line)

    @classmethod
    def from_bytes(cls, raw: bytes) -> Headers:
        """Build a header block from raw bytes (blank line terminator included)."""
        lines = raw.splitlines(keepends=True)
        terminator = b""
        if lines and lines[-1] in (b"\r\n", b"\n"):
            terminator = lines.pop()
        return cls(lines, terminator)

    def __len__(self) -> int:
        return len(self._fields)

    def __contains__(self, name: object) -> bool:
        return isinstance(name, str) and self.has(name)

    def keys(self) -> list[str]:
        """Return field names in their original order and spelling."""
        return [_field_name(f, lower=False) for f in self._fields]

    def has(self, name: str) -> bool:
        wanted = name.lower()
        return any(_field_name(f) == wanted for f in self._fields)

    def get(self, name: str) -> str | None:
        """Return the unfolded value of the first *name* field, or None."""
        values = self.get_all(name)
        return values[0] if values else None

    def get_all(self, name: str) -> list[str]:
        wanted = name.lower()
        return [_field_value(f) for f in self._fields if _field_name(f) == wanted]

    def remove(self, name: str) -> int:
        """Drop every *name* field, continuation lines included.

        Returns the number of fields removed.
        """
        wanted = name.lower()
        kept = [f for f in self._fields if _field_name(f) != wanted]
        removed = len(self._fields) - len(kept)
        self._fields = kept
        return removed

    def to_bytes(self) -> bytes:
        return b"".join(self._fields) + self.terminator

    def line_ending(self) -> bytes:
        """Line ending used by this block, ``b"\\r\\n"`` when undeterminable."""
        for sample in [self.terminator, *self._fields]:
            if sample.endswith(b"\r\n"):
                return b"\r\n"
            if sample.endswith(b"\n"):
                return b"\n"
        return b"\r\n"

    def as_message(self) -> email.message.Message:
        """Parse the block with the stdlib parser for parameter access."""
        raw = b"".join(self._fields) + b"\r\n"
        return BytesHeaderParser(policy=email.policy.default).parsebytes(raw)


def _field_name(field: bytes, lower: bool = True) -> str:
    if b":" not in field or field.startswith(_FOLD_PREFIXES):
        return ""
    name = field.split(b":", 1)[0].strip().decode("ascii", errors="replace")
    return name.lower() if lower else name


def _field_value(field: bytes) -> str:
    value = field.split(b":", 1)[1] if b":" in field else field
    unfolded = b" ".join(part.strip() for part in value.splitlines())
    return unfolded.strip().decode("utf-8", errors="replace")
