"""Shared fixtures for mailkit-emlx tests."""

from __future__ import annotations

from pathlib import Path

import pytest

from mailkit_core.mime import Headers, MessageNode

# ---------------------------------------------------------------------------
# Container fixtures
# ---------------------------------------------------------------------------

PLAIN_BODY = b"Hello, this is a test email body."
PDF_BYTES = b"%PDF-1.4\n" + bytes(range(256)) * 3 + b"\n%%EOF\n"
PNG_BYTES = b"\x89PNG\r\n\x1a\n" + b"\x00" * 50

PLIST_EPILOGUE = (
    b'<?xml version="1.0" encoding="UTF-8"?>\n'
    b'<!DOCTYPE plist PUBLIC "-//Apple//DTD PLIST 1.0//EN" '
    b'"http://www.apple.com/DTDs/PropertyList-1.0.dtd">\n'
    b'<plist version="1.0">\n<dict>\n\t<key>flags</key>\n\t<integer>8590195713</integer>\n'
    b"</dict>\n</plist>\n"
)


def build_message(
    attachments: list[dict] | None = None,
    plain: bytes = PLAIN_BODY,
    boundary: str = "Apple-Mail=_BOUNDARY",
) -> bytes:
    """Build a multipart/mixed payload as Mail.app stores it (LF line endings).

    Each attachment dict accepts ``filename`` (None for an unnamed part),
    ``content_type``, ``encoding`` and ``placeholder`` (default True: the
    body is left out and ``X-Apple-Content-Length`` is set); non-placeholder
    attachments need a ``body``.
    """
    b = boundary.encode()
    lines = [
        b"From: sender@example.com",
        b"To: recipient@example.com",
        b"Subject: Test Subject",
        b"Date: Mon, 17 Feb 2026 12:00:00 +0000",
        b"Message-Id: <test-123@example.com>",
        b"Mime-Version: 1.0 (Mac OS X Mail 16.0)",
        b'Content-Type: multipart/mixed; boundary="' + b + b'"',
        b"",
        b"",
        b"--" + b,
        b"Content-Transfer-Encoding: 7bit",
        b"Content-Type: text/plain; charset=us-ascii",
        b"",
        plain,
    ]
    for att in attachments or []:
        content_type = att.get("content_type", "application/octet-stream").encode()
        filename = att.get("filename")
        lines.append(b"--" + b)
        if filename:
            lines.append(
                b"Content-Disposition: attachment; filename=" + filename.encode()
            )
            lines.append(b"Content-Type: " + content_type + b"; name=" + filename.encode())
        else:
            lines.append(b"Content-Disposition: attachment")
            lines.append(b"Content-Type: " + content_type)
        lines.append(b"Content-Transfer-Encoding: " + att.get("encoding", "base64").encode())
        if att.get("placeholder", True):
            lines.append(b"X-Apple-Content-Length: " + str(att.get("length", 1234)).encode())
            lines.append(b"")
            lines.append(b"")
        else:
            lines.append(b"")
            lines.append(att["body"])
    lines.append(b"--" + b + b"--")
    lines.append(b"")
    return b"\n".join(lines)


def build_container(payload: bytes, epilogue: bytes = PLIST_EPILOGUE) -> bytes:
    """Wrap *payload* in the emlx length-prefixed framing."""
    return str(len(payload)).encode() + b"\n" + payload + epilogue


@pytest.fixture
def message_builder():
    """Return :func:`build_message`."""
    return build_message


@pytest.fixture
def container_builder():
    """Return :func:`build_container`."""
    return build_container


@pytest.fixture
def write_container(tmp_path: Path):
    """Write a container (and optional attachment files) to a directory.

    Returns the container path as ``str``.
    """

    def _write(
        payload: bytes,
        name: str = "123.partial.emlx",
        files: dict[str, bytes] | None = None,
        subdir: str = "Messages",
        epilogue: bytes = PLIST_EPILOGUE,
    ) -> str:
        directory = tmp_path / subdir
        directory.mkdir(parents=True, exist_ok=True)
        for file_name, content in (files or {}).items():
            (directory / file_name).write_bytes(content)
        path = directory / name
        path.write_bytes(build_container(payload, epilogue))
        return str(path)

    return _write


@pytest.fixture
def placeholder_node():
    """Return a factory for a placeholder MessageNode."""

    def _node(filename: str | None = "report.pdf", part_number: tuple[int, ...] = (2,)) -> MessageNode:
        raw = b"Content-Type: application/pdf\n"
        if filename:
            raw += b"Content-Disposition: attachment; filename=" + filename.encode() + b"\n"
        raw += b"Content-Transfer-Encoding: base64\nX-Apple-Content-Length: 10\n\n"
        return MessageNode(Headers.from_bytes(raw), part_number=part_number)

    return _node


@pytest.fixture
def chunked():
    """Return a helper splitting bytes into fixed-size chunks."""

    def _chunked(data: bytes, size: int) -> list[bytes]:
        return [data[i : i + size] for i in range(0, len(data), size)]

    return _chunked
