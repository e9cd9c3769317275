"""Shared fixtures for mailkit-core tests."""

from __future__ import annotations

import pytest

# ---------------------------------------------------------------------------
# Message fixtures
# ---------------------------------------------------------------------------

SIMPLE_MESSAGE = (
    b"From: sender@example.com\r\n"
    b"To: recipient@example.com\r\n"
    b"Subject: Test Subject\r\n"
    b"\r\n"
    b"Hello, this is a test email body.\r\n"
    b"Second line.\r\n"
)

NESTED_MESSAGE = (
    b"From: sender@example.com\n"
    b"Subject: Nested\n"
    b"MIME-Version: 1.0\n"
    b'Content-Type: multipart/mixed; boundary="outer"\n'
    b"\n"
    b"This is a multi-part message in MIME format.\n"
    b"--outer\n"
    b'Content-Type: multipart/alternative; boundary="inner"\n'
    b"\n"
    b"--inner\n"
    b"Content-Type: text/plain\n"
    b"\n"
    b"plain body\n"
    b"--inner\n"
    b"Content-Type: text/html\n"
    b"\n"
    b"<p>html body</p>\n"
    b"--inner--\n"
    b"--outer\n"
    b"Content-Type: application/octet-stream;\n"
    b"\tname=report.pdf\n"
    b"Content-Disposition: attachment; filename=report.pdf\n"
    b"Content-Transfer-Encoding: base64\n"
    b"X-Apple-Content-Length: 12\n"
    b"\n"
    b"\n"
    b"--outer--\n"
    b"epilogue text\n"
)

EMBEDDED_MESSAGE = (
    b"Subject: Fwd\n"
    b'Content-Type: multipart/mixed; boundary="b1"\n'
    b"\n"
    b"--b1\n"
    b"Content-Type: message/rfc822\n"
    b"\n"
    b"Subject: Inner\n"
    b'Content-Type: multipart/mixed; boundary="b2"\n'
    b"\n"
    b"--b2\n"
    b"Content-Type: text/plain\n"
    b"\n"
    b"inner text\n"
    b"--b2--\n"
    b"--b1--\n"
)


@pytest.fixture
def simple_message() -> bytes:
    """Single-part CRLF message."""
    return SIMPLE_MESSAGE


@pytest.fixture
def nested_message() -> bytes:
    """multipart/mixed with a nested alternative and a placeholder part."""
    return NESTED_MESSAGE


@pytest.fixture
def embedded_message() -> bytes:
    """multipart/mixed carrying a message/rfc822 part."""
    return EMBEDDED_MESSAGE


@pytest.fixture
def chunked():
    """Return a helper splitting bytes into fixed-size chunks."""

    def _chunked(data: bytes, size: int) -> list[bytes]:
        return [data[i : i + size] for i in range(0, len(data), size)]

    return _chunked
