"""Tests for mailkit_emlx.framing -- the length-prefixed container decoder."""

from __future__ import annotations

import logging

import pytest

from mailkit_emlx.errors import ErrorCode, MalformedContainerError
from mailkit_emlx.framing import EmlxFrameDecoder, decode_payload


def _decode(chunks) -> bytes:
    return b"".join(decode_payload(chunks))


def _split_after(data: bytes, first: int, size: int) -> list[bytes]:
    """First chunk of *first* bytes, the rest in *size*-byte chunks."""
    rest = data[first:]
    return [data[:first]] + [rest[i : i + size] for i in range(0, len(rest), size)]


class TestLengthPrefix:
    def test_payload_is_sliced_exactly(self):
        assert _decode([b"5\r\nHELLO<html>trailing-epilogue-ignored"]) == b"HELLO"

    @pytest.mark.parametrize("separator", [b"\n", b"\r\n", b"\r", b" \t\n", b" "])
    def test_separators(self, separator):
        assert _decode([b"3" + separator + b"abc<?xml"]) == b"abc"

    def test_leading_payload_whitespace_kept(self):
        assert _decode([b"4\n  ab<?xml"]) == b"  ab"
        assert _decode([b"3\n\nab<?xml"]) == b"\nab"

    def test_zero_length(self):
        decoder = EmlxFrameDecoder()
        assert decoder.feed(b"0\n<?xml version") == b""
        assert decoder.finished
        assert _decode([b"0\n<?xml"]) == b""

    @pytest.mark.parametrize("data", [b"abc\n", b"-3\nabc", b"\n3\nabc", b"3abc"])
    def test_malformed(self, data):
        with pytest.raises(MalformedContainerError) as exc_info:
            _decode([data])
        assert exc_info.value.code == ErrorCode.E_EMLX_MALFORMED_CONTAINER
        assert exc_info.value.stage == "framing"
        assert "did not start with payload length" in exc_info.value.message

    def test_empty_input_is_malformed(self):
        with pytest.raises(MalformedContainerError):
            _decode([])

    def test_length_line_split_across_chunks_is_rejected(self):
        with pytest.raises(MalformedContainerError):
            _decode([b"1", b"2\nabcdefghijkl"])


class TestChunking:
    PAYLOAD = b"Subject: x\n\nbody line\n--b--"
    DATA = str(len(PAYLOAD)).encode() + b"\n" + PAYLOAD + b'<?xml version="1.0"?>'

    @pytest.mark.parametrize("size", [1, 2, 3, 7, 64])
    def test_result_independent_of_chunking(self, size):
        chunks = _split_after(self.DATA, 3, size)
        assert _decode(chunks) == self.PAYLOAD

    def test_stops_reading_after_payload(self):
        def chunks():
            yield b"3\nabc"
            raise AssertionError("input read past the payload")

        assert _decode(chunks()) == b"abc"

    def test_feed_after_finish_returns_nothing(self):
        decoder = EmlxFrameDecoder()
        decoder.feed(b"2\nab")
        assert decoder.finished
        assert decoder.feed(b"more") == b""

    def test_counters(self):
        decoder = EmlxFrameDecoder()
        decoder.feed(b"6\nabc")
        assert decoder.bytes_to_read == 6
        assert decoder.bytes_read == 3
        assert not decoder.finished


class TestSingleDashCorrection:
    def test_appends_dash_before_plist(self):
        payload = b"--b\n\nbody\n--b-"
        data = str(len(payload)).encode() + b"\n" + payload + b"<?xml version"
        assert _decode([data]) == payload + b"-"

    def test_double_dash_unchanged(self):
        payload = b"--b\n\nbody\n--b--"
        data = str(len(payload)).encode() + b"\n" + payload + b"<?xml version"
        assert _decode([data]) == payload

    def test_no_plist_no_correction(self):
        payload = b"text ending in a dash-"
        data = str(len(payload)).encode() + b"\n" + payload + b"<html>"
        assert _decode([data]) == payload

    @pytest.mark.parametrize("size", [1, 2, 4])
    def test_lookahead_across_chunks(self, size):
        payload = b"body\n--b-"
        data = str(len(payload)).encode() + b"\n" + payload + b"<?xml version"
        assert _decode(_split_after(data, 2, size)) == payload + b"-"

    def test_decoder_resolves_marker_one_byte_per_feed(self):
        payload = b"body\n--b-"
        decoder = EmlxFrameDecoder()
        assert decoder.feed(str(len(payload)).encode() + b"\n" + payload) == payload
        assert not decoder.finished
        assert [decoder.feed(bytes([b])) for b in b"<?xm"] == [b""] * 4
        assert not decoder.finished
        assert decoder.feed(b"l version") == b"-"
        assert decoder.finished
        assert decoder.feed(b"<plist>") == b""

    def test_decoder_marker_mismatch_in_later_feed(self):
        payload = b"body\n--b-"
        decoder = EmlxFrameDecoder()
        decoder.feed(str(len(payload)).encode() + b"\n" + payload + b"<?")
        assert decoder.feed(b"html") == b""
        assert decoder.finished

    def test_dash_split_from_previous_byte(self):
        # "-" arrives alone; the preceding "-" came in the previous chunk.
        payload = b"body\n--b--"
        data = str(len(payload)).encode() + b"\n" + payload + b"<?xml"
        assert _decode(_split_after(data, len(data) - 6, 1)) == payload

    def test_truncated_plist_marker_no_correction(self):
        payload = b"body\n--b-"
        data = str(len(payload)).encode() + b"\n" + payload + b"<?xm"
        assert _decode([data]) == payload

    def test_payload_without_epilogue(self):
        payload = b"body\n--b-"
        data = str(len(payload)).encode() + b"\n" + payload
        assert _decode([data]) == payload


class TestTruncation:
    def test_short_payload_logs_warning(self, caplog):
        with caplog.at_level(logging.WARNING, logger="mailkit_emlx"):
            assert _decode([b"10\nabc"]) == b"abc"
        assert ErrorCode.W_EMLX_PAYLOAD_TRUNCATED.value in caplog.text
        assert "3 of 10" in caplog.text
