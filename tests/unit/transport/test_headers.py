"""Tests for raw response splitting and header parsing."""

import pytest

from instagram_client.errors.exceptions import MalformedHeaderError, ResponseDecodeError
from instagram_client.transport.headers import ResponseEnvelope, parse_headers, split_response


class TestParseHeaders:
    """Test parse_headers."""

    @pytest.mark.unit
    def test_first_line_is_status_line(self):
        status_line, headers = parse_headers("HTTP/1.1 200 OK\r\nContent-Type: application/json")

        assert status_line == "HTTP/1.1 200 OK"
        assert headers == {"Content-Type": "application/json"}

    @pytest.mark.unit
    def test_value_keeps_colons_after_the_first(self):
        """Only the first colon separates name and value."""
        _, headers = parse_headers("HTTP/1.1 200 OK\r\nDate: Mon, 01 Jan 2024 12:34:56 GMT")

        assert headers["Date"] == "Mon, 01 Jan 2024 12:34:56 GMT"

    @pytest.mark.unit
    def test_at_most_one_leading_space_trimmed(self):
        _, headers = parse_headers("HTTP/1.1 200 OK\r\nX-One: value\r\nX-Two:  padded\r\nX-None:tight")

        assert headers["X-One"] == "value"
        assert headers["X-Two"] == " padded"
        assert headers["X-None"] == "tight"

    @pytest.mark.unit
    def test_empty_value(self):
        _, headers = parse_headers("HTTP/1.1 200 OK\r\nX-Empty:")

        assert headers["X-Empty"] == ""

    @pytest.mark.unit
    def test_line_without_colon_is_malformed(self):
        with pytest.raises(MalformedHeaderError) as exc_info:
            parse_headers("HTTP/1.1 200 OK\r\nthis is not a header")

        assert exc_info.value.line == "this is not a header"

    @pytest.mark.unit
    def test_status_line_without_colon_is_fine(self):
        status_line, headers = parse_headers("HTTP/1.1 204 No Content")

        assert status_line == "HTTP/1.1 204 No Content"
        assert headers == {}

    @pytest.mark.unit
    def test_blank_lines_skipped(self):
        _, headers = parse_headers("HTTP/1.1 200 OK\r\nX-A: 1\r\n\r\n")

        assert headers == {"X-A": "1"}


class TestSplitResponse:
    """Test split_response."""

    @pytest.mark.unit
    def test_splits_at_first_blank_line(self):
        raw = b'HTTP/1.1 200 OK\r\nX-Ratelimit-Remaining: 42\r\n\r\n{"data":[]}'

        envelope = split_response(raw)

        assert envelope.status_line == "HTTP/1.1 200 OK"
        assert envelope.headers == {"X-Ratelimit-Remaining": "42"}
        assert envelope.body == b'{"data":[]}'

    @pytest.mark.unit
    def test_body_may_contain_blank_lines(self):
        raw = b"HTTP/1.1 200 OK\r\nA: b\r\n\r\nfirst\r\n\r\nsecond"

        envelope = split_response(raw)

        assert envelope.body == b"first\r\n\r\nsecond"

    @pytest.mark.unit
    def test_no_body(self):
        assert split_response(b"HTTP/1.1 200 OK\r\nA: b\r\n\r\n").body is None
        assert split_response(b"HTTP/1.1 200 OK\r\nA: b").body is None

    @pytest.mark.unit
    def test_malformed_header_raises(self):
        with pytest.raises(MalformedHeaderError):
            split_response(b"HTTP/1.1 200 OK\r\ngarbage\r\n\r\n{}")


class TestResponseEnvelope:
    """Test ResponseEnvelope helpers."""

    @pytest.mark.unit
    def test_status_code(self):
        assert ResponseEnvelope("HTTP/1.1 404 Not Found").status_code == 404
        assert ResponseEnvelope("HTTP/2 200").status_code == 200
        assert ResponseEnvelope("garbage").status_code is None

    @pytest.mark.unit
    def test_header_lookup_is_case_insensitive(self):
        envelope = ResponseEnvelope("HTTP/1.1 200 OK", {"X-Ratelimit-Remaining": "7"})

        assert envelope.header("x-ratelimit-remaining") == "7"
        assert envelope.header("X-RateLimit-Remaining") == "7"
        assert envelope.header("Missing") is None

    @pytest.mark.unit
    def test_json(self):
        envelope = ResponseEnvelope("HTTP/1.1 200 OK", body=b'{"data": []}')

        assert envelope.json() == {"data": []}

    @pytest.mark.unit
    def test_json_invalid(self):
        envelope = ResponseEnvelope("HTTP/1.1 200 OK", body=b"<html>")

        with pytest.raises(ResponseDecodeError) as exc_info:
            envelope.json()

        assert exc_info.value.envelope is envelope
