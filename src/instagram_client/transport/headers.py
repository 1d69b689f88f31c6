"""Splitting raw HTTP responses into status line, headers and body.

Transports hand back the response exactly as it came off the wire:
the status line, CRLF-delimited header lines, a blank line and the body.

Example:
    ```python
    envelope = split_response(
        b"HTTP/1.1 200 OK\\r\\nX-Ratelimit-Remaining: 42\\r\\n\\r\\n{\\"data\\": []}"
    )
    envelope.status_code  # 200
    envelope.header("x-ratelimit-remaining")  # "42"
    envelope.json()  # {"data": []}
    ```
"""

import json
from dataclasses import dataclass, field
from typing import Any

from instagram_client.errors.exceptions import MalformedHeaderError, ResponseDecodeError

HEADER_BODY_SEPARATOR = b"\r\n\r\n"


@dataclass(frozen=True)
class ResponseEnvelope:
    """A raw response split into its parts."""

    status_line: str
    headers: dict[str, str] = field(default_factory=dict)
    body: bytes | None = None

    @property
    def status_code(self) -> int | None:
        """Numeric status parsed from the status line, e.g. 200 from ``HTTP/1.1 200 OK``."""
        parts = self.status_line.split(" ", 2)
        if len(parts) < 2:
            return None
        try:
            return int(parts[1])
        except ValueError:
            return None

    def header(self, name: str) -> str | None:
        """Case-insensitive header lookup."""
        wanted = name.lower()
        for key, value in self.headers.items():
            if key.lower() == wanted:
                return value
        return None

    def json(self) -> Any:
        """Decode the body as JSON.

        Raises:
            ResponseDecodeError: If the body is missing or not valid JSON.
        """
        if not self.body:
            raise ResponseDecodeError("Response has no body to decode", envelope=self)
        try:
            return json.loads(self.body)
        except ValueError as e:
            raise ResponseDecodeError(f"Response body is not valid JSON: {e}", envelope=self) from e


def parse_headers(raw: str) -> tuple[str, dict[str, str]]:
    """Parse a CRLF-delimited header block.

    The first line is the status line. Each later line is split on its first
    colon; the value keeps any further colons (``Date: Mon, 01 Jan 12:00:00``)
    and loses at most one leading space. Empty lines are skipped. Repeated
    header names keep the last value.

    Args:
        raw: Header block without the terminating blank line

    Returns:
        Tuple of (status_line, headers)

    Raises:
        MalformedHeaderError: If a header line has no colon
    """
    lines = raw.split("\r\n")
    status_line = lines[0]
    headers: dict[str, str] = {}

    for line in lines[1:]:
        if not line:
            continue
        name, sep, value = line.partition(":")
        if not sep:
            raise MalformedHeaderError(f"Header line without colon: {line!r}", line=line)
        if value.startswith(" "):
            value = value[1:]
        headers[name] = value

    return status_line, headers


def split_response(raw: bytes) -> ResponseEnvelope:
    """Split raw transport output at the first blank line and parse the headers.

    Args:
        raw: Status line, headers, blank line and body as bytes

    Returns:
        ResponseEnvelope; ``body`` is None when nothing follows the headers
    """
    header_block, sep, body = raw.partition(HEADER_BODY_SEPARATOR)
    status_line, headers = parse_headers(header_block.decode("latin-1"))
    return ResponseEnvelope(status_line=status_line, headers=headers, body=body if sep and body else None)
