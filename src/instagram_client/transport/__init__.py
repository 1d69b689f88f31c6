"""Transport layer: the HTTP round trip and raw response parsing.

The dispatcher only needs something implementing ``Transport.send``; the
default ``HttpxTransport`` uses httpx. Responses travel as raw bytes and are
split into status line, headers and body by ``split_response``.

Modules:
    base: Transport protocol and timeout defaults
    httpx_transport: httpx implementation
    headers: Raw response parsing

Example:
    ```python
    from instagram_client.transport import HttpxTransport, split_response

    async with HttpxTransport() as transport:
        raw = await transport.send(url, "GET", {"Accept": "application/json"}, None,
                                   connect_timeout=20, total_timeout=90)
    envelope = split_response(raw)
    ```
"""

from instagram_client.transport.base import (
    DEFAULT_CONNECT_TIMEOUT,
    DEFAULT_TOTAL_TIMEOUT,
    Timeouts,
    Transport,
    send_with_timeouts,
)
from instagram_client.transport.headers import ResponseEnvelope, parse_headers, split_response
from instagram_client.transport.httpx_transport import HttpxTransport, render_raw_response

__all__ = [
    "DEFAULT_CONNECT_TIMEOUT",
    "DEFAULT_TOTAL_TIMEOUT",
    "HttpxTransport",
    "ResponseEnvelope",
    "Timeouts",
    "Transport",
    "parse_headers",
    "render_raw_response",
    "send_with_timeouts",
    "split_response",
]
