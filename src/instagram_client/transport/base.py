"""Transport contract used by the request dispatcher."""

from collections.abc import Mapping
from dataclasses import dataclass
from typing import Protocol, runtime_checkable

from instagram_client.errors.exceptions import TransportError

DEFAULT_CONNECT_TIMEOUT = 20.0
DEFAULT_TOTAL_TIMEOUT = 90.0


@dataclass(frozen=True)
class Timeouts:
    """Connect and overall timeouts in seconds."""

    connect: float = DEFAULT_CONNECT_TIMEOUT
    total: float = DEFAULT_TOTAL_TIMEOUT


@runtime_checkable
class Transport(Protocol):
    """Anything that can perform one HTTP round trip.

    Implementations return the raw response: status line, CRLF-delimited
    headers, a blank line and the body. Network failures and timeouts must
    be raised as ``instagram_client.errors.TransportError``; the dispatcher
    wraps anything else.
    """

    async def send(
        self,
        url: str,
        method: str,
        headers: Mapping[str, str],
        body: bytes | None,
        *,
        connect_timeout: float,
        total_timeout: float,
    ) -> bytes: ...


async def send_with_timeouts(
    transport: Transport,
    url: str,
    method: str,
    headers: Mapping[str, str],
    body: bytes | None,
    timeouts: Timeouts,
) -> bytes:
    """Call ``transport.send`` and normalize its failures to TransportError."""
    try:
        return await transport.send(
            url,
            method,
            headers,
            body,
            connect_timeout=timeouts.connect,
            total_timeout=timeouts.total,
        )
    except TransportError:
        raise
    except Exception as e:
        raise TransportError(f"{method} request failed: {e}") from e
