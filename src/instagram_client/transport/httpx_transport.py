"""httpx-backed implementation of the Transport protocol.

Example:
    ```python
    import httpx

    from instagram_client.transport import HttpxTransport

    # Default: owns an httpx.AsyncClient and closes it on exit
    async with HttpxTransport() as transport:
        raw = await transport.send(
            "https://api.instagram.com/v1/media/popular?client_id=KEY",
            "GET",
            {"Accept": "application/json"},
            None,
            connect_timeout=20,
            total_timeout=90,
        )

    # Tests: wrap an httpx.MockTransport
    transport = HttpxTransport(wrapped_transport=httpx.MockTransport(handler))
    ```
"""

import asyncio
import logging
from collections.abc import Mapping

import httpx

from instagram_client.errors.exceptions import TransportError

logger = logging.getLogger(__name__)


def render_raw_response(response: httpx.Response) -> bytes:
    """Serialize an httpx response back into wire format.

    Header names keep the casing the server sent.
    """
    status_line = f"{response.http_version} {response.status_code} {response.reason_phrase}".rstrip()
    lines = [status_line]
    for name, value in response.headers.raw:
        lines.append(f"{name.decode('latin-1')}: {value.decode('latin-1')}")
    return "\r\n".join(lines).encode("latin-1") + b"\r\n\r\n" + response.content


class HttpxTransport:
    """Send requests with ``httpx.AsyncClient``.

    The connect timeout is handed to httpx; the overall timeout bounds the
    whole round trip including reading the body. Every httpx error surfaces
    as TransportError with the original exception chained.

    Args:
        client: Existing AsyncClient to use. It is not closed by this transport.
        wrapped_transport: httpx transport for the owned client (e.g. MockTransport)
    """

    def __init__(
        self,
        *,
        client: httpx.AsyncClient | None = None,
        wrapped_transport: httpx.AsyncBaseTransport | None = None,
    ) -> None:
        self._owns_client = client is None
        self._client = client or httpx.AsyncClient(transport=wrapped_transport)

    async def __aenter__(self):
        return self

    async def __aexit__(self, exc_type, exc_val, exc_tb):
        await self.aclose()

    async def aclose(self) -> None:
        if self._owns_client:
            await self._client.aclose()

    async def send(
        self,
        url: str,
        method: str,
        headers: Mapping[str, str],
        body: bytes | None,
        *,
        connect_timeout: float,
        total_timeout: float,
    ) -> bytes:
        timeout = httpx.Timeout(total_timeout, connect=connect_timeout)
        try:
            response = await asyncio.wait_for(
                self._client.request(method, url, headers=dict(headers), content=body, timeout=timeout),
                timeout=total_timeout,
            )
        except TimeoutError as e:
            raise TransportError(f"{method} request timed out after {total_timeout}s") from e
        except httpx.TimeoutException as e:
            raise TransportError(f"{method} request timed out: {e}") from e
        except httpx.HTTPError as e:
            raise TransportError(f"{method} request failed: {e}") from e

        logger.debug(f"{method} {response.url.path} -> {response.status_code}")
        return render_raw_response(response)
