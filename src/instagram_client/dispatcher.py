"""Central request pipeline.

Every endpoint call goes through ``RequestDispatcher``:

1. Pick the auth mode (client ID or access token); a missing token fails
   here, before anything is sent.
2. Build the URL (and form body for POST), signing it if enabled.
3. Hand it to the transport.
4. Split the raw response, parse headers and record the rate limit.
5. Reject empty or undecodable bodies and error statuses; return the
   decoded JSON.

Because step 4 runs before step 5, the rate-limit state already reflects a
response whose body turns out to be empty, invalid or an API error.
"""

import logging
from dataclasses import dataclass, field
from typing import Any

from instagram_client.auth.credentials import Credentials
from instagram_client.auth.exceptions import CredentialNotFoundError
from instagram_client.auth.modes import ApiKeyAuth, AuthMode, BearerAuth, auth_query
from instagram_client.auth.signing import RequestSigner
from instagram_client.config import ClientConfig
from instagram_client.errors.exceptions import EmptyResponseBodyError, ResponseDecodeError
from instagram_client.errors.handler import raise_for_status
from instagram_client.models import HttpMethod, Params, RequestDescriptor, encode_params
from instagram_client.ratelimit import RateLimitTracker
from instagram_client.transport.base import Timeouts, Transport, send_with_timeouts
from instagram_client.transport.headers import ResponseEnvelope, split_response

logger = logging.getLogger(__name__)


@dataclass
class SessionState:
    """Mutable per-client state: the access token and the last rate limit.

    One instance belongs to one client. Sharing it across concurrent callers
    is safe for reads; token and rate-limit writes are serialized, but which
    response's rate limit "wins" under concurrency is last-writer order.
    """

    credentials: Credentials = field(default_factory=Credentials)
    rate_limit: RateLimitTracker = field(default_factory=RateLimitTracker)


@dataclass(frozen=True)
class PreparedRequest:
    url: str
    method: HttpMethod
    headers: dict[str, str]
    body: bytes | None
    auth: AuthMode


class RequestDispatcher:
    """Build, sign, send and normalize API requests.

    Args:
        config: Application settings
        transport: HTTP round-trip implementation
        session: Token and rate-limit state; a fresh one if omitted
    """

    def __init__(self, config: ClientConfig, transport: Transport, session: SessionState | None = None):
        self.config = config
        self.transport = transport
        self.session = session or SessionState()
        self.signed_requests = config.signed_requests
        self._signer = RequestSigner(config.api_secret)

    def select_auth(self, request: RequestDescriptor) -> AuthMode:
        """Return the auth mode declared by the request.

        Raises:
            MissingAccessTokenError: If the request needs a token and none is set.
        """
        if not request.requires_auth:
            return ApiKeyAuth(self.config.api_key)
        return BearerAuth(self.session.credentials.require_token(request.endpoint))

    def prepare(self, request: RequestDescriptor) -> PreparedRequest:
        """Build the final URL, headers and body without sending anything."""
        method = HttpMethod(request.method)
        auth = self.select_auth(request)

        url = f"{self.config.api_base_url}{request.endpoint}?{auth_query(auth)}"
        headers = {"Accept": "application/json"}
        body = None

        # DELETE carries its ids in the path; no params are sent or signed
        params = None if method is HttpMethod.DELETE else request.params
        encoded = encode_params(params)
        if method is HttpMethod.GET:
            if encoded:
                url += f"&{encoded}"
        elif method is HttpMethod.POST:
            headers["Content-Type"] = "application/x-www-form-urlencoded"
            body = encoded.encode("utf-8")

        if self.signed_requests:
            if not self.config.api_secret:
                raise CredentialNotFoundError("Signed requests need a non-empty api_secret")
            url += f"&sig={self._signer.sign(request.endpoint, auth, params)}"

        return PreparedRequest(url=url, method=method, headers=headers, body=body, auth=auth)

    async def send(self, request: RequestDescriptor, timeouts: Timeouts | None = None) -> ResponseEnvelope:
        """Perform the round trip and record the rate limit.

        Returns:
            The split response; the body is not checked or decoded.

        Raises:
            MissingAccessTokenError: Before sending, if a token is required.
            TransportError: On network failure or timeout.
            MalformedHeaderError: If the response headers cannot be parsed.
        """
        prepared = self.prepare(request)
        logger.debug(f"{prepared.method.value} {request.endpoint} (auth={type(prepared.auth).__name__})")

        raw = await send_with_timeouts(
            self.transport,
            prepared.url,
            prepared.method.value,
            prepared.headers,
            prepared.body,
            timeouts or self.config.timeouts,
        )

        envelope = split_response(raw)
        self.session.rate_limit.update_from_headers(envelope.headers)
        return envelope

    async def dispatch(self, request: RequestDescriptor, timeouts: Timeouts | None = None) -> Any:
        """Execute a request and return the decoded JSON body.

        Raises:
            EmptyResponseBodyError: If the response has no body.
            ResponseDecodeError: If the body is not JSON.
            APIError: Subclass matching an error status.
        """
        envelope = await self.send(request, timeouts)

        if not envelope.body:
            raise EmptyResponseBodyError(
                f"Empty response body from {request.endpoint} ({envelope.status_line})",
                envelope=envelope,
            )

        try:
            payload = envelope.json()
        except ResponseDecodeError:
            # error pages (e.g. an HTML 502) report the status, not the decoding
            raise_for_status(envelope)
            raise
        raise_for_status(envelope, payload)
        return payload

    async def execute(
        self,
        endpoint: str,
        *,
        requires_auth: bool = False,
        params: Params | None = None,
        method: HttpMethod | str = HttpMethod.GET,
        timeouts: Timeouts | None = None,
    ) -> Any:
        """Build a RequestDescriptor from the arguments and dispatch it."""
        request = RequestDescriptor(
            endpoint=endpoint,
            requires_auth=requires_auth,
            params=params,
            method=HttpMethod(method.upper()),
        )
        return await self.dispatch(request, timeouts)
