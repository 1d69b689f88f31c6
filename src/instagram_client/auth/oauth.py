"""OAuth 2.0 authorization code flow.

1. Send the user to ``build_login_url()``.
2. Instagram redirects back to the callback URL with ``?code=...``.
3. ``exchange_code(code)`` trades the code for an access token.

Example:
    ```python
    from instagram_client.auth.oauth import Scope, TokenExchange

    exchange = TokenExchange(config, transport)
    url = exchange.build_login_url([Scope.BASIC, Scope.LIKES])

    # ... user authorizes, callback receives ?code=...
    token = await exchange.exchange_code(code)
    credentials.set_access_token(token)
    ```
"""

import logging
from collections.abc import Iterable
from dataclasses import dataclass, field
from enum import Enum
from typing import TYPE_CHECKING, Any
from urllib.parse import quote_plus, urlencode

from instagram_client.auth.exceptions import InvalidScopeError, OAuthExchangeError
from instagram_client.errors.exceptions import InstagramError, ResponseDecodeError, TransportError
from instagram_client.errors.models import ResponseMeta
from instagram_client.transport.base import Transport, send_with_timeouts
from instagram_client.transport.headers import split_response

if TYPE_CHECKING:
    from instagram_client.config import ClientConfig

logger = logging.getLogger(__name__)


class Scope(str, Enum):
    """Permissions that can be requested on the login URL."""

    BASIC = "basic"
    LIKES = "likes"
    COMMENTS = "comments"
    RELATIONSHIPS = "relationships"
    USER_PROFILE = "user_profile"
    USER_MEDIA = "user_media"

    @classmethod
    def validate(cls, scope: "str | Scope") -> "Scope":
        """Coerce a string to a Scope.

        Raises:
            InvalidScopeError: If the scope is not on the allow-list.
        """
        try:
            return cls(scope)
        except ValueError:
            raise InvalidScopeError(f"Unknown or disallowed scope: {scope!r}", scope=str(scope)) from None


@dataclass(frozen=True)
class TokenResponse:
    """Decoded token endpoint response."""

    access_token: str
    user: dict[str, Any] | None = None
    raw: dict[str, Any] = field(default_factory=dict)

    @classmethod
    def from_payload(cls, payload: dict[str, Any]) -> "TokenResponse":
        user = payload.get("user")
        return cls(
            access_token=payload["access_token"],
            user=user if isinstance(user, dict) else None,
            raw=dict(payload),
        )


class TokenExchange:
    """Login URL construction and code-for-token exchange.

    Independent of the request dispatcher: it never touches the stored
    access token or the rate-limit state.
    """

    def __init__(self, config: "ClientConfig", transport: Transport):
        self._config = config
        self._transport = transport

    def build_login_url(self, scopes: "str | Scope | Iterable[str | Scope]" = (Scope.BASIC,)) -> str:
        """Return the authorization URL to redirect the user to.

        Args:
            scopes: Requested permissions, or a single one; duplicates are
                dropped, order kept.

        Raises:
            InvalidScopeError: If any scope is not supported.
            CredentialNotFoundError: If key, secret or callback URL is empty.
        """
        if isinstance(scopes, str):
            scopes = (scopes,)

        validated: list[Scope] = []
        for scope in scopes:
            scope = Scope.validate(scope)
            if scope not in validated:
                validated.append(scope)

        self._config.require_oauth_fields()

        return (
            f"{self._config.authorize_url}"
            f"?client_id={self._config.api_key}"
            f"&redirect_uri={quote_plus(self._config.callback_url)}"
            f"&scope={','.join(scope.value for scope in validated)}"
            f"&response_type=code"
        )

    async def exchange_code(self, code: str) -> TokenResponse:
        """Exchange an authorization code for an access token.

        The token is returned, not stored.

        Raises:
            OAuthExchangeError: On transport failure, an empty or undecodable
                body, an error status or a body without ``access_token``.
            CredentialNotFoundError: If key, secret or callback URL is empty.
        """
        self._config.require_oauth_fields()

        form = {
            "grant_type": "authorization_code",
            "client_id": self._config.api_key,
            "client_secret": self._config.api_secret,
            "redirect_uri": self._config.callback_url,
            "code": code,
        }
        headers = {
            "Accept": "application/json",
            "Content-Type": "application/x-www-form-urlencoded",
        }

        logger.debug(f"Exchanging authorization code at {self._config.token_url}")
        try:
            raw = await send_with_timeouts(
                self._transport,
                self._config.token_url,
                "POST",
                headers,
                urlencode(form).encode("utf-8"),
                self._config.timeouts,
            )
        except TransportError as e:
            raise OAuthExchangeError(f"Token exchange failed: {e}") from e

        try:
            envelope = split_response(raw)
            if not envelope.body:
                raise OAuthExchangeError(f"Token endpoint returned an empty body ({envelope.status_line})")
            payload = envelope.json()
        except ResponseDecodeError as e:
            raise OAuthExchangeError(f"Token endpoint returned an invalid body: {e}") from e
        except OAuthExchangeError:
            raise
        except InstagramError as e:
            raise OAuthExchangeError(f"Token endpoint returned a malformed response: {e}") from e

        status_code = envelope.status_code
        if (status_code is not None and status_code >= 400) or not (
            isinstance(payload, dict) and payload.get("access_token")
        ):
            meta = ResponseMeta.from_payload(payload)
            detail = meta.to_exception_message() if meta else envelope.status_line
            raise OAuthExchangeError(
                f"Token exchange rejected: {detail}",
                error_type=meta.error_type if meta else None,
            )

        logger.debug("Token exchange succeeded")
        return TokenResponse.from_payload(payload)
