"""Authentication components for the Instagram client.

This module provides:
- Settings resolution (value → env → .env → default)
- The per-client access token holder
- API key / access token auth modes
- Request signing for apps with signed requests enforced
- The OAuth 2.0 authorization code flow

Example:
    ```python
    from instagram_client.auth import Scope, TokenExchange

    exchange = TokenExchange(config, transport)
    login_url = exchange.build_login_url([Scope.BASIC])
    ```
"""

from instagram_client.auth.credentials import CredentialResolver, Credentials
from instagram_client.auth.exceptions import (
    AuthError,
    CredentialFileError,
    CredentialNotFoundError,
    InvalidScopeError,
    MissingAccessTokenError,
    OAuthExchangeError,
)
from instagram_client.auth.modes import ApiKeyAuth, AuthMode, BearerAuth, auth_query, parse_auth_param
from instagram_client.auth.oauth import Scope, TokenExchange, TokenResponse
from instagram_client.auth.signing import RequestSigner

__all__ = [
    "ApiKeyAuth",
    "AuthError",
    "AuthMode",
    "BearerAuth",
    "CredentialFileError",
    "CredentialNotFoundError",
    "CredentialResolver",
    "Credentials",
    "InvalidScopeError",
    "MissingAccessTokenError",
    "OAuthExchangeError",
    "RequestSigner",
    "Scope",
    "TokenExchange",
    "TokenResponse",
    "auth_query",
    "parse_auth_param",
]
