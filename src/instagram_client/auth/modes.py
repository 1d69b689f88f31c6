"""How a request identifies itself: application key or user token."""

from dataclasses import dataclass
from urllib.parse import quote_plus

from instagram_client.auth.exceptions import AuthError


@dataclass(frozen=True)
class ApiKeyAuth:
    """Public endpoints identified by the application's client ID."""

    api_key: str

    @property
    def query_param(self) -> tuple[str, str]:
        return "client_id", self.api_key


@dataclass(frozen=True)
class BearerAuth:
    """User-scoped endpoints authorized with an OAuth access token."""

    token: str

    @property
    def query_param(self) -> tuple[str, str]:
        return "access_token", self.token

    def __repr__(self) -> str:
        return "BearerAuth(token='***')"


AuthMode = ApiKeyAuth | BearerAuth


def auth_query(auth: AuthMode) -> str:
    """Render the auth parameter as ``key=value`` for a query string."""
    key, value = auth.query_param
    return f"{key}={quote_plus(value)}"


def parse_auth_param(raw: str) -> AuthMode:
    """Parse a ``?client_id=...`` or ``?access_token=...`` fragment.

    Raises:
        AuthError: If the fragment names another parameter.
    """
    key, _, value = raw.lstrip("?").partition("=")
    if key == "client_id":
        return ApiKeyAuth(value)
    if key == "access_token":
        return BearerAuth(value)
    raise AuthError(f"Not an auth parameter: {raw!r}")
