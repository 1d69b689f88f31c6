"""Client configuration."""

import logging
from dataclasses import dataclass, field

from instagram_client.auth.credentials import CredentialResolver
from instagram_client.auth.exceptions import CredentialNotFoundError
from instagram_client.transport.base import Timeouts

logger = logging.getLogger(__name__)

API_BASE_URL = "https://api.instagram.com/v1/"
OAUTH_AUTHORIZE_URL = "https://api.instagram.com/oauth/authorize"
OAUTH_TOKEN_URL = "https://api.instagram.com/oauth/access_token"

ENV_PREFIX = "INSTAGRAM_"


@dataclass(frozen=True)
class ClientConfig:
    """Application settings, fixed for the lifetime of a client.

    Attributes:
        api_key: Client ID of the registered application.
        api_secret: Client secret; needed for token exchange and signing.
        callback_url: Redirect URI registered with the application.
        signed_requests: Whether to add a ``sig`` parameter to every call.
        api_base_url: Base URL that endpoints are appended to.
        authorize_url: OAuth authorization endpoint (browser redirect).
        token_url: OAuth code-for-token endpoint.
        timeouts: Connect and overall timeouts for each round trip.
    """

    api_key: str
    api_secret: str = ""
    callback_url: str = ""
    signed_requests: bool = False
    api_base_url: str = API_BASE_URL
    authorize_url: str = OAUTH_AUTHORIZE_URL
    token_url: str = OAUTH_TOKEN_URL
    timeouts: Timeouts = field(default_factory=Timeouts)

    def require_oauth_fields(self) -> None:
        """Check the settings the OAuth flow depends on.

        Raises:
            CredentialNotFoundError: Naming every empty field.
        """
        missing = [
            name
            for name, value in (
                ("api_key", self.api_key),
                ("api_secret", self.api_secret),
                ("callback_url", self.callback_url),
            )
            if not value
        ]
        if missing:
            raise CredentialNotFoundError(f"OAuth requires non-empty settings: {', '.join(missing)}")

    @classmethod
    def from_env(cls, resolver: CredentialResolver | None = None, *, prefix: str = ENV_PREFIX) -> "ClientConfig":
        """Build a config from the environment and .env file.

        Reads ``{prefix}API_KEY`` (required), ``{prefix}API_SECRET`` or the file
        named by ``{prefix}API_SECRET_FILE``, ``{prefix}CALLBACK_URL`` and
        ``{prefix}SIGNED_REQUESTS``.

        Raises:
            CredentialNotFoundError: If the API key is not set.
        """
        resolver = resolver or CredentialResolver()

        api_secret = resolver.resolve(env_var_name=f"{prefix}API_SECRET")
        if api_secret is None:
            api_secret = resolver.resolve_from_file(env_var_name=f"{prefix}API_SECRET_FILE")

        config = cls(
            api_key=resolver.resolve(env_var_name=f"{prefix}API_KEY", required=True),
            api_secret=api_secret or "",
            callback_url=resolver.resolve(env_var_name=f"{prefix}CALLBACK_URL", default=""),
            signed_requests=resolver.resolve_bool(env_var_name=f"{prefix}SIGNED_REQUESTS"),
        )
        logger.debug(f"Loaded client config from environment (signed_requests={config.signed_requests})")
        return config
