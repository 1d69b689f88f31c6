"""Custom exceptions for configuration, credentials and the OAuth flow.

Example:
    ```python
    from instagram_client.auth.exceptions import MissingAccessTokenError

    try:
        await client.get_user_likes()
    except MissingAccessTokenError as e:
        print(f"Log in first, {e.endpoint} needs an access token")
    ```
"""

from instagram_client.errors.exceptions import InstagramError


class AuthError(InstagramError):
    """Base exception for authentication-related errors.

    All auth-specific exceptions inherit from this class,
    making it easy to catch any authentication problem.
    """

    pass


class CredentialNotFoundError(AuthError):
    """Raised when a required setting cannot be resolved.

    Attributes:
        env_var_name: The environment variable that was checked (if any).
    """

    def __init__(self, message: str, env_var_name: str | None = None):
        super().__init__(message)
        self.env_var_name = env_var_name


class CredentialFileError(AuthError):
    """Raised when a secret file cannot be read."""

    pass


class MissingAccessTokenError(AuthError):
    """Raised when an authenticated request is made before a token is set.

    Raised before anything is sent.

    Attributes:
        endpoint: The endpoint that required the token.
    """

    def __init__(self, message: str, endpoint: str | None = None):
        super().__init__(message)
        self.endpoint = endpoint


class InvalidScopeError(AuthError):
    """Raised when a login URL is requested with an unknown scope."""

    def __init__(self, message: str, scope: str | None = None):
        super().__init__(message)
        self.scope = scope


class OAuthExchangeError(AuthError):
    """Raised when the authorization code cannot be exchanged for a token.

    Attributes:
        error_type: Error type reported by the token endpoint, if any.
    """

    def __init__(self, message: str, error_type: str | None = None):
        super().__init__(message)
        self.error_type = error_type
