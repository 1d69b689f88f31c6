"""Settings resolution and the per-client access token.

``CredentialResolver`` looks up application settings (API key, secret,
callback URL) from several sources, highest priority first:

1. Explicitly provided value
2. Environment variable
3. .env file (python-dotenv, loaded into the environment)
4. Default value

``Credentials`` holds the user's OAuth access token once the login flow
(or the caller) has provided one.

Example:
    ```python
    from instagram_client.auth import CredentialResolver, Credentials

    resolver = CredentialResolver()
    api_key = resolver.resolve(env_var_name="INSTAGRAM_API_KEY", required=True)

    credentials = Credentials()
    credentials.set_access_token(token_response)
    ```

Security Considerations:
    - Resolved values are never logged (masked with ***)
    - Only the source (env var name, file path) is logged
"""

import logging
import os
from collections.abc import Mapping
from pathlib import Path
from threading import Lock

from dotenv import load_dotenv

from instagram_client.auth.exceptions import (
    CredentialFileError,
    CredentialNotFoundError,
    MissingAccessTokenError,
)

logger = logging.getLogger(__name__)

TRUTHY_VALUES = frozenset(["1", "true", "yes", "on"])


class CredentialResolver:
    """Resolve settings from explicit values, the environment, .env and defaults.

    Args:
        dotenv_path: Path to a .env file. If None, python-dotenv searches
            parent directories.
        load_dotenv: Whether to load the .env file at all.
    """

    def __init__(self, dotenv_path: str | None = None, load_dotenv: bool = True):
        self._dotenv_loaded = False
        self._dotenv_lock = Lock()
        self._dotenv_path = dotenv_path

        if load_dotenv:
            self._ensure_dotenv_loaded()

    def _ensure_dotenv_loaded(self) -> None:
        with self._dotenv_lock:
            if self._dotenv_loaded:
                return
            load_dotenv(dotenv_path=self._dotenv_path)
            self._dotenv_loaded = True
            logger.debug("Loaded .env file for settings resolution")

    def resolve(
        self,
        *,
        value: str | None = None,
        env_var_name: str | None = None,
        default: str | None = None,
        required: bool = False,
    ) -> str | None:
        """Resolve one setting.

        Args:
            value: Explicit value; wins over every other source.
            env_var_name: Environment variable to check (.env values included).
            default: Fallback when nothing else is set.
            required: Raise instead of returning None.

        Returns:
            The resolved value, or None when not found and not required.

        Raises:
            CredentialNotFoundError: If required and not found anywhere.
        """
        if value is not None:
            result, source = value, "explicit parameter"
        elif env_var_name and os.environ.get(env_var_name):
            result, source = os.environ[env_var_name], f"environment variable '{env_var_name}'"
        elif default is not None:
            result, source = default, "default value"
        else:
            result, source = None, None

        if result is not None:
            logger.debug(f"Resolved setting from {source}: ***")
        elif required:
            error_msg = "Required setting not found"
            if env_var_name:
                error_msg += f" (checked env var: {env_var_name})"
            raise CredentialNotFoundError(error_msg, env_var_name=env_var_name)

        return result

    def resolve_bool(self, *, env_var_name: str, default: bool = False) -> bool:
        """Resolve a flag; ``1``, ``true``, ``yes`` and ``on`` count as set."""
        raw = self.resolve(env_var_name=env_var_name)
        if raw is None:
            return default
        return raw.strip().lower() in TRUTHY_VALUES

    def resolve_from_file(
        self,
        *,
        file_path: str | Path | None = None,
        env_var_name: str | None = None,
        required: bool = False,
    ) -> str | None:
        """Read a setting (typically the API secret) from a file.

        The path may come from ``file_path`` or from ``env_var_name``; ``~``
        and ``$VAR`` are expanded and the contents are stripped.

        Raises:
            CredentialFileError: If required and the file cannot be read.
        """
        path = str(file_path) if file_path is not None else None
        if path is None and env_var_name:
            path = self.resolve(env_var_name=env_var_name)

        if path is None:
            if required:
                raise CredentialFileError("No file path provided for setting resolution")
            return None

        path_obj = Path(os.path.expanduser(os.path.expandvars(path)))
        try:
            content = path_obj.read_text().strip()
        except OSError as e:
            if required:
                raise CredentialFileError(f"Cannot read setting file {path_obj}: {e}") from e
            logger.warning(f"Cannot read setting file {path_obj}: {e}")
            return None

        logger.debug(f"Resolved setting from file: {path_obj} (***)")
        return content


class Credentials:
    """The OAuth access token used by authenticated requests.

    Set once, read by every request. Writes take a lock so a client shared
    between threads sees either the old or the new token, never a mix.
    """

    def __init__(self, access_token: str | None = None):
        self._access_token = access_token or None
        self._lock = Lock()

    @property
    def access_token(self) -> str | None:
        return self._access_token

    @property
    def has_token(self) -> bool:
        return self._access_token is not None

    def set_access_token(self, token: object) -> None:
        """Store a token.

        Accepts the token string, a ``TokenResponse`` or the decoded token
        endpoint payload (a mapping with ``access_token``).
        """
        if isinstance(token, Mapping):
            token = token.get("access_token")
        elif hasattr(token, "access_token"):
            token = token.access_token

        if token is not None and not isinstance(token, str):
            raise TypeError(f"Access token must be a string, got {type(token).__name__}")

        with self._lock:
            self._access_token = token or None
        logger.debug("Access token updated" if token else "Access token cleared")

    def require_token(self, endpoint: str | None = None) -> str:
        """Return the token or fail before any request is made.

        Raises:
            MissingAccessTokenError: If no token has been set.
        """
        token = self._access_token
        if token is None:
            target = f" for endpoint '{endpoint}'" if endpoint else ""
            raise MissingAccessTokenError(f"Access token required{target}", endpoint=endpoint)
        return token
