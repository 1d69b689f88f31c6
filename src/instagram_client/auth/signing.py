"""HMAC-SHA256 request signatures ("enforce signed requests").

When signed requests are enabled for an application, every call must carry
a ``sig`` parameter computed over the endpoint and all parameters:

    /media/657988443280050001_25025320|access_token=TOKEN|count=10

with each ``|key=value`` pair in ascending key order, hashed with the
application secret and hex encoded.

Example:
    ```python
    from instagram_client.auth.modes import BearerAuth
    from instagram_client.auth.signing import RequestSigner

    signer = RequestSigner("my-secret")
    sig = signer.sign("users/self", BearerAuth("TOKEN"), {"count": 10})
    ```
"""

import hashlib
import hmac

from instagram_client.auth.modes import AuthMode
from instagram_client.models import serialize_params


class RequestSigner:
    """Compute ``sig`` values with the application secret."""

    def __init__(self, secret: str):
        self._secret = secret.encode("utf-8")

    def base_string(self, endpoint: str, auth: AuthMode | str | None, params: object) -> str:
        """Build the string that gets signed.

        Args:
            endpoint: Endpoint path without the API base, e.g. ``users/self``
            auth: Auth mode, or a legacy ``?key=value`` fragment (any key)
            params: Request parameters; anything but a mapping counts as empty

        Returns:
            ``/endpoint|k1=v1|k2=v2`` with keys sorted ascending
        """
        pairs = dict(serialize_params(params))
        if isinstance(auth, str):
            key, _, value = auth.lstrip("?").partition("=")
            pairs[key] = value
        elif auth is not None:
            key, value = auth.query_param
            pairs[key] = value

        base = "/" + endpoint
        for key in sorted(pairs):
            base += f"|{key}={pairs[key]}"
        return base

    def sign(self, endpoint: str, auth: AuthMode | str | None, params: object) -> str:
        """Return the lowercase hex HMAC-SHA256 of the base string."""
        message = self.base_string(endpoint, auth, params).encode("utf-8")
        return hmac.new(self._secret, message, hashlib.sha256).hexdigest()
