"""Instagram Client - async client for the Instagram v1 REST API.

This library provides:
- OAuth 2.0 login URL and code-for-token exchange
- Authenticated URL building with optional HMAC request signing
- Cursor-based pagination helpers
- Rate-limit tracking from response headers
- Typed errors for every failure mode

Example:
    ```python
    from instagram_client import ClientConfig, InstagramClient

    config = ClientConfig(
        api_key="CLIENT_ID",
        api_secret="CLIENT_SECRET",
        callback_url="https://example.com/callback",
    )

    async with InstagramClient(config) as client:
        login_url = client.get_login_url(["basic"])
        ...
        await client.get_oauth_token(code, store=True)
        media = await client.get_user_media(limit=10)
    ```
"""

from instagram_client.client import InstagramClient
from instagram_client.config import ClientConfig
from instagram_client.dispatcher import RequestDispatcher, SessionState
from instagram_client.models import HttpMethod, RelationshipAction, RequestDescriptor
from instagram_client.pagination import PaginationCursor, PaginationDescriptor
from instagram_client.ratelimit import RateLimitTracker

__version__ = "0.1.0"

__all__ = [
    "ClientConfig",
    "HttpMethod",
    "InstagramClient",
    "PaginationCursor",
    "PaginationDescriptor",
    "RateLimitTracker",
    "RelationshipAction",
    "RequestDescriptor",
    "RequestDispatcher",
    "SessionState",
    "__version__",
]
