"""Async Instagram API client.

Example:
    ```python
    from instagram_client import ClientConfig, InstagramClient

    config = ClientConfig.from_env()
    async with InstagramClient(config) as client:
        print(client.get_login_url(["basic", "likes"]))

        await client.get_oauth_token(code, store=True)
        page = await client.get_user_media(limit=20)
        while page is not None:
            handle(page["data"])
            page = await client.next_page(page, limit=20)

        print(f"{client.rate_limit} calls left")
    ```
"""

from collections.abc import Iterable
from typing import Any

from instagram_client.auth.oauth import Scope, TokenExchange, TokenResponse
from instagram_client.config import ClientConfig
from instagram_client.dispatcher import RequestDispatcher, SessionState
from instagram_client.models import HttpMethod, Params, RelationshipAction
from instagram_client.pagination import PaginationCursor
from instagram_client.transport.base import Transport
from instagram_client.transport.httpx_transport import HttpxTransport


def _count(limit: int) -> dict[str, int]:
    return {"count": limit} if limit > 0 else {}


class InstagramClient:
    """Endpoint operations on top of the request dispatcher.

    Every method returns the decoded JSON response.

    Args:
        config: Application settings
        transport: Custom transport; defaults to an owned HttpxTransport
        session: Shared token/rate-limit state; a fresh one if omitted
    """

    def __init__(
        self,
        config: ClientConfig,
        transport: Transport | None = None,
        session: SessionState | None = None,
    ):
        self._owned_transport = HttpxTransport() if transport is None else None
        self.transport = transport or self._owned_transport
        self.config = config
        self.dispatcher = RequestDispatcher(config, self.transport, session)
        self.oauth = TokenExchange(config, self.transport)
        self.cursor = PaginationCursor(config.api_base_url)

    async def __aenter__(self):
        return self

    async def __aexit__(self, exc_type, exc_val, exc_tb):
        await self.aclose()

    async def aclose(self) -> None:
        if self._owned_transport is not None:
            await self._owned_transport.aclose()

    @property
    def session(self) -> SessionState:
        return self.dispatcher.session

    # Authentication

    def get_login_url(self, scopes: str | Scope | Iterable[str | Scope] = (Scope.BASIC,)) -> str:
        return self.oauth.build_login_url(scopes)

    async def get_oauth_token(self, code: str, store: bool = False) -> TokenResponse:
        """Exchange a login code for a token, optionally storing it on this client."""
        token = await self.oauth.exchange_code(code)
        if store:
            self.set_access_token(token)
        return token

    def set_access_token(self, token: str | TokenResponse | dict[str, Any] | None) -> None:
        self.session.credentials.set_access_token(token)

    @property
    def access_token(self) -> str | None:
        return self.session.credentials.access_token

    def set_signed_requests(self, enabled: bool) -> None:
        self.dispatcher.signed_requests = enabled

    @property
    def rate_limit(self) -> int | None:
        """Value of the last X-Ratelimit-Remaining header seen."""
        return self.session.rate_limit.remaining

    def get_rate_limit(self) -> int | None:
        return self.rate_limit

    async def request(
        self,
        endpoint: str,
        *,
        requires_auth: bool = False,
        params: Params | None = None,
        method: HttpMethod | str = HttpMethod.GET,
    ) -> Any:
        return await self.dispatcher.execute(endpoint, requires_auth=requires_auth, params=params, method=method)

    async def next_page(self, response: Any, limit: int = 0) -> Any | None:
        """Fetch the page after ``response``, or return None on the last page.

        Raises:
            PaginationUnsupportedError: If ``response`` has no pagination field.
        """
        request = self.cursor.next_from_response(response, limit)
        if request is None:
            return None
        return await self.dispatcher.dispatch(request)

    # Users

    async def get_user_likes(self, limit: int = 0) -> Any:
        return await self.request("users/self/media/liked", requires_auth=True, params=_count(limit))

    async def get_user_follows(self, user_id: int | str = "self", limit: int = 0) -> Any:
        return await self.request(f"users/{user_id}/follows", requires_auth=True, params=_count(limit))

    async def get_user_followers(self, user_id: int | str = "self", limit: int = 0) -> Any:
        return await self.request(f"users/{user_id}/followed-by", requires_auth=True, params=_count(limit))

    async def get_user_relationship(self, user_id: int | str) -> Any:
        return await self.request(f"users/{user_id}/relationship", requires_auth=True)

    async def modify_relationship(self, action: str | RelationshipAction, user_id: int | str) -> Any:
        """Follow, unfollow, block, unblock, approve or deny a user.

        Raises:
            InvalidRelationshipActionError: Before sending, for any other action.
        """
        action = RelationshipAction.validate(action)
        return await self.request(
            f"users/{user_id}/relationship",
            requires_auth=True,
            params={"action": action.value},
            method=HttpMethod.POST,
        )

    async def get_user_media(self, user_id: int | str = "self", limit: int = 0) -> Any:
        # public profiles can be read with the client ID alone
        return await self.request(
            f"users/{user_id}/media/recent",
            requires_auth=self.session.credentials.has_token,
            params=_count(limit),
        )

    # Media

    async def search_media(
        self,
        lat: float,
        lng: float,
        distance: int = 1000,
        min_timestamp: int | None = None,
        max_timestamp: int | None = None,
    ) -> Any:
        params = {
            "lat": lat,
            "lng": lng,
            "distance": distance,
            "min_timestamp": min_timestamp,
            "max_timestamp": max_timestamp,
        }
        return await self.request("media/search", params=params)

    async def get_media(self, media_id: int | str) -> Any:
        return await self.request(f"media/{media_id}", requires_auth=self.session.credentials.has_token)

    async def get_popular_media(self) -> Any:
        return await self.request("media/popular")

    # Likes

    async def get_media_likes(self, media_id: int | str) -> Any:
        return await self.request(f"media/{media_id}/likes", requires_auth=True)

    async def like_media(self, media_id: int | str) -> Any:
        return await self.request(f"media/{media_id}/likes", requires_auth=True, method=HttpMethod.POST)

    async def delete_liked_media(self, media_id: int | str) -> Any:
        return await self.request(f"media/{media_id}/likes", requires_auth=True, method=HttpMethod.DELETE)

    # Comments

    async def get_media_comments(self, media_id: int | str) -> Any:
        return await self.request(f"media/{media_id}/comments")

    async def add_media_comment(self, media_id: int | str, text: str) -> Any:
        return await self.request(
            f"media/{media_id}/comments",
            requires_auth=True,
            params={"text": text},
            method=HttpMethod.POST,
        )

    async def delete_media_comment(self, media_id: int | str, comment_id: int | str) -> Any:
        return await self.request(
            f"media/{media_id}/comments/{comment_id}",
            requires_auth=True,
            method=HttpMethod.DELETE,
        )

    # Tags

    async def search_tags(self, name: str) -> Any:
        return await self.request("tags/search", params={"q": name})

    async def get_tag(self, name: str) -> Any:
        return await self.request(f"tags/{name}")

    async def get_tag_media(self, name: str, limit: int = 0) -> Any:
        return await self.request(f"tags/{name}/media/recent", params=_count(limit))

    # Locations

    async def get_location(self, location_id: int | str) -> Any:
        return await self.request(f"locations/{location_id}")

    async def get_location_media(self, location_id: int | str) -> Any:
        return await self.request(f"locations/{location_id}/media/recent")

    async def search_location(self, lat: float, lng: float, distance: int = 1000) -> Any:
        return await self.request("locations/search", params={"lat": lat, "lng": lng, "distance": distance})
