"""Cursor-based pagination.

List endpoints return a ``pagination`` block next to ``data``::

    {"pagination": {"next_url": "https://api.instagram.com/v1/users/self/follows?access_token=...&cursor=123",
                    "next_cursor": "123"},
     "data": [...]}

``PaginationCursor`` turns that block into the request for the next page.
It never fetches anything itself; callers decide whether to follow.
"""

from collections.abc import Mapping
from dataclasses import dataclass
from typing import Any
from urllib.parse import urlsplit

from instagram_client.config import API_BASE_URL
from instagram_client.errors.exceptions import PaginationUnsupportedError
from instagram_client.models import HttpMethod, RequestDescriptor


@dataclass(frozen=True)
class PaginationDescriptor:
    next_url: str | None = None
    next_max_id: str | None = None
    next_cursor: str | None = None

    @property
    def exhausted(self) -> bool:
        return not self.next_url

    @classmethod
    def from_response(cls, response: Any) -> "PaginationDescriptor":
        """Extract the pagination block from a decoded response.

        An empty block is a valid last page; a missing one means the
        endpoint does not paginate.

        Raises:
            PaginationUnsupportedError: If the response has no pagination field.
        """
        if not isinstance(response, Mapping) or response.get("pagination") is None:
            raise PaginationUnsupportedError("Response does not support pagination")

        block = response["pagination"]
        if not isinstance(block, Mapping):
            raise PaginationUnsupportedError(f"Unexpected pagination field: {block!r}")

        def text(key: str) -> str | None:
            value = block.get(key)
            return str(value) if value not in (None, "") else None

        return cls(
            next_url=text("next_url"),
            next_max_id=text("next_max_id"),
            next_cursor=text("next_cursor"),
        )


class PaginationCursor:
    """Derive the next page request from a pagination descriptor.

    Args:
        api_base_url: Base URL whose path is stripped from ``next_url`` to
            recover the endpoint
    """

    def __init__(self, api_base_url: str = API_BASE_URL):
        self.api_base_url = api_base_url

    def next_request(self, prior: PaginationDescriptor | None, limit: int = 0) -> RequestDescriptor | None:
        """Return the request for the next page, or None on the last page.

        The endpoint is the path of ``next_url`` below the API base path, so
        a client pointed at another host still follows Instagram's links.
        The request is authenticated with the access token only if
        ``next_url`` carried one. Paging uses ``max_id`` when the API
        provided ``next_max_id``, otherwise ``cursor``.

        Raises:
            PaginationUnsupportedError: If ``next_url`` points outside the API
                base path.
        """
        if prior is None or not prior.next_url:
            return None

        parts = urlsplit(prior.next_url)
        query = parts.query
        if not query:
            return None

        base_path = urlsplit(self.api_base_url).path
        if not parts.path.startswith(base_path):
            raise PaginationUnsupportedError(f"next_url is outside the API base path {base_path!r}: {parts.path}")
        endpoint = parts.path.removeprefix(base_path)
        requires_auth = "access_token" in query

        params: dict[str, str | int] = {}
        if prior.next_max_id is not None:
            params["max_id"] = prior.next_max_id
        elif prior.next_cursor is not None:
            params["cursor"] = prior.next_cursor
        params["count"] = limit

        return RequestDescriptor(
            endpoint=endpoint,
            requires_auth=requires_auth,
            params=params,
            method=HttpMethod.GET,
        )

    def next_from_response(self, response: Any, limit: int = 0) -> RequestDescriptor | None:
        """Shortcut for ``next_request(PaginationDescriptor.from_response(response), limit)``.

        Raises:
            PaginationUnsupportedError: If the response has no pagination field.
        """
        return self.next_request(PaginationDescriptor.from_response(response), limit)
