"""Error taxonomy and response normalization for the Instagram client."""

from instagram_client.errors.exceptions import (
    APIError,
    BadRequestError,
    ClientError,
    EmptyResponseBodyError,
    ForbiddenError,
    InstagramError,
    InvalidRelationshipActionError,
    MalformedHeaderError,
    NotFoundError,
    PaginationUnsupportedError,
    RateLimitError,
    ResponseDecodeError,
    ServerError,
    TransportError,
    UnauthorizedError,
)
from instagram_client.errors.handler import raise_for_status
from instagram_client.errors.models import ResponseMeta

__all__ = [
    "APIError",
    "BadRequestError",
    "ClientError",
    "EmptyResponseBodyError",
    "ForbiddenError",
    "InstagramError",
    "InvalidRelationshipActionError",
    "MalformedHeaderError",
    "NotFoundError",
    "PaginationUnsupportedError",
    "RateLimitError",
    "ResponseDecodeError",
    "ResponseMeta",
    "ServerError",
    "TransportError",
    "UnauthorizedError",
    "raise_for_status",
]
