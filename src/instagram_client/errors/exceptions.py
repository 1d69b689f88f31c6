"""Structured exceptions for Instagram API requests."""

from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from instagram_client.errors.models import ResponseMeta
    from instagram_client.transport.headers import ResponseEnvelope


class InstagramError(Exception):
    """Base exception for everything raised by instagram_client."""

    pass


class InvalidRelationshipActionError(InstagramError):
    """Relationship action outside follow/unfollow/block/unblock/approve/deny."""

    def __init__(self, message: str, action: str | None = None):
        super().__init__(message)
        self.action = action


class MalformedHeaderError(InstagramError):
    """A response header line could not be split into name and value."""

    def __init__(self, message: str, line: str | None = None):
        super().__init__(message)
        self.line = line


class EmptyResponseBodyError(InstagramError):
    """The transport returned headers but no body."""

    def __init__(self, message: str, envelope: "ResponseEnvelope | None" = None):
        super().__init__(message)
        self.envelope = envelope


class ResponseDecodeError(InstagramError):
    """The response body is not valid JSON."""

    def __init__(self, message: str, envelope: "ResponseEnvelope | None" = None):
        super().__init__(message)
        self.envelope = envelope


class TransportError(InstagramError):
    """Network failure or timeout while talking to the API."""

    pass


class PaginationUnsupportedError(InstagramError):
    """The response carries no pagination field."""

    pass


class APIError(InstagramError):
    """The API answered with an error status."""

    def __init__(
        self,
        message: str,
        status_code: int | None = None,
        envelope: "ResponseEnvelope | None" = None,
        meta: "ResponseMeta | None" = None,
    ):
        super().__init__(message)
        self.status_code = status_code
        self.envelope = envelope
        self.meta = meta

    @property
    def error_type(self) -> str | None:
        return self.meta.error_type if self.meta else None


class ClientError(APIError):
    """4xx client errors."""

    pass


class BadRequestError(ClientError):
    """400 Bad Request."""

    pass


class UnauthorizedError(ClientError):
    """401 Unauthorized."""

    pass


class ForbiddenError(ClientError):
    """403 Forbidden."""

    pass


class NotFoundError(ClientError):
    """404 Not Found."""

    pass


class RateLimitError(ClientError):
    """429 Too Many Requests."""

    def __init__(self, message: str, remaining: int | None = None, **kwargs):
        super().__init__(message, **kwargs)
        self.remaining = remaining


class ServerError(APIError):
    """5xx server errors."""

    pass
