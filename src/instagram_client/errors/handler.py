"""Error handling utilities for Instagram responses."""

from typing import TYPE_CHECKING, Any

from instagram_client.errors.exceptions import (
    APIError,
    BadRequestError,
    ClientError,
    ForbiddenError,
    NotFoundError,
    RateLimitError,
    ServerError,
    UnauthorizedError,
)
from instagram_client.errors.models import ResponseMeta
from instagram_client.ratelimit import RATE_LIMIT_HEADER, parse_remaining

if TYPE_CHECKING:
    from instagram_client.transport.headers import ResponseEnvelope


def raise_for_status(envelope: "ResponseEnvelope", payload: Any = None) -> None:
    """Raise appropriate exception for error responses.

    Uses the ``meta`` block of the decoded body for the message when
    present, otherwise the status line.

    Args:
        envelope: Parsed response (status line, headers, raw body)
        payload: Decoded JSON body, if any

    Raises:
        APIError subclass based on status code
    """
    status_code = envelope.status_code
    if status_code is None or status_code < 400:
        return

    meta = ResponseMeta.from_payload(payload)

    exception_map = {
        400: BadRequestError,
        401: UnauthorizedError,
        403: ForbiddenError,
        404: NotFoundError,
        429: RateLimitError,
    }

    if status_code in exception_map:
        exc_class = exception_map[status_code]
    elif 400 <= status_code < 500:
        exc_class = ClientError
    elif 500 <= status_code < 600:
        exc_class = ServerError
    else:
        exc_class = APIError

    if meta:
        message = f"HTTP {status_code}: {meta.to_exception_message()}"
    else:
        message = f"HTTP {status_code}: {envelope.status_line}"

    if exc_class is RateLimitError:
        raise RateLimitError(
            message=message,
            remaining=parse_remaining(envelope.header(RATE_LIMIT_HEADER)),
            status_code=status_code,
            envelope=envelope,
            meta=meta,
        )

    raise exc_class(
        message=message,
        status_code=status_code,
        envelope=envelope,
        meta=meta,
    )
