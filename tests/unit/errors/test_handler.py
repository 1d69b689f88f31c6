"""Tests for error status normalization."""

import pytest

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
from instagram_client.errors.handler import raise_for_status
from instagram_client.transport.headers import ResponseEnvelope


def _envelope(status_line: str, headers: dict | None = None) -> ResponseEnvelope:
    return ResponseEnvelope(status_line=status_line, headers=headers or {}, body=b"{}")


@pytest.mark.unit
@pytest.mark.parametrize("status_line", ["HTTP/1.1 200 OK", "HTTP/1.1 201 Created", "HTTP/1.1 304 Not Modified"])
def test_success_does_not_raise(status_line):
    raise_for_status(_envelope(status_line), {"data": []})


@pytest.mark.unit
def test_unparseable_status_line_does_not_raise():
    raise_for_status(_envelope("garbage"))


@pytest.mark.unit
@pytest.mark.parametrize(
    ("status_line", "exc_class"),
    [
        ("HTTP/1.1 400 Bad Request", BadRequestError),
        ("HTTP/1.1 401 Unauthorized", UnauthorizedError),
        ("HTTP/1.1 403 Forbidden", ForbiddenError),
        ("HTTP/1.1 404 Not Found", NotFoundError),
        ("HTTP/1.1 418 I'm a teapot", ClientError),
        ("HTTP/1.1 500 Internal Server Error", ServerError),
        ("HTTP/1.1 503 Service Unavailable", ServerError),
        ("HTTP/1.1 600 Weird", APIError),
    ],
)
def test_status_mapping(status_line, exc_class):
    envelope = _envelope(status_line)

    with pytest.raises(exc_class) as exc_info:
        raise_for_status(envelope)

    assert type(exc_info.value) is exc_class
    assert exc_info.value.status_code == envelope.status_code
    assert exc_info.value.envelope is envelope


@pytest.mark.unit
def test_meta_used_for_message():
    payload = {
        "meta": {
            "error_type": "OAuthParameterException",
            "code": 400,
            "error_message": "Missing client_id or access_token URL parameter.",
        }
    }

    with pytest.raises(BadRequestError) as exc_info:
        raise_for_status(_envelope("HTTP/1.1 400 Bad Request"), payload)

    assert "OAuthParameterException" in str(exc_info.value)
    assert "Missing client_id" in str(exc_info.value)
    assert exc_info.value.error_type == "OAuthParameterException"


@pytest.mark.unit
def test_status_line_used_without_meta():
    with pytest.raises(NotFoundError) as exc_info:
        raise_for_status(_envelope("HTTP/1.1 404 Not Found"), {"data": None})

    assert str(exc_info.value) == "HTTP 404: HTTP/1.1 404 Not Found"
    assert exc_info.value.meta is None


@pytest.mark.unit
def test_rate_limit_error_carries_remaining():
    envelope = _envelope("HTTP/1.1 429 Too Many Requests", {"X-Ratelimit-Remaining": "0"})
    payload = {"meta": {"error_type": "OAuthRateLimitException", "code": 429, "error_message": "Slow down"}}

    with pytest.raises(RateLimitError) as exc_info:
        raise_for_status(envelope, payload)

    assert exc_info.value.remaining == 0
    assert exc_info.value.status_code == 429
