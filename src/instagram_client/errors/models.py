"""Instagram error envelope models."""

from dataclasses import dataclass
from typing import Any


@dataclass
class ResponseMeta:
    """The ``meta`` block Instagram attaches to every response.

    Error responses look like::

        {"meta": {"error_type": "OAuthParameterException",
                  "code": 400,
                  "error_message": "The access_token provided is invalid."}}

    The token endpoint uses the same keys at the top level instead of
    nesting them under ``meta``.
    """

    code: int | None = None  # HTTP status echoed by the API
    error_type: str | None = None  # Exception class name, e.g. OAuthAccessTokenException
    error_message: str | None = None  # Human-readable explanation

    @classmethod
    def from_payload(cls, payload: Any) -> "ResponseMeta | None":
        """Extract the meta block from a decoded response body.

        Args:
            payload: Decoded JSON body

        Returns:
            ResponseMeta or None if the body carries no error fields
        """
        if not isinstance(payload, dict):
            return None

        data = payload.get("meta")
        if not isinstance(data, dict):
            data = payload

        fields = {"code", "error_type", "error_message"}
        if not any(field in data for field in fields):
            return None

        code = data.get("code")
        try:
            code = int(code) if code is not None else None
        except (TypeError, ValueError):
            code = None

        return cls(
            code=code,
            error_type=data.get("error_type"),
            error_message=data.get("error_message"),
        )

    def to_exception_message(self) -> str:
        """Convert the meta block to an exception message."""
        parts = []
        if self.error_type:
            parts.append(self.error_type)
        if self.error_message:
            parts.append(self.error_message)
        return ": ".join(parts) if parts else "Unknown API error"
