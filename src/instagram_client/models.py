"""Request models shared by the dispatcher, signer and pagination cursor."""

from collections.abc import Mapping
from dataclasses import dataclass
from enum import Enum
from urllib.parse import urlencode

from instagram_client.errors.exceptions import InvalidRelationshipActionError

ParamValue = str | int | float | None
Params = Mapping[str, ParamValue]


class HttpMethod(str, Enum):
    GET = "GET"
    POST = "POST"
    DELETE = "DELETE"


class RelationshipAction(str, Enum):
    """Actions accepted by ``users/{id}/relationship``."""

    FOLLOW = "follow"
    UNFOLLOW = "unfollow"
    BLOCK = "block"
    UNBLOCK = "unblock"
    APPROVE = "approve"
    DENY = "deny"

    @classmethod
    def validate(cls, action: "str | RelationshipAction") -> "RelationshipAction":
        """Coerce a string to a RelationshipAction.

        Raises:
            InvalidRelationshipActionError: If the action is not supported.
        """
        try:
            return cls(action)
        except ValueError:
            allowed = ", ".join(member.value for member in cls)
            raise InvalidRelationshipActionError(
                f"Unsupported relationship action {action!r} (expected one of: {allowed})",
                action=str(action),
            ) from None


@dataclass(frozen=True)
class RequestDescriptor:
    """Everything the dispatcher needs for one API call."""

    endpoint: str
    requires_auth: bool = False
    params: Params | None = None
    method: HttpMethod = HttpMethod.GET


def serialize_params(params: object) -> list[tuple[str, str]]:
    """Flatten request parameters into sorted (key, value) string pairs.

    Signing, query strings and form bodies all go through this function so
    they agree on which parameters are sent and in what order. Anything that
    is not a mapping counts as no parameters; ``None`` values are dropped.
    """
    if not isinstance(params, Mapping):
        return []
    return sorted((str(key), str(value)) for key, value in params.items() if value is not None)


def encode_params(params: object) -> str:
    """URL-encode parameters as ``key=value&...`` in serialization order."""
    return urlencode(serialize_params(params))
