"""Bookkeeping for the X-Ratelimit-Remaining response header."""

import logging
from collections.abc import Mapping
from threading import Lock

logger = logging.getLogger(__name__)

RATE_LIMIT_HEADER = "X-Ratelimit-Remaining"


def parse_remaining(value: str | None) -> int | None:
    """Parse a rate-limit header value, returning None when unusable."""
    if value is None:
        return None
    try:
        return int(value.strip())
    except ValueError:
        return None


class RateLimitTracker:
    """Remembers the most recently reported number of API calls left.

    The value is overwritten by every response carrying the header and is
    left untouched by responses without it. Writes are serialized so a
    client shared between tasks or threads never tears the value.
    """

    def __init__(self, remaining: int | None = None):
        self._remaining = remaining
        self._lock = Lock()

    @property
    def remaining(self) -> int | None:
        """Calls left in the current window, or None before any response."""
        return self._remaining

    def record(self, remaining: int) -> None:
        with self._lock:
            self._remaining = remaining
        logger.debug(f"Rate limit remaining: {remaining}")

    def update_from_headers(self, headers: Mapping[str, str]) -> bool:
        """Update from a parsed header map.

        The header name is matched case-insensitively. A missing or
        non-integer header leaves the state unchanged.

        Args:
            headers: Response headers as returned by parse_headers

        Returns:
            True if the state was updated
        """
        raw_value = None
        for name, value in headers.items():
            if name.lower() == RATE_LIMIT_HEADER.lower():
                raw_value = value
                break

        if raw_value is None:
            return False

        remaining = parse_remaining(raw_value)
        if remaining is None:
            logger.warning(f"Ignoring non-integer {RATE_LIMIT_HEADER} header: {raw_value!r}")
            return False

        self.record(remaining)
        return True
