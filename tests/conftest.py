"""Pytest configuration and shared fixtures for instagram-client tests."""

import pytest

from instagram_client.config import ClientConfig
from instagram_client.testing import RecordingTransport, build_raw_response


@pytest.fixture(autouse=True)
def clear_env(monkeypatch):
    """Auto-cleanup: Clear test-related environment variables before each test.

    This prevents test pollution when testing settings resolution.
    """
    import os

    test_prefixes = ("TEST_", "INSTAGRAM_", "IGTEST_")

    for key in list(os.environ.keys()):
        if any(key.startswith(prefix) for prefix in test_prefixes):
            monkeypatch.delenv(key, raising=False)

    yield


@pytest.fixture
def config() -> ClientConfig:
    return ClientConfig(
        api_key="test-client-id",
        api_secret="test-secret",
        callback_url="https://example.com/callback",
    )


@pytest.fixture
def ok_response() -> bytes:
    return build_raw_response(200, {"meta": {"code": 200}, "data": []}, {"X-Ratelimit-Remaining": "4999"})


@pytest.fixture
def transport(ok_response) -> RecordingTransport:
    return RecordingTransport(ok_response)
