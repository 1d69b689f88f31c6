"""Testing utilities for code built on instagram_client.

Example:
    ```python
    from instagram_client.testing import RecordingTransport, build_raw_response


    async def test_reads_rate_limit(config):
        transport = RecordingTransport(
            build_raw_response(200, {"data": []}, {"X-Ratelimit-Remaining": "42"})
        )
        async with InstagramClient(config, transport=transport) as client:
            await client.get_popular_media()
        assert client.rate_limit == 42
    ```
"""

from instagram_client.testing.factories import RecordedRequest, RecordingTransport, build_raw_response

__all__ = ["RecordedRequest", "RecordingTransport", "build_raw_response"]
