"""Tests for RateLimitedClient — request spacing and delegation."""

import time
from unittest.mock import AsyncMock, MagicMock

from tracelens.infra.http.rate_limited_client import RateLimitedClient


def _make_client(rate: float) -> RateLimitedClient:
    client = RateLimitedClient(rate_per_second=rate)
    client._client = AsyncMock()
    client._client.get.return_value = MagicMock(status_code=200)
    client._client.post.return_value = MagicMock(status_code=200)
    return client


class TestRateLimitedClient:
    async def test_delegates_get_and_post(self):
        client = _make_client(rate=0)

        await client.get("https://example.org/a", params={"q": "1"})
        await client.post("https://example.org/b", json={"id": 1})

        client._client.get.assert_awaited_once_with("https://example.org/a", params={"q": "1"})
        client._client.post.assert_awaited_once_with("https://example.org/b", json={"id": 1})
        assert client.request_count == 2

    async def test_requests_are_spaced(self):
        client = _make_client(rate=20.0)

        start = time.monotonic()
        for _ in range(3):
            await client.get("https://example.org")
        elapsed = time.monotonic() - start

        # first request is immediate, the next two wait one interval each
        assert elapsed >= 0.09

    async def test_context_manager_closes(self):
        client = _make_client(rate=0)
        async with client as c:
            assert c is client
        client._client.aclose.assert_awaited_once()
