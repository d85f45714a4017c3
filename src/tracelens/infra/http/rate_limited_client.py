import asyncio
import logging
import time

import httpx

logger = logging.getLogger(__name__)

DEFAULT_HEADERS = {"User-Agent": "tracelens", "Accept": "application/json"}


class RateLimitedClient:
    """Async HTTP client spacing requests at a fixed minimum interval.

    Shared by the signature registry and the JSON-RPC client, so one
    inspection's registry lookups and metadata reads draw from the same budget.
    A non-positive rate disables spacing.
    """

    def __init__(
        self,
        rate_per_second: float = 5.0,
        timeout: float = 30.0,
        headers: dict[str, str] | None = None,
    ) -> None:
        self._min_interval = 1.0 / rate_per_second if rate_per_second > 0 else 0.0
        self._next_slot = 0.0
        self._lock = asyncio.Lock()
        self._client = httpx.AsyncClient(timeout=timeout, headers={**DEFAULT_HEADERS, **(headers or {})})
        self.request_count = 0

    async def _acquire(self) -> None:
        async with self._lock:
            delay = self._next_slot - time.monotonic()
            if delay > 0:
                await asyncio.sleep(delay)
            self._next_slot = time.monotonic() + self._min_interval
            self.request_count += 1

    async def get(self, url: str, params: dict | None = None) -> httpx.Response:
        await self._acquire()
        logger.debug("GET %s %s", url, params or "")
        return await self._client.get(url, params=params)

    async def post(self, url: str, json: dict | list | None = None) -> httpx.Response:
        await self._acquire()
        logger.debug("POST %s", url)
        return await self._client.post(url, json=json)

    async def close(self) -> None:
        await self._client.aclose()

    async def __aenter__(self) -> "RateLimitedClient":
        return self

    async def __aexit__(self, *args: object) -> None:
        await self.close()
