"""4byte.directory client: candidate text signatures for selectors and event topics."""

import logging

import httpx
from tenacity import retry, retry_if_exception_type, stop_after_attempt, wait_exponential

from tracelens.exceptions import ExternalServiceError
from tracelens.infra.http.rate_limited_client import RateLimitedClient

logger = logging.getLogger(__name__)

FUNCTION_SIGNATURES_URL = "https://www.4byte.directory/api/v1/signatures/"
EVENT_SIGNATURES_URL = "https://www.4byte.directory/api/v1/event-signatures/"


class SignatureRegistryClient:
    """Looks up candidate text signatures by hex hash.

    A selector may map to several signatures (hash collisions and registry
    spam); all candidates are returned in registry order and the caller picks.
    """

    def __init__(
        self,
        http_client: RateLimitedClient,
        function_url: str = FUNCTION_SIGNATURES_URL,
        event_url: str = EVENT_SIGNATURES_URL,
    ) -> None:
        self._http = http_client
        self._function_url = function_url
        self._event_url = event_url

    @retry(
        retry=retry_if_exception_type(ExternalServiceError),
        stop=stop_after_attempt(3),
        wait=wait_exponential(multiplier=1, min=1, max=8),
        reraise=True,
    )
    async def _lookup(self, url: str, hex_signature: str) -> list[str]:
        try:
            resp = await self._http.get(url, params={"hex_signature": hex_signature})
        except httpx.HTTPError as e:
            raise ExternalServiceError(f"Signature registry unreachable: {e}") from e

        # Rate limit or server error → retriable
        if resp.status_code == 429 or resp.status_code >= 500:
            raise ExternalServiceError(f"Signature registry error: HTTP {resp.status_code}")
        if resp.status_code != 200:
            logger.debug("Signature registry returned HTTP %d for %s", resp.status_code, hex_signature)
            return []

        try:
            data = resp.json()
        except ValueError as e:
            raise ExternalServiceError(f"Signature registry returned invalid JSON: {e}") from e
        if not isinstance(data, dict):
            raise ExternalServiceError(f"Signature registry returned unexpected payload: {type(data).__name__}")

        results = data.get("results")
        if not isinstance(results, list):
            return []
        return [r["text_signature"] for r in results if isinstance(r, dict) and r.get("text_signature")]

    async def lookup_function(self, selector: str) -> list[str]:
        """Candidate signatures for a 4-byte selector like `0xa9059cbb`."""
        return await self._lookup(self._function_url, selector.lower())

    async def lookup_event(self, topic: str) -> list[str]:
        """Candidate signatures for a 32-byte event topic."""
        return await self._lookup(self._event_url, topic.lower())
