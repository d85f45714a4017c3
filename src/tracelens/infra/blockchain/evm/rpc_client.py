"""Read-only EVM JSON-RPC client used for token metadata probing."""

import logging

import httpx
from tenacity import retry, retry_if_exception_type, stop_after_attempt, wait_exponential

from tracelens.exceptions import ExternalServiceError
from tracelens.infra.http.rate_limited_client import RateLimitedClient

logger = logging.getLogger(__name__)


class EVMRPCClient:
    def __init__(self, rpc_url: str, http_client: RateLimitedClient) -> None:
        self._rpc_url = rpc_url
        self._http = http_client

    @retry(
        retry=retry_if_exception_type(ExternalServiceError),
        stop=stop_after_attempt(3),
        wait=wait_exponential(multiplier=1, min=1, max=8),
        reraise=True,
    )
    async def _call(self, method: str, params: list) -> dict:
        """Execute a JSON-RPC call and return the full response envelope."""
        payload = {
            "jsonrpc": "2.0",
            "id": 1,
            "method": method,
            "params": params,
        }
        try:
            resp = await self._http.post(self._rpc_url, json=payload)
        except httpx.HTTPError as e:
            raise ExternalServiceError(f"RPC unreachable ({method}): {e}") from e

        if resp.status_code == 429 or resp.status_code >= 500:
            raise ExternalServiceError(f"RPC error ({method}): HTTP {resp.status_code}")

        try:
            envelope = resp.json()
        except ValueError as e:
            raise ExternalServiceError(f"RPC returned invalid JSON ({method}): {e}") from e
        if not isinstance(envelope, dict):
            raise ExternalServiceError(f"RPC returned unexpected payload ({method}): {type(envelope).__name__}")
        return envelope

    async def eth_call(self, to: str, data: str, block: str = "latest") -> str | None:
        """Run a read-only call. Returns the 0x-hex return data, or None if the call reverted.

        A JSON-RPC `error` object means the target rejected the call (not a
        contract, missing function, revert) and is not retried.
        """
        envelope = await self._call("eth_call", [{"to": to, "data": data}, block])
        if "error" in envelope:
            error = envelope["error"]
            msg = error.get("message", str(error)) if isinstance(error, dict) else str(error)
            logger.debug("eth_call to %s (%s) failed: %s", to, data[:10], msg)
            return None

        result = envelope.get("result")
        if not isinstance(result, str) or result in ("0x", ""):
            return None
        return result
