"""Tests for SignatureRegistryClient — 4byte lookups over the shared HTTP client."""

from unittest.mock import AsyncMock, MagicMock

import httpx
import pytest

from tracelens.exceptions import ExternalServiceError
from tracelens.infra.signatures.fourbyte_client import (
    EVENT_SIGNATURES_URL,
    FUNCTION_SIGNATURES_URL,
    SignatureRegistryClient,
)


@pytest.fixture()
def mock_http():
    return AsyncMock()


@pytest.fixture()
def registry(mock_http):
    return SignatureRegistryClient(http_client=mock_http)


def _mock_response(data: dict | None = None, status_code: int = 200):
    resp = MagicMock()
    resp.status_code = status_code
    resp.json.return_value = data or {}
    return resp


class TestLookupFunction:
    async def test_returns_text_signatures(self, registry, mock_http):
        mock_http.get.return_value = _mock_response({
            "count": 2,
            "results": [
                {"id": 2, "text_signature": "transfer(address,uint256)", "hex_signature": "0xa9059cbb"},
                {"id": 1, "text_signature": "many_msg_babbage(bytes1)", "hex_signature": "0xa9059cbb"},
            ],
        })

        result = await registry.lookup_function("0xA9059CBB")

        assert result == ["transfer(address,uint256)", "many_msg_babbage(bytes1)"]
        mock_http.get.assert_called_once_with(FUNCTION_SIGNATURES_URL, params={"hex_signature": "0xa9059cbb"})

    async def test_empty_results(self, registry, mock_http):
        mock_http.get.return_value = _mock_response({"count": 0, "results": []})
        assert await registry.lookup_function("0xdeadbeef") == []

    async def test_client_error_is_empty(self, registry, mock_http):
        mock_http.get.return_value = _mock_response(status_code=404)

        assert await registry.lookup_function("0xdeadbeef") == []
        assert mock_http.get.call_count == 1

    async def test_malformed_entries_skipped(self, registry, mock_http):
        mock_http.get.return_value = _mock_response({"results": [{"id": 1}, "junk", {"text_signature": "f()"}]})
        assert await registry.lookup_function("0x26121ff0") == ["f()"]

    async def test_server_error_retried(self, registry, mock_http):
        mock_http.get.side_effect = [
            _mock_response(status_code=502),
            _mock_response({"results": [{"text_signature": "balanceOf(address)"}]}),
        ]

        result = await registry.lookup_function("0x70a08231")

        assert result == ["balanceOf(address)"]
        assert mock_http.get.call_count == 2

    async def test_persistent_rate_limit_raises(self, registry, mock_http):
        mock_http.get.return_value = _mock_response(status_code=429)

        with pytest.raises(ExternalServiceError, match="HTTP 429"):
            await registry.lookup_function("0x70a08231")

        assert mock_http.get.call_count == 3

    async def test_invalid_json_raises_service_error(self, registry, mock_http):
        resp = _mock_response()
        resp.json.side_effect = ValueError("Expecting value")
        mock_http.get.return_value = resp

        with pytest.raises(ExternalServiceError, match="invalid JSON"):
            await registry.lookup_function("0x70a08231")

    async def test_non_object_body_raises_service_error(self, registry, mock_http):
        mock_http.get.return_value = _mock_response()
        mock_http.get.return_value.json.return_value = ["not", "an", "object"]

        with pytest.raises(ExternalServiceError, match="unexpected payload"):
            await registry.lookup_function("0x70a08231")

    async def test_non_list_results_is_empty(self, registry, mock_http):
        mock_http.get.return_value = _mock_response({"results": "oops"})
        assert await registry.lookup_function("0x70a08231") == []

    async def test_transport_error_wrapped(self, registry, mock_http):
        mock_http.get.side_effect = httpx.ConnectError("connection refused")

        with pytest.raises(ExternalServiceError, match="unreachable"):
            await registry.lookup_function("0x70a08231")


class TestLookupEvent:
    async def test_uses_event_endpoint(self, registry, mock_http):
        topic = "0xDDF252AD1BE2C89B69C2B068FC378DAA952BA7F163C4A11628F55A4DF523B3EF"
        mock_http.get.return_value = _mock_response({
            "results": [{"text_signature": "Transfer(address,address,uint256)"}],
        })

        result = await registry.lookup_event(topic)

        assert result == ["Transfer(address,address,uint256)"]
        mock_http.get.assert_called_once_with(EVENT_SIGNATURES_URL, params={"hex_signature": topic.lower()})
