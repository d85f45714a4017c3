"""End-to-end tests for InspectionService."""

from unittest.mock import AsyncMock

import pytest
from eth_abi import encode

from tracelens.defi import DefiDetector
from tracelens.defi.signatures import UNISWAP_V2_ROUTER
from tracelens.domain.models import DefiAnalysis
from tracelens.exceptions import NoTraceDataError, TraceFormatError
from tracelens.report import render_tree
from tracelens.service import InspectionService

SENDER = "0x1111111111111111111111111111111111111111"
USDC = "0xA0b86991c6218b36c1d19D4a2e9Eb0cE3606eB48"
WETH = "0xC02aaA39b223FE8D0A0e5C4F27eAD9083C756Cc2"
PAIR = "0xB4e16d0168e52d35CaCD2c6185b44281Ec28C9Dc"
TRANSFER_TOPIC = "0xddf252ad1be2c89b69c2b068fc378daa952ba7f163c4a11628f55a4df523b3ef"
APPROVAL_TOPIC = "0x8c5be1e5ebec7d5bd14f71427d1e84f3dd0314c0f7b2291e5b200ac8c7c3b925"


def _swap_frame() -> dict:
    args = encode(
        ["uint256", "uint256", "address[]", "address", "uint256"],
        [2_000_000, 1, [USDC, WETH], SENDER, 1_700_000_000],
    )
    return {
        "type": "CALL",
        "from": SENDER,
        "to": UNISWAP_V2_ROUTER,
        "value": "0x0",
        "gas": "0x30d40",
        "gasUsed": "0x1d4c0",
        "input": "0x38ed1739" + args.hex(),
        "calls": [{"type": "CALL", "from": UNISWAP_V2_ROUTER, "to": PAIR, "input": "0x022c0d9f"}],
    }


def _make_tx() -> dict:
    return {"hash": "0xe2e", "blockNumber": "0x10", "from": SENDER, "to": UNISWAP_V2_ROUTER}


def _transfer_log() -> dict:
    return {
        "address": USDC,
        "topics": [TRANSFER_TOPIC, "0x" + "00" * 12 + SENDER[2:], "0x" + "00" * 12 + PAIR[2:].lower()],
        "data": "0x" + encode(["uint256"], [2_000_000]).hex(),
    }


def _approval_log(amount: int) -> dict:
    return {
        "address": USDC,
        "topics": [APPROVAL_TOPIC, "0x" + "00" * 12 + SENDER[2:], "0x" + "00" * 12 + UNISWAP_V2_ROUTER[2:]],
        "data": "0x" + encode(["uint256"], [amount]).hex(),
    }


@pytest.fixture()
def service(trace_parser, detector):
    return InspectionService(parser=trace_parser, detector=detector)


class TestInspect:
    async def test_swap_pipeline(self, service):
        result = await service.inspect({"jsonrpc": "2.0", "id": 1, "result": _swap_frame()}, [_transfer_log()], _make_tx())

        assert result.trace.root_call.decoded_function.name == "swapExactTokensForTokens"
        assert result.trace.root_call.subcalls[0].depth == 1
        assert [e.decoded_event.name for e in result.trace.events] == ["Transfer"]
        assert result.defi.detected is True
        assert result.defi.interactions[0].description == "Token swap: USDC → WETH via Uniswap V2"

    async def test_transfer_with_transfer_and_approval_logs(self, service, token_resolver):
        transfer = {
            "type": "CALL",
            "from": SENDER,
            "to": USDC,
            "gas": "0x186a0",
            "gasUsed": "0xc350",
            "input": "0xa9059cbb" + encode(["address", "uint256"], [PAIR, 2_000_000]).hex(),
        }

        result = await service.inspect(transfer, [_transfer_log(), _approval_log(2**256 - 1)], _make_tx())

        events = result.trace.events
        assert [e.decoded_event.name for e in events] == ["Transfer", "Approval"]
        assert [e.log_index for e in events] == [0, 1]
        assert events[1].decoded_event.inputs[2].value == str(2**256 - 1)
        assert result.trace.root_call.subcalls == []
        assert result.defi.detected is False

        text = render_tree(result.trace, tokens=token_resolver)
        assert "Approval(owner=" in text
        assert "value=∞ (unlimited)" in text

    async def test_logs_taken_from_trace_when_missing(self, service):
        raw = {"calls": [_swap_frame()], "gasUsed": "0x1d4c0", "logs": [_transfer_log()]}

        result = await service.inspect(raw, None, _make_tx())

        assert len(result.trace.events) == 1
        assert result.trace.total_gas_used == "0x1d4c0"

    async def test_explicit_empty_logs(self, service):
        raw = {"calls": [_swap_frame()], "logs": [_transfer_log()]}
        result = await service.inspect(raw, [], _make_tx())
        assert result.trace.events == []

    async def test_emitter_association(self, trace_parser, detector):
        service = InspectionService(parser=trace_parser, detector=detector, associate="emitter")
        frame = _swap_frame()
        frame["calls"].append({"type": "CALL", "from": PAIR, "to": USDC, "input": "0x"})

        result = await service.inspect(frame, [_transfer_log()], _make_tx())

        assert result.trace.root_call.events == []
        assert len(result.trace.root_call.subcalls[1].events) == 1

    async def test_format_errors_propagate(self, service):
        with pytest.raises(TraceFormatError):
            await service.inspect("garbage", [], _make_tx())

    async def test_empty_trace_propagates(self, service):
        with pytest.raises(NoTraceDataError):
            await service.inspect([], [], _make_tx())

    async def test_detector_result_passed_through(self, trace_parser):
        detector = AsyncMock(spec=DefiDetector)
        detector.analyze_trace.return_value = DefiAnalysis(detected=False, summary="stub")
        service = InspectionService(parser=trace_parser, detector=detector)

        result = await service.inspect(_swap_frame(), [], _make_tx())

        assert result.defi.summary == "stub"
        detector.analyze_trace.assert_awaited_once_with(result.trace)
