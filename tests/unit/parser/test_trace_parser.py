"""Tests for TraceParser — call tree construction, revert reasons and log association."""

import pytest
from eth_abi import encode

from tracelens.domain.enums import CallType
from tracelens.domain.models import TransactionInfo
from tracelens.exceptions import NoTraceDataError, TraceFormatError
from tracelens.parser import extract_revert_reason

SENDER = "0x1111111111111111111111111111111111111111"
RECIPIENT = "0x2222222222222222222222222222222222222222"
TOKEN = "0xdAC17F958D2ee523a2206206994597C13D831ec7"
PAIR = "0x0d4a11d5EEaaC28EC3F61d100daF4d40471f1852"

TRANSFER_TOPIC = "0xddf252ad1be2c89b69c2b068fc378daa952ba7f163c4a11628f55a4df523b3ef"


def _transfer_input(to: str = RECIPIENT, amount: int = 1_000_000) -> str:
    return "0xa9059cbb" + encode(["address", "uint256"], [to, amount]).hex()


def _error_output(message: str) -> str:
    return "0x08c379a0" + encode(["string"], [message]).hex()


def _make_frame(to: str = TOKEN, input: str = "0x", calls: list | None = None, **overrides) -> dict:
    frame = {
        "type": "CALL",
        "from": SENDER,
        "to": to,
        "value": "0x0",
        "gas": "0x30000",
        "gasUsed": "0x5208",
        "input": input,
        "output": "0x",
    }
    if calls is not None:
        frame["calls"] = calls
    frame.update(overrides)
    return frame


def _make_tx(**overrides) -> dict:
    tx = {
        "hash": "0xabc123",
        "blockNumber": "0x112a880",
        "from": SENDER,
        "to": TOKEN,
        "value": "0",
        "gasUsed": "21000",
        "gasPrice": "20000000000",
        "status": 1,
    }
    tx.update(overrides)
    return tx


def _topic(address: str) -> str:
    return "0x" + "00" * 12 + address[2:].lower()


def _transfer_log(address: str = TOKEN, amount: int = 1_000_000) -> dict:
    return {
        "address": address,
        "topics": [TRANSFER_TOPIC, _topic(SENDER), _topic(RECIPIENT)],
        "data": "0x" + encode(["uint256"], [amount]).hex(),
    }


def _depths_ok(call) -> bool:
    return all(child.depth == call.depth + 1 and _depths_ok(child) for child in call.subcalls)


class TestParseTrace:
    async def test_simple_transfer(self, trace_parser):
        trace = await trace_parser.parse_trace(_make_frame(input=_transfer_input()), _make_tx())

        root = trace.root_call
        assert root.depth == 0
        assert root.success is True
        assert root.subcalls == []
        assert root.decoded_function.name == "transfer"
        assert root.decoded_function.get("amount") == "1000000"
        assert trace.total_gas_used == "0x5208"
        assert trace.transaction.block_number == 18_000_000

    async def test_depth_invariant(self, trace_parser):
        raw = _make_frame(calls=[
            _make_frame(calls=[_make_frame(calls=[_make_frame()])]),
            _make_frame(),
        ])

        trace = await trace_parser.parse_trace(raw, _make_tx())

        assert _depths_ok(trace.root_call)
        assert [c.depth for c in trace.iter_calls()] == [0, 1, 2, 3, 1]

    async def test_child_order_follows_source(self, trace_parser):
        addresses = [f"0x{i:040x}" for i in range(1, 6)]
        raw = _make_frame(calls=[_make_frame(to=a) for a in addresses])

        trace = await trace_parser.parse_trace(raw, _make_tx())

        assert [c.to for c in trace.root_call.subcalls] == addresses

    async def test_deep_trace_does_not_recurse(self, trace_parser):
        raw = _make_frame()
        node = raw
        for _ in range(200):
            child = _make_frame()
            node["calls"] = [child]
            node = child

        trace = await trace_parser.parse_trace(raw, _make_tx())

        assert max(c.depth for c in trace.iter_calls()) == 200

    async def test_call_types(self, trace_parser):
        raw = _make_frame(calls=[
            _make_frame(type="STATICCALL"),
            _make_frame(type="DELEGATECALL"),
            _make_frame(type="CREATE2"),
            _make_frame(type="SELFDESTRUCT"),
            _make_frame(type=None),
        ])

        trace = await trace_parser.parse_trace(raw, _make_tx())

        assert [c.type for c in trace.root_call.subcalls] == [
            CallType.STATICCALL,
            CallType.DELEGATECALL,
            CallType.CREATE2,
            CallType.CALL,
            CallType.CALL,
        ]

    async def test_reverted_call_with_reason(self, trace_parser):
        raw = _make_frame(
            input=_transfer_input(),
            error="execution reverted",
            output=_error_output("Insufficient balance"),
        )

        trace = await trace_parser.parse_trace(raw, _make_tx(status="0x0"))

        root = trace.root_call
        assert root.success is False
        assert root.error == "execution reverted"
        assert root.revert_reason == "Insufficient balance"
        assert trace.transaction.status == 0

    async def test_provider_revert_reason_wins(self, trace_parser):
        raw = _make_frame(error="execution reverted", revertReason="custom", output=_error_output("other"))
        trace = await trace_parser.parse_trace(raw, _make_tx())
        assert trace.root_call.revert_reason == "custom"

    async def test_successful_call_has_no_revert_reason(self, trace_parser):
        trace = await trace_parser.parse_trace(_make_frame(output=_error_output("ignored")), _make_tx())
        assert trace.root_call.revert_reason is None

    async def test_undecodable_call_still_in_tree(self, trace_parser):
        raw = _make_frame(calls=[_make_frame(input="0xdeadbeef" + "00" * 32), _make_frame(input=_transfer_input())])

        trace = await trace_parser.parse_trace(raw, _make_tx())

        first, second = trace.root_call.subcalls
        assert first.decoded_function is None
        assert second.decoded_function.name == "transfer"

    async def test_missing_fields_default(self, trace_parser):
        raw = {"type": "CREATE", "from": SENDER, "to": TOKEN}

        trace = await trace_parser.parse_trace(raw, _make_tx())

        root = trace.root_call
        assert root.value == "0x0"
        assert root.gas_limit == "0"
        assert root.gas_used == "0"

    async def test_accepts_transaction_model(self, trace_parser):
        tx = TransactionInfo.model_validate(_make_tx())
        trace = await trace_parser.parse_trace(_make_frame(), tx)
        assert trace.transaction is tx

    async def test_empty_trace_raises(self, trace_parser):
        with pytest.raises(NoTraceDataError) as exc_info:
            await trace_parser.parse_trace([], _make_tx())
        assert exc_info.value.code == "NO_TRACE_DATA"

    async def test_unrecognized_format_raises(self, trace_parser):
        with pytest.raises(TraceFormatError):
            await trace_parser.parse_trace("0x1234", _make_tx())


class TestExtractRevertReason:
    def test_error_string(self):
        assert extract_revert_reason(_error_output("Insufficient balance")) == "Insufficient balance"

    def test_empty(self):
        assert extract_revert_reason(None) is None
        assert extract_revert_reason("0x") is None

    def test_custom_error_returned_verbatim(self):
        assert extract_revert_reason("0xe450d38c" + "00" * 32) == "0xe450d38c" + "00" * 32

    def test_truncated_error_string_falls_back_to_raw(self):
        output = _error_output("Insufficient balance")[:80]
        assert extract_revert_reason(output) == output


class TestParseLogs:
    async def test_root_association(self, trace_parser):
        raw = _make_frame(to=PAIR, calls=[_make_frame(to=TOKEN, input=_transfer_input())])
        trace = await trace_parser.parse_trace(raw, _make_tx())

        events = await trace_parser.parse_logs([_transfer_log(), _transfer_log(amount=5)], trace)

        assert [e.log_index for e in events] == [0, 1]
        assert trace.root_call.events == events
        assert trace.root_call.subcalls[0].events == []
        assert trace.events == events
        assert events[0].decoded_event.name == "Transfer"
        assert events[1].decoded_event.inputs[2].value == "5"

    async def test_emitter_association(self, trace_parser):
        other = "0x3333333333333333333333333333333333333333"
        raw = _make_frame(to=PAIR, calls=[
            _make_frame(to=TOKEN, type="STATICCALL"),
            _make_frame(to=TOKEN, input=_transfer_input()),
        ])
        trace = await trace_parser.parse_trace(raw, _make_tx())

        await trace_parser.parse_logs(
            [_transfer_log(address=TOKEN.lower()), _transfer_log(address=other)],
            trace,
            associate="emitter",
        )

        static_call, transfer_call = trace.root_call.subcalls
        assert static_call.events == []
        assert [e.log_index for e in transfer_call.events] == [0]
        # no call targets `other`: falls back to root
        assert [e.log_index for e in trace.root_call.events] == [1]
        assert [e.log_index for e in trace.events] == [0, 1]

    async def test_reparsing_replaces_previous_association(self, trace_parser):
        raw = _make_frame(to=PAIR, calls=[_make_frame(to=TOKEN, input=_transfer_input())])
        trace = await trace_parser.parse_trace(raw, _make_tx())
        logs = [_transfer_log(), _transfer_log(amount=5)]

        await trace_parser.parse_logs(logs, trace)
        await trace_parser.parse_logs(logs, trace)

        assert [e.log_index for e in trace.root_call.events] == [0, 1]
        assert [e.log_index for e in trace.events] == [0, 1]

        await trace_parser.parse_logs(logs, trace, associate="emitter")

        assert trace.root_call.events == []
        assert [e.log_index for e in trace.root_call.subcalls[0].events] == [0, 1]
        assert [e.log_index for e in trace.events] == [0, 1]

    async def test_undecodable_log_kept_raw(self, trace_parser):
        trace = await trace_parser.parse_trace(_make_frame(), _make_tx())
        log = {"address": TOKEN, "topics": ["0x" + "ab" * 32], "data": "0x01"}

        events = await trace_parser.parse_logs([log], trace)

        assert events[0].decoded_event is None
        assert events[0].raw_topics == ["0x" + "ab" * 32]
        assert events[0].raw_data == "0x01"

    async def test_no_logs(self, trace_parser):
        trace = await trace_parser.parse_trace(_make_frame(), _make_tx())
        assert await trace_parser.parse_logs([], trace) == []
        assert trace.events == []
