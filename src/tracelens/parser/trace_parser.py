"""TraceParser — builds the typed, depth-annotated call tree and attaches receipt logs."""

import asyncio
import logging
from collections.abc import Mapping, Sequence
from typing import Any, Literal

from eth_abi import decode as abi_decode
from eth_utils import decode_hex

from tracelens.decoder import SignatureDecoder
from tracelens.domain.enums import CallType
from tracelens.domain.models import (
    DecodedFunction,
    ParsedCall,
    ParsedEvent,
    ParsedTrace,
    RawLog,
    RawTraceCall,
    TransactionInfo,
)
from tracelens.exceptions import NoTraceDataError
from tracelens.parser.normalizer import normalize_trace

logger = logging.getLogger(__name__)

# Error(string) selector used by Solidity require/revert messages
ERROR_STRING_SELECTOR = "0x08c379a0"

EventAssociation = Literal["root", "emitter"]


def extract_revert_reason(output: str | None) -> str | None:
    """Decode an `Error(string)` payload; any other non-empty output is returned verbatim."""
    if not output or output == "0x":
        return None
    if output.startswith(ERROR_STRING_SELECTOR) and len(output) > len(ERROR_STRING_SELECTOR):
        try:
            return abi_decode(["string"], decode_hex(output[len(ERROR_STRING_SELECTOR):]))[0]
        except Exception:
            return output
    return output


class TraceParser:
    """Converts a normalized raw trace into a ParsedTrace.

    The raw tree is flattened pre-order with an explicit stack (no recursion,
    so pathological depth is safe), every frame is decoded concurrently, and
    children are re-linked in source order.
    """

    def __init__(self, decoder: SignatureDecoder, concurrency: int = 8) -> None:
        self._decoder = decoder
        self._semaphore = asyncio.Semaphore(max(1, concurrency))

    async def parse_trace(self, raw_trace: Any, transaction: TransactionInfo | Mapping) -> ParsedTrace:
        trace = normalize_trace(raw_trace)
        if not trace.calls:
            raise NoTraceDataError("No trace data to parse")

        if not isinstance(transaction, TransactionInfo):
            transaction = TransactionInfo.model_validate(transaction)

        if len(trace.calls) > 1:
            logger.debug("Trace has %d top-level frames; using the first as root", len(trace.calls))

        root_call = await self._build_tree(trace.calls[0])
        logger.info("Parsed trace %s: %d calls", transaction.hash, sum(1 for _ in root_call.iter_calls()))

        return ParsedTrace(
            transaction=transaction,
            root_call=root_call,
            total_gas_used=trace.gas_used,
            events=[e for call in root_call.iter_calls() for e in call.events],
        )

    async def _build_tree(self, root: RawTraceCall) -> ParsedCall:
        # (frame, depth, parent index) in pre-order
        frames: list[tuple[RawTraceCall, int, int | None]] = []
        stack: list[tuple[RawTraceCall, int, int | None]] = [(root, 0, None)]
        while stack:
            raw, depth, parent = stack.pop()
            index = len(frames)
            frames.append((raw, depth, parent))
            stack.extend((child, depth + 1, index) for child in reversed(raw.calls))

        decoded = await asyncio.gather(*(self._decode(raw) for raw, _, _ in frames))

        nodes: list[ParsedCall] = []
        for (raw, depth, parent), function in zip(frames, decoded):
            node = self._make_call(raw, depth, function)
            nodes.append(node)
            if parent is not None:
                nodes[parent].subcalls.append(node)
        return nodes[0]

    async def _decode(self, raw: RawTraceCall) -> DecodedFunction | None:
        if not raw.input or raw.input == "0x" or not raw.to:
            return None
        async with self._semaphore:
            return await self._decoder.decode_function_call(raw.to, raw.input)

    @staticmethod
    def _make_call(raw: RawTraceCall, depth: int, function: DecodedFunction | None) -> ParsedCall:
        success = not raw.error
        revert_reason = None
        if not success:
            revert_reason = raw.revert_reason or extract_revert_reason(raw.output)

        return ParsedCall(
            type=CallType.from_raw(raw.type),
            from_address=raw.from_address,
            to=raw.to or "",
            value=raw.value or "0x0",
            gas_limit=raw.gas or "0",
            gas_used=raw.gas_used or "0",
            success=success,
            error=raw.error,
            revert_reason=revert_reason,
            depth=depth,
            decoded_function=function,
        )

    async def parse_logs(
        self,
        logs: Sequence[RawLog | Mapping],
        parsed_trace: ParsedTrace,
        associate: EventAssociation = "root",
    ) -> list[ParsedEvent]:
        """Decode receipt logs and attach them to the tree.

        `root` attaches every event to the root call. `emitter` attaches each
        event to the first non-static call (pre-order) whose target is the
        emitting address, falling back to root. Calling again replaces the
        previous association instead of adding to it.
        """
        raw_logs = [log if isinstance(log, RawLog) else RawLog.model_validate(log) for log in logs]
        logger.info("Parsing %d event logs", len(raw_logs))

        decoded = await asyncio.gather(*(self._decode_log(log) for log in raw_logs))
        events = [
            ParsedEvent(
                address=log.address,
                log_index=i,
                raw_topics=list(log.topics),
                raw_data=log.data,
                decoded_event=event,
            )
            for i, (log, event) in enumerate(zip(raw_logs, decoded))
        ]

        root = parsed_trace.root_call
        emitters: dict[str, ParsedCall] = {}
        for call in root.iter_calls():
            call.events = []
            if associate == "emitter" and call.type != CallType.STATICCALL and call.to:
                emitters.setdefault(call.to.lower(), call)

        for event in events:
            owner = emitters.get(event.address.lower(), root)
            owner.events.append(event)

        parsed_trace.events = sorted(
            (e for call in root.iter_calls() for e in call.events),
            key=lambda e: e.log_index,
        )
        return events

    async def _decode_log(self, log: RawLog):
        if not log.topics:
            return None
        async with self._semaphore:
            return await self._decoder.decode_event_log(log.address, log.topics, log.data)
