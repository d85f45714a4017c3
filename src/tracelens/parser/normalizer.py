"""Normalize provider-specific trace payloads into one RawTrace shape.

Recognized shapes, tried in order:
1. a single callTracer frame (`type`, `from`, `to` present)
2. a JSON-RPC envelope with `result` (unwrapped, then normalized again)
3. an array of frames
4. an object with `calls` and/or `logs`
Anything else is rejected; guessing would produce a misleading tree.
"""

from collections.abc import Mapping
from typing import Any

from pydantic import ValidationError

from tracelens.domain.models import RawTrace
from tracelens.exceptions import MalformedTraceError, TraceFormatError


def _is_single_call(raw: Mapping) -> bool:
    return all(raw.get(key) for key in ("type", "from", "to"))


def normalize_trace(raw: Any) -> RawTrace:
    if isinstance(raw, RawTrace):
        return raw

    try:
        if isinstance(raw, Mapping):
            if _is_single_call(raw):
                return RawTrace(calls=[dict(raw)], gas_used=raw.get("gasUsed") or "0")
            if raw.get("result") is not None:
                return normalize_trace(raw["result"])

        if isinstance(raw, list):
            first = raw[0] if raw else None
            gas_used = first.get("gasUsed") if isinstance(first, Mapping) else None
            return RawTrace(calls=raw, gas_used=gas_used or "0")

        if isinstance(raw, Mapping) and ("calls" in raw or "logs" in raw):
            return RawTrace(
                calls=raw.get("calls") or [],
                gas_used=raw.get("gasUsed") or "0",
                logs=raw.get("logs"),
            )
    except ValidationError as e:
        raise MalformedTraceError(f"Malformed trace payload: {e.error_count()} invalid field(s)") from e

    raise TraceFormatError(f"Unrecognized trace format ({type(raw).__name__}) received from RPC provider")
