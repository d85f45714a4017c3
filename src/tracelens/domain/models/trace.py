"""Raw provider trace input and the normalized call tree built from it."""

from collections.abc import Iterator
from typing import Any

from pydantic import Field, field_validator

from tracelens.domain.enums import CallType
from tracelens.domain.models.base import WireModel
from tracelens.domain.models.decoding import DecodedEvent, DecodedFunction


def _as_str(value: Any) -> Any:
    # Some providers emit gas/value as JSON numbers; keep everything as strings (256-bit safe)
    if isinstance(value, bool):
        return value
    if isinstance(value, int):
        return str(value)
    return value


# --- Raw input (produced by the RPC collaborator) ---


class RawTraceCall(WireModel):
    """One callTracer frame. Field names follow the provider wire format."""

    type: str | None = None
    from_address: str = Field(default="", alias="from")
    to: str | None = None
    value: str | None = None
    gas: str | None = None
    gas_used: str | None = None
    input: str | None = None
    output: str | None = None
    error: str | None = None
    revert_reason: str | None = None
    calls: list["RawTraceCall"] = []

    @field_validator("value", "gas", "gas_used", mode="before")
    @classmethod
    def _quantity_as_str(cls, v: Any) -> Any:
        return _as_str(v)

    @field_validator("calls", mode="before")
    @classmethod
    def _null_calls(cls, v: Any) -> Any:
        return [] if v is None else v


class RawLog(WireModel):
    address: str
    topics: list[str] = []
    data: str = "0x"

    @field_validator("topics", mode="before")
    @classmethod
    def _null_topics(cls, v: Any) -> Any:
        return [] if v is None else v

    @field_validator("data", mode="before")
    @classmethod
    def _null_data(cls, v: Any) -> Any:
        return v or "0x"


class RawTrace(WireModel):
    """Canonical `{calls, gasUsed, logs?}` shape emitted by the normalizer."""

    calls: list[RawTraceCall] = []
    gas_used: str = "0"
    logs: list[RawLog] | None = None

    @field_validator("gas_used", mode="before")
    @classmethod
    def _gas_as_str(cls, v: Any) -> Any:
        return "0" if v is None else _as_str(v)


class TransactionInfo(WireModel):
    hash: str
    block_number: int
    from_address: str = Field(alias="from")
    to: str | None = None
    value: str = "0"
    gas_used: str = "0"
    gas_price: str = "0"
    status: int = 1

    @field_validator("value", "gas_used", "gas_price", mode="before")
    @classmethod
    def _quantity_as_str(cls, v: Any) -> Any:
        return _as_str(v)

    @field_validator("block_number", "status", mode="before")
    @classmethod
    def _hex_int(cls, v: Any) -> Any:
        if isinstance(v, str) and v.startswith("0x"):
            return int(v, 16)
        return v


# --- Normalized output ---


class ParsedEvent(WireModel):
    address: str
    log_index: int
    raw_topics: list[str] = []
    raw_data: str = "0x"
    decoded_event: DecodedEvent | None = None


class ParsedCall(WireModel):
    type: CallType = CallType.CALL
    from_address: str = Field(default="", alias="from")
    to: str = ""
    value: str = "0x0"
    gas_limit: str = "0"
    gas_used: str = "0"
    success: bool = True
    error: str | None = None
    revert_reason: str | None = None
    depth: int = 0
    decoded_function: DecodedFunction | None = None
    events: list[ParsedEvent] = []
    subcalls: list["ParsedCall"] = []

    @property
    def function_name(self) -> str | None:
        return self.decoded_function.name if self.decoded_function else None

    def iter_calls(self) -> Iterator["ParsedCall"]:
        """Pre-order walk (self first) with an explicit stack."""
        stack: list[ParsedCall] = [self]
        while stack:
            call = stack.pop()
            yield call
            stack.extend(reversed(call.subcalls))


class ParsedTrace(WireModel):
    transaction: TransactionInfo
    root_call: ParsedCall
    total_gas_used: str
    events: list[ParsedEvent] = []

    def iter_calls(self) -> Iterator[ParsedCall]:
        return self.root_call.iter_calls()
