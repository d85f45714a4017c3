"""Plain-text call tree rendering (no colors)."""

from tracelens.decoder import display_value
from tracelens.domain.enums import CallType
from tracelens.domain.models import DecodedEvent, DecodedFunction, ParsedCall, ParsedEvent, ParsedTrace
from tracelens.tokens import TokenResolver, format_token_amount

INDENT = "  "


def _to_int(quantity: str | None) -> int:
    if not quantity:
        return 0
    try:
        return int(quantity, 16) if quantity.startswith(("0x", "0X")) else int(quantity)
    except ValueError:
        return 0


def _format_native(value: str, symbol: str) -> str | None:
    wei = _to_int(value)
    if wei == 0:
        return None
    quotient, remainder = divmod(wei, 10**18)
    if remainder == 0:
        return f"{quotient} {symbol}"
    return f"{quotient}.{str(remainder).rjust(18, '0').rstrip('0')} {symbol}"


def _label(address: str, tokens: TokenResolver | None) -> str:
    if tokens is not None and address:
        token = tokens.get_cached_token_info(address)
        if token is not None:
            return f"{token.symbol} ({address})"
    return address or "<create>"


def _format_args(params, contract: str, tokens: TokenResolver | None, amount_names: set[str]) -> str:
    token = tokens.get_cached_token_info(contract) if tokens is not None and contract else None
    parts = []
    for p in params:
        rendered = display_value(p.type, p.value)
        if token is not None and p.name in amount_names and p.type.startswith("uint") and rendered.isdigit():
            rendered = format_token_amount(int(rendered), token)
        parts.append(f"{p.name}={rendered}")
    return ", ".join(parts)


def _format_function(function: DecodedFunction, contract: str, tokens: TokenResolver | None) -> str:
    args = _format_args(function.inputs, contract, tokens, {"amount", "value", "wad"})
    return f"{function.name}({args})"


def _format_event(event: ParsedEvent, tokens: TokenResolver | None) -> str:
    decoded: DecodedEvent | None = event.decoded_event
    if decoded is None:
        topic = event.raw_topics[0] if event.raw_topics else "anonymous"
        return f"[{event.log_index}] {_label(event.address, tokens)} {topic}"
    args = _format_args(decoded.inputs, event.address, tokens, {"value", "amount", "wad"})
    return f"[{event.log_index}] {_label(event.address, tokens)} {decoded.name}({args})"


def _call_line(call: ParsedCall, native_symbol: str, tokens: TokenResolver | None) -> str:
    target = _label(call.to, tokens)
    if call.decoded_function is not None:
        body = f"{target}.{_format_function(call.decoded_function, call.to, tokens)}"
    else:
        body = target
    line = f"{call.type.value.upper()} {body}"

    native = _format_native(call.value, native_symbol)
    if native:
        line += f" value={native}"
    line += f" gas={_to_int(call.gas_used)}/{_to_int(call.gas_limit)}"
    if not call.success:
        line += f" REVERTED: {call.revert_reason or call.error}"
    return line


def render_tree(
    trace: ParsedTrace,
    max_depth: int | None = None,
    contracts_only: bool = False,
    events_only: bool = False,
    tokens: TokenResolver | None = None,
    native_symbol: str = "ETH",
) -> str:
    """Indented text view of the call tree.

    `contracts_only` hides static calls. `events_only` prints just the event
    list. Token symbols and amounts come from the resolver's cache only.
    """
    tx = trace.transaction
    lines = [f"Transaction {tx.hash} (block {tx.block_number})", f"Gas used: {trace.total_gas_used}"]

    if events_only:
        lines.append(f"Events ({len(trace.events)}):")
        lines.extend(INDENT + _format_event(e, tokens) for e in trace.events)
        return "\n".join(lines)

    stack: list[ParsedCall] = [trace.root_call]
    while stack:
        call = stack.pop()
        if max_depth is not None and call.depth > max_depth:
            continue
        if contracts_only and call.type == CallType.STATICCALL:
            continue
        prefix = INDENT * call.depth
        lines.append(prefix + _call_line(call, native_symbol, tokens))
        for event in call.events:
            lines.append(prefix + INDENT + "emit " + _format_event(event, tokens))
        stack.extend(reversed(call.subcalls))

    return "\n".join(lines)
