"""Text-signature parsing and ABI value formatting.

Signatures come from two places: the seeded tables (with parameter names and
`indexed` markers) and the public registry (bare types). Both go through
`parse_text_signature`, which normalizes types and rejects anything eth-abi
cannot encode.
"""

import re
from dataclasses import dataclass
from typing import Any

from eth_abi import is_encodable_type
from eth_abi.grammar import TupleType, normalize
from eth_abi.grammar import parse as parse_abi_type
from eth_utils import keccak, to_checksum_address

# Registry spam patterns (scam selectors squatting on popular hashes)
SPAM_MARKERS = ("watch_tg_", "_faebe36")

MAX_UINT256 = 2**256 - 1
# Near-max allowance some wallets write instead of 2**256-1
LEGACY_UNLIMITED = 115792089237316195423570985008687907853269984665640564039457584007727448869935
UNLIMITED_DISPLAY = "∞ (unlimited)"

_SIGNATURE_RE = re.compile(r"^\s*(\w+)\s*\((.*)\)\s*$", re.DOTALL)


@dataclass(frozen=True)
class AbiParam:
    name: str
    type: str
    indexed: bool = False


@dataclass(frozen=True)
class AbiSignature:
    """A resolved function or event schema."""

    name: str
    params: tuple[AbiParam, ...]

    @property
    def types(self) -> list[str]:
        return [p.type for p in self.params]

    @property
    def canonical(self) -> str:
        return f"{self.name}({','.join(self.types)})"

    @property
    def selector(self) -> str:
        return "0x" + keccak(text=self.canonical)[:4].hex()

    @property
    def topic(self) -> str:
        return "0x" + keccak(text=self.canonical).hex()


def _split_top_level(args: str) -> list[str]:
    parts, depth, current = [], 0, ""
    for c in args:
        if c == "," and depth == 0:
            parts.append(current)
            current = ""
            continue
        if c == "(":
            depth += 1
        elif c == ")":
            depth -= 1
        current += c
    if current.strip():
        parts.append(current)
    return [p.strip() for p in parts]


def _split_param(part: str) -> tuple[str, list[str]]:
    """Separate a possibly-tuple type from trailing words (`indexed`, name)."""
    if part.startswith("("):
        depth = 0
        for i, c in enumerate(part):
            if c == "(":
                depth += 1
            elif c == ")":
                depth -= 1
                if depth == 0:
                    j = i + 1
                    while j < len(part) and part[j] in "[]0123456789":
                        j += 1
                    return part[:j], part[j:].split()
        return part, []
    words = part.split()
    return words[0], words[1:]


def is_spam_signature(text_signature: str) -> bool:
    return any(marker in text_signature for marker in SPAM_MARKERS)


def parse_text_signature(text_signature: str) -> AbiSignature | None:
    """Parse `name(type [indexed] [name],...)` into an AbiSignature. None if malformed."""
    if is_spam_signature(text_signature):
        return None
    match = _SIGNATURE_RE.match(text_signature)
    if not match:
        return None

    name, args = match.group(1), match.group(2)
    if args.count("(") != args.count(")"):
        return None

    params: list[AbiParam] = []
    for index, part in enumerate(_split_top_level(args)):
        if not part:
            return None
        raw_type, words = _split_param(part)
        indexed = "indexed" in words
        words = [w for w in words if w != "indexed"]
        abi_type = normalize(raw_type)
        if not is_encodable_type(abi_type):
            return None
        params.append(AbiParam(name=words[-1] if words else f"param{index}", type=abi_type, indexed=indexed))

    return AbiSignature(name=name, params=tuple(params))


def _format(abi_type: Any, value: Any) -> Any:
    if abi_type.is_array:
        return [_format(abi_type.item_type, v) for v in value]
    if isinstance(abi_type, TupleType):
        return [_format(c, v) for c, v in zip(abi_type.components, value)]

    base = abi_type.base
    if base == "address":
        return to_checksum_address(value)
    if base == "bool":
        return bool(value)
    if base == "bytes":
        return "0x" + bytes(value).hex()
    if base == "string":
        return value
    # uint/int/fixed/ufixed: decimal string, never float
    return str(value)


def format_value(abi_type: str, value: Any) -> Any:
    """Render a decoded value in its wire form (checksummed, decimal string, bool, 0x-hex)."""
    return _format(parse_abi_type(abi_type), value)


def is_dynamic_type(abi_type: str) -> bool:
    return parse_abi_type(abi_type).is_dynamic


def is_unlimited(value: Any) -> bool:
    try:
        number = int(value)
    except (TypeError, ValueError):
        return False
    return number in (MAX_UINT256, LEGACY_UNLIMITED)


def display_value(abi_type: str, value: Any) -> str:
    """Human rendering of one decoded parameter; unlimited allowances become `∞ (unlimited)`."""
    if abi_type.startswith(("uint", "int")) and is_unlimited(value):
        return UNLIMITED_DISPLAY
    if isinstance(value, list):
        return "[" + ", ".join(str(v) for v in value) + "]"
    return str(value)
