"""TokenResolver — ERC-20 metadata from a static table or live `eth_call` probing."""

import asyncio
import logging
from dataclasses import dataclass
from typing import Any

from eth_abi import decode as abi_decode
from eth_utils import decode_hex

from tracelens.domain.models import TokenInfo
from tracelens.exceptions import ExternalServiceError
from tracelens.infra.blockchain.evm.rpc_client import EVMRPCClient
from tracelens.tokens.known import KNOWN_CONTRACT_NAMES, WELL_KNOWN_TOKENS

logger = logging.getLogger(__name__)

# ERC-20 read-only selectors
NAME_SELECTOR = "0x06fdde03"      # name()
SYMBOL_SELECTOR = "0x95d89b41"    # symbol()
DECIMALS_SELECTOR = "0x313ce567"  # decimals()

DEFAULT_DECIMALS = 18


@dataclass(frozen=True)
class FieldRead:
    """Outcome of probing one metadata field: `ok` with a value, or absent."""

    ok: bool
    value: Any = None


ABSENT = FieldRead(ok=False)


def _decode_text(raw: bytes) -> str | None:
    # Most tokens return `string`; some early ones (MKR, SAI) return bytes32
    try:
        text = abi_decode(["string"], raw)[0]
    except Exception:
        if len(raw) != 32:
            return None
        text = raw.rstrip(b"\x00").decode("utf-8", errors="ignore")
    text = text.strip("\x00").strip()
    return text or None


def format_token_amount(value: int, token: TokenInfo) -> str:
    """Exact integer formatting: `1.5 WETH`, trailing zeros trimmed."""
    divisor = 10**token.decimals
    quotient, remainder = divmod(value, divisor)
    if remainder == 0:
        return f"{quotient} {token.symbol}"
    fraction = str(remainder).rjust(token.decimals, "0").rstrip("0")
    return f"{quotient}.{fraction} {token.symbol}"


class TokenResolver:
    """Resolves and caches token metadata by lowercase address.

    Only positive results are cached; an address that exposes neither
    `name()` nor `symbol()` is retried on the next lookup.
    """

    def __init__(self, rpc: EVMRPCClient | None = None, seed_well_known: bool = True) -> None:
        self._rpc = rpc
        self._tokens: dict[str, TokenInfo] = {}
        self._contract_names: dict[str, str] = {}
        if seed_well_known:
            for token in WELL_KNOWN_TOKENS:
                self._tokens[token.address.lower()] = token

    def get_cached_token_info(self, address: str) -> TokenInfo | None:
        """Cache-only lookup. Never performs I/O."""
        return self._tokens.get(address.lower())

    def is_known_token(self, address: str) -> bool:
        return address.lower() in self._tokens

    async def get_token_info(self, address: str) -> TokenInfo | None:
        key = address.lower()
        cached = self._tokens.get(key)
        if cached is not None:
            return cached
        if self._rpc is None:
            return None

        name, symbol, decimals = await asyncio.gather(
            self._read_text(address, NAME_SELECTOR),
            self._read_text(address, SYMBOL_SELECTOR),
            self._read_decimals(address),
        )
        if not name.ok and not symbol.ok:
            logger.debug("Address %s does not look like an ERC-20 token", address)
            return None

        token = TokenInfo(
            address=address,
            name=name.value if name.ok else "Unknown Token",
            symbol=symbol.value if symbol.ok else "UNK",
            decimals=decimals.value if decimals.ok else DEFAULT_DECIMALS,
        )
        self._tokens[key] = token
        return token

    async def get_contract_name(self, address: str) -> str | None:
        key = address.lower()
        if key in self._contract_names:
            return self._contract_names[key]
        if key in KNOWN_CONTRACT_NAMES:
            return KNOWN_CONTRACT_NAMES[key]

        token = await self.get_token_info(address)
        if token is None:
            return None
        name = token.name or token.symbol
        self._contract_names[key] = name
        return name

    async def _probe(self, address: str, selector: str) -> bytes | None:
        try:
            result = await self._rpc.eth_call(address, selector)
        except ExternalServiceError as e:
            logger.warning("Metadata read %s on %s failed: %s", selector, address, e)
            return None
        if result is None:
            return None
        try:
            return decode_hex(result)
        except ValueError:
            return None

    async def _read_text(self, address: str, selector: str) -> FieldRead:
        raw = await self._probe(address, selector)
        if not raw:
            return ABSENT
        text = _decode_text(raw)
        return FieldRead(ok=True, value=text) if text else ABSENT

    async def _read_decimals(self, address: str) -> FieldRead:
        raw = await self._probe(address, DECIMALS_SELECTOR)
        if not raw or len(raw) < 32:
            return ABSENT
        decimals = int.from_bytes(raw[:32], "big")
        # decimals() is uint8 per ERC-20; anything larger is garbage
        if decimals > 255:
            return ABSENT
        return FieldRead(ok=True, value=decimals)
