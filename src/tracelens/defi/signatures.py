"""Static protocol reference data: known contracts, function names and event topics."""

from dataclasses import dataclass, field

from tracelens.domain.enums import ContractRole, Protocol

ADDRESS_MATCH_CONFIDENCE = 0.9


@dataclass(frozen=True)
class ContractSignature:
    address: str  # lowercase
    name: str
    protocol: str
    role: ContractRole
    version: str | None = None


@dataclass(frozen=True)
class FunctionSignature:
    selector: str
    name: str
    protocol: str
    confidence: float


@dataclass(frozen=True)
class EventSignature:
    topic0: str
    name: str
    protocol: str
    confidence: float


@dataclass(frozen=True)
class DetectionResult:
    """Why a call was attributed to a protocol."""

    confidence: float
    protocol: str
    contract_address: str
    version: str | None = None
    function_name: str | None = None
    evidence: list[str] = field(default_factory=list)


UNISWAP_V2_ROUTER = "0x7a250d5630b4cf539739df2c5dacb4c659f2488d"
UNISWAP_V2_FACTORY = "0x5c69bee701ef814a2b6a3edd4b1652cb9cc5aa6f"

CONTRACT_SIGNATURES: dict[str, ContractSignature] = {
    UNISWAP_V2_ROUTER: ContractSignature(
        address=UNISWAP_V2_ROUTER,
        name="Uniswap V2 Router 02",
        protocol=Protocol.UNISWAP_V2.value,
        role=ContractRole.ROUTER,
        version="2.0",
    ),
    UNISWAP_V2_FACTORY: ContractSignature(
        address=UNISWAP_V2_FACTORY,
        name="Uniswap V2 Factory",
        protocol=Protocol.UNISWAP_V2.value,
        role=ContractRole.FACTORY,
        version="2.0",
    ),
}


def _fn(selector: str, name: str, confidence: float) -> FunctionSignature:
    return FunctionSignature(selector=selector, name=name, protocol=Protocol.UNISWAP_V2.value, confidence=confidence)


# Keyed by decoded function name
FUNCTION_SIGNATURES: dict[str, FunctionSignature] = {
    sig.name: sig
    for sig in [
        _fn("0x38ed1739", "swapExactTokensForTokens", 0.95),
        _fn("0x8803dbee", "swapTokensForExactTokens", 0.95),
        _fn("0x7ff36ab5", "swapExactETHForTokens", 0.95),
        _fn("0x4a25d94a", "swapTokensForExactETH", 0.95),
        _fn("0x18cbafe5", "swapExactTokensForETH", 0.95),
        _fn("0xfb3bdb41", "swapETHForExactTokens", 0.95),
        _fn("0xe8e33700", "addLiquidity", 0.90),
        _fn("0xbaa2abde", "removeLiquidity", 0.90),
    ]
}

UNISWAP_V2_SWAP_TOPIC = "0xd78ad95fa46c994b6551d0da85fc275fe613ce37657fb8d5e3d130840159d822"

EVENT_SIGNATURES: dict[str, EventSignature] = {
    UNISWAP_V2_SWAP_TOPIC: EventSignature(
        topic0=UNISWAP_V2_SWAP_TOPIC,
        name="Swap",
        protocol=Protocol.UNISWAP_V2.value,
        confidence=0.90,
    ),
}
