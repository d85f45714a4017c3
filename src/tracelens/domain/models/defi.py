"""DeFi interpretation results produced by DefiDetector."""

from typing import Annotated, Literal, Union

from pydantic import Field

from tracelens.domain.enums import InteractionType
from tracelens.domain.models.base import WireModel


class SwapToken(WireModel):
    model_config = {"frozen": True}

    address: str
    symbol: str
    name: str
    decimals: int = 18


class SwapDetail(WireModel):
    kind: Literal["swap"] = "swap"
    token_in: SwapToken
    token_out: SwapToken
    amount_in: str = "0"  # zero when only the other side is known (exact-in vs exact-out)
    amount_out: str = "0"
    route: list[SwapToken] | None = None  # multi-hop only
    is_multi_hop: bool = False


class LiquidityDetail(WireModel):
    """Envelope only. Token pair and amounts are not extracted yet."""

    kind: Literal["liquidity"] = "liquidity"
    operation: Literal["add", "remove"]
    token_a: str | None = None
    token_b: str | None = None


class GenericDetail(WireModel):
    kind: Literal["generic"] = "generic"


InteractionDetail = Annotated[
    Union[SwapDetail, LiquidityDetail, GenericDetail],
    Field(discriminator="kind"),
]


class DefiInteraction(WireModel):
    model_config = {"frozen": True}

    type: InteractionType
    protocol: str
    version: str | None = None
    description: str
    success: bool
    details: InteractionDetail = GenericDetail()
    gas_used: str = "0"
    contract_address: str
    function_name: str | None = None
    confidence: float = Field(ge=0.0, le=1.0)


class DefiAnalysis(WireModel):
    detected: bool
    protocol: str | None = None
    version: str | None = None
    interactions: list[DefiInteraction] = []
    summary: str
    confidence: float = 0.0
