"""Uniswap V2 router swaps (single and multi-hop) and liquidity envelopes."""

import asyncio
import logging

from tracelens.defi.base import ProtocolAnalyzer
from tracelens.defi.signatures import DetectionResult
from tracelens.domain.enums import InteractionType, Protocol
from tracelens.domain.models import (
    DefiInteraction,
    GenericDetail,
    LiquidityDetail,
    ParsedCall,
    SwapDetail,
    SwapToken,
)
from tracelens.tokens import TokenResolver

logger = logging.getLogger(__name__)

WETH = "0xc02aaa39b223fe8d0a0e5c4f27ead9083c756cc2"

# Which side of the trade the calldata fixes
EXACT_INPUT = {
    "swapExactTokensForTokens",
    "swapExactTokensForETH",
    "swapExactTokensForTokensSupportingFeeOnTransferTokens",
    "swapExactTokensForETHSupportingFeeOnTransferTokens",
}
EXACT_OUTPUT = {
    "swapTokensForExactTokens",
    "swapTokensForExactETH",
    "swapETHForExactTokens",
}
# Input amount is the call's msg.value
NATIVE_INPUT = {
    "swapExactETHForTokens",
    "swapExactETHForTokensSupportingFeeOnTransferTokens",
}


def _quantity(value: str | None) -> str:
    """Trace quantities are usually 0x-hex; amounts are reported as decimal strings."""
    if not value:
        return "0"
    if value.startswith(("0x", "0X")):
        return str(int(value, 16)) if len(value) > 2 else "0"
    return value


class UniswapV2Analyzer(ProtocolAnalyzer):
    PROTOCOL = Protocol.UNISWAP_V2.value
    VERSION = "2.0"
    DISPLAY_NAME = "Uniswap V2"

    def __init__(
        self,
        token_resolver: TokenResolver | None = None,
        wrapped_native: str = WETH,
        native_symbol: str = "ETH",
        native_name: str = "Ethereum",
    ) -> None:
        self._tokens = token_resolver
        self._wrapped_native = wrapped_native.lower()
        self._native_symbol = native_symbol
        self._native_name = native_name

    async def analyze(self, call: ParsedCall, detection: DetectionResult) -> DefiInteraction | None:
        if call.decoded_function is None or not call.success:
            return None

        function_name = call.decoded_function.name
        interaction_type = InteractionType.from_function_name(function_name)

        swap = None
        if interaction_type == InteractionType.SWAP:
            swap = await self.extract_swap_details(call)

        if swap is not None:
            details = swap
        elif interaction_type == InteractionType.LIQUIDITY_ADD:
            details = LiquidityDetail(operation="add")
        elif interaction_type == InteractionType.LIQUIDITY_REMOVE:
            details = LiquidityDetail(operation="remove")
        else:
            details = GenericDetail()

        return DefiInteraction(
            type=interaction_type,
            protocol=self.PROTOCOL,
            version=detection.version or self.VERSION,
            description=self.describe(function_name, swap),
            success=call.success,
            details=details,
            gas_used=call.gas_used,
            contract_address=call.to,
            function_name=function_name,
            confidence=detection.confidence,
        )

    async def extract_swap_details(self, call: ParsedCall) -> SwapDetail | None:
        fn = call.decoded_function
        if fn is None:
            return None
        name = fn.name

        path = fn.get("path")
        if path is None:
            path = next((p.value for p in fn.inputs if p.type == "address[]"), None)
        if not path or len(path) < 2:
            return None

        amount_in, amount_out = "0", "0"
        if name in NATIVE_INPUT:
            amount_in = _quantity(call.value)
        elif name in EXACT_OUTPUT:
            amount_out = fn.get("amountOut") or "0"
        elif name in EXACT_INPUT:
            amount_in = fn.get("amountIn") or "0"
        else:
            amount_in = fn.get("amountIn") or "0"
            amount_out = fn.get("amountOut") or "0"

        native_leg = "ETH" in name
        is_multi_hop = len(path) > 2
        addresses = path if is_multi_hop else [path[0], path[-1]]
        tokens = await asyncio.gather(*(self._token(a, native_leg) for a in addresses))

        return SwapDetail(
            token_in=tokens[0],
            token_out=tokens[-1],
            amount_in=amount_in,
            amount_out=amount_out,
            route=list(tokens) if is_multi_hop else None,
            is_multi_hop=is_multi_hop,
        )

    async def _token(self, address: str, native_leg: bool) -> SwapToken:
        if native_leg and address.lower() == self._wrapped_native:
            return SwapToken(address=address, symbol=self._native_symbol, name=self._native_name, decimals=18)

        info = await self._tokens.get_token_info(address) if self._tokens else None
        if info is None:
            return SwapToken(address=address, symbol="UNK", name="Unknown Token", decimals=18)
        return SwapToken(address=address, symbol=info.symbol, name=info.name, decimals=info.decimals)

    def describe(self, function_name: str, swap: SwapDetail | None) -> str:
        if swap is not None:
            pair = f"{swap.token_in.symbol} → {swap.token_out.symbol}"
            if swap.is_multi_hop:
                return f"Multi-hop token swap: {pair} via {self.DISPLAY_NAME}"
            return f"Token swap: {pair} via {self.DISPLAY_NAME}"
        if "addLiquidity" in function_name:
            return f"Add liquidity to {self.DISPLAY_NAME} pool"
        if "removeLiquidity" in function_name:
            return f"Remove liquidity from {self.DISPLAY_NAME} pool"
        return f"{self.DISPLAY_NAME} {function_name}"
