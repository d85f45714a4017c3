"""AnalyzerRegistry — protocol identifier → analyzer lookup."""

from tracelens.defi.base import ProtocolAnalyzer
from tracelens.tokens import TokenResolver


class AnalyzerRegistry:
    def __init__(self) -> None:
        self._analyzers: dict[str, ProtocolAnalyzer] = {}

    def register(self, analyzer: ProtocolAnalyzer) -> None:
        self._analyzers[analyzer.PROTOCOL] = analyzer

    def get(self, protocol: str) -> ProtocolAnalyzer | None:
        return self._analyzers.get(protocol)

    def protocols(self) -> list[str]:
        return list(self._analyzers)


def build_default_registry(
    token_resolver: TokenResolver | None = None,
    wrapped_native: str | None = None,
    native_symbol: str = "ETH",
) -> AnalyzerRegistry:
    """Create an AnalyzerRegistry with all protocol analyzers registered."""
    from tracelens.defi.uniswap_v2 import WETH, UniswapV2Analyzer

    registry = AnalyzerRegistry()
    registry.register(UniswapV2Analyzer(
        token_resolver=token_resolver,
        wrapped_native=wrapped_native or WETH,
        native_symbol=native_symbol,
    ))
    return registry
