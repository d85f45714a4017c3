"""Ethereum mainnet tokens and contracts resolved without RPC."""

from tracelens.domain.models import TokenInfo

WELL_KNOWN_TOKENS: list[TokenInfo] = [
    TokenInfo(address="0x15D4c048F83bd7e37d49eA4C83a07267Ec4203dA", name="Gala (V1)", symbol="GALA", decimals=8),
    TokenInfo(address="0xd1d2Eb1B1e90B638588728b4130137D262C87cae", name="Gala", symbol="GALA", decimals=8),
    TokenInfo(address="0xdAC17F958D2ee523a2206206994597C13D831ec7", name="Tether USD", symbol="USDT", decimals=6),
    TokenInfo(address="0xA0b86991c6218b36c1d19D4a2e9Eb0cE3606eB48", name="USD Coin", symbol="USDC", decimals=6),
    TokenInfo(address="0x6B175474E89094C44Da98b954EedeAC495271d0F", name="Dai Stablecoin", symbol="DAI", decimals=18),
    TokenInfo(address="0xC02aaA39b223FE8D0A0e5C4F27eAD9083C756Cc2", name="Wrapped Ether", symbol="WETH", decimals=18),
    TokenInfo(address="0x1f9840a85d5aF5bf1D1762F925BDADdC4201F984", name="Uniswap", symbol="UNI", decimals=18),
    TokenInfo(address="0x7Fc66500c84A76Ad7e9c93437bFc5Ac33E2DDaE9", name="Aave Token", symbol="AAVE", decimals=18),
    TokenInfo(address="0xc00e94Cb662C3520282E6f5717214004A7f26888", name="Compound", symbol="COMP", decimals=18),
    TokenInfo(address="0x2260FAC5E5542a773Aa44fBCfeDf7C193bc2C599", name="Wrapped BTC", symbol="WBTC", decimals=8),
]

# Non-token contracts worth naming in output (all lowercase)
KNOWN_CONTRACT_NAMES: dict[str, str] = {
    "0x7a250d5630b4cf539739df2c5dacb4c659f2488d": "Uniswap V2 Router",
    "0x5c69bee701ef814a2b6a3edd4b1652cb9cc5aa6f": "Uniswap V2 Factory",
    "0xe592427a0aece92de3edee1f18e0157c05861564": "Uniswap V3 Router",
    "0xa0b73e1ff0b80914ab6fe0444e65848c4c34450b": "Curve.fi Registry Exchange",
}
