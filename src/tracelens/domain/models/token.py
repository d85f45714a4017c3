from pydantic import BaseModel


class TokenInfo(BaseModel):
    """ERC-20 metadata. Immutable once resolved."""

    model_config = {"frozen": True}

    address: str
    name: str
    symbol: str
    decimals: int = 18
