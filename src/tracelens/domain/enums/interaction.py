from enum import Enum


class InteractionType(str, Enum):
    """Classification of a detected DeFi interaction."""

    SWAP = "swap"
    LIQUIDITY_ADD = "liquidity_add"
    LIQUIDITY_REMOVE = "liquidity_remove"
    LENDING = "lending"
    BORROWING = "borrowing"
    STAKING = "staking"
    UNSTAKING = "unstaking"
    YIELD_FARMING = "yield_farming"
    FLASH_LOAN = "flash_loan"
    UNKNOWN = "unknown"

    @classmethod
    def from_function_name(cls, name: str) -> "InteractionType":
        if "swap" in name.lower():
            return cls.SWAP
        if "addLiquidity" in name:
            return cls.LIQUIDITY_ADD
        if "removeLiquidity" in name:
            return cls.LIQUIDITY_REMOVE
        return cls.UNKNOWN
