from enum import Enum


class Protocol(str, Enum):
    """DeFi protocols the detector knows identifiers for."""

    UNISWAP_V2 = "uniswap-v2"


class ContractRole(str, Enum):
    ROUTER = "router"
    FACTORY = "factory"
    PAIR = "pair"
    POOL = "pool"
    LENDING = "lending"
    VAULT = "vault"
