from tracelens.domain.enums.call_type import CallType
from tracelens.domain.enums.interaction import InteractionType
from tracelens.domain.enums.protocol import ContractRole, Protocol

__all__ = [
    "CallType",
    "ContractRole",
    "InteractionType",
    "Protocol",
]
