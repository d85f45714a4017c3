from tracelens.domain.models.decoding import DecodedEvent, DecodedEventParam, DecodedFunction, DecodedParam
from tracelens.domain.models.defi import (
    DefiAnalysis,
    DefiInteraction,
    GenericDetail,
    LiquidityDetail,
    SwapDetail,
    SwapToken,
)
from tracelens.domain.models.token import TokenInfo
from tracelens.domain.models.trace import (
    ParsedCall,
    ParsedEvent,
    ParsedTrace,
    RawLog,
    RawTrace,
    RawTraceCall,
    TransactionInfo,
)

__all__ = [
    "DecodedEvent",
    "DecodedEventParam",
    "DecodedFunction",
    "DecodedParam",
    "DefiAnalysis",
    "DefiInteraction",
    "GenericDetail",
    "LiquidityDetail",
    "ParsedCall",
    "ParsedEvent",
    "ParsedTrace",
    "RawLog",
    "RawTrace",
    "RawTraceCall",
    "SwapDetail",
    "SwapToken",
    "TokenInfo",
    "TransactionInfo",
]
