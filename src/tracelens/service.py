"""End-to-end inspection: raw trace in, typed call tree plus DeFi analysis out."""

import logging
from collections.abc import Mapping, Sequence
from dataclasses import dataclass
from typing import Any

from tracelens.defi import DefiDetector
from tracelens.domain.models import DefiAnalysis, ParsedTrace, RawLog, TransactionInfo
from tracelens.parser import TraceParser, normalize_trace
from tracelens.parser.trace_parser import EventAssociation

logger = logging.getLogger(__name__)


@dataclass
class InspectionResult:
    trace: ParsedTrace
    defi: DefiAnalysis


class InspectionService:
    """Runs normalize → parse_trace → parse_logs → analyze_trace.

    Trace-level failures (unrecognized format, malformed frames, empty trace)
    propagate. Decoding and detection failures degrade to missing enrichment.
    """

    def __init__(self, parser: TraceParser, detector: DefiDetector, associate: EventAssociation = "root") -> None:
        self._parser = parser
        self._detector = detector
        self._associate = associate

    async def inspect(
        self,
        raw_trace: Any,
        logs: Sequence[RawLog | Mapping] | None,
        transaction: TransactionInfo | Mapping,
    ) -> InspectionResult:
        normalized = normalize_trace(raw_trace)
        logger.info("Parsing trace with %d top-level calls", len(normalized.calls))

        trace = await self._parser.parse_trace(normalized, transaction)

        if logs is None:
            logs = normalized.logs or []
        await self._parser.parse_logs(logs, trace, associate=self._associate)

        defi = await self._detector.analyze_trace(trace)
        logger.info("Inspection of %s complete: %s", trace.transaction.hash, defi.summary)
        return InspectionResult(trace=trace, defi=defi)
