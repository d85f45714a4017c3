"""DefiDetector — best-effort protocol recognition over a parsed call tree."""

import asyncio
import logging

from tracelens.defi.registry import AnalyzerRegistry, build_default_registry
from tracelens.defi.signatures import (
    ADDRESS_MATCH_CONFIDENCE,
    CONTRACT_SIGNATURES,
    EVENT_SIGNATURES,
    FUNCTION_SIGNATURES,
    ContractSignature,
    DetectionResult,
    EventSignature,
    FunctionSignature,
)
from tracelens.domain.models import DefiAnalysis, DefiInteraction, ParsedCall, ParsedEvent, ParsedTrace
from tracelens.tokens import TokenResolver

logger = logging.getLogger(__name__)

NO_DETECTION_SUMMARY = "No DeFi protocol interactions detected"
ERROR_SUMMARY = "DeFi analysis unavailable due to error"


class DefiDetector:
    """Walks every call (pre-order) and attributes it to a protocol.

    Address match on the call target wins (confidence 0.9); otherwise the
    decoded function name is matched against known signatures. Never raises:
    a failure on one call drops that call, a failure of the whole pass yields
    a no-detection result.
    """

    def __init__(
        self,
        token_resolver: TokenResolver | None = None,
        registry: AnalyzerRegistry | None = None,
        contracts: dict[str, ContractSignature] | None = None,
        functions: dict[str, FunctionSignature] | None = None,
        events: dict[str, EventSignature] | None = None,
    ) -> None:
        self._registry = registry or build_default_registry(token_resolver)
        self._contracts = {k.lower(): v for k, v in (contracts or CONTRACT_SIGNATURES).items()}
        self._functions = dict(functions or FUNCTION_SIGNATURES)
        self._events = {k.lower(): v for k, v in (events or EVENT_SIGNATURES).items()}

    async def analyze_trace(self, trace: ParsedTrace) -> DefiAnalysis:
        try:
            interactions = await self.detect_interactions(trace)
            if not interactions:
                return DefiAnalysis(detected=False, interactions=[], summary=NO_DETECTION_SUMMARY, confidence=0)

            return DefiAnalysis(
                detected=True,
                protocol=interactions[0].protocol,
                version=interactions[0].version,
                interactions=interactions,
                summary=self.generate_summary(interactions),
                confidence=self.overall_confidence(interactions),
            )
        except Exception:
            logger.exception("DeFi analysis failed for %s", trace.transaction.hash)
            return DefiAnalysis(detected=False, interactions=[], summary=ERROR_SUMMARY, confidence=0)

    async def detect_interactions(self, trace: ParsedTrace) -> list[DefiInteraction]:
        event_matches = self.match_events(trace.events)
        candidates: list[tuple[ParsedCall, DetectionResult]] = []
        for call in trace.iter_calls():
            detection = self.detect_protocol(call)
            if detection is None:
                continue
            detection.evidence.extend(
                f"Event: {sig.name} at {event.address}"
                for event, sig in event_matches
                if sig.protocol == detection.protocol
            )
            candidates.append((call, detection))

        # gather keeps tree order regardless of completion order
        results = await asyncio.gather(*(self._analyze_call(call, d) for call, d in candidates))
        return [r for r in results if r is not None]

    def detect_protocol(self, call: ParsedCall) -> DetectionResult | None:
        contract = self._contracts.get(call.to.lower()) if call.to else None
        if contract is not None:
            return DetectionResult(
                confidence=ADDRESS_MATCH_CONFIDENCE,
                protocol=contract.protocol,
                version=contract.version,
                contract_address=call.to,
                function_name=call.function_name,
                evidence=[f"Contract address: {call.to} ({contract.name})"],
            )

        name = call.function_name
        func = self._functions.get(name) if name else None
        if func is not None:
            return DetectionResult(
                confidence=func.confidence,
                protocol=func.protocol,
                contract_address=call.to,
                function_name=func.name,
                evidence=[f"Function: {func.name}"],
            )
        return None

    def match_events(self, events: list[ParsedEvent]) -> list[tuple[ParsedEvent, EventSignature]]:
        matches = []
        for event in events:
            if not event.raw_topics:
                continue
            sig = self._events.get(event.raw_topics[0].lower())
            if sig is not None:
                matches.append((event, sig))
        return matches

    async def _analyze_call(self, call: ParsedCall, detection: DetectionResult) -> DefiInteraction | None:
        analyzer = self._registry.get(detection.protocol)
        if analyzer is None:
            logger.debug("No analyzer for protocol %s (call to %s)", detection.protocol, call.to)
            return None
        try:
            interaction = await analyzer.analyze(call, detection)
        except Exception:
            logger.exception("Failed to analyze %s call to %s", detection.protocol, call.to)
            return None
        if interaction is not None:
            logger.debug("Detected %s via %s", interaction.description, "; ".join(detection.evidence))
        return interaction

    @staticmethod
    def generate_summary(interactions: list[DefiInteraction]) -> str:
        if not interactions:
            return NO_DETECTION_SUMMARY
        protocols = list(dict.fromkeys(i.protocol for i in interactions))
        types = list(dict.fromkeys(i.type.value for i in interactions))
        if len(protocols) == 1:
            return f"{protocols[0]} {', '.join(types)} detected"
        return f"Multi-protocol DeFi interaction: {', '.join(protocols)}"

    @staticmethod
    def overall_confidence(interactions: list[DefiInteraction]) -> float:
        if not interactions:
            return 0.0
        return sum(i.confidence for i in interactions) / len(interactions)
