"""Protocol analyzer interface."""

from abc import ABC, abstractmethod

from tracelens.defi.signatures import DetectionResult
from tracelens.domain.models import DefiInteraction, ParsedCall


class ProtocolAnalyzer(ABC):
    """Turns one detected call into a DefiInteraction.

    Subclasses define:
        PROTOCOL: protocol identifier they interpret
        VERSION: protocol version string, if any
    """

    PROTOCOL: str = "unknown"
    VERSION: str | None = None

    @abstractmethod
    async def analyze(self, call: ParsedCall, detection: DetectionResult) -> DefiInteraction | None:
        """Return an interaction, or None if the call carries no interpretable action."""
