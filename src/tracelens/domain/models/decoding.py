"""Decoded call/event payloads produced by the SignatureDecoder."""

from typing import Any

from tracelens.domain.models.base import WireModel


class DecodedParam(WireModel):
    """One decoded argument. Integers are decimal strings, bytes are 0x-hex."""

    model_config = {"frozen": True}

    name: str
    type: str
    value: Any


class DecodedEventParam(DecodedParam):
    indexed: bool = False


class DecodedFunction(WireModel):
    model_config = {"frozen": True}

    name: str
    signature: str
    inputs: list[DecodedParam] = []

    def get(self, name: str) -> Any:
        """Value of the first input called `name`, or None."""
        for param in self.inputs:
            if param.name == name:
                return param.value
        return None


class DecodedEvent(WireModel):
    model_config = {"frozen": True}

    name: str
    signature: str
    inputs: list[DecodedEventParam] = []
