"""SignatureDecoder — selector/topic resolution and ABI decoding of calls and logs."""

import logging

from eth_abi import decode as abi_decode
from eth_utils import decode_hex

from tracelens.decoder.abi import AbiParam, AbiSignature, format_value, is_dynamic_type, parse_text_signature
from tracelens.decoder.known import COMMON_EVENTS, COMMON_FUNCTIONS
from tracelens.domain.models import DecodedEvent, DecodedEventParam, DecodedFunction, DecodedParam
from tracelens.exceptions import ExternalServiceError
from tracelens.infra.signatures.fourbyte_client import SignatureRegistryClient

logger = logging.getLogger(__name__)


class SignatureDecoder:
    """Decodes call input and receipt logs into named, typed parameters.

    Both caches live on the instance: seeded at construction, filled lazily
    from the registry, never persisted. A failed decode is always `None`.
    """

    def __init__(self, registry: SignatureRegistryClient | None = None, lookup_events: bool = False) -> None:
        self._registry = registry
        self._lookup_events = lookup_events
        self._functions: dict[str, AbiSignature] = {}
        self._events: dict[str, AbiSignature] = {}
        self._unresolved: set[str] = set()
        self._load_common_signatures()

    def _load_common_signatures(self) -> None:
        for text in COMMON_FUNCTIONS:
            self.register_function(text)
        for text in COMMON_EVENTS:
            self.register_event(text)

    def register_function(self, text_signature: str) -> AbiSignature:
        sig = parse_text_signature(text_signature)
        if sig is None:
            raise ValueError(f"Invalid function signature: {text_signature}")
        self._functions[sig.selector] = sig
        return sig

    def register_event(self, text_signature: str) -> AbiSignature:
        sig = parse_text_signature(text_signature)
        if sig is None:
            raise ValueError(f"Invalid event signature: {text_signature}")
        self._events[sig.topic] = sig
        return sig

    def cached_function(self, selector: str) -> AbiSignature | None:
        return self._functions.get(selector.lower())

    # --- Resolution ---

    async def resolve_function(self, selector: str) -> AbiSignature | None:
        selector = selector.lower()
        cached = self._functions.get(selector)
        if cached is not None:
            return cached
        if self._registry is None or selector in self._unresolved:
            return None

        try:
            candidates = await self._registry.lookup_function(selector)
        except ExternalServiceError as e:
            logger.warning("Selector lookup failed for %s: %s", selector, e)
            return None

        for text in candidates:
            sig = parse_text_signature(text)
            if sig is None or sig.selector != selector:
                logger.debug("Skipping registry candidate %r for %s", text, selector)
                continue
            self._functions[selector] = sig
            return sig

        self._unresolved.add(selector)
        return None

    async def resolve_event(self, topic: str, indexed_count: int) -> AbiSignature | None:
        topic = topic.lower()
        cached = self._events.get(topic)
        if cached is not None:
            return cached
        if self._registry is None or not self._lookup_events or topic in self._unresolved:
            return None

        try:
            candidates = await self._registry.lookup_event(topic)
        except ExternalServiceError as e:
            logger.warning("Event topic lookup failed for %s: %s", topic, e)
            return None

        for text in candidates:
            sig = parse_text_signature(text)
            if sig is None or sig.topic != topic or len(sig.params) < indexed_count:
                continue
            # Registry signatures carry no `indexed` markers; assume leading params fill the topics
            params = tuple(
                AbiParam(name=p.name, type=p.type, indexed=i < indexed_count) for i, p in enumerate(sig.params)
            )
            sig = AbiSignature(name=sig.name, params=params)
            self._events[topic] = sig
            return sig

        self._unresolved.add(topic)
        return None

    # --- Decoding ---

    async def decode_function_call(self, contract_address: str, input_data: str) -> DecodedFunction | None:
        """Decode calldata. `contract_address` is reserved for per-contract ABIs."""
        if not input_data or len(input_data) < 10:
            return None

        sig = await self.resolve_function(input_data[:10])
        if sig is None:
            return None

        try:
            values = abi_decode(sig.types, decode_hex(input_data[10:]))
            inputs = [
                DecodedParam(name=p.name, type=p.type, value=format_value(p.type, v))
                for p, v in zip(sig.params, values)
            ]
        except Exception as e:
            # Layout mismatch for this selector (collision, spam, truncated input)
            logger.debug("Could not decode %s on %s: %s", sig.canonical, contract_address, e)
            return None

        return DecodedFunction(name=sig.name, signature=sig.canonical, inputs=inputs)

    async def decode_event_log(self, contract_address: str, topics: list[str], data: str) -> DecodedEvent | None:
        if not topics:
            return None

        sig = await self.resolve_event(topics[0], indexed_count=len(topics) - 1)
        if sig is None:
            return None

        indexed = [p for p in sig.params if p.indexed]
        if len(indexed) != len(topics) - 1:
            return None

        try:
            non_indexed = [p for p in sig.params if not p.indexed]
            data_values = iter(abi_decode([p.type for p in non_indexed], decode_hex(data or "0x")))
            topic_values = iter(topics[1:])

            inputs: list[DecodedEventParam] = []
            for p in sig.params:
                if p.indexed:
                    topic = next(topic_values)
                    # Dynamic indexed values are stored as their keccak hash
                    if is_dynamic_type(p.type):
                        value = topic
                    else:
                        value = format_value(p.type, abi_decode([p.type], decode_hex(topic))[0])
                else:
                    value = format_value(p.type, next(data_values))
                inputs.append(DecodedEventParam(name=p.name, type=p.type, value=value, indexed=p.indexed))
        except Exception as e:
            logger.debug("Could not decode event %s from %s: %s", sig.canonical, contract_address, e)
            return None

        return DecodedEvent(name=sig.name, signature=sig.canonical, inputs=inputs)
