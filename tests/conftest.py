import pytest

from tracelens.decoder import SignatureDecoder
from tracelens.defi import DefiDetector
from tracelens.parser import TraceParser
from tracelens.tokens import TokenResolver


@pytest.fixture(scope="session")
def anyio_backend():
    return "asyncio"


@pytest.fixture()
def decoder() -> SignatureDecoder:
    """Offline decoder: seeded signatures only."""
    return SignatureDecoder()


@pytest.fixture()
def trace_parser(decoder) -> TraceParser:
    return TraceParser(decoder, concurrency=4)


@pytest.fixture()
def token_resolver() -> TokenResolver:
    """Well-known tokens only, no RPC."""
    return TokenResolver()


@pytest.fixture()
def detector(token_resolver) -> DefiDetector:
    return DefiDetector(token_resolver=token_resolver)
