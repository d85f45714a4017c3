from dependency_injector import containers, providers

from tracelens.config import Settings
from tracelens.decoder import SignatureDecoder
from tracelens.defi import DefiDetector, build_default_registry
from tracelens.infra.blockchain.evm.rpc_client import EVMRPCClient
from tracelens.infra.http.rate_limited_client import RateLimitedClient
from tracelens.infra.signatures.fourbyte_client import SignatureRegistryClient
from tracelens.parser import TraceParser
from tracelens.service import InspectionService
from tracelens.tokens import TokenResolver


def build_signature_decoder(
    registry: SignatureRegistryClient,
    enable_lookup: bool,
    lookup_events: bool,
) -> SignatureDecoder:
    # Offline mode: seeded signatures only
    return SignatureDecoder(registry=registry if enable_lookup else None, lookup_events=lookup_events)


class Container(containers.DeclarativeContainer):
    settings = providers.Singleton(Settings)

    http_client = providers.Singleton(
        RateLimitedClient,
        rate_per_second=settings.provided.http_rate_per_second,
        timeout=settings.provided.http_timeout,
    )

    rpc_client = providers.Singleton(
        EVMRPCClient,
        rpc_url=settings.provided.rpc_url,
        http_client=http_client,
    )

    signature_registry = providers.Singleton(
        SignatureRegistryClient,
        http_client=http_client,
        function_url=settings.provided.signature_registry_url,
        event_url=settings.provided.event_registry_url,
    )

    decoder = providers.Singleton(
        build_signature_decoder,
        registry=signature_registry,
        enable_lookup=settings.provided.enable_signature_lookup,
        lookup_events=settings.provided.enable_event_lookup,
    )

    token_resolver = providers.Singleton(TokenResolver, rpc=rpc_client)

    analyzer_registry = providers.Singleton(
        build_default_registry,
        token_resolver=token_resolver,
        wrapped_native=settings.provided.wrapped_native_address,
        native_symbol=settings.provided.native_symbol,
    )

    trace_parser = providers.Singleton(
        TraceParser,
        decoder=decoder,
        concurrency=settings.provided.decode_concurrency,
    )

    defi_detector = providers.Singleton(
        DefiDetector,
        token_resolver=token_resolver,
        registry=analyzer_registry,
    )

    inspection_service = providers.Singleton(
        InspectionService,
        parser=trace_parser,
        detector=defi_detector,
    )
