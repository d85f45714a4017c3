from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    model_config = SettingsConfigDict(env_prefix="TRACELENS_", env_file=".env", extra="ignore")

    rpc_url: str = "https://eth.llamarpc.com"
    signature_registry_url: str = "https://www.4byte.directory/api/v1/signatures/"
    event_registry_url: str = "https://www.4byte.directory/api/v1/event-signatures/"
    enable_signature_lookup: bool = True
    enable_event_lookup: bool = False  # root-compatible default: seeded events only
    http_rate_per_second: float = 5.0
    http_timeout: float = 30.0
    decode_concurrency: int = 8
    native_symbol: str = "ETH"
    wrapped_native_address: str = "0xc02aaa39b223fe8d0a0e5c4f27ead9083c756cc2"  # WETH (mainnet)
    log_level: str = "INFO"


settings = Settings()
