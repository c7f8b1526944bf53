from pathlib import Path

from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
    )

    # App
    APP_NAME: str = "Pool Data Cache"
    DEBUG: bool = False

    # Upstream RPC: primary first, then fallbacks in order.
    # RPC_FALLBACK_URLS is a JSON list in the environment.
    RPC_URL: str = "https://api.mainnet-beta.solana.com"
    RPC_FALLBACK_URLS: list[str] = []
    RPC_TIMEOUT_SECONDS: float = 15.0
    RPC_COMMITMENT: str = "confirmed"

    # Pools must be owned by this program
    PROGRAM_ID: str = "quXSYkeZ8ByTCtYY1J1uxQmE36UZ3LmNGgE3CYMFixD"
    MIN_ACCOUNT_DATA_BYTES: int = 100

    # File cache
    CACHE_DIR: Path = Path("cache/pool_data")
    CACHE_TTL_SECONDS: int = 24 * 60 * 60
    CACHE_CONTROL_MAX_AGE: int = 60

    # Optional token metadata cache (symbol/name/decimals per mint)
    TOKEN_METADATA_DIR: Path | None = None
    TOKEN_METADATA_TIMEOUT_SECONDS: float = 2.0

    @property
    def rpc_endpoints(self) -> list[str]:
        """Primary + fallbacks, blanks and duplicates dropped, order kept."""
        endpoints: list[str] = []
        for url in [self.RPC_URL, *self.RPC_FALLBACK_URLS]:
            url = url.strip()
            if url and url not in endpoints:
                endpoints.append(url)
        return endpoints


settings = Settings()
