"""Client configuration using pydantic-settings."""
from functools import lru_cache
from pathlib import Path

from pydantic_settings import BaseSettings, SettingsConfigDict

# Placeholders shipped in the default configuration; replaced after deploying the API
API_URL_PLACEHOLDER = "YOUR_API_GATEWAY_URL_HERE"
API_KEY_PLACEHOLDER = "YOUR_API_KEY_HERE"


class ClientSettings(BaseSettings):
    """Client settings loaded from RECOLLECT_* environment variables."""

    model_config = SettingsConfigDict(
        env_prefix="RECOLLECT_",
        env_file=".env",
        env_file_encoding="utf-8",
        extra="ignore",
    )

    api_url: str = API_URL_PLACEHOLDER
    api_key: str = API_KEY_PLACEHOLDER

    page_size: int = 20
    cache_duration_ms: int = 5 * 60 * 1000  # 5 minutes
    cache_path: Path = Path.home() / ".recollect" / "cache.json"
    timeout: float = 10.0


@lru_cache
def get_client_settings() -> ClientSettings:
    """Get cached client settings instance."""
    return ClientSettings()
