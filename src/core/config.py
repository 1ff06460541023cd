"""Application configuration using pydantic-settings."""
from functools import lru_cache

from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    """
    Application settings loaded from environment variables.

    Constructed once per process by get_settings() and injected into handlers.
    """

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        extra="ignore",
    )

    # Shared secret expected in the X-API-Key header. Empty = misconfigured (fail closed)
    api_key: str = ""

    # Bookmark table
    table_name: str = "saved_urls"
    aws_region: str = "us-east-1"
    # Local DynamoDB (e.g. http://localhost:8000); None uses the AWS endpoint
    dynamodb_endpoint_url: str | None = None

    # Pagination bounds for GET /api/urls
    default_page_size: int = 50
    max_page_size: int = 100

    log_level: str = "INFO"

    @property
    def is_api_key_configured(self) -> bool:
        """True when a non-blank shared secret is configured."""
        return bool(self.api_key.strip())


@lru_cache
def get_settings() -> Settings:
    """Get cached settings instance."""
    return Settings()
