"""
Application settings using Pydantic.

Provides environment-based configuration loading with CLOUDING_ prefix.
"""

from functools import lru_cache

from pydantic_settings import BaseSettings


class Settings(BaseSettings):
    """Application settings."""

    # API access
    token: str | None = None
    endpoint: str = "https://api.clouding.io"
    api_version: str = "v1"

    # HTTP client settings
    http_timeout: float = 30.0
    user_agent: str = "clouding-python/0.1.0"

    # Action polling
    action_poll_interval: float = 5.0
    action_max_attempts: int | None = None
    action_timeout: float | None = None

    # Logging
    log_level: str = "INFO"

    class Config:
        env_file = ".env"
        env_file_encoding = "utf-8"
        env_prefix = "CLOUDING_"


@lru_cache
def get_settings() -> Settings:
    """Get cached settings instance."""
    return Settings()
