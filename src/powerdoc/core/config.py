"""Process settings using pydantic-settings."""

from functools import lru_cache
from typing import Literal

from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    """Process-wide settings loaded from environment variables."""

    model_config = SettingsConfigDict(
        env_prefix="POWERDOC_",
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=False,
        extra="ignore",
    )

    # Environment
    environment: Literal["development", "staging", "production"] = "development"
    debug: bool = False
    log_level: Literal["trace", "debug", "info", "notice", "warn", "error", "fatal"] = "info"

    # Logfire export: "if-token-present" keeps local runs offline
    send_to_logfire: Literal["if-token-present"] | bool = Field(
        default="if-token-present",
        description="Whether spans and logs are exported to Logfire.",
    )


@lru_cache
def get_settings() -> Settings:
    """Get cached settings instance."""
    return Settings()
