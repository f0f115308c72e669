"""Configuration management for naturalgit."""

from __future__ import annotations

from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict

from .logging_utils import LogProfile, configure_logging

DEFAULT_MODEL = "gemini:gemini-2.5-flash"


class Settings(BaseSettings):
    """Application settings."""

    model_config = SettingsConfigDict(
        env_prefix="NATURALGIT_",
        case_sensitive=False,
        env_file=".env",
        env_file_encoding="utf-8",
        extra="ignore",
        protected_namespaces=(),
    )

    # Model configuration
    model: str = Field(default=DEFAULT_MODEL, description="Model in provider:model format")
    api_key: str | None = Field(default=None, description="API key for the model provider")
    api_base: str | None = Field(default=None, description="Optional API base URL")
    max_tokens: int | None = Field(default=None, description="Maximum tokens for responses")
    model_timeout_seconds: float | None = Field(
        default=None, description="Timeout for one generation call, unbounded when unset"
    )

    # Workspace probing
    vcs_timeout_seconds: float = Field(default=10.0, description="Timeout for each git subprocess")

    # Logging
    log_level: str = Field(default="INFO", description="Log level")


def get_settings(*, profile: LogProfile = "default") -> Settings:
    """Get application settings and configure logging for them."""
    settings = Settings()
    configure_logging(profile=profile, level=settings.log_level)
    return settings
