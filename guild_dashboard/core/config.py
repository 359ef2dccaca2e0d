"""Application configuration using pydantic-settings."""

import os
from enum import Enum
from functools import lru_cache
from pathlib import Path

from pydantic import Field, ValidationError
from pydantic_settings import BaseSettings, SettingsConfigDict

from guild_dashboard.core.exceptions import ConfigurationError


def _find_env_file() -> str:
    """Find the appropriate .env file.

    Priority: ENV_FILE env var > .env.local > .env.production > .env
    """
    if env_file := os.environ.get("ENV_FILE"):
        return env_file

    base = Path(__file__).resolve().parent.parent.parent
    for name in (".env.local", ".env.production", ".env"):
        path = base / name
        if path.is_file():
            return str(path)
    return ".env"


class EnablePolicy(str, Enum):
    """How a command sync treats an entry without an explicit ``enabled`` field.

    ``preserve`` keeps whatever ``is_enabled`` is already stored, so a command
    an administrator disabled stays disabled. ``reset`` writes ``True`` for
    every such entry, re-enabling previously disabled commands.
    """

    PRESERVE = "preserve"
    RESET = "reset"


class Settings(BaseSettings):
    """Application settings loaded from environment variables."""

    model_config = SettingsConfigDict(
        env_file=_find_env_file(),
        env_file_encoding="utf-8",
        case_sensitive=False,
        extra="ignore",
    )

    # Application
    app_name: str = Field(default="Guild Dashboard API")
    app_version: str = Field(default="1.0.0")
    debug: bool = Field(default=False)
    environment: str = Field(default="development")

    # API Server
    api_host: str = Field(default="0.0.0.0")
    api_port: int = Field(default=8000)
    api_prefix: str = Field(default="/api/v1")

    # Database
    database_url: str = Field(..., description="Async SQLAlchemy URL of the command store")
    database_echo: bool = Field(default=False)
    database_pool_size: int = Field(default=5, ge=1)
    database_max_overflow: int = Field(default=10, ge=0)

    # Discord
    discord_bot_token: str = Field(default="", description="Bot token for Discord API lookups")
    discord_api_base: str = Field(default="https://discord.com/api/v10")
    discord_timeout_seconds: float = Field(default=10.0, gt=0)

    # Security
    cors_origins: str = Field(default="http://localhost:3000")
    rate_limit_enabled: bool = Field(default=True)

    # Command sync
    command_sync_enable_policy: EnablePolicy = Field(default=EnablePolicy.PRESERVE)

    # Logging
    log_level: str = Field(default="INFO")
    log_format: str = Field(default="json")

    @property
    def cors_origins_list(self) -> list[str]:
        """Get CORS origins as a list."""
        return [o.strip() for o in self.cors_origins.split(",") if o.strip()]

    @property
    def is_production(self) -> bool:
        """Check if running in production."""
        return self.environment == "production"


def load_settings(**overrides) -> Settings:
    """Build settings, failing fast with a readable error on missing values.

    Raises:
        ConfigurationError: If required configuration is absent or invalid
    """
    try:
        return Settings(**overrides)
    except ValidationError as exc:
        fields = ", ".join(
            ".".join(str(part) for part in error["loc"]).upper() for error in exc.errors()
        )
        raise ConfigurationError(f"Invalid or missing configuration: {fields}") from exc


@lru_cache()
def get_settings() -> Settings:
    """Get cached settings instance for the process entrypoint."""
    return load_settings()
