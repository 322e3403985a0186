"""Environment configuration and validation.

This module defines strongly-typed application settings loaded from environment variables
(optionally via a local `.env` file).
"""

from __future__ import annotations

from pydantic import Field, ValidationError, field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    """Application settings loaded from environment variables.

    Only the template library is mandatory for script generation. The audit log is enabled by
    `DATABASE_URL`; the Telegram token is only needed by the bot entry point.
    """

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        extra="ignore",
    )

    library_dir: str = Field(default="library", alias="LIBRARY_DIR")
    library_cache: bool = Field(default=True, alias="LIBRARY_CACHE")
    strict_keywords: bool = Field(default=False, alias="STRICT_KEYWORDS")

    database_url: str | None = Field(default=None, alias="DATABASE_URL")
    audit_user: str = Field(default="jdoe", alias="AUDIT_USER")

    notify_enabled: bool = Field(default=True, alias="NOTIFY_ENABLED")
    notify_email_to: str = Field(default="dev@example.com", alias="NOTIFY_EMAIL_TO")

    telegram_bot_token: str | None = Field(default=None, alias="TELEGRAM_BOT_TOKEN")

    http_host: str = Field(default="0.0.0.0", alias="HTTP_HOST")
    http_port: int = Field(default=3000, alias="HTTP_PORT")

    @field_validator("database_url", "telegram_bot_token")
    @classmethod
    def blank_is_unset(cls, value: str | None) -> str | None:
        """Treat `DATABASE_URL=` (empty) the same as not setting it."""

        if value is None or not value.strip():
            return None
        return value.strip()

    @field_validator("http_port")
    @classmethod
    def validate_port(cls, value: int) -> int:
        if not 0 < value < 65536:
            raise ValueError("HTTP_PORT must be between 1 and 65535")
        return value


def load_settings() -> Settings:
    """Load and validate settings from environment variables.

    Raises:
        RuntimeError: If the environment configuration is missing or invalid.
    """

    try:
        return Settings()
    except ValidationError as exc:
        raise RuntimeError(f"Invalid environment configuration: {exc}") from exc
