"""Configuration loading for the ordergap profile sync.

This module provides centralized configuration management:
- Load settings from environment variables and .env files
- Validate configuration using pydantic
- Provide typed access to all settings
"""

from typing import Literal

from pydantic import AliasChoices, Field, field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    """Application configuration loaded from environment.

    Uses pydantic-settings for environment variable handling with
    .env file support via python-dotenv.
    """

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=False,
        extra="ignore",
    )

    # Klaviyo configuration
    klaviyo_private_api_key: str = Field(
        validation_alias=AliasChoices(
            "klaviyo_private_api_key",
            "your_klaviyo_private_api_key",
        ),
        description="Klaviyo private API key",
    )
    klaviyo_api_url: str = Field(
        default="https://a.klaviyo.com/api/",
        description="Klaviyo API base URL",
    )
    klaviyo_revision: str = Field(
        default="2024-07-15",
        description="Klaviyo API revision header value",
    )
    http_timeout_seconds: float = Field(
        default=30.0,
        description="Timeout for each outbound Klaviyo request",
    )

    # Logging configuration
    log_level: Literal["DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"] = Field(
        default="INFO",
        description="Log level",
    )
    log_format: Literal["json", "text"] = Field(
        default="text",
        description="Log format",
    )

    # Run mode
    run_mode: Literal["webhook", "cli"] = Field(
        default="webhook",
        description="Run mode",
    )

    # Webhook configuration
    webhook_host: str = Field(
        default="0.0.0.0",
        description="Host to listen on for webhook server",
    )
    webhook_port: int = Field(
        default=8080,
        description="Port to listen on for webhook server",
    )
    webhook_path: str = Field(
        default="/webhook",
        description="Path accepting profile webhooks",
    )
    webhook_request_timeout_seconds: float = Field(
        default=60.0,
        description="Maximum time to process one webhook request",
    )

    @field_validator("klaviyo_private_api_key")
    @classmethod
    def validate_api_key(cls, v: str) -> str:
        """Ensure the API key is not blank."""
        if not v or not v.strip():
            raise ValueError("klaviyo_private_api_key must not be empty")
        return v.strip()

    @field_validator("http_timeout_seconds", "webhook_request_timeout_seconds")
    @classmethod
    def validate_timeout(cls, v: float) -> float:
        """Ensure timeouts are positive."""
        if v <= 0:
            raise ValueError("timeouts must be positive")
        return v

    @field_validator("webhook_port")
    @classmethod
    def validate_webhook_port(cls, v: int) -> int:
        """Ensure webhook port is in valid range."""
        if v <= 0 or v > 65535:
            raise ValueError("webhook_port must be between 1 and 65535")
        return v

    @field_validator("webhook_path")
    @classmethod
    def validate_webhook_path(cls, v: str) -> str:
        """Ensure webhook path is absolute."""
        if not v.startswith("/"):
            raise ValueError("webhook_path must start with '/'")
        return v


def load_settings(env_file: str | None = None) -> Settings:
    """Load application settings from environment.

    Args:
        env_file: Optional path to .env file. If not provided,
                 uses the default .env in the current directory.

    Returns:
        Validated Settings instance.

    Raises:
        ValidationError: If settings validation fails.
    """
    if env_file:
        return Settings(_env_file=env_file)  # type: ignore[call-arg]
    return Settings()  # type: ignore[call-arg]


__all__ = ["Settings", "load_settings"]
