"""Configuration management with Pydantic Settings.

This module loads the Slack credentials and library options from
environment variables (and an optional ``.env`` file).
"""

from __future__ import annotations

import logging
from functools import lru_cache
from typing import Literal

from pydantic import Field, SecretStr, field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict


class SlackSettings(BaseSettings):
    """Slack Web API settings."""

    model_config = SettingsConfigDict(
        env_prefix="SLACK_MONITORING_",
        env_file=".env",
        env_file_encoding="utf-8",
        extra="ignore",
    )

    token: SecretStr | None = Field(
        default=None,
        alias="SLACK_MONITORING_TOKEN",
        description="Slack bot token (needs chat:write, channels:join and users:read)",
    )
    channel_id: str | None = Field(
        default=None,
        alias="SLACK_MONITORING_CHANNEL_ID",
        description="Slack channel ID receiving alerts",
    )
    api_base_url: str = Field(
        default="https://slack.com/api",
        alias="SLACK_API_BASE_URL",
        description="Slack Web API base URL",
    )
    timeout: float = Field(
        default=10.0,
        alias="SLACK_API_TIMEOUT",
        description="HTTP request timeout in seconds",
        gt=0,
    )

    @field_validator("api_base_url")
    @classmethod
    def validate_url(cls, v: str) -> str:
        """Validate API URL format."""
        if not v.startswith(("http://", "https://")):
            raise ValueError("Slack API URL must be an HTTP(S) endpoint")
        return v.rstrip("/")

    @property
    def enabled(self) -> bool:
        """Check if both Slack credentials are configured."""
        return self.token is not None and bool(self.channel_id)


class Settings(BaseSettings):
    """Main library settings.

    Example:
        ```python
        from slack_alerts.config import get_settings

        settings = get_settings()
        print(settings.slack.channel_id)
        print(settings.log_level)
        ```
    """

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        extra="ignore",
    )

    slack: SlackSettings = Field(default_factory=SlackSettings)

    log_level: Literal["DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"] = Field(
        default="INFO",
        alias="LOG_LEVEL",
        description="Logging level",
    )
    dry_run: bool = Field(
        default=False,
        alias="SLACK_ALERTS_DRY_RUN",
        description="Log alerts instead of sending them",
    )

    def get_logging_level(self) -> int:
        """Get the numeric logging level."""
        level: int = getattr(logging, self.log_level)
        return level

    def redacted_summary(self) -> dict[str, str]:
        """Get a summary of settings with secrets redacted."""
        return {
            "token": "(set)" if self.slack.token else "(not set)",
            "channel_id": self.slack.channel_id or "(not set)",
            "api_base_url": self.slack.api_base_url,
            "slack_enabled": str(self.slack.enabled),
            "log_level": self.log_level,
            "dry_run": str(self.dry_run),
        }


@lru_cache(maxsize=1)
def get_settings() -> Settings:
    """Get the settings singleton.

    Raises:
        ValidationError: If environment variables have invalid values.
    """
    return Settings()


def clear_settings_cache() -> None:
    """Clear the settings cache.

    Useful for testing when you need to reload settings with
    different environment variables.
    """
    get_settings.cache_clear()
