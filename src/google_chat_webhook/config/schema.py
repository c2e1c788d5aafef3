"""Pydantic models for configuration schema."""

from typing import Literal

from pydantic import BaseModel, Field
from pydantic_settings import BaseSettings, SettingsConfigDict


class WebhookConfig(BaseModel):
    """Outbound webhook request configuration."""

    timeout: float = Field(30.0, gt=0, le=300, description="Request timeout in seconds")
    user_agent: str | None = None


class LoggingConfig(BaseModel):
    """Logging configuration."""

    level: Literal["DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"] = "WARNING"
    format: Literal["json", "console"] = "console"


class NotifierConfig(BaseSettings):
    """Root configuration for the notifier.

    Values come from a YAML file when one is given, otherwise from
    ``GCHAT_``-prefixed environment variables, e.g.
    ``GCHAT_WEBHOOK__TIMEOUT=10``.
    """

    webhook: WebhookConfig = WebhookConfig()
    logging: LoggingConfig = LoggingConfig()

    model_config = SettingsConfigDict(
        env_prefix="GCHAT_",
        env_nested_delimiter="__",
    )
