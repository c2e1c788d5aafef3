"""Configuration loading and validation."""

from .loader import load_config
from .schema import LoggingConfig, NotifierConfig, WebhookConfig

__all__ = [
    # Loader
    "load_config",
    # Root config
    "NotifierConfig",
    # Sections
    "LoggingConfig",
    "WebhookConfig",
]
