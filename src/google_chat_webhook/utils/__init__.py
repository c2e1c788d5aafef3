"""Utility functions and helpers.

This module provides various utilities for the notifier:
- async_helpers: Error taxonomy and cancellation
- logging: Structured logging with secret sanitization
- security: Secret redaction for webhook URLs and logs
"""

from google_chat_webhook.utils.async_helpers import (
    CancellationToken,
    ConfigError,
    ContextError,
    DispatchError,
    InvalidContext,
    MissingContext,
    NotifierError,
    SerializationError,
    TransportError,
    UnexpectedStatus,
    UsageError,
    run_cancellable,
)
from google_chat_webhook.utils.logging import (
    LogFormat,
    LogLevel,
    bind_context,
    clear_context,
    configure_logging,
    get_logger,
)
from google_chat_webhook.utils.security import (
    RedactionError,
    SecretRedactor,
    SecurityError,
    redact_webhook_url,
)

__all__ = [
    # Errors
    "CancellationToken",
    "ConfigError",
    "ContextError",
    "DispatchError",
    "InvalidContext",
    # Logging
    "LogFormat",
    "LogLevel",
    "MissingContext",
    "NotifierError",
    # Security
    "RedactionError",
    "SecretRedactor",
    "SecurityError",
    "SerializationError",
    "TransportError",
    "UnexpectedStatus",
    "UsageError",
    "bind_context",
    "clear_context",
    "configure_logging",
    "get_logger",
    "redact_webhook_url",
    "run_cancellable",
]
