"""Protocol definitions for pluggable adapters."""

from .chat import WebhookSender

__all__ = ["WebhookSender"]
