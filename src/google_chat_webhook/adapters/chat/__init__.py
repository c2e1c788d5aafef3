"""Chat webhook adapters."""

from .google_chat import GoogleChatWebhook

__all__ = ["GoogleChatWebhook"]
