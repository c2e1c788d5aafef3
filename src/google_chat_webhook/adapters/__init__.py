"""Concrete implementations of provider interfaces."""

from .chat.google_chat import GoogleChatWebhook

__all__ = ["GoogleChatWebhook"]
