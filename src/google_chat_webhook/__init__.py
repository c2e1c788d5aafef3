"""Send GitHub workflow notifications to Google Chat via incoming webhooks."""

from google_chat_webhook._version import __version__

__all__ = ["__version__"]
