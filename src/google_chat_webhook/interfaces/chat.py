"""Abstract interface for chat webhook delivery."""

from typing import Protocol

from ..models.dispatch import DispatchResult
from ..utils.async_helpers import CancellationToken


class WebhookSender(Protocol):
    """Abstract interface for delivering a message to a chat webhook.

    This protocol defines the contract that webhook adapters (Google Chat
    today) must implement. Implementations make exactly one attempt.
    """

    async def send(
        self,
        url: str,
        body: bytes,
        cancel_token: CancellationToken | None = None,
    ) -> DispatchResult:
        """
        POST a serialized message to a webhook URL.

        Args:
            url: Destination webhook URL, including its credentials
            body: Serialized JSON message
            cancel_token: Token that aborts the request when cancelled

        Returns:
            DispatchResult describing the accepted delivery

        Raises:
            TransportError: If the request could not be completed
            UnexpectedStatus: If the webhook answered with a non-200 status
        """
        ...
