"""Google Chat incoming-webhook adapter using httpx.

This module implements the WebhookSender protocol for Google Chat. A
message is delivered with exactly one POST; any status other than 200 is
a failure and the response body is never read.

The webhook URL embeds its ``key`` and ``token`` credentials, so it is
only ever logged in redacted form.
"""

from __future__ import annotations

import asyncio

import httpx
import structlog

from ..._version import __version__
from ...config.schema import WebhookConfig
from ...models.dispatch import DispatchResult
from ...utils.async_helpers import (
    CancellationToken,
    TransportError,
    UnexpectedStatus,
    run_cancellable,
)
from ...utils.logging import LogEventNames
from ...utils.security import get_redactor, redact_webhook_url

log = structlog.get_logger()

JSON_CONTENT_TYPE = "application/json; charset=UTF-8"


class GoogleChatWebhook:
    """Google Chat webhook adapter implementing the WebhookSender protocol.

    Example:
        sender = GoogleChatWebhook(WebhookConfig(timeout=10))
        result = await sender.send(webhook_url, body)
        assert result.ok
    """

    def __init__(
        self,
        config: WebhookConfig | None = None,
        transport: httpx.AsyncBaseTransport | None = None,
    ) -> None:
        """Initialize the adapter.

        Args:
            config: Request settings (timeout, user agent).
            transport: Optional httpx transport, used by tests to stub the network.
        """
        self._config = config or WebhookConfig()
        self._transport = transport

    @property
    def user_agent(self) -> str:
        return self._config.user_agent or f"send-google-chat-webhook/{__version__}"

    async def send(
        self,
        url: str,
        body: bytes,
        cancel_token: CancellationToken | None = None,
    ) -> DispatchResult:
        """POST ``body`` to ``url`` once.

        Args:
            url: Webhook URL. Not validated; a bad URL fails as a transport error.
            body: Serialized JSON message.
            cancel_token: Token that aborts the in-flight request.

        Returns:
            A successful DispatchResult.

        Raises:
            TransportError: If the request could not be sent or was cancelled.
            UnexpectedStatus: If the webhook answered with a non-200 status.
        """
        safe_url = redact_webhook_url(url)
        log.info(LogEventNames.WEBHOOK_SENDING, url=safe_url, size=len(body))

        try:
            status_code = await run_cancellable(self._post(url, body), cancel_token)
        except asyncio.CancelledError:
            if cancel_token is None or not cancel_token.is_cancelled:
                raise
            log.warning(LogEventNames.WEBHOOK_CANCELLED, url=safe_url)
            raise TransportError("sending http request failed: request cancelled") from None
        except (httpx.HTTPError, httpx.InvalidURL) as e:
            detail = get_redactor().redact(str(e)) or type(e).__name__
            log.error(
                LogEventNames.WEBHOOK_TRANSPORT_ERROR,
                url=safe_url,
                error_type=type(e).__name__,
                error=detail,
            )
            raise TransportError(f"sending http request failed: {detail}") from e

        if status_code != httpx.codes.OK:
            log.error(LogEventNames.WEBHOOK_REJECTED, url=safe_url, status_code=status_code)
            raise UnexpectedStatus(status_code)

        log.info(LogEventNames.WEBHOOK_SENT, url=safe_url, status_code=status_code)
        return DispatchResult.success(status_code)

    async def _post(self, url: str, body: bytes) -> int:
        """Send the request and return the status code without reading the body.

        Both the client and the streamed response are context managers, so
        the connection is released however this coroutine exits.
        """
        async with httpx.AsyncClient(
            timeout=self._config.timeout,
            transport=self._transport,
            headers={"User-Agent": self.user_agent},
        ) as client:
            async with client.stream(
                "POST",
                url,
                content=body,
                headers={"Content-Type": JSON_CONTENT_TYPE},
            ) as response:
                return response.status_code
