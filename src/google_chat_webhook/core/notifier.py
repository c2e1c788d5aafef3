"""Workflow notification pipeline.

This module sequences one notification run:
1. Load ``GITHUB_CONTEXT`` and ``JOB_CONTEXT``
2. Build the card message
3. Send it to the webhook

The first error stops the run and propagates unchanged to the caller.
There is no retry at any stage.
"""

from __future__ import annotations

import asyncio
import signal
from collections.abc import Callable, Mapping
from datetime import UTC, datetime
from typing import TYPE_CHECKING

import structlog

from ..adapters.chat.google_chat import GoogleChatWebhook
from ..models.dispatch import DispatchResult, PipelineState
from ..utils.async_helpers import CancellationToken, DispatchError, NotifierError
from ..utils.logging import LogEventNames, bind_context
from .context_loader import load_job_context, load_repository_context
from .message_builder import build_message

if TYPE_CHECKING:
    from ..config.schema import NotifierConfig
    from ..interfaces.chat import WebhookSender

log = structlog.get_logger()


def _utc_now() -> datetime:
    return datetime.now(UTC)


class WorkflowNotifier:
    """Runs the load -> build -> send pipeline once.

    Example:
        notifier = WorkflowNotifier(GoogleChatWebhook())
        result = await notifier.run(webhook_url)
    """

    def __init__(
        self,
        sender: WebhookSender,
        environ: Mapping[str, str] | None = None,
        clock: Callable[[], datetime] = _utc_now,
    ) -> None:
        """Initialize the notifier.

        Args:
            sender: Adapter that delivers the message
            environ: Environment to read contexts from (defaults to os.environ)
            clock: Source of the run timestamp
        """
        self._sender = sender
        self._environ = environ
        self._clock = clock
        self._state = PipelineState.IDLE
        self._result: DispatchResult | None = None

    @property
    def state(self) -> PipelineState:
        """Current pipeline stage."""
        return self._state

    @property
    def result(self) -> DispatchResult | None:
        """Outcome of the delivery attempt, if one was made."""
        return self._result

    async def run(
        self,
        webhook_url: str,
        cancel_token: CancellationToken | None = None,
    ) -> DispatchResult:
        """Load contexts, build the message and send it.

        Args:
            webhook_url: Destination webhook URL
            cancel_token: Token that aborts the in-flight request

        Returns:
            The successful DispatchResult

        Raises:
            NotifierError: From whichever stage failed first
        """
        if self._state is not PipelineState.IDLE:
            raise RuntimeError(f"notifier already ran (state={self._state.value})")

        try:
            repo = load_repository_context(self._environ)
            job = load_job_context(self._environ)
            self._state = PipelineState.CONTEXT_LOADED
            bind_context(repository=repo.repository, status=job.status)

            body = build_message(repo, job, self._clock())
            self._state = PipelineState.MESSAGE_BUILT

            try:
                self._result = await self._sender.send(webhook_url, body, cancel_token)
            except DispatchError as e:
                self._result = DispatchResult.from_error(e)
                raise
            self._state = PipelineState.DISPATCHED
        except NotifierError as e:
            log.debug(
                LogEventNames.COMMAND_FAILED,
                stage=self._state.value,
                error_type=type(e).__name__,
            )
            self._state = PipelineState.FAILED
            raise

        return self._result


def install_signal_handlers(token: CancellationToken) -> Callable[[], None]:
    """Cancel ``token`` on SIGINT or SIGTERM.

    Must be called from inside the running event loop.

    Returns:
        A function that removes the handlers again.
    """
    loop = asyncio.get_running_loop()
    installed: list[signal.Signals] = []

    def _handle_signal(sig: signal.Signals) -> None:
        log.info(LogEventNames.SIGNAL_RECEIVED, signal=sig.name)
        token.cancel()

    for sig in (signal.SIGTERM, signal.SIGINT):
        try:
            loop.add_signal_handler(sig, _handle_signal, sig)
        except NotImplementedError:
            # Event loops without signal support (Windows)
            log.debug(LogEventNames.SIGNAL_HANDLER_UNSUPPORTED, signal=sig.name)
            continue
        installed.append(sig)
        log.debug(LogEventNames.SIGNAL_HANDLER_REGISTERED, signal=sig.name)

    def remove() -> None:
        for sig in installed:
            loop.remove_signal_handler(sig)

    return remove


async def run_notification(
    webhook_url: str,
    config: NotifierConfig,
    environ: Mapping[str, str] | None = None,
    sender: WebhookSender | None = None,
) -> DispatchResult:
    """Run one notification with signal-driven cancellation.

    Args:
        webhook_url: Destination webhook URL
        config: Notifier configuration
        environ: Environment to read contexts from (defaults to os.environ)
        sender: Delivery adapter (defaults to GoogleChatWebhook)

    Returns:
        The successful DispatchResult

    Raises:
        NotifierError: From whichever stage failed first
    """
    token = CancellationToken()
    remove_handlers = install_signal_handlers(token)
    try:
        notifier = WorkflowNotifier(sender or GoogleChatWebhook(config.webhook), environ)
        return await notifier.run(webhook_url, token)
    finally:
        remove_handlers()
