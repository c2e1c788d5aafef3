"""Error taxonomy and cancellation helpers for the notification pipeline.

This module provides:
- Custom exceptions for every stage of a notification run
- A cancellation token driven by process signals
- A helper that races an awaitable against a cancellation token
"""

from __future__ import annotations

import asyncio
import contextlib
from collections.abc import Awaitable
from http import HTTPStatus
from typing import TypeVar

import structlog

log = structlog.get_logger()

T = TypeVar("T")


# =============================================================================
# Custom Exceptions
# =============================================================================


class NotifierError(Exception):
    """Base exception for all notifier errors."""


class UsageError(NotifierError):
    """Command line usage was invalid."""


class ConfigError(NotifierError):
    """Configuration could not be loaded or validated."""


class ContextError(NotifierError):
    """A workflow context environment variable could not be used.

    Attributes:
        name: Name of the environment variable involved.
    """

    def __init__(self, message: str, name: str) -> None:
        super().__init__(message)
        self.name = name


class MissingContext(ContextError):
    """Context environment variable is unset or empty."""

    def __init__(self, name: str) -> None:
        super().__init__(f"environment var {name} not set", name)


class InvalidContext(ContextError):
    """Context environment variable does not hold a JSON object."""

    def __init__(self, name: str, reason: str) -> None:
        super().__init__(f"failed unmarshaling {name}: {reason}", name)
        self.reason = reason


class SerializationError(NotifierError):
    """The card message could not be encoded as JSON."""


class DispatchError(NotifierError):
    """Delivering the message to the webhook failed."""


class TransportError(DispatchError):
    """The HTTP request could not be completed."""


class UnexpectedStatus(DispatchError):
    """The webhook answered with a status other than 200 OK.

    Attributes:
        status_code: HTTP status code returned by the webhook.
    """

    def __init__(self, status_code: int) -> None:
        try:
            reason = HTTPStatus(status_code).phrase
        except ValueError:
            reason = ""
        super().__init__(f"unexpected HTTP status code {status_code} ({reason})")
        self.status_code = status_code


# =============================================================================
# Cancellation Utilities
# =============================================================================


class CancellationToken:
    """Token for cooperative cancellation of async operations.

    Example:
        token = CancellationToken()

        async def worker(token: CancellationToken):
            await run_cancellable(do_request(), token)

        # Cancel from a signal handler
        token.cancel()
    """

    def __init__(self) -> None:
        self._cancelled = False
        self._event = asyncio.Event()

    @property
    def is_cancelled(self) -> bool:
        """Check if cancellation has been requested."""
        return self._cancelled

    def cancel(self) -> None:
        """Request cancellation."""
        self._cancelled = True
        self._event.set()

    async def wait(self) -> None:
        """Wait until cancellation is requested."""
        await self._event.wait()

    def raise_if_cancelled(self) -> None:
        """Raise asyncio.CancelledError if cancelled."""
        if self._cancelled:
            raise asyncio.CancelledError("Operation was cancelled")


async def run_cancellable(aw: Awaitable[T], token: CancellationToken | None) -> T:
    """Await ``aw`` unless ``token`` is cancelled first.

    The awaitable runs as its own task. If the token fires before it
    finishes, the task is cancelled and awaited so that any context
    managers inside it unwind before this function returns.

    Args:
        aw: The awaitable to run.
        token: Optional cancellation token.

    Returns:
        The result of the awaitable.

    Raises:
        asyncio.CancelledError: If the token was cancelled first.
    """
    if token is None:
        return await aw

    if token.is_cancelled:
        if asyncio.iscoroutine(aw):
            aw.close()
        token.raise_if_cancelled()

    task: asyncio.Future[T] = asyncio.ensure_future(aw)
    waiter = asyncio.ensure_future(token.wait())
    try:
        done, _ = await asyncio.wait({task, waiter}, return_when=asyncio.FIRST_COMPLETED)
    finally:
        waiter.cancel()
        with contextlib.suppress(asyncio.CancelledError):
            await waiter
        if not task.done():
            task.cancel()
            with contextlib.suppress(asyncio.CancelledError):
                await task

    if task in done:
        return task.result()

    log.debug("operation_cancelled")
    raise asyncio.CancelledError("Operation was cancelled")
