"""Data models for webhook delivery outcomes and pipeline progress."""

from dataclasses import dataclass
from enum import Enum

from ..utils.async_helpers import DispatchError, UnexpectedStatus


class DispatchOutcome(Enum):
    """Outcome of a delivery attempt."""

    SUCCESS = "success"
    TRANSPORT_ERROR = "transport_error"
    UNEXPECTED_STATUS = "unexpected_status"


@dataclass(frozen=True)
class DispatchResult:
    """Result of sending one message to a webhook."""

    outcome: DispatchOutcome
    status_code: int | None = None
    error: str | None = None

    @property
    def ok(self) -> bool:
        """True when the webhook accepted the message."""
        return self.outcome is DispatchOutcome.SUCCESS

    @classmethod
    def success(cls, status_code: int = 200) -> "DispatchResult":
        return cls(outcome=DispatchOutcome.SUCCESS, status_code=status_code)

    @classmethod
    def from_error(cls, error: DispatchError) -> "DispatchResult":
        """Describe a failed delivery from the error that ended it."""
        if isinstance(error, UnexpectedStatus):
            return cls(
                outcome=DispatchOutcome.UNEXPECTED_STATUS,
                status_code=error.status_code,
                error=str(error),
            )
        return cls(outcome=DispatchOutcome.TRANSPORT_ERROR, error=str(error))


class PipelineState(Enum):
    """Stages of a notification run.

    Runs move strictly forward: IDLE -> CONTEXT_LOADED -> MESSAGE_BUILT
    -> DISPATCHED, or to FAILED on the first error.
    """

    IDLE = "idle"
    CONTEXT_LOADED = "context_loaded"
    MESSAGE_BUILT = "message_built"
    DISPATCHED = "dispatched"
    FAILED = "failed"
