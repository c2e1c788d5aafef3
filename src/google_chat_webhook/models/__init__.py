"""Data models and transfer objects."""

from .card import (
    Button,
    ButtonList,
    Card,
    CardHeader,
    CardSection,
    ChatCardMessage,
    DecoratedText,
)
from .context import JobContext, RepositoryContext
from .dispatch import DispatchOutcome, DispatchResult, PipelineState

__all__ = [
    # Context models
    "RepositoryContext",
    "JobContext",
    # Card models
    "CardHeader",
    "DecoratedText",
    "Button",
    "ButtonList",
    "CardSection",
    "Card",
    "ChatCardMessage",
    # Dispatch models
    "DispatchOutcome",
    "DispatchResult",
    "PipelineState",
]
