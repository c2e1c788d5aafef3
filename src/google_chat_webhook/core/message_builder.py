"""Render workflow contexts into a Google Chat card message.

Building is pure: the same contexts always produce byte-identical JSON.
The timestamp argument is accepted so callers can pass the run time, but
it does not affect the rendered card.
"""

from __future__ import annotations

import json
from collections.abc import Mapping
from datetime import datetime
from typing import Any

import structlog

from ..models.card import (
    Button,
    ButtonList,
    Card,
    CardHeader,
    CardSection,
    ChatCardMessage,
    DecoratedText,
)
from ..models.context import JobContext, RepositoryContext
from ..utils.async_helpers import SerializationError
from ..utils.logging import LogEventNames

log = structlog.get_logger()

NIL_PLACEHOLDER = "<nil>"
GITHUB_URL = "https://github.com"
# The same icon is used for every job status
HEADER_IMAGE_URL = "https://github.githubassets.com/favicons/favicon.png"
OPEN_BUTTON_TEXT = "Open"


def format_value(value: Any, placeholder: str = NIL_PLACEHOLDER) -> str:
    """Convert a JSON value to display text.

    Args:
        value: A value decoded from JSON.
        placeholder: Text used for missing (``None``) values.

    Returns:
        Strings verbatim, booleans as ``true``/``false``, integral floats
        without a fractional part, containers as compact JSON.
    """
    if value is None:
        return placeholder
    if isinstance(value, str):
        return value
    if isinstance(value, bool):
        return "true" if value else "false"
    if isinstance(value, float) and value.is_integer():
        return str(int(value))
    if isinstance(value, (dict, list)):
        return json.dumps(value, separators=(",", ":"), ensure_ascii=False, default=str)
    return str(value)


def _repository_context(context: RepositoryContext | Mapping[str, Any]) -> RepositoryContext:
    if isinstance(context, RepositoryContext):
        return context
    return RepositoryContext.from_mapping(context)


def _job_context(context: JobContext | Mapping[str, Any]) -> JobContext:
    if isinstance(context, JobContext):
        return context
    return JobContext.from_mapping(context)


def pull_request_url(repository: Any, number: Any) -> str:
    """Return the GitHub web URL of a pull request."""
    return f"{GITHUB_URL}/{format_value(repository)}/pull/{format_value(number)}"


def build_card(
    repo_context: RepositoryContext | Mapping[str, Any],
    job_context: JobContext | Mapping[str, Any],
) -> ChatCardMessage:
    """Build the card structure for a pull request workflow run."""
    repo = _repository_context(repo_context)
    job = _job_context(job_context)

    header = CardHeader(
        title=f"Pull Request {format_value(job.status)}",
        subtitle=f"Repository: {format_value(repo.repository)}",
        image_url=HEADER_IMAGE_URL,
    )
    section = CardSection(
        widgets=(
            DecoratedText(text=f"<b>Title:</b> {format_value(repo.pull_request_title)}"),
            DecoratedText(text=f"<b>Author:</b> {format_value(repo.pull_request_author)}"),
            ButtonList(
                buttons=(
                    Button(
                        text=OPEN_BUTTON_TEXT,
                        url=pull_request_url(repo.repository, repo.pull_request_number),
                    ),
                )
            ),
        )
    )
    return ChatCardMessage(card=Card(header=header, sections=(section,)))


def serialize_message(message: ChatCardMessage) -> bytes:
    """Encode a card message as UTF-8 JSON with sorted keys.

    Raises:
        SerializationError: If the structure cannot be encoded.
    """
    try:
        body = json.dumps(
            message.to_dict(),
            sort_keys=True,
            separators=(",", ":"),
            ensure_ascii=False,
            allow_nan=False,
        ).encode("utf-8")
    except (TypeError, ValueError) as e:
        log.error(LogEventNames.MESSAGE_SERIALIZATION_ERROR, error=str(e))
        raise SerializationError(f"failed to generate message body: {e}") from e
    return body


def build_message(
    repo_context: RepositoryContext | Mapping[str, Any],
    job_context: JobContext | Mapping[str, Any],
    timestamp: datetime | None = None,
) -> bytes:
    """Build the serialized webhook message body.

    Args:
        repo_context: Repository context or the raw ``GITHUB_CONTEXT`` mapping.
        job_context: Job context or the raw ``JOB_CONTEXT`` mapping.
        timestamp: Time of the run. Accepted but not rendered.

    Returns:
        JSON document as bytes.

    Raises:
        SerializationError: If the message cannot be encoded.
    """
    body = serialize_message(build_card(repo_context, job_context))
    log.debug(LogEventNames.MESSAGE_BUILT, size=len(body))
    return body
