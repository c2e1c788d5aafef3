"""Shared test fixtures for send-google-chat-webhook."""

import json
import logging
from collections.abc import Callable, Iterator
from typing import Any

import httpx
import pytest
import structlog

WEBHOOK_URL = (
    "https://chat.googleapis.com/v1/spaces/AAAA1234/messages"
    "?key=AIzaSyFAKEKEYNotRealJustForTests00000000&token=FAKE-token-value"
)


@pytest.fixture
def webhook_url() -> str:
    """Return a Google Chat style webhook URL with fake credentials."""
    return WEBHOOK_URL


@pytest.fixture
def github_context() -> dict[str, Any]:
    """Return a GITHUB_CONTEXT object for a pull request run."""
    return {
        "workflow": "test-workflow",
        "ref": "test-ref",
        "triggering_actor": "test-triggered_actor",
        "repository": "test-repository",
        "pull_request_title": "Test Pull Request",
        "pull_request_author": "test-author",
        "pull_request_number": "123",
    }


@pytest.fixture
def job_context() -> dict[str, Any]:
    """Return a JOB_CONTEXT object for a successful job."""
    return {"status": "success"}


@pytest.fixture
def context_environ(github_context: dict[str, Any], job_context: dict[str, Any]) -> dict[str, str]:
    """Return an environment holding both contexts as JSON."""
    return {
        "GITHUB_CONTEXT": json.dumps(github_context),
        "JOB_CONTEXT": json.dumps(job_context),
    }


class RecordingHandler:
    """httpx.MockTransport handler that records requests and answers with a fixed status."""

    def __init__(self, status_code: int = 200) -> None:
        self.status_code = status_code
        self.requests: list[httpx.Request] = []

    def __call__(self, request: httpx.Request) -> httpx.Response:
        self.requests.append(request)
        return httpx.Response(self.status_code, json={"name": "spaces/AAAA1234/messages/1"})


@pytest.fixture
def recording_handler() -> Callable[[int], RecordingHandler]:
    """Return a factory for RecordingHandler instances."""
    return RecordingHandler


@pytest.fixture(autouse=True)
def _reset_logging() -> Iterator[None]:
    """Undo logging configuration made by a test."""
    yield
    structlog.contextvars.clear_contextvars()
    structlog.reset_defaults()
    logging.getLogger().handlers.clear()
