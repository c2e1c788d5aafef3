"""Core notification components.

This module exports:
- load_context: Reads a JSON object from an environment variable
- build_message: Renders contexts into a serialized card message
- WorkflowNotifier: Sequences load, build and send for one run
"""

from google_chat_webhook.core.context_loader import (
    GITHUB_CONTEXT_ENV,
    JOB_CONTEXT_ENV,
    load_context,
    load_job_context,
    load_repository_context,
)
from google_chat_webhook.core.message_builder import build_card, build_message
from google_chat_webhook.core.notifier import WorkflowNotifier, run_notification

__all__ = [
    "GITHUB_CONTEXT_ENV",
    "JOB_CONTEXT_ENV",
    "WorkflowNotifier",
    "build_card",
    "build_message",
    "load_context",
    "load_job_context",
    "load_repository_context",
    "run_notification",
]
