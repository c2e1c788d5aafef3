"""Load workflow contexts from JSON-valued environment variables.

GitHub Actions exposes its contexts to steps through expressions such as
``${{ toJson(github) }}``; the workflow passes them to this tool in the
``GITHUB_CONTEXT`` and ``JOB_CONTEXT`` variables.
"""

from __future__ import annotations

import json
import os
from collections.abc import Mapping
from typing import Any

import structlog

from ..models.context import JobContext, RepositoryContext
from ..utils.async_helpers import InvalidContext, MissingContext
from ..utils.logging import LogEventNames

log = structlog.get_logger()

GITHUB_CONTEXT_ENV = "GITHUB_CONTEXT"
JOB_CONTEXT_ENV = "JOB_CONTEXT"


def _reject_constant(token: str) -> Any:
    # json accepts NaN and Infinity unless told otherwise
    raise ValueError(f"{token} is not a valid JSON value")


def load_context(name: str, environ: Mapping[str, str] | None = None) -> dict[str, Any]:
    """Parse the JSON object held in an environment variable.

    Args:
        name: Environment variable name.
        environ: Environment to read from (defaults to ``os.environ``).

    Returns:
        The parsed object. Its shape is not validated.

    Raises:
        MissingContext: If the variable is unset or empty.
        InvalidContext: If the value is not a JSON object.
    """
    env = os.environ if environ is None else environ

    raw = env.get(name, "")
    if not raw:
        raise MissingContext(name)

    try:
        data = json.loads(raw, parse_constant=_reject_constant)
    except (ValueError, RecursionError) as e:
        raise InvalidContext(name, str(e)) from e

    if not isinstance(data, dict):
        raise InvalidContext(name, f"expected a JSON object, got {type(data).__name__}")

    log.debug(LogEventNames.CONTEXT_LOADED, variable=name, keys=len(data))
    return data


def load_repository_context(environ: Mapping[str, str] | None = None) -> RepositoryContext:
    """Load ``GITHUB_CONTEXT`` as a RepositoryContext."""
    return RepositoryContext.from_mapping(load_context(GITHUB_CONTEXT_ENV, environ))


def load_job_context(environ: Mapping[str, str] | None = None) -> JobContext:
    """Load ``JOB_CONTEXT`` as a JobContext."""
    return JobContext.from_mapping(load_context(JOB_CONTEXT_ENV, environ))
