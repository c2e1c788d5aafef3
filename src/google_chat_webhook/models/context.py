"""Data models for workflow contexts read from the environment."""

from collections.abc import Mapping
from dataclasses import dataclass, field
from types import MappingProxyType
from typing import Any


def _freeze(data: Mapping[str, Any]) -> Mapping[str, Any]:
    return MappingProxyType(dict(data))


@dataclass(frozen=True)
class RepositoryContext:
    """Repository and pull request metadata (``GITHUB_CONTEXT``).

    Known keys are lifted into attributes; absent keys stay ``None``.
    The complete parsed object is kept in ``raw``.
    """

    repository: Any = None
    pull_request_title: Any = None
    pull_request_author: Any = None
    pull_request_number: Any = None
    raw: Mapping[str, Any] = field(default_factory=dict, repr=False, compare=False)

    @classmethod
    def from_mapping(cls, data: Mapping[str, Any]) -> "RepositoryContext":
        return cls(
            repository=data.get("repository"),
            pull_request_title=data.get("pull_request_title"),
            pull_request_author=data.get("pull_request_author"),
            pull_request_number=data.get("pull_request_number"),
            raw=_freeze(data),
        )


@dataclass(frozen=True)
class JobContext:
    """Job result metadata (``JOB_CONTEXT``)."""

    status: Any = None
    raw: Mapping[str, Any] = field(default_factory=dict, repr=False, compare=False)

    @classmethod
    def from_mapping(cls, data: Mapping[str, Any]) -> "JobContext":
        return cls(status=data.get("status"), raw=_freeze(data))
