"""Secret redaction for webhook URLs and log output.

Google Chat incoming webhooks carry their credentials in the ``key`` and
``token`` query parameters, so the destination URL itself is a secret.
Redaction is fail-closed: if a pattern cannot be applied the operation
raises instead of returning the original text.
"""

from __future__ import annotations

import re
from typing import TYPE_CHECKING
from urllib.parse import parse_qsl, urlencode, urlsplit, urlunsplit

import structlog

if TYPE_CHECKING:
    from collections.abc import Sequence

log = structlog.get_logger()

PLACEHOLDER = "[REDACTED]"

# Query parameters of a webhook URL that carry credentials
SENSITIVE_QUERY_PARAMS = frozenset({"key", "token", "access_token"})


class SecurityError(Exception):
    """Base exception for security-related errors."""


class RedactionError(SecurityError):
    """Raised when secret redaction fails."""


class SecretRedactor:
    """Detects and redacts secrets from text.

    Usage:
        redactor = SecretRedactor()
        safe_text = redactor.redact(potentially_sensitive_text)

    Attributes:
        patterns: List of compiled regex patterns to detect secrets.
        placeholder: The string to replace secrets with (default: "[REDACTED]").
    """

    DEFAULT_PATTERNS: tuple[tuple[str, str], ...] = (
        # Google Chat webhook credentials (value only, parameter name is kept)
        (r"(?<=[?&]key=)[^&\s\"']+", "Webhook key parameter"),
        (r"(?<=[?&]token=)[^&\s\"']+", "Webhook token parameter"),
        (r"(?<=[?&]access_token=)[^&\s\"']+", "Access token parameter"),
        # Google Cloud
        (r"AIza[0-9A-Za-z\-_]{35}", "Google API key"),
        (r"ya29\.[0-9A-Za-z\-_]+", "Google OAuth access token"),
        # GitHub
        (r"ghp_[a-zA-Z0-9]{36}", "GitHub PAT"),
        (r"github_pat_[a-zA-Z0-9_]{22,}", "GitHub fine-grained PAT"),
        (r"gh[ousr]_[a-zA-Z0-9]{36}", "GitHub app token"),
        # Generic
        (
            r"(?i)(api[_-]?key|secret|token|password|credential)\s*[=:]\s*[\"']?[\w-]{16,}",
            "Generic secret",
        ),
        (r"(?i)bearer\s+[\w\-.=]{16,}", "Bearer token"),
    )

    def __init__(
        self,
        placeholder: str = PLACEHOLDER,
        custom_patterns: Sequence[tuple[str, str]] | None = None,
    ) -> None:
        """Initialize the SecretRedactor.

        Args:
            placeholder: String to replace detected secrets with.
            custom_patterns: Additional (pattern, name) tuples to detect.

        Raises:
            RedactionError: If any pattern fails to compile.
        """
        self.placeholder = placeholder
        self._pattern_names: dict[re.Pattern[str], str] = {}

        all_patterns = list(self.DEFAULT_PATTERNS)
        if custom_patterns:
            all_patterns.extend(custom_patterns)

        try:
            for pattern_str, name in all_patterns:
                compiled = re.compile(pattern_str)
                self._pattern_names[compiled] = name
        except re.error as e:
            msg = f"Failed to compile secret pattern '{pattern_str}': {e}"
            log.error("pattern_compilation_failed", pattern=pattern_str, error=str(e))
            raise RedactionError(msg) from e

    @property
    def patterns(self) -> list[re.Pattern[str]]:
        """Return the list of compiled patterns."""
        return list(self._pattern_names.keys())

    def redact(self, text: str) -> str:
        """Redact all secrets from the given text.

        Args:
            text: The text to scan and redact secrets from.

        Returns:
            The text with all detected secrets replaced with placeholder.

        Raises:
            RedactionError: If redaction fails for any reason.
        """
        if not text:
            return text

        try:
            result = text
            for pattern in self._pattern_names:
                result = pattern.sub(self.placeholder, result)
            return result
        except Exception as e:
            raise RedactionError(f"Redaction failed: {e}") from e

    def has_secrets(self, text: str) -> bool:
        """Check if text contains any secrets."""
        if not text:
            return False

        try:
            return any(pattern.search(text) for pattern in self._pattern_names)
        except Exception as e:
            raise RedactionError(f"Secret check failed: {e}") from e


_redactor: SecretRedactor | None = None


def get_redactor() -> SecretRedactor:
    """Get or create the shared secret redactor."""
    global _redactor
    if _redactor is None:
        _redactor = SecretRedactor(placeholder=PLACEHOLDER)
    return _redactor


def redact_webhook_url(url: str) -> str:
    """Mask credential query parameters in a webhook URL.

    Args:
        url: Webhook URL, e.g.
            ``https://chat.googleapis.com/v1/spaces/S/messages?key=K&token=T``

    Returns:
        The URL with ``key`` and ``token`` values replaced by the placeholder.
        Text that does not parse as a URL is passed through the pattern
        redactor instead.
    """
    try:
        parts = urlsplit(url)
    except ValueError:
        return get_redactor().redact(url)

    if not parts.query:
        return url

    query = [
        (name, PLACEHOLDER if name.lower() in SENSITIVE_QUERY_PARAMS else value)
        for name, value in parse_qsl(parts.query, keep_blank_values=True)
    ]
    return urlunsplit(parts._replace(query=urlencode(query, safe="[]")))
