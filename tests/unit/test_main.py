"""Tests for the command line entry point."""

from __future__ import annotations

import json
from pathlib import Path
from unittest.mock import AsyncMock, patch

import pytest

from google_chat_webhook.__main__ import EXIT_FAILURE, EXIT_OK, main, parse_args
from google_chat_webhook.models.dispatch import DispatchResult
from google_chat_webhook.utils.async_helpers import TransportError, UnexpectedStatus, UsageError
from google_chat_webhook.utils.logging import LogEventNames

COMMAND = ["chat", "workflownotification"]


@pytest.fixture
def send_mock():
    """Patch the webhook adapter's send method."""
    with patch(
        "google_chat_webhook.adapters.chat.google_chat.GoogleChatWebhook.send",
        new_callable=AsyncMock,
    ) as mock:
        mock.return_value = DispatchResult.success()
        yield mock


@pytest.fixture
def contexts_in_env(monkeypatch: pytest.MonkeyPatch, context_environ: dict[str, str]) -> None:
    """Export both contexts to the process environment."""
    for name, value in context_environ.items():
        monkeypatch.setenv(name, value)


class TestParseArgs:
    """Test argument parsing."""

    def test_webhook_url(self, webhook_url: str) -> None:
        """Test the webhook URL flag is parsed."""
        args = parse_args([*COMMAND, "--webhook-url", webhook_url])
        assert args.webhook_url == webhook_url
        assert args.command == "chat"
        assert args.chat_command == "workflownotification"
        assert args.config is None
        assert args.debug is False

    def test_global_options(self, webhook_url: str) -> None:
        """Test global options precede the command."""
        args = parse_args(["-d", "--format", "json", "-c", "cfg.yaml", *COMMAND, "--webhook-url", webhook_url])
        assert args.debug is True
        assert args.format == "json"
        assert args.config == Path("cfg.yaml")

    def test_missing_webhook_url(self) -> None:
        """Test the webhook URL is required."""
        with pytest.raises(UsageError, match="webhook-url"):
            parse_args(COMMAND)

    def test_empty_webhook_url(self) -> None:
        """Test an empty webhook URL is rejected."""
        with pytest.raises(UsageError, match="must not be empty"):
            parse_args([*COMMAND, "--webhook-url", ""])

    def test_positional_arguments_rejected(self, webhook_url: str) -> None:
        """Test positional arguments are a usage error."""
        with pytest.raises(UsageError, match=r"expected 0 arguments, got \['extra'\]"):
            parse_args([*COMMAND, "--webhook-url", webhook_url, "extra"])

    def test_unknown_flag(self, webhook_url: str) -> None:
        """Test unknown flags are a usage error rather than exit status 2."""
        with pytest.raises(UsageError, match="failed to parse flags"):
            parse_args([*COMMAND, "--webhook-url", webhook_url, "--bogus"])

    def test_unknown_command(self) -> None:
        """Test an unknown subcommand is a usage error."""
        with pytest.raises(UsageError):
            parse_args(["chat", "other"])

    def test_url_format_not_validated(self) -> None:
        """Test any non-empty URL is accepted at parse time."""
        args = parse_args([*COMMAND, "--webhook-url", "not a url"])
        assert args.webhook_url == "not a url"


class TestMain:
    """Test exit codes and output."""

    def test_success(
        self,
        webhook_url: str,
        contexts_in_env: None,
        send_mock: AsyncMock,
        capsys: pytest.CaptureFixture[str],
    ) -> None:
        """Test a successful run exits 0 and prints nothing."""
        assert main([*COMMAND, "--webhook-url", webhook_url]) == EXIT_OK

        send_mock.assert_awaited_once()
        url, body = send_mock.await_args.args[:2]
        assert url == webhook_url
        assert json.loads(body)["cardsV2"]["card"]["header"]["title"] == "Pull Request success"

        captured = capsys.readouterr()
        assert captured.out == ""
        assert captured.err == ""

    def test_debug_logs_command_lifecycle(
        self,
        webhook_url: str,
        contexts_in_env: None,
        send_mock: AsyncMock,
        capsys: pytest.CaptureFixture[str],
    ) -> None:
        """Test debug logging records the command start and finish events."""
        argv = ["-d", "--format", "json", *COMMAND, "--webhook-url", webhook_url]
        assert main(argv) == EXIT_OK

        lines = capsys.readouterr().err.splitlines()
        events = [json.loads(line)["event"] for line in lines if line.startswith("{")]
        assert events[0] == LogEventNames.COMMAND_STARTING
        assert events[-1] == LogEventNames.COMMAND_FINISHED

    def test_positional_argument_makes_no_request(
        self,
        webhook_url: str,
        contexts_in_env: None,
        send_mock: AsyncMock,
        capsys: pytest.CaptureFixture[str],
    ) -> None:
        """Test a usage error exits 1 before any network call."""
        assert main([*COMMAND, "--webhook-url", webhook_url, "extra"]) == EXIT_FAILURE

        send_mock.assert_not_awaited()
        captured = capsys.readouterr()
        assert "expected 0 arguments" in captured.err
        assert captured.out == ""

    def test_missing_flag_exits_1(self, capsys: pytest.CaptureFixture[str]) -> None:
        """Test flag parse failures exit with status 1."""
        assert main(COMMAND) == EXIT_FAILURE
        assert "webhook-url" in capsys.readouterr().err

    @pytest.mark.parametrize("missing", ["GITHUB_CONTEXT", "JOB_CONTEXT"])
    def test_missing_context(
        self,
        webhook_url: str,
        contexts_in_env: None,
        send_mock: AsyncMock,
        monkeypatch: pytest.MonkeyPatch,
        capsys: pytest.CaptureFixture[str],
        missing: str,
    ) -> None:
        """Test an unset context exits 1 with the variable named on stderr."""
        monkeypatch.delenv(missing)

        assert main([*COMMAND, "--webhook-url", webhook_url]) == EXIT_FAILURE

        send_mock.assert_not_awaited()
        assert f"environment var {missing} not set" in capsys.readouterr().err

    def test_malformed_context(
        self,
        webhook_url: str,
        contexts_in_env: None,
        send_mock: AsyncMock,
        monkeypatch: pytest.MonkeyPatch,
        capsys: pytest.CaptureFixture[str],
    ) -> None:
        """Test malformed JSON exits 1 before any network call."""
        monkeypatch.setenv("JOB_CONTEXT", "{status: success}")

        assert main([*COMMAND, "--webhook-url", webhook_url]) == EXIT_FAILURE

        send_mock.assert_not_awaited()
        assert "failed unmarshaling JOB_CONTEXT" in capsys.readouterr().err

    def test_oversized_context_reports_one_line(
        self,
        webhook_url: str,
        contexts_in_env: None,
        send_mock: AsyncMock,
        monkeypatch: pytest.MonkeyPatch,
        capsys: pytest.CaptureFixture[str],
    ) -> None:
        """Test decoder limits are reported as a context error, not a crash."""
        monkeypatch.setenv("GITHUB_CONTEXT", '{"n": ' + "9" * 5000 + "}")

        assert main([*COMMAND, "--webhook-url", webhook_url]) == EXIT_FAILURE

        send_mock.assert_not_awaited()
        err = capsys.readouterr().err
        assert err.startswith("failed unmarshaling GITHUB_CONTEXT")
        assert "Traceback" not in err

    @pytest.mark.parametrize("status_code", [400, 500])
    def test_rejected_by_webhook(
        self,
        webhook_url: str,
        contexts_in_env: None,
        send_mock: AsyncMock,
        capsys: pytest.CaptureFixture[str],
        status_code: int,
    ) -> None:
        """Test a non-200 response exits 1 with the status on stderr."""
        send_mock.side_effect = UnexpectedStatus(status_code)

        assert main([*COMMAND, "--webhook-url", webhook_url]) == EXIT_FAILURE

        send_mock.assert_awaited_once()
        assert f"unexpected HTTP status code {status_code}" in capsys.readouterr().err

    def test_transport_error(
        self,
        webhook_url: str,
        contexts_in_env: None,
        send_mock: AsyncMock,
        capsys: pytest.CaptureFixture[str],
    ) -> None:
        """Test transport failures exit 1."""
        send_mock.side_effect = TransportError("sending http request failed: connection refused")

        assert main([*COMMAND, "--webhook-url", webhook_url]) == EXIT_FAILURE

        assert "connection refused" in capsys.readouterr().err

    def test_missing_config_file(
        self,
        webhook_url: str,
        contexts_in_env: None,
        send_mock: AsyncMock,
        tmp_path: Path,
        capsys: pytest.CaptureFixture[str],
    ) -> None:
        """Test a missing configuration file exits 1."""
        missing = tmp_path / "missing.yaml"

        assert main(["-c", str(missing), *COMMAND, "--webhook-url", webhook_url]) == EXIT_FAILURE

        send_mock.assert_not_awaited()
        assert "Configuration file not found" in capsys.readouterr().err

    def test_config_file_applied(
        self,
        webhook_url: str,
        contexts_in_env: None,
        send_mock: AsyncMock,
        tmp_path: Path,
    ) -> None:
        """Test a valid configuration file is accepted."""
        config_file = tmp_path / "config.yaml"
        config_file.write_text("webhook:\n  timeout: 5\nlogging:\n  level: ERROR\n")

        assert main(["-c", str(config_file), *COMMAND, "--webhook-url", webhook_url]) == EXIT_OK
        send_mock.assert_awaited_once()

    def test_version(self, capsys: pytest.CaptureFixture[str]) -> None:
        """Test --version prints the version and exits 0."""
        with pytest.raises(SystemExit) as exc_info:
            main(["--version"])
        assert exc_info.value.code == 0
        assert "send-google-chat-webhook" in capsys.readouterr().out
