"""Entry point for send-google-chat-webhook.

This module provides the command line interface. It handles:
- Argument parsing (``chat workflownotification --webhook-url URL``)
- Configuration loading
- Logging setup with secret sanitization
- Mapping every failure to exit status 1 with the error on stderr
"""

from __future__ import annotations

import argparse
import asyncio
import sys
from collections.abc import Sequence
from pathlib import Path
from typing import NoReturn

import structlog

from google_chat_webhook._version import __version__
from google_chat_webhook.utils.async_helpers import NotifierError, UsageError
from google_chat_webhook.utils.logging import LogEventNames

log = structlog.get_logger()

EXIT_OK = 0
EXIT_FAILURE = 1

WEBHOOK_URL_EXAMPLE = "https://chat.googleapis.com/v1/spaces/<SPACE_ID>/messages?key=<KEY>&token=<TOKEN>"


class ArgumentParser(argparse.ArgumentParser):
    """ArgumentParser that raises UsageError instead of exiting with status 2."""

    def error(self, message: str) -> NoReturn:
        raise UsageError(f"failed to parse flags: {message}")


def setup_logging(debug: bool = False, log_format: str = "console", level: str = "WARNING") -> None:
    """Configure structured logging.

    Args:
        debug: Force debug logging if True
        log_format: Output format ("json" or "console")
        level: Log level used when debug is off
    """
    from google_chat_webhook.utils.logging import configure_logging

    configure_logging(level="DEBUG" if debug else level, log_format=log_format)


def build_parser() -> ArgumentParser:
    """Build the command tree.

    Returns:
        Parser for ``send-google-chat-webhook chat workflownotification``
    """
    parser = ArgumentParser(
        prog="send-google-chat-webhook",
        description="Send GitHub workflow notifications to Google Chat",
    )

    parser.add_argument(
        "--version",
        action="version",
        version=f"%(prog)s {__version__}",
    )

    parser.add_argument(
        "-c",
        "--config",
        type=Path,
        default=None,
        help="Path to an optional YAML configuration file",
    )

    parser.add_argument(
        "-d",
        "--debug",
        action="store_true",
        help="Enable debug logging",
    )

    parser.add_argument(
        "--format",
        choices=["json", "console"],
        default=None,
        help="Log output format (default: from configuration, console)",
    )

    commands = parser.add_subparsers(dest="command", metavar="COMMAND", required=True)
    chat = commands.add_parser("chat", help="Google Chat commands")

    chat_commands = chat.add_subparsers(dest="chat_command", metavar="COMMAND", required=True)
    notification = chat_commands.add_parser(
        "workflownotification",
        help="Send a message to a Google Chat space",
        description="The chat command sends messages to Google Chat spaces.",
    )
    notification.add_argument(
        "--webhook-url",
        dest="webhook_url",
        required=True,
        metavar="URL",
        help=f"Webhook URL from google chat, e.g. {WEBHOOK_URL_EXAMPLE}",
    )
    # Collected only so they can be rejected with a clear message
    notification.add_argument("extra_args", nargs="*", help=argparse.SUPPRESS)

    return parser


def parse_args(argv: Sequence[str] | None = None) -> argparse.Namespace:
    """Parse and validate command line arguments.

    Returns:
        Parsed argument namespace

    Raises:
        UsageError: If flags are invalid or positional arguments were given
    """
    args = build_parser().parse_args(argv)

    if args.extra_args:
        raise UsageError(f"expected 0 arguments, got {args.extra_args!r}")

    if not args.webhook_url:
        raise UsageError("failed to parse flags: --webhook-url must not be empty")

    return args


async def run_command(args: argparse.Namespace) -> int:
    """Run the workflow notification command.

    Args:
        args: Parsed arguments

    Returns:
        Exit code (0 for success, 1 for error)
    """
    from google_chat_webhook.config.loader import load_config
    from google_chat_webhook.core.notifier import run_notification

    try:
        config = load_config(args.config)

        setup_logging(
            debug=args.debug,
            log_format=args.format or config.logging.format,
            level=config.logging.level,
        )
        log.info(
            LogEventNames.COMMAND_STARTING,
            version=__version__,
            command="chat workflownotification",
        )

        await run_notification(args.webhook_url, config)

        log.info(LogEventNames.COMMAND_FINISHED)
        return EXIT_OK

    except NotifierError as e:
        log.debug(LogEventNames.COMMAND_FAILED, error_type=type(e).__name__)
        print(e, file=sys.stderr)
        return EXIT_FAILURE
    except Exception as e:
        log.exception(LogEventNames.COMMAND_CRASHED, error=str(e))
        print(e, file=sys.stderr)
        return EXIT_FAILURE


def main(argv: Sequence[str] | None = None) -> int:
    """Main entry point."""
    try:
        args = parse_args(argv)
    except UsageError as e:
        print(e, file=sys.stderr)
        return EXIT_FAILURE

    setup_logging(debug=args.debug, log_format=args.format or "console")

    try:
        return asyncio.run(run_command(args))
    except KeyboardInterrupt:
        print("interrupted", file=sys.stderr)
        return EXIT_FAILURE


if __name__ == "__main__":
    sys.exit(main())
