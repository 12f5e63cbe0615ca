"""Composition root for the ordergap profile sync.

This module is the ONLY location that imports both core domain logic
and concrete adapter implementations. All wiring of dependencies
happens here, creating a clear entry point for the application.

Module Structure:
- Configuration loading via config module
- Adapter instantiation
- Core service initialization
- Entry point selection (webhook or CLI)
"""

import asyncio
import json
import logging
import sys
from typing import Any

from pydantic import ValidationError as SettingsValidationError

from ordergap.adapters.cli.commands import CLICommandHandler
from ordergap.adapters.klaviyo.client import KlaviyoMarketingAdapter
from ordergap.adapters.webhook.http_server import WebhookHTTPServer
from ordergap.adapters.webhook.receiver import WebhookReceiver
from ordergap.config import Settings, load_settings
from ordergap.core.pipeline import ProfileSyncService


async def _run_cli_interactive(cli_handler: CLICommandHandler) -> None:
    """Run interactive CLI loop.

    Args:
        cli_handler: CLICommandHandler instance for executing commands.
    """
    logger = logging.getLogger(__name__)
    logger.info("Starting interactive CLI. Type 'help' for available commands or 'exit' to quit.")

    loop = asyncio.get_running_loop()

    while True:
        try:
            # Read command from stdin in a thread to avoid blocking
            command_line = await loop.run_in_executor(None, input, "ordergap> ")
            command_line = command_line.strip()

            if not command_line:
                continue

            if command_line.lower() == "exit":
                logger.info("Exiting CLI")
                break

            if command_line.lower() == "help":
                _print_cli_help()
                continue

            parts = command_line.split(maxsplit=1)
            command = parts[0].lower()
            args_str = parts[1] if len(parts) > 1 else ""

            try:
                args = json.loads(args_str) if args_str else {}
            except json.JSONDecodeError:
                logger.error("Invalid JSON arguments. Use 'help' for command syntax.")
                continue

            try:
                result = await _execute_cli_command(cli_handler, command, args)
                print(json.dumps(result, indent=2, default=str))
            except Exception as e:
                logger.error(f"Command execution error: {e}", exc_info=True)
                print(json.dumps({"status": "error", "message": str(e)}, indent=2))

        except EOFError:
            logger.info("EOF received, exiting CLI")
            break
        except KeyboardInterrupt:
            logger.info("Interrupted by user")
            continue
        except Exception as e:
            logger.error(f"CLI error: {e}", exc_info=True)


async def _execute_cli_command(
    cli_handler: CLICommandHandler,
    command: str,
    args: dict[str, Any],
) -> dict[str, Any]:
    """Execute a CLI command.

    Raises:
        ValueError: If command is not recognized or arguments are missing.
    """
    if not isinstance(args, dict):
        raise ValueError("Arguments must be a JSON object")

    if command == "process":
        if "profile_id" not in args:
            raise ValueError("Missing required parameter: profile_id")
        return await cli_handler.process_profile(
            profile_id=args["profile_id"],
            verbose=args.get("verbose", False),
        )

    raise ValueError(f"Unknown command: {command}. Use 'help' for available commands.")


def _print_cli_help() -> None:
    """Print CLI help message."""
    help_text = """
Available Commands (JSON format):

  process
    Compute days from email subscription to first order and store
    them on the profile.
    Required: profile_id
    Optional: verbose

    Example: process {"profile_id": "01J0000000000000000000000", "verbose": true}

  help
    Show this help message.

  exit
    Exit the CLI.
    """
    print(help_text)


def configure_logging(log_level: str, log_format: str) -> None:
    """Configure application logging.

    Args:
        log_level: Logging level (DEBUG, INFO, WARNING, ERROR, CRITICAL).
        log_format: Log format (json, text).
    """
    level = getattr(logging, log_level, logging.INFO)

    if log_format == "json":
        format_str = '{"time": "%(asctime)s", "level": "%(levelname)s", "logger": "%(name)s", "message": "%(message)s"}'
    else:
        format_str = "%(asctime)s - %(name)s - %(levelname)s - %(message)s"

    logging.basicConfig(
        level=level,
        format=format_str,
        handlers=[
            logging.StreamHandler(sys.stdout),
        ],
    )


def build_service(settings: Settings) -> tuple[KlaviyoMarketingAdapter, ProfileSyncService]:
    """Instantiate the Klaviyo adapter and the pipeline that uses it."""
    marketing = KlaviyoMarketingAdapter(
        api_key=settings.klaviyo_private_api_key,
        api_url=settings.klaviyo_api_url,
        revision=settings.klaviyo_revision,
        timeout=settings.http_timeout_seconds,
    )
    return marketing, ProfileSyncService(marketing=marketing)


async def bootstrap(settings: Settings) -> None:
    """Wire adapters and start the configured run mode.

    Steps:
    1. Instantiate adapters with configuration
    2. Initialize the pipeline
    3. Select and start run mode
    """
    logger = logging.getLogger(__name__)

    marketing, service = build_service(settings)
    logger.info(f"Starting in {settings.run_mode} mode...")

    try:
        if settings.run_mode == "webhook":
            http_server = WebhookHTTPServer(
                webhook_receiver=WebhookReceiver(sync_port=service),
                host=settings.webhook_host,
                port=settings.webhook_port,
                webhook_path=settings.webhook_path,
                request_timeout=settings.webhook_request_timeout_seconds,
            )
            await http_server.start()

            try:
                while True:
                    await asyncio.sleep(1)
            finally:
                await http_server.stop()

        elif settings.run_mode == "cli":
            await _run_cli_interactive(CLICommandHandler(service))

    finally:
        await marketing.close()


def main() -> None:
    """Application entry point.

    Exit codes:
        0: Successful shutdown
        1: Invalid configuration or fatal runtime error
        130: Interrupted by user (SIGINT/KeyboardInterrupt)
    """
    logger = logging.getLogger(__name__)

    try:
        settings = load_settings()
    except SettingsValidationError as e:
        configure_logging("INFO", "text")
        logger.error(f"Invalid configuration: {e}")
        sys.exit(1)

    configure_logging(settings.log_level, settings.log_format)
    logger.info("Loading ordergap profile sync...")

    try:
        asyncio.run(bootstrap(settings))
    except KeyboardInterrupt:
        logger.warning("Shutdown requested by user (SIGINT)")
        sys.exit(130)
    except asyncio.CancelledError:
        logger.info("Graceful shutdown completed")
        sys.exit(0)
    except Exception as e:
        logger.error(f"Fatal error: {e}", exc_info=True)
        sys.exit(1)


if __name__ == "__main__":
    main()
