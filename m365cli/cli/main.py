"""Entry point of the m365 CLI.

    m365 planner plan list --ownerGroupName Marketing
    m365 onenote notebook list --groupId <id> --output text

Exit codes: 0 success, 1 command failure, 2 usage error, 130 interrupted.
"""

from __future__ import annotations

import asyncio
import logging
import sys

import httpx
from dotenv import load_dotenv

from m365cli.auth import EnvTokenProvider, TokenProvider
from m365cli.cli.arg_parser import COMMAND_NAME_DEST, build_parser, extract_arguments
from m365cli.cli.logging_setup import configure_logging
from m365cli.cli.output import ConsoleLogger
from m365cli.client import GraphClient
from m365cli.commands.base import Command
from m365cli.commands.protocol import ArgumentBag, CommandContext, CommandLogger
from m365cli.commands.registry import default_registry
from m365cli.commands.telemetry import TelemetryClient
from m365cli.config.loader import load_config
from m365cli.config.schema import Config
from m365cli.core.cancel import CancellationToken
from m365cli.core.errors import CommandError, ConfigError

logger = logging.getLogger(__name__)


async def run_command(
    command: Command,
    args: ArgumentBag,
    config: Config,
    *,
    cli_logger: CommandLogger | None = None,
    token_provider: TokenProvider | None = None,
    transport: httpx.AsyncBaseTransport | None = None,
    cancel_token: CancellationToken | None = None,
) -> int:
    """Execute one command invocation and return its exit code.

    Args:
        command: The command to run.
        args: Its argument bag.
        config: Effective configuration.
        cli_logger: Output sink. Defaults to a ConsoleLogger honoring --output.
        token_provider: Defaults to the environment variable named in config.
        transport: Optional httpx transport (tests).
        cancel_token: Optional cancellation token for the invocation.

    Returns:
        0 on success, 1 if the command failed.
    """
    if cli_logger is None:
        cli_logger = ConsoleLogger(
            output=str(args.get("output") or "json"),
            default_properties=command.default_properties(),
        )
    if token_provider is None:
        token_provider = EnvTokenProvider(config.auth.access_token_env)

    async with GraphClient(config.graph, token_provider, transport=transport) as client:
        ctx = CommandContext(
            client=client,
            config=config,
            cancel_token=cancel_token or CancellationToken(),
            telemetry=TelemetryClient(enabled=config.telemetry.enabled),
        )
        try:
            await command.execute(cli_logger, args, ctx)
        except CommandError as e:
            cli_logger.log_to_stderr(f"Error: {e.message}")
            return 1
    return 0


def main(argv: list[str] | None = None) -> None:
    """Entry point for the m365 CLI."""
    load_dotenv()

    registry = default_registry()
    parser = build_parser(registry)
    namespace = parser.parse_args(argv)

    name = getattr(namespace, COMMAND_NAME_DEST, None)
    if name is None:
        parser.print_help(sys.stderr)
        raise SystemExit(2)

    command = registry.get(name)
    if command is None:
        parser.error(f"Unknown command: {name}")
    args = extract_arguments(command, namespace)
    configure_logging(verbose=bool(args.get("verbose")), debug=bool(args.get("debug")))

    try:
        config = load_config(namespace.config_path)
    except ConfigError as e:
        print(f"Error: {e.message}", file=sys.stderr)
        raise SystemExit(1) from e

    try:
        exit_code = asyncio.run(run_command(command, args, config))
    except KeyboardInterrupt:
        logger.info("Interrupted")
        exit_code = 130
    raise SystemExit(exit_code)
