"""Command framework for m365cli.

Architecture:
    - protocol.py: Contribution and context types (validators, outcomes, logger)
    - options.py: Option schema registry
    - validators.py: Reusable validators
    - telemetry.py: Telemetry contributions and event recording
    - base.py: Command, which composes the above and runs the pipeline
    - selection.py: Endpoint selection by identifying option
    - registry.py: Name -> command factory registry

Example:
    from m365cli.commands import CommandContext, default_registry

    command = default_registry().get("planner plan list")
    await command.execute(cli_logger, {"ownerGroupName": "Marketing"}, ctx)
"""

from m365cli.commands.base import Command
from m365cli.commands.options import OptionDeclaration, OptionRegistry
from m365cli.commands.protocol import (
    ACCEPTED,
    Accepted,
    ArgumentBag,
    CommandContext,
    CommandLogger,
    Rejected,
    ValidationOutcome,
    Validator,
)
from m365cli.commands.registry import CommandRegistry, default_registry
from m365cli.commands.selection import Selection, select_option
from m365cli.commands.telemetry import TelemetryClient, TelemetryRegistry

__all__ = [
    # Protocol types
    "ACCEPTED",
    "Accepted",
    "ArgumentBag",
    "CommandContext",
    "CommandLogger",
    "Rejected",
    "ValidationOutcome",
    "Validator",
    # Framework
    "Command",
    "CommandRegistry",
    "OptionDeclaration",
    "OptionRegistry",
    "Selection",
    "TelemetryClient",
    "TelemetryRegistry",
    "default_registry",
    "select_option",
]
