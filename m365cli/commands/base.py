"""Base command for m365cli.

A command is the sum of its contributions. Its constructor registers
options, validators and telemetry contributions into three registries;
the base class only adds the global ones and runs the pipeline:

    telemetry (always) -> validators (in order, first rejection wins)
        -> command_action -> errors translated into one CommandError

Registries are open while the command is being built and frozen the first
time the command is validated or executed.

Example:
    >>> class GroupPlanCount(Command):
    ...     def __init__(self) -> None:
    ...         super().__init__("planner plan count", "Count plans of a group")
    ...         self.register_options(OptionDeclaration("groupId", required=True))
    ...         self.register_validator(guid_option("groupId"))
    ...
    ...     async def command_action(self, cli_logger, args, ctx) -> None:
    ...         url = f"{ctx.resource}/v1.0/groups/{args['groupId']}/planner/plans"
    ...         plans = await get_all_items(ctx.client, url)
    ...         cli_logger.log(len(plans))
"""

from __future__ import annotations

import logging
import re
from abc import ABC, abstractmethod
from collections.abc import Sequence
from types import MappingProxyType
from typing import Any

from m365cli.commands.options import OptionDeclaration, OptionRegistry
from m365cli.commands.protocol import (
    ACCEPTED,
    ArgumentBag,
    CommandContext,
    CommandLogger,
    Rejected,
    TelemetryContribution,
    ValidationOutcome,
    Validator,
)
from m365cli.commands.telemetry import TelemetryRegistry
from m365cli.commands.validators import option_schema_validator
from m365cli.core.errors import CommandDefinitionError, CommandError, translate_error

logger = logging.getLogger(__name__)

# Lowercase words separated by single spaces: "planner plan list"
COMMAND_NAME_PATTERN = re.compile(r"^[a-z][a-z0-9-]*( [a-z][a-z0-9-]*)*$")

OUTPUT_MODES = ("json", "text")

GLOBAL_OPTIONS = (
    OptionDeclaration(
        "output",
        short="o",
        description="Output type: json or text (default: json)",
        autocomplete=OUTPUT_MODES,
    ),
    OptionDeclaration("verbose", type="boolean", description="Runs command with verbose logging"),
    OptionDeclaration("debug", type="boolean", description="Runs command with debug logging"),
)


def validate_command_name(name: str) -> None:
    """Raise CommandDefinitionError unless name looks like 'area noun verb'."""
    if not COMMAND_NAME_PATTERN.match(name or ""):
        raise CommandDefinitionError(
            f"Invalid command name {name!r}: use lowercase words separated by single spaces"
        )


def _global_telemetry(args: ArgumentBag, properties: dict[str, Any]) -> None:
    properties.update(
        {
            "output": args.get("output") or "json",
            "verbose": bool(args.get("verbose")),
            "debug": bool(args.get("debug")),
        }
    )


class Command(ABC):
    """Base class for all commands.

    Subclasses call super().__init__() with their identity, register their
    contributions, and implement command_action(). Nothing else is meant to
    be overridden.
    """

    def __init__(
        self,
        name: str,
        description: str,
        *,
        default_properties: Sequence[str] | None = None,
    ) -> None:
        """Initialize the command and register the global contributions.

        Args:
            name: Command name, e.g. "planner plan list".
            description: One-line description.
            default_properties: Fields shown by default in text output.

        Raises:
            CommandDefinitionError: If the name is malformed.
        """
        validate_command_name(name)
        self._name = name
        self._description = description
        self._default_properties = list(default_properties) if default_properties else None
        self._options = OptionRegistry()
        self._validators: list[Validator] = []
        self._telemetry = TelemetryRegistry()
        self._frozen = False

        self.register_options(*GLOBAL_OPTIONS)
        self.register_validator(option_schema_validator(self._options))
        self.register_telemetry(_global_telemetry)

    @property
    def name(self) -> str:
        """Command name (used for dispatch and telemetry)."""
        return self._name

    @property
    def description(self) -> str:
        """Human-readable one-line description."""
        return self._description

    @property
    def options(self) -> OptionRegistry:
        """The merged option schema."""
        return self._options

    @property
    def validators(self) -> tuple[Validator, ...]:
        """Validators in evaluation order."""
        return tuple(self._validators)

    @property
    def frozen(self) -> bool:
        return self._frozen

    def default_properties(self) -> list[str] | None:
        """Fields projected in text output, or None for all fields."""
        return list(self._default_properties) if self._default_properties else None

    # === Registration ===

    def _check_open(self) -> None:
        if self._frozen:
            raise CommandDefinitionError(
                f"Command '{self._name}' is already in use; register contributions in __init__"
            )

    def register_options(self, *declarations: OptionDeclaration) -> None:
        """Add option declarations to the schema."""
        self._check_open()
        self._options.register(*declarations)

    def register_validator(self, validator: Validator) -> None:
        """Append a validator; registration order is evaluation order."""
        self._check_open()
        self._validators.append(validator)

    def register_telemetry(self, contribution: TelemetryContribution) -> None:
        """Append a telemetry contribution."""
        self._check_open()
        self._telemetry.register(contribution)

    def freeze(self) -> None:
        """Close the registries. Called on first use."""
        self._frozen = True

    # === Invocation ===

    def collect_telemetry(self, args: ArgumentBag) -> dict[str, Any]:
        """Build this invocation's telemetry property bag."""
        return self._telemetry.collect(args)

    async def validate(self, args: ArgumentBag) -> ValidationOutcome:
        """Run the validators in order and return the first rejection.

        A validator that raises (for example a lookup that fails at the
        transport layer) counts as a rejection carrying the translated
        error message; nothing is raised to the caller.

        Returns:
            ACCEPTED if every validator accepts, else the first Rejected.
        """
        self.freeze()
        for validator in self._validators:
            try:
                outcome = await validator(args)
            except Exception as e:
                logger.debug("Validator of %s raised", self._name, exc_info=True)
                return Rejected(translate_error(e).message)
            if isinstance(outcome, Rejected):
                logger.debug("%s rejected: %s", self._name, outcome.reason)
                return outcome
        return ACCEPTED

    async def execute(
        self,
        cli_logger: CommandLogger,
        args: ArgumentBag,
        ctx: CommandContext,
    ) -> None:
        """Run the command.

        Telemetry is collected first and recorded whatever happens next;
        a contribution that fails counts as a failure of the invocation.
        The action only runs if validation accepts the arguments.

        Args:
            cli_logger: Receives the command's output.
            args: Parsed arguments; copied into a read-only mapping.
            ctx: Per-invocation context (client, config, cancellation).

        Raises:
            CommandError: On validation rejection or any failure of the
                action. Exactly one CommandError per failed invocation.
            asyncio.CancelledError: If the invocation was cancelled.
        """
        self.freeze()
        bag: ArgumentBag = MappingProxyType(dict(args))

        try:
            properties = self.collect_telemetry(bag)
            if ctx.telemetry is not None:
                ctx.telemetry.track_event(self._name, properties)

            outcome = await self.validate(bag)
            if isinstance(outcome, Rejected):
                raise CommandError(outcome.reason)

            logger.debug("Executing %s", self._name)
            await self.command_action(cli_logger, bag, ctx)
        except Exception as e:
            error = translate_error(e)
            if error is not e:
                logger.debug("%s failed: %s", self._name, error.message, exc_info=True)
                raise error from e
            raise

    @abstractmethod
    async def command_action(
        self,
        cli_logger: CommandLogger,
        args: ArgumentBag,
        ctx: CommandContext,
    ) -> None:
        """Perform the command's work. Raise on failure."""
        ...
