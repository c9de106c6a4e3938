"""Command registry with factory-based instantiation.

Commands are registered as factories (zero-argument callables returning a
Command) under their command name, and instantiated lazily on first use.

Example:
    registry = CommandRegistry()
    registry.register(PLAN_LIST, PlannerPlanListCommand)

    command = registry.get("planner plan list")
"""

from __future__ import annotations

import logging
from collections.abc import Callable

from m365cli.commands.base import Command, validate_command_name
from m365cli.core.errors import CommandDefinitionError

logger = logging.getLogger(__name__)

CommandFactory = Callable[[], Command]


class CommandRegistry:
    """Registry for available commands.

    Attributes:
        _factories: Command name -> factory.
        _instances: Cache of instantiated commands.
    """

    def __init__(self) -> None:
        self._factories: dict[str, CommandFactory] = {}
        self._instances: dict[str, Command] = {}

    def register(self, name: str, factory: CommandFactory) -> None:
        """Register a command factory under its name.

        Re-registering a name replaces the factory and clears any cached
        instance.

        Raises:
            CommandDefinitionError: If the name is malformed.
        """
        validate_command_name(name)
        self._instances.pop(name, None)
        self._factories[name] = factory

    def get(self, name: str) -> Command | None:
        """Get a command instance by name (lazy instantiation).

        Raises:
            CommandDefinitionError: If the factory builds a command whose
                name differs from the registered name.
        """
        if name in self._instances:
            return self._instances[name]

        factory = self._factories.get(name)
        if factory is None:
            return None

        command = factory()
        if command.name != name:
            raise CommandDefinitionError(
                f"Command registered as '{name}' reports name '{command.name}'"
            )
        self._instances[name] = command
        logger.debug("Instantiated command: %s", name)
        return command

    def names(self) -> list[str]:
        """Registered command names, sorted."""
        return sorted(self._factories)

    def __contains__(self, name: object) -> bool:
        return name in self._factories

    def __len__(self) -> int:
        return len(self._factories)


def default_registry() -> CommandRegistry:
    """Registry holding every built-in command."""
    from m365cli.m365.onenote import commands as onenote
    from m365cli.m365.onenote.notebook_list import OneNoteNotebookListCommand
    from m365cli.m365.planner import commands as planner
    from m365cli.m365.planner.plan_list import PlannerPlanListCommand

    registry = CommandRegistry()
    registry.register(onenote.NOTEBOOK_LIST, OneNoteNotebookListCommand)
    registry.register(planner.PLAN_LIST, PlannerPlanListCommand)
    return registry
