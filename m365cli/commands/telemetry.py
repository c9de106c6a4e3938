"""Telemetry contributions and event recording.

Commands contribute telemetry properties the same way they contribute
validators: as functions registered in their constructor. collect() builds
a fresh property bag per invocation, so nothing is shared between
invocations. Contributions only add keys; a contribution that drops a key
written by an earlier one is a definition error.
"""

from __future__ import annotations

import logging
from collections.abc import Iterator
from typing import Any

from m365cli.commands.protocol import ArgumentBag, TelemetryContribution
from m365cli.core.errors import CommandDefinitionError

logger = logging.getLogger(__name__)


class TelemetryRegistry:
    """Ordered list of telemetry contributions."""

    def __init__(self) -> None:
        self._contributions: list[TelemetryContribution] = []

    def register(self, contribution: TelemetryContribution) -> None:
        self._contributions.append(contribution)

    def __iter__(self) -> Iterator[TelemetryContribution]:
        return iter(self._contributions)

    def __len__(self) -> int:
        return len(self._contributions)

    def collect(self, args: ArgumentBag) -> dict[str, Any]:
        """Apply every contribution, in order, to a new property bag.

        Raises:
            CommandDefinitionError: If a contribution removed a property.
        """
        properties: dict[str, Any] = {}
        for contribution in self._contributions:
            before = set(properties)
            contribution(args, properties)
            removed = before - set(properties)
            if removed:
                raise CommandDefinitionError(
                    f"Telemetry contribution removed properties: {sorted(removed)}"
                )
        return properties


class TelemetryClient:
    """Records one event per command invocation.

    Events are written to the `m365cli.telemetry` logger at DEBUG level;
    there is no remote sink.
    """

    def __init__(self, enabled: bool = True) -> None:
        self._enabled = enabled
        self._events: list[tuple[str, dict[str, Any]]] = []

    @property
    def enabled(self) -> bool:
        return self._enabled

    @property
    def events(self) -> list[tuple[str, dict[str, Any]]]:
        """Events recorded by this client, oldest first."""
        return list(self._events)

    def track_event(self, name: str, properties: dict[str, Any]) -> None:
        if not self._enabled:
            return
        self._events.append((name, dict(properties)))
        logger.debug("Telemetry event %s: %s", name, properties)
