"""Types for the command framework.

A command is assembled from contributions: option declarations, async
validators and telemetry contributions. This module defines the shapes of
those contributions and of the per-invocation context a command runs in.
"""

from __future__ import annotations

from collections.abc import Awaitable, Callable, Mapping
from dataclasses import dataclass, field
from typing import TYPE_CHECKING, Any, Protocol, TypeAlias, runtime_checkable

from m365cli.config.schema import Config
from m365cli.core.cancel import CancellationToken

if TYPE_CHECKING:
    from m365cli.client import GraphClient
    from m365cli.commands.telemetry import TelemetryClient

ArgumentBag: TypeAlias = Mapping[str, Any]
"""Option name -> parsed value. Absent options are missing or None."""


@dataclass(frozen=True)
class Accepted:
    """The argument bag passed a validator."""

    @property
    def accepted(self) -> bool:
        return True


@dataclass(frozen=True)
class Rejected:
    """The argument bag failed a validator.

    Attributes:
        reason: Human-readable explanation shown to the user.
    """

    reason: str

    @property
    def accepted(self) -> bool:
        return False


ValidationOutcome: TypeAlias = Accepted | Rejected

ACCEPTED = Accepted()

Validator: TypeAlias = Callable[[ArgumentBag], Awaitable[ValidationOutcome]]
"""Async predicate over the whole argument bag."""

TelemetryContribution: TypeAlias = Callable[[ArgumentBag, dict[str, Any]], None]
"""Writes properties derived from the argument bag into a property bag."""


@runtime_checkable
class CommandLogger(Protocol):
    """Receives a command's output."""

    def log(self, value: Any) -> None:
        """Emit the command's result (formatted according to --output)."""
        ...

    def log_raw(self, value: Any) -> None:
        """Emit a value as-is."""
        ...

    def log_to_stderr(self, value: Any) -> None:
        """Emit diagnostic text that must not pollute stdout."""
        ...


@dataclass
class CommandContext:
    """Per-invocation resources a command action can use.

    One context is created for each invocation; nothing in it is shared
    between concurrent invocations.

    Attributes:
        client: Authorized transport for API requests.
        config: Effective configuration.
        cancel_token: Checked at every network suspension point.
        telemetry: Receives the invocation's telemetry event (optional).
    """

    client: GraphClient
    config: Config = field(default_factory=Config)
    cancel_token: CancellationToken = field(default_factory=CancellationToken)
    telemetry: TelemetryClient | None = None

    @property
    def resource(self) -> str:
        """Base URL endpoints are built from."""
        return self.client.resource

    @property
    def max_pages(self) -> int:
        """Page ceiling for paginated retrieval."""
        return self.config.pagination.max_pages
