"""Option schema registry.

Commands declare the options they accept as OptionDeclarations. The base
command contributes the global options; each command adds its own. A later
declaration of an existing name may refine its description, short flag or
autocomplete values, but changing whether it is required or its value
type is a definition error raised while the command is being built.
"""

from __future__ import annotations

from collections.abc import Iterator
from dataclasses import dataclass, replace
from typing import Any, Literal

from m365cli.core.errors import CommandDefinitionError

OptionType = Literal["string", "boolean", "number"]

_OPTION_TYPES: frozenset[str] = frozenset({"string", "boolean", "number"})


@dataclass(frozen=True)
class OptionDeclaration:
    """One option a command accepts.

    Attributes:
        name: Option name as it appears in the argument bag ("ownerGroupId").
        required: Whether validation rejects a bag that lacks it.
        type: Value type: "string", "boolean" (flag) or "number".
        short: Optional one-letter alias ("u" for -u).
        description: Help text.
        autocomplete: Allowed values, used for completion and validation.
    """

    name: str
    required: bool = False
    type: OptionType = "string"
    short: str | None = None
    description: str = ""
    autocomplete: tuple[str, ...] | None = None

    def __post_init__(self) -> None:
        if not self.name or not self.name[0].isalpha():
            raise CommandDefinitionError(f"Invalid option name: {self.name!r}")
        if self.type not in _OPTION_TYPES:
            raise CommandDefinitionError(
                f"Option '{self.name}' has unknown type '{self.type}'"
            )
        if self.short is not None and len(self.short) != 1:
            raise CommandDefinitionError(
                f"Short alias for '{self.name}' must be one character, got {self.short!r}"
            )
        if self.autocomplete is not None and not isinstance(self.autocomplete, tuple):
            object.__setattr__(self, "autocomplete", tuple(self.autocomplete))

    def to_json_schema(self) -> dict[str, Any]:
        """JSON Schema for this option's value."""
        schema: dict[str, Any] = {"type": self.type}
        if self.autocomplete:
            schema["enum"] = list(self.autocomplete)
        if self.description:
            schema["description"] = self.description
        return schema


class OptionRegistry:
    """Ordered mapping of option name -> OptionDeclaration.

    Example:
        options = OptionRegistry()
        options.register(
            OptionDeclaration("ownerGroupId"),
            OptionDeclaration("ownerGroupName"),
        )
        options.to_json_schema()
    """

    def __init__(self) -> None:
        self._options: dict[str, OptionDeclaration] = {}

    def register(self, *declarations: OptionDeclaration) -> None:
        """Add declarations, refining compatible redefinitions.

        Raises:
            CommandDefinitionError: If a name is redeclared with a different
                required flag or type, or a short alias is already taken by
                another option.
        """
        for decl in declarations:
            existing = self._options.get(decl.name)
            if existing is not None:
                if existing.required != decl.required or existing.type != decl.type:
                    raise CommandDefinitionError(
                        f"Option '{decl.name}' redefined incompatibly: "
                        f"(required={existing.required}, type={existing.type}) vs "
                        f"(required={decl.required}, type={decl.type})"
                    )
                decl = replace(
                    existing,
                    short=decl.short if decl.short is not None else existing.short,
                    description=decl.description or existing.description,
                    autocomplete=(
                        decl.autocomplete
                        if decl.autocomplete is not None
                        else existing.autocomplete
                    ),
                )
            self._check_short(decl)
            self._options[decl.name] = decl

    def _check_short(self, decl: OptionDeclaration) -> None:
        if decl.short is None:
            return
        for other in self._options.values():
            if other.name != decl.name and other.short == decl.short:
                raise CommandDefinitionError(
                    f"Short alias -{decl.short} of '{decl.name}' "
                    f"is already used by '{other.name}'"
                )

    def get(self, name: str) -> OptionDeclaration | None:
        return self._options.get(name)

    def names(self) -> list[str]:
        """Option names in registration order."""
        return list(self._options)

    def required_names(self) -> list[str]:
        return [d.name for d in self._options.values() if d.required]

    def __contains__(self, name: object) -> bool:
        return name in self._options

    def __iter__(self) -> Iterator[OptionDeclaration]:
        return iter(self._options.values())

    def __len__(self) -> int:
        return len(self._options)

    def to_json_schema(self) -> dict[str, Any]:
        """JSON Schema object describing a valid argument bag.

        Unknown options are allowed; absent values are stripped before
        validation so only supplied values are type-checked.
        """
        return {
            "type": "object",
            "properties": {d.name: d.to_json_schema() for d in self._options.values()},
            "required": self.required_names(),
        }

