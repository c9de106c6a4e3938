"""Reusable argument validators.

Each factory returns an async validator over the whole argument bag.
Validators report problems as Rejected(reason); they never raise for bad
input. None of the validators here touch the network, so commands register
them ahead of any validator that does.
"""

from __future__ import annotations

from collections.abc import Sequence
from typing import Any

import jsonschema

from m365cli.commands.options import OptionRegistry
from m365cli.commands.protocol import (
    ACCEPTED,
    ArgumentBag,
    Rejected,
    ValidationOutcome,
    Validator,
)
from m365cli.core.validation import is_valid_guid


def is_present(args: ArgumentBag, name: str) -> bool:
    """Whether an option was supplied (None and "" count as absent)."""
    value = args.get(name)
    return value is not None and value != ""


def supplied(args: ArgumentBag, names: Sequence[str]) -> list[str]:
    """Names from `names` that were supplied, in the given order."""
    return [name for name in names if is_present(args, name)]


def _format_names(names: Sequence[str]) -> str:
    """'a', 'a or b', 'a, b or c'."""
    if len(names) == 1:
        return names[0]
    return f"{', '.join(names[:-1])} or {names[-1]}"


def _format_schema_error(error: jsonschema.ValidationError) -> str:
    """Turn a jsonschema error into a message about an option."""
    option = ".".join(str(p) for p in error.absolute_path)

    if error.validator == "required":
        # error.message is like "'ownerGroupId' is a required property"
        missing = str(error.message).split("'")[1] if "'" in error.message else error.message
        return f"Required option {missing} not specified"

    if error.validator == "type":
        return f"Option '{option}' must be a {error.validator_value}: got {error.instance!r}"

    if error.validator == "enum":
        allowed = ", ".join(str(v) for v in error.validator_value)
        return f"{error.instance} is not a valid value for option '{option}'. Allowed values are {allowed}"

    if option:
        return f"Option '{option}': {error.message}"
    return error.message


def option_schema_validator(options: OptionRegistry) -> Validator:
    """Check required options, value types and allowed values.

    The schema is built when the validator runs so options registered after
    this validator are covered too.
    """

    async def validate(args: ArgumentBag) -> ValidationOutcome:
        present: dict[str, Any] = {k: v for k, v in args.items() if v is not None}
        validator = jsonschema.Draft7Validator(options.to_json_schema())
        error = jsonschema.exceptions.best_match(validator.iter_errors(present))
        if error is not None:
            return Rejected(_format_schema_error(error))
        return ACCEPTED

    return validate


def guid_option(name: str) -> Validator:
    """Reject a supplied option value that is not a GUID."""

    async def validate(args: ArgumentBag) -> ValidationOutcome:
        if is_present(args, name) and not is_valid_guid(args[name]):
            return Rejected(f"{args[name]} is not a valid GUID")
        return ACCEPTED

    return validate


def mutually_exclusive(first: str, second: str) -> Validator:
    """Reject a bag supplying both options."""

    async def validate(args: ArgumentBag) -> ValidationOutcome:
        if is_present(args, first) and is_present(args, second):
            return Rejected(f"Specify either {first} or {second}, but not both")
        return ACCEPTED

    return validate


def at_most_one_of(*names: str) -> Validator:
    """Reject a bag supplying more than one of the options."""

    async def validate(args: ArgumentBag) -> ValidationOutcome:
        given = supplied(args, names)
        if len(given) > 1:
            return Rejected(
                f"Specify at most one of {_format_names(names)}; got {', '.join(given)}"
            )
        return ACCEPTED

    return validate


def exactly_one_of(*names: str) -> Validator:
    """Reject a bag supplying none, or more than one, of the options."""

    async def validate(args: ArgumentBag) -> ValidationOutcome:
        given = supplied(args, names)
        if not given:
            return Rejected(f"Specify either {_format_names(names)}")
        if len(given) > 1:
            if len(names) == 2:
                return Rejected(f"Specify either {names[0]} or {names[1]}, but not both")
            return Rejected(f"Specify only one of {_format_names(names)}")
        return ACCEPTED

    return validate
