"""Endpoint selection by identifying option.

Commands that can address the same collection through different owners
(a user id, a group name, a site URL...) pick the owner with
select_option() and match on the result:

    match select_option(args, ("groupId", "groupName")):
        case Selection("groupId", group_id):
            ...
        case Selection("groupName", name):
            ...
        case None:
            ...

A validator (at_most_one_of / exactly_one_of) guarantees at most one
identifying option is supplied, so the selection is unambiguous.
"""

from __future__ import annotations

from collections.abc import Sequence
from dataclasses import dataclass

from m365cli.commands.protocol import ArgumentBag
from m365cli.commands.validators import supplied


@dataclass(frozen=True)
class Selection:
    """The identifying option that was supplied, and its value."""

    option: str
    value: str


def select_option(args: ArgumentBag, names: Sequence[str]) -> Selection | None:
    """Return the supplied identifying option, or None if none was given.

    Raises:
        ValueError: If several were supplied (a missing validator).
    """
    given = supplied(args, names)
    if not given:
        return None
    if len(given) > 1:
        raise ValueError(f"Conflicting identifying options: {', '.join(given)}")
    return Selection(given[0], str(args[given[0]]))
