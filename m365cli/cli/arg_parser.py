"""Argument parsing for the m365 CLI.

The parser tree is derived from the command registry: each word of a
command name becomes a nested sub-command ("m365 planner plan list") and
each option declaration becomes a flag ("--ownerGroupName"). Required
options are not enforced here; the command's validators decide.
"""

import argparse
from pathlib import Path
from typing import Any

from m365cli.commands.base import Command
from m365cli.commands.protocol import ArgumentBag
from m365cli.commands.registry import CommandRegistry

COMMAND_NAME_DEST = "command_name"


def add_option_args(parser: argparse.ArgumentParser, command: Command) -> None:
    """Add one flag per option declaration of a command."""
    for decl in command.options:
        flags = [f"--{decl.name}"]
        if decl.short:
            flags.insert(0, f"-{decl.short}")

        kwargs: dict[str, Any] = {"dest": decl.name, "help": decl.description or None}
        if decl.type == "boolean":
            kwargs.update(action="store_true", default=None)
        else:
            if decl.type == "number":
                kwargs["type"] = float
            if decl.autocomplete:
                kwargs["choices"] = list(decl.autocomplete)
            kwargs["metavar"] = decl.name
        parser.add_argument(*flags, **kwargs)


def build_parser(registry: CommandRegistry) -> argparse.ArgumentParser:
    """Build the argparse tree for every registered command."""
    parser = argparse.ArgumentParser(
        prog="m365",
        description="Manage Microsoft 365 from the command line",
    )
    parser.add_argument(
        "--config",
        dest="config_path",
        type=Path,
        help="Config file to use instead of ~/.m365cli/config.json and ./.m365cli/config.json",
    )
    parser.set_defaults(**{COMMAND_NAME_DEST: None})

    # Group parsers keyed by name prefix ("planner", "planner plan")
    groups: dict[str, argparse._SubParsersAction] = {"": parser.add_subparsers(title="commands")}

    for name in registry.names():
        command = registry.get(name)
        if command is None:
            continue
        words = name.split(" ")
        prefix = ""
        for word in words[:-1]:
            path = f"{prefix} {word}".strip()
            if path not in groups:
                group_parser = groups[prefix].add_parser(word, help=f"{path} commands")
                groups[path] = group_parser.add_subparsers(title=f"{path} commands")
            prefix = path

        leaf = groups[prefix].add_parser(
            words[-1],
            help=command.description,
            description=command.description,
        )
        add_option_args(leaf, command)
        leaf.set_defaults(**{COMMAND_NAME_DEST: name})

    return parser


def extract_arguments(command: Command, namespace: argparse.Namespace) -> ArgumentBag:
    """Build a command's argument bag from parsed arguments.

    Options that were not supplied are left out of the bag.
    """
    bag: dict[str, Any] = {}
    for decl in command.options:
        value = getattr(namespace, decl.name, None)
        if value is not None:
            bag[decl.name] = value
    return bag
