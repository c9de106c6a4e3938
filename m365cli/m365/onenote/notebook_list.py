"""onenote notebook list: list notebooks of the signed-in user, a user, a group or a site."""

from __future__ import annotations

from urllib.parse import quote

from m365cli.commands.base import Command
from m365cli.commands.options import OptionDeclaration
from m365cli.commands.protocol import ArgumentBag, CommandContext, CommandLogger
from m365cli.commands.selection import Selection, select_option
from m365cli.commands.validators import (
    at_most_one_of,
    guid_option,
    is_present,
    mutually_exclusive,
)
from m365cli.m365.onenote.commands import NOTEBOOK_LIST
from m365cli.resources.odata import get_all_items
from m365cli.resources.resolver import IdentifierResolver

OWNER_OPTIONS = ("userId", "userName", "groupId", "groupName", "webUrl")


class OneNoteNotebookListCommand(Command):
    """Lists OneNote notebooks of the signed-in user, a user, a group or a site."""

    def __init__(self) -> None:
        super().__init__(
            NOTEBOOK_LIST,
            "Retrieve a list of notebooks",
            default_properties=["createdDateTime", "displayName", "id"],
        )
        self.register_options(
            OptionDeclaration("userId", description="ID of the user whose notebooks to list"),
            OptionDeclaration("userName", description="UPN of the user whose notebooks to list"),
            OptionDeclaration("groupId", description="ID of the group whose notebooks to list"),
            OptionDeclaration("groupName", description="Name of the group whose notebooks to list"),
            OptionDeclaration("webUrl", short="u", description="URL of the site whose notebooks to list"),
        )
        self.register_validator(guid_option("userId"))
        self.register_validator(guid_option("groupId"))
        self.register_validator(mutually_exclusive("userId", "userName"))
        self.register_validator(mutually_exclusive("groupId", "groupName"))
        self.register_validator(at_most_one_of(*OWNER_OPTIONS))
        self.register_telemetry(self._telemetry_properties)

    @staticmethod
    def _telemetry_properties(args: ArgumentBag, properties: dict) -> None:
        for name in OWNER_OPTIONS:
            properties[name] = is_present(args, name)

    async def _endpoint(self, args: ArgumentBag, ctx: CommandContext) -> str:
        base = f"{ctx.resource}/v1.0"
        resolver = IdentifierResolver(ctx.client, ctx.cancel_token)

        match select_option(args, OWNER_OPTIONS):
            case Selection("userId" | "userName", user):
                owner = f"users/{quote(user, safe='@')}"
            case Selection("groupId", group_id):
                owner = f"groups/{group_id}"
            case Selection("groupName", name):
                owner = f"groups/{await resolver.group_id(name)}"
            case Selection("webUrl", web_url):
                owner = f"sites/{await resolver.site_id(web_url)}"
            case _:
                owner = "me"

        return f"{base}/{owner}/onenote/notebooks"

    async def command_action(
        self,
        cli_logger: CommandLogger,
        args: ArgumentBag,
        ctx: CommandContext,
    ) -> None:
        endpoint = await self._endpoint(args, ctx)
        notebooks = await get_all_items(
            ctx.client,
            endpoint,
            max_pages=ctx.max_pages,
            cancel_token=ctx.cancel_token,
        )
        cli_logger.log(notebooks)
