"""planner plan list: list the plans owned by a group."""

from __future__ import annotations

import logging

from m365cli.commands.base import Command
from m365cli.commands.options import OptionDeclaration
from m365cli.commands.protocol import ArgumentBag, CommandContext, CommandLogger
from m365cli.commands.selection import Selection, select_option
from m365cli.commands.validators import exactly_one_of, guid_option, is_present
from m365cli.m365.planner.commands import PLAN_LIST
from m365cli.resources.odata import get_all_items
from m365cli.resources.resolver import IdentifierResolver

logger = logging.getLogger(__name__)

OWNER_OPTIONS = ("ownerGroupId", "ownerGroupName")


class PlannerPlanListCommand(Command):
    """Lists the Planner plans of a Microsoft 365 group."""

    def __init__(self) -> None:
        super().__init__(
            PLAN_LIST,
            "Returns a list of plans associated with a specified group",
            default_properties=["id", "title", "createdDateTime", "owner"],
        )
        self.register_options(
            OptionDeclaration("ownerGroupId", description="ID of the group that owns the plans"),
            OptionDeclaration("ownerGroupName", description="Name of the group that owns the plans"),
        )
        self.register_validator(guid_option("ownerGroupId"))
        self.register_validator(exactly_one_of(*OWNER_OPTIONS))
        self.register_telemetry(self._telemetry_properties)

    @staticmethod
    def _telemetry_properties(args: ArgumentBag, properties: dict) -> None:
        properties["ownerGroupId"] = is_present(args, "ownerGroupId")
        properties["ownerGroupName"] = is_present(args, "ownerGroupName")

    async def _owner_group_id(self, args: ArgumentBag, ctx: CommandContext) -> str:
        match select_option(args, OWNER_OPTIONS):
            case Selection("ownerGroupId", group_id):
                return group_id
            case Selection("ownerGroupName", name):
                return await IdentifierResolver(ctx.client, ctx.cancel_token).group_id(name)
        raise ValueError("Specify either ownerGroupId or ownerGroupName")

    async def command_action(
        self,
        cli_logger: CommandLogger,
        args: ArgumentBag,
        ctx: CommandContext,
    ) -> None:
        group_id = await self._owner_group_id(args, ctx)
        plans = await get_all_items(
            ctx.client,
            f"{ctx.resource}/v1.0/groups/{group_id}/planner/plans",
            max_pages=ctx.max_pages,
            cancel_token=ctx.cancel_token,
        )
        logger.debug("Found %d plans for group %s", len(plans), group_id)
        if plans:
            cli_logger.log(plans)
