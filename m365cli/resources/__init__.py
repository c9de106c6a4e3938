"""Resource access layer: pagination and identifier resolution.

Example:
    from m365cli.resources import IdentifierResolver, get_all_items

    group_id = await IdentifierResolver(client).group_id("Marketing")
    plans = await get_all_items(
        client, f"{client.resource}/v1.0/groups/{group_id}/planner/plans"
    )
"""

from m365cli.resources.groups import get_group_by_display_name
from m365cli.resources.odata import get_all_items, get_item, parse_page
from m365cli.resources.resolver import IdentifierResolver, ResourceCategory
from m365cli.resources.sites import get_graph_site_id

__all__ = [
    "IdentifierResolver",
    "ResourceCategory",
    "get_all_items",
    "get_graph_site_id",
    "get_group_by_display_name",
    "get_item",
    "parse_page",
]
