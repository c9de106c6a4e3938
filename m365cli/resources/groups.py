"""Directory group lookups."""

from __future__ import annotations

import logging
from typing import TYPE_CHECKING, Any

from m365cli.core.errors import AmbiguousMatchError, MalformedResponseError, NotFoundError
from m365cli.core.validation import format_query_literal
from m365cli.resources.odata import get_item, parse_page

if TYPE_CHECKING:
    from m365cli.client import GraphClient
    from m365cli.core.cancel import CancellationToken

logger = logging.getLogger(__name__)


def group_lookup_url(resource: str, display_name: str) -> str:
    """Build the filtered lookup URL for a group display name."""
    literal = format_query_literal(display_name)
    return (
        f"{resource}/v1.0/groups?$filter=displayName eq '{literal}'"
        "&$select=id,displayName"
    )


async def get_group_by_display_name(
    client: GraphClient,
    display_name: str,
    *,
    cancel_token: CancellationToken | None = None,
) -> dict[str, Any]:
    """Find the one group with the given display name.

    Issues exactly one request. A continuation link on the response means
    there are more matches than fit one page, which is an ambiguous match.

    Returns:
        The group object (at least `id` and `displayName`).

    Raises:
        NotFoundError: If no group has that display name.
        AmbiguousMatchError: If several groups share that display name.
        FetchError: If the lookup request fails.
    """
    url = group_lookup_url(client.resource, display_name)
    body = await get_item(client, url, cancel_token=cancel_token)
    groups, next_link = parse_page(body, url)

    if not groups:
        raise NotFoundError(f"The specified group '{display_name}' does not exist.")

    if len(groups) > 1 or next_link:
        ids = [str(g.get("id")) for g in groups if isinstance(g, dict)]
        raise AmbiguousMatchError(
            f"Multiple groups with name '{display_name}' found: {', '.join(ids)}.",
            candidates=ids,
        )

    group = groups[0]
    if not isinstance(group, dict) or not group.get("id"):
        raise MalformedResponseError(f"Group returned for '{display_name}' has no id")

    logger.debug("Resolved group '%s' to %s", display_name, group["id"])
    return group
