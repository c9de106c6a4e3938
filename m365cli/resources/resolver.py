"""Turn human-friendly names into API identifiers.

The resolver is stateless: it keeps no cache, so resolving the same name
twice issues two requests. Each resolution is one network round trip and
must be awaited before the dependent endpoint URL is built.
"""

from __future__ import annotations

from enum import Enum
from typing import TYPE_CHECKING

from m365cli.resources.groups import get_group_by_display_name
from m365cli.resources.sites import get_graph_site_id

if TYPE_CHECKING:
    from m365cli.client import GraphClient
    from m365cli.core.cancel import CancellationToken


class ResourceCategory(Enum):
    """Kinds of names the resolver understands."""

    DIRECTORY_GROUP = "directory-group"
    SITE = "site"


class IdentifierResolver:
    """Resolves display names and URLs to canonical identifiers.

    Example:
        resolver = IdentifierResolver(client)
        group_id = await resolver.group_id("Marketing")
        site_id = await resolver.resolve(web_url, ResourceCategory.SITE)
    """

    def __init__(
        self,
        client: GraphClient,
        cancel_token: CancellationToken | None = None,
    ) -> None:
        self._client = client
        self._cancel_token = cancel_token

    async def group_id(self, display_name: str) -> str:
        """Resolve a directory group display name to its id.

        Raises:
            NotFoundError: No group has that name.
            AmbiguousMatchError: Several groups share that name.
        """
        group = await get_group_by_display_name(
            self._client, display_name, cancel_token=self._cancel_token
        )
        return str(group["id"])

    async def site_id(self, web_url: str) -> str:
        """Resolve a site web URL to its site id."""
        return await get_graph_site_id(
            self._client, web_url, cancel_token=self._cancel_token
        )

    async def resolve(self, name: str, category: ResourceCategory) -> str:
        """Resolve `name` according to its category."""
        match category:
            case ResourceCategory.DIRECTORY_GROUP:
                return await self.group_id(name)
            case ResourceCategory.SITE:
                return await self.site_id(name)
        raise ValueError(f"Unsupported resource category: {category}")
