"""Site lookups."""

from __future__ import annotations

import logging
from typing import TYPE_CHECKING
from urllib.parse import quote, urlparse

from m365cli.core.errors import MalformedResponseError, ResolutionError
from m365cli.resources.odata import get_item

if TYPE_CHECKING:
    from m365cli.client import GraphClient
    from m365cli.core.cancel import CancellationToken

logger = logging.getLogger(__name__)


def site_lookup_url(resource: str, web_url: str) -> str:
    """Build the URL addressing a site by host name and server-relative path.

    https://contoso.sharepoint.com/sites/team -> <resource>/v1.0/sites/contoso.sharepoint.com:/sites/team
    https://contoso.sharepoint.com            -> <resource>/v1.0/sites/contoso.sharepoint.com

    Raises:
        ResolutionError: If web_url is not an absolute http(s) URL.
    """
    parsed = urlparse(web_url)
    if parsed.scheme.lower() not in ("http", "https") or not parsed.hostname:
        raise ResolutionError(f"'{web_url}' is not a valid site URL")

    path = parsed.path.rstrip("/")
    if path:
        return f"{resource}/v1.0/sites/{parsed.hostname}:{quote(path)}?$select=id"
    return f"{resource}/v1.0/sites/{parsed.hostname}?$select=id"


async def get_graph_site_id(
    client: GraphClient,
    web_url: str,
    *,
    cancel_token: CancellationToken | None = None,
) -> str:
    """Translate a site web URL into the API's site identifier.

    Issues exactly one request; its failures propagate unchanged.

    Raises:
        ResolutionError: If web_url is not a site URL.
        MalformedResponseError: If the response has no id.
        FetchError: If the lookup request fails.
    """
    url = site_lookup_url(client.resource, web_url)
    body = await get_item(client, url, cancel_token=cancel_token)
    site_id = body.get("id")
    if not isinstance(site_id, str) or not site_id:
        raise MalformedResponseError(f"Site returned for '{web_url}' has no id")
    logger.debug("Resolved site %s to %s", web_url, site_id)
    return site_id
