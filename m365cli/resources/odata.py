"""Paginated collection retrieval for OData endpoints.

Collection responses carry their items in `value` and, when more items
remain, an `@odata.nextLink` URL pointing at the next page. get_all_items()
follows those links until the server stops returning one and hands back
the whole collection at once.
"""

from __future__ import annotations

import logging
from typing import TYPE_CHECKING, Any

from m365cli.core.constants import ODATA_NEXT_LINK, ODATA_VALUE
from m365cli.core.errors import MalformedResponseError, PaginationLimitError

if TYPE_CHECKING:
    from m365cli.client import GraphClient
    from m365cli.core.cancel import CancellationToken

logger = logging.getLogger(__name__)


def parse_page(body: dict[str, Any], url: str) -> tuple[list[Any], str | None]:
    """Split a collection response into its items and continuation link.

    Raises:
        MalformedResponseError: If the body has no `value` list or the
            continuation link is not a string.
    """
    items = body.get(ODATA_VALUE)
    if not isinstance(items, list):
        raise MalformedResponseError(
            f"Response from {url} is not a collection: missing '{ODATA_VALUE}' array"
        )
    next_link = body.get(ODATA_NEXT_LINK)
    if next_link is not None and not isinstance(next_link, str):
        raise MalformedResponseError(
            f"Response from {url} has an invalid '{ODATA_NEXT_LINK}'"
        )
    return items, next_link or None


async def get_all_items(
    client: GraphClient,
    url: str,
    *,
    max_pages: int | None = None,
    cancel_token: CancellationToken | None = None,
) -> list[Any]:
    """Retrieve every item of a paginated collection.

    Pages are requested strictly one after another since each page's
    address is only known from the previous response. Items keep their
    page arrival order.

    Args:
        client: Transport used for each GET.
        url: URL of the first page.
        max_pages: Page ceiling. None or 0 means unlimited.
        cancel_token: Checked before every page request.

    Returns:
        All items of all pages, in order.

    Raises:
        FetchError: If any page request fails. Items gathered from earlier
            pages are discarded; no partial collection is returned.
        MalformedResponseError: If a page is not a collection response.
        PaginationLimitError: If max_pages pages were fetched and the server
            still returned a continuation link.
        asyncio.CancelledError: If the token was cancelled.
    """
    items: list[Any] = []
    current: str | None = url
    pages = 0

    while current:
        if max_pages and pages >= max_pages:
            raise PaginationLimitError(url, max_pages)
        if cancel_token is not None:
            cancel_token.raise_if_cancelled()

        body = await client.get(current)
        page_items, current = parse_page(body, current)
        items.extend(page_items)
        pages += 1
        logger.debug("Page %d of %s: %d items", pages, url, len(page_items))

    logger.debug("Retrieved %d items from %s in %d pages", len(items), url, pages)
    return items


async def get_item(
    client: GraphClient,
    url: str,
    *,
    cancel_token: CancellationToken | None = None,
) -> dict[str, Any]:
    """Retrieve a single object."""
    if cancel_token is not None:
        cancel_token.raise_if_cancelled()
    return await client.get(url)
