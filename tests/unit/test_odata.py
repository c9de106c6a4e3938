"""Unit tests for OData collection retrieval."""

import asyncio

import httpx
import pytest
from conftest import GRAPH, RecordingTransport, make_client, route

from m365cli.core.cancel import CancellationToken
from m365cli.core.errors import (
    HttpError,
    MalformedResponseError,
    PaginationLimitError,
    TransportError,
)
from m365cli.resources.odata import get_all_items, get_item, parse_page

ITEMS = f"{GRAPH}/v1.0/items"
PAGE_2 = f"{ITEMS}?page=2"
PAGE_3 = f"{ITEMS}?page=3"


class TestParsePage:
    """Tests for parse_page()."""

    def test_items_and_link(self):
        assert parse_page({"value": [1], "@odata.nextLink": PAGE_2}, ITEMS) == ([1], PAGE_2)

    def test_no_link(self):
        assert parse_page({"value": []}, ITEMS) == ([], None)

    def test_empty_link_means_last_page(self):
        assert parse_page({"value": [1], "@odata.nextLink": ""}, ITEMS) == ([1], None)

    def test_missing_value(self):
        with pytest.raises(MalformedResponseError, match="not a collection"):
            parse_page({"id": "x"}, ITEMS)

    def test_value_not_a_list(self):
        with pytest.raises(MalformedResponseError):
            parse_page({"value": {"id": "x"}}, ITEMS)

    def test_link_not_a_string(self):
        with pytest.raises(MalformedResponseError):
            parse_page({"value": [], "@odata.nextLink": 3}, ITEMS)


class TestGetAllItems:
    """Tests for get_all_items()."""

    @pytest.mark.asyncio
    async def test_follows_continuation_links_in_order(self):
        """Two pages [a, b] + [c] give [a, b, c] in exactly two requests."""
        transport = RecordingTransport(
            route(
                {
                    ITEMS: {"value": ["a", "b"], "@odata.nextLink": PAGE_2},
                    PAGE_2: {"value": ["c"]},
                }
            )
        )
        async with make_client(transport) as client:
            items = await get_all_items(client, ITEMS)

        assert items == ["a", "b", "c"]
        assert transport.urls == [ITEMS, PAGE_2]

    @pytest.mark.asyncio
    async def test_single_empty_page(self):
        transport = RecordingTransport(route({ITEMS: {"value": []}}))
        async with make_client(transport) as client:
            items = await get_all_items(client, ITEMS)

        assert items == []
        assert transport.call_count == 1

    @pytest.mark.asyncio
    async def test_empty_intermediate_page_continues(self):
        transport = RecordingTransport(
            route(
                {
                    ITEMS: {"value": [], "@odata.nextLink": PAGE_2},
                    PAGE_2: {"value": ["a"]},
                }
            )
        )
        async with make_client(transport) as client:
            assert await get_all_items(client, ITEMS) == ["a"]

    @pytest.mark.asyncio
    async def test_failure_on_later_page_discards_earlier_items(self):
        """A failing second page fails the whole retrieval."""
        transport = RecordingTransport(
            route(
                {
                    ITEMS: {"value": ["a", "b"], "@odata.nextLink": PAGE_2},
                    PAGE_2: httpx.Response(
                        500, json={"error": {"code": "Internal", "message": "Page lost"}}
                    ),
                }
            )
        )
        async with make_client(transport) as client:
            with pytest.raises(HttpError) as exc_info:
                await get_all_items(client, ITEMS)

        assert exc_info.value.status_code == 500
        assert transport.call_count == 2

    @pytest.mark.asyncio
    async def test_transport_failure_propagates(self):
        transport = RecordingTransport(route({ITEMS: httpx.ConnectError("refused")}))
        async with make_client(transport) as client:
            with pytest.raises(TransportError):
                await get_all_items(client, ITEMS)

    @pytest.mark.asyncio
    async def test_malformed_page(self):
        transport = RecordingTransport(route({ITEMS: {"items": []}}))
        async with make_client(transport) as client:
            with pytest.raises(MalformedResponseError):
                await get_all_items(client, ITEMS)

    @pytest.mark.asyncio
    async def test_page_ceiling(self):
        """A server that never stops linking hits the ceiling instead of looping."""
        transport = RecordingTransport(
            route(
                {
                    ITEMS: {"value": [1], "@odata.nextLink": PAGE_2},
                    PAGE_2: {"value": [2], "@odata.nextLink": PAGE_3},
                    PAGE_3: {"value": [3], "@odata.nextLink": ITEMS},
                }
            )
        )
        async with make_client(transport) as client:
            with pytest.raises(PaginationLimitError) as exc_info:
                await get_all_items(client, ITEMS, max_pages=3)

        assert exc_info.value.max_pages == 3
        assert transport.call_count == 3

    @pytest.mark.asyncio
    async def test_ceiling_not_hit_when_last_page_fits(self):
        transport = RecordingTransport(
            route(
                {
                    ITEMS: {"value": [1], "@odata.nextLink": PAGE_2},
                    PAGE_2: {"value": [2]},
                }
            )
        )
        async with make_client(transport) as client:
            assert await get_all_items(client, ITEMS, max_pages=2) == [1, 2]

    @pytest.mark.asyncio
    async def test_zero_ceiling_is_unlimited(self):
        transport = RecordingTransport(
            route(
                {
                    ITEMS: {"value": [1], "@odata.nextLink": PAGE_2},
                    PAGE_2: {"value": [2], "@odata.nextLink": PAGE_3},
                    PAGE_3: {"value": [3]},
                }
            )
        )
        async with make_client(transport) as client:
            assert await get_all_items(client, ITEMS, max_pages=0) == [1, 2, 3]

    @pytest.mark.asyncio
    async def test_cancelled_before_first_page(self):
        transport = RecordingTransport(route({ITEMS: {"value": []}}))
        token = CancellationToken()
        token.cancel()
        async with make_client(transport) as client:
            with pytest.raises(asyncio.CancelledError):
                await get_all_items(client, ITEMS, cancel_token=token)
        assert transport.call_count == 0

    @pytest.mark.asyncio
    async def test_cancelled_between_pages(self):
        token = CancellationToken()
        pages = {
            ITEMS: {"value": [1], "@odata.nextLink": PAGE_2},
            PAGE_2: {"value": [2]},
        }
        inner = route(pages)

        def handler(request: httpx.Request) -> httpx.Response:
            response = inner(request)
            token.cancel()
            return response

        transport = RecordingTransport(handler)
        async with make_client(transport) as client:
            with pytest.raises(asyncio.CancelledError):
                await get_all_items(client, ITEMS, cancel_token=token)
        assert transport.call_count == 1


class TestGetItem:
    @pytest.mark.asyncio
    async def test_returns_object(self):
        transport = RecordingTransport(route({ITEMS: {"id": "1"}}))
        async with make_client(transport) as client:
            assert await get_item(client, ITEMS) == {"id": "1"}
