"""Unit tests for group/site lookups and IdentifierResolver."""

import httpx
import pytest
from conftest import GRAPH, RecordingTransport, make_client

from m365cli.core.errors import (
    AmbiguousMatchError,
    HttpError,
    MalformedResponseError,
    NotFoundError,
    ResolutionError,
)
from m365cli.resources.groups import get_group_by_display_name, group_lookup_url
from m365cli.resources.resolver import IdentifierResolver, ResourceCategory
from m365cli.resources.sites import get_graph_site_id, site_lookup_url

GROUP_ID = "233e43d0-dc6a-482e-9b4e-0de7a7bce9b4"
SITE_ID = "contoso.sharepoint.com,1a2b,3c4d"


def groups_handler(groups: list[dict], next_link: str | None = None):
    """Answer group lookups with the given groups, anything else with 404."""

    def handler(request: httpx.Request) -> httpx.Response:
        if request.url.path != "/v1.0/groups":
            return httpx.Response(404, json={"error": {"message": "Unexpected"}})
        body: dict = {"value": groups}
        if next_link:
            body["@odata.nextLink"] = next_link
        return httpx.Response(200, json=body)

    return handler


class TestGroupLookupUrl:
    def test_filter_and_select(self):
        url = group_lookup_url(GRAPH, "spridermvp")
        assert url == (
            f"{GRAPH}/v1.0/groups?$filter=displayName eq 'spridermvp'&$select=id,displayName"
        )

    def test_quote_escaped(self):
        assert "O%27%27Brien" in group_lookup_url(GRAPH, "O'Brien")


class TestGetGroupByDisplayName:
    """Tests for get_group_by_display_name()."""

    @pytest.mark.asyncio
    async def test_single_match(self):
        transport = RecordingTransport(
            groups_handler([{"id": GROUP_ID, "displayName": "spridermvp"}])
        )
        async with make_client(transport) as client:
            group = await get_group_by_display_name(client, "spridermvp")

        assert group["id"] == GROUP_ID
        assert transport.call_count == 1
        params = transport.requests[0].url.params
        assert params["$filter"] == "displayName eq 'spridermvp'"
        assert params["$select"] == "id,displayName"

    @pytest.mark.asyncio
    async def test_quote_in_name_sent_doubled(self):
        transport = RecordingTransport(groups_handler([{"id": GROUP_ID}]))
        async with make_client(transport) as client:
            await get_group_by_display_name(client, "O'Brien")
        assert transport.requests[0].url.params["$filter"] == "displayName eq 'O''Brien'"

    @pytest.mark.asyncio
    async def test_not_found(self):
        transport = RecordingTransport(groups_handler([]))
        async with make_client(transport) as client:
            with pytest.raises(NotFoundError) as exc_info:
                await get_group_by_display_name(client, "nobody")
        assert exc_info.value.message == "The specified group 'nobody' does not exist."

    @pytest.mark.asyncio
    async def test_ambiguous(self):
        transport = RecordingTransport(groups_handler([{"id": "1"}, {"id": "2"}]))
        async with make_client(transport) as client:
            with pytest.raises(AmbiguousMatchError) as exc_info:
                await get_group_by_display_name(client, "dup")
        assert exc_info.value.candidates == ("1", "2")
        assert exc_info.value.message == "Multiple groups with name 'dup' found: 1, 2."

    @pytest.mark.asyncio
    async def test_continuation_link_is_ambiguous(self):
        """More matches than one page holds still counts as ambiguous."""
        transport = RecordingTransport(
            groups_handler([{"id": "1"}], next_link=f"{GRAPH}/v1.0/groups?page=2")
        )
        async with make_client(transport) as client:
            with pytest.raises(AmbiguousMatchError):
                await get_group_by_display_name(client, "dup")
        assert transport.call_count == 1

    @pytest.mark.asyncio
    async def test_group_without_id(self):
        transport = RecordingTransport(groups_handler([{"displayName": "x"}]))
        async with make_client(transport) as client:
            with pytest.raises(MalformedResponseError):
                await get_group_by_display_name(client, "x")

    @pytest.mark.asyncio
    async def test_lookup_failure_propagates(self):
        transport = RecordingTransport(
            lambda request: httpx.Response(401, json={"error": {"message": "Expired"}})
        )
        async with make_client(transport) as client:
            with pytest.raises(HttpError):
                await get_group_by_display_name(client, "x")


class TestSiteLookupUrl:
    """Tests for site_lookup_url()."""

    def test_site_with_path(self):
        assert site_lookup_url(GRAPH, "https://contoso.sharepoint.com/sites/team") == (
            f"{GRAPH}/v1.0/sites/contoso.sharepoint.com:/sites/team?$select=id"
        )

    def test_trailing_slash_ignored(self):
        assert site_lookup_url(GRAPH, "https://contoso.sharepoint.com/sites/team/") == (
            f"{GRAPH}/v1.0/sites/contoso.sharepoint.com:/sites/team?$select=id"
        )

    def test_root_site(self):
        assert site_lookup_url(GRAPH, "https://contoso.sharepoint.com") == (
            f"{GRAPH}/v1.0/sites/contoso.sharepoint.com?$select=id"
        )

    def test_path_encoded(self):
        url = site_lookup_url(GRAPH, "https://contoso.sharepoint.com/sites/team site")
        assert ":/sites/team%20site?" in url

    @pytest.mark.parametrize("web_url", ["not a url", "ftp://contoso.com/sites/x", "/sites/x"])
    def test_invalid_url(self, web_url):
        with pytest.raises(ResolutionError):
            site_lookup_url(GRAPH, web_url)


class TestGetGraphSiteId:
    @pytest.mark.asyncio
    async def test_returns_id(self):
        transport = RecordingTransport(lambda request: httpx.Response(200, json={"id": SITE_ID}))
        async with make_client(transport) as client:
            site_id = await get_graph_site_id(client, "https://contoso.sharepoint.com/sites/team")

        assert site_id == SITE_ID
        assert transport.requests[0].url.path == "/v1.0/sites/contoso.sharepoint.com:/sites/team"

    @pytest.mark.asyncio
    async def test_missing_id(self):
        transport = RecordingTransport(lambda request: httpx.Response(200, json={}))
        async with make_client(transport) as client:
            with pytest.raises(MalformedResponseError):
                await get_graph_site_id(client, "https://contoso.sharepoint.com/sites/team")


class TestIdentifierResolver:
    """Tests for IdentifierResolver."""

    @pytest.mark.asyncio
    async def test_resolve_group(self):
        transport = RecordingTransport(groups_handler([{"id": GROUP_ID}]))
        async with make_client(transport) as client:
            resolver = IdentifierResolver(client)
            assert await resolver.resolve("spridermvp", ResourceCategory.DIRECTORY_GROUP) == GROUP_ID

    @pytest.mark.asyncio
    async def test_resolve_site(self):
        transport = RecordingTransport(lambda request: httpx.Response(200, json={"id": SITE_ID}))
        async with make_client(transport) as client:
            resolver = IdentifierResolver(client)
            assert await resolver.resolve(
                "https://contoso.sharepoint.com/sites/team", ResourceCategory.SITE
            ) == SITE_ID

    @pytest.mark.asyncio
    async def test_no_caching(self):
        """Resolving the same name twice issues two lookups."""
        transport = RecordingTransport(groups_handler([{"id": GROUP_ID}]))
        async with make_client(transport) as client:
            resolver = IdentifierResolver(client)
            await resolver.group_id("spridermvp")
            await resolver.group_id("spridermvp")
        assert transport.call_count == 2
