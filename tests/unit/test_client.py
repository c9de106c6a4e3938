"""Unit tests for GraphClient using httpx.MockTransport."""

import httpx
import pytest
from conftest import GRAPH, RecordingTransport, make_client, route

from m365cli.client import ACCEPT_HEADER, MAX_ERROR_BODY_SIZE, GraphClient
from m365cli.core.errors import (
    FetchError,
    HttpError,
    MalformedResponseError,
    TransportError,
)

ME = f"{GRAPH}/v1.0/me"


class TestGraphClientRequests:
    """Tests for successful requests."""

    @pytest.mark.asyncio
    async def test_returns_json_object(self):
        transport = RecordingTransport(route({ME: {"id": "1", "displayName": "Alex"}}))
        async with make_client(transport) as client:
            body = await client.get(ME)
        assert body == {"id": "1", "displayName": "Alex"}
        assert client.request_count == 1

    @pytest.mark.asyncio
    async def test_sends_auth_and_accept_headers(self):
        transport = RecordingTransport(route({ME: {}}))
        async with make_client(transport) as client:
            await client.get(ME)

        request = transport.requests[0]
        assert request.method == "GET"
        assert request.headers["Authorization"] == "Bearer abc"
        assert request.headers["Accept"] == ACCEPT_HEADER
        assert request.headers["User-Agent"] == "m365cli"

    @pytest.mark.asyncio
    async def test_no_token_provider_sends_no_authorization(self):
        transport = RecordingTransport(route({ME: {}}))
        async with GraphClient(transport=transport) as client:
            await client.get(ME)
        assert "Authorization" not in transport.requests[0].headers

    def test_resource(self):
        assert GraphClient().resource == GRAPH


class TestGraphClientFailures:
    """Tests for the failures surfaced by get()."""

    @pytest.mark.asyncio
    async def test_not_initialized(self):
        client = GraphClient()
        with pytest.raises(FetchError, match="not initialized"):
            await client.get(ME)

    @pytest.mark.asyncio
    async def test_http_error_keeps_status_and_body(self):
        body = {"error": {"code": "Forbidden", "message": "Access denied"}}
        transport = RecordingTransport(route({ME: httpx.Response(403, json=body)}))
        async with make_client(transport) as client:
            with pytest.raises(HttpError) as exc_info:
                await client.get(ME)
        assert exc_info.value.status_code == 403
        assert exc_info.value.body == body

    @pytest.mark.asyncio
    async def test_http_error_text_body_truncated(self):
        transport = RecordingTransport(
            route({ME: httpx.Response(500, text="x" * (MAX_ERROR_BODY_SIZE * 2))})
        )
        async with make_client(transport) as client:
            with pytest.raises(HttpError) as exc_info:
                await client.get(ME)
        assert exc_info.value.body == "x" * MAX_ERROR_BODY_SIZE

    @pytest.mark.asyncio
    async def test_no_retry_on_error(self):
        transport = RecordingTransport(route({ME: httpx.Response(503, text="busy")}))
        async with make_client(transport) as client:
            with pytest.raises(HttpError):
                await client.get(ME)
        assert transport.call_count == 1

    @pytest.mark.asyncio
    async def test_connect_error(self):
        transport = RecordingTransport(route({ME: httpx.ConnectError("refused")}))
        async with make_client(transport) as client:
            with pytest.raises(TransportError, match="Connection failed"):
                await client.get(ME)

    @pytest.mark.asyncio
    async def test_timeout(self):
        transport = RecordingTransport(route({ME: httpx.ReadTimeout("slow")}))
        async with make_client(transport) as client:
            with pytest.raises(TransportError, match="timed out"):
                await client.get(ME)

    @pytest.mark.asyncio
    async def test_invalid_json(self):
        transport = RecordingTransport(route({ME: httpx.Response(200, text="<html>")}))
        async with make_client(transport) as client:
            with pytest.raises(MalformedResponseError):
                await client.get(ME)

    @pytest.mark.asyncio
    async def test_non_object_json(self):
        transport = RecordingTransport(route({ME: httpx.Response(200, json=[1, 2])}))
        async with make_client(transport) as client:
            with pytest.raises(MalformedResponseError, match="JSON object"):
                await client.get(ME)
