"""Shared pytest fixtures and helpers for m365cli tests."""

from collections.abc import Callable
from typing import Any

import httpx
import pytest

from m365cli.auth import StaticTokenProvider
from m365cli.client import GraphClient
from m365cli.config.schema import Config

GRAPH = "https://graph.microsoft.com"

Handler = Callable[[httpx.Request], httpx.Response]


class RecordingTransport(httpx.MockTransport):
    """MockTransport that records every request it receives."""

    def __init__(self, handler: Handler) -> None:
        self.requests: list[httpx.Request] = []

        def record(request: httpx.Request) -> httpx.Response:
            self.requests.append(request)
            return handler(request)

        super().__init__(record)

    @property
    def call_count(self) -> int:
        return len(self.requests)

    @property
    def urls(self) -> list[str]:
        return [str(r.url) for r in self.requests]


def route(responses: dict[str, Any]) -> Handler:
    """Handler answering by exact URL; values are JSON bodies or Responses.

    Unknown URLs get a 404 with a platform error body.
    """

    def handler(request: httpx.Request) -> httpx.Response:
        url = str(request.url)
        if url in responses:
            value = responses[url]
            if isinstance(value, httpx.Response):
                return value
            if isinstance(value, Exception):
                raise value
            return httpx.Response(200, json=value)
        return httpx.Response(
            404,
            json={"error": {"code": "NotFound", "message": f"Invalid request {url}"}},
        )

    return handler


class ListLogger:
    """CommandLogger collecting everything it is given."""

    def __init__(self) -> None:
        self.logged: list[Any] = []
        self.raw: list[Any] = []
        self.stderr: list[Any] = []

    def log(self, value: Any) -> None:
        self.logged.append(value)

    def log_raw(self, value: Any) -> None:
        self.raw.append(value)

    def log_to_stderr(self, value: Any) -> None:
        self.stderr.append(value)


def make_client(transport: httpx.AsyncBaseTransport, config: Config | None = None) -> GraphClient:
    """GraphClient over a mock transport with a fixed token."""
    config = config or Config()
    return GraphClient(config.graph, StaticTokenProvider("abc"), transport=transport)


@pytest.fixture
def cli_logger() -> ListLogger:
    return ListLogger()
