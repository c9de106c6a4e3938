"""Async HTTP client for the Graph REST API."""

import json
import logging
from typing import Any

import httpx

from m365cli.auth import TokenProvider
from m365cli.config.schema import GraphConfig
from m365cli.core.errors import (
    FetchError,
    HttpError,
    MalformedResponseError,
    TransportError,
)

logger = logging.getLogger(__name__)

# Maximum size for error response bodies kept on HttpError
MAX_ERROR_BODY_SIZE: int = 10 * 1024  # 10 KB

# Ask for JSON without OData annotations other than the continuation link
ACCEPT_HEADER = "application/json;odata.metadata=none"


class GraphClient:
    """Async HTTP client issuing authorized GET requests.

    The client performs no retries: a failed request surfaces as exactly one
    FetchError subclass to the caller.

    Usage:
        async with GraphClient(config.graph, EnvTokenProvider()) as client:
            body = await client.get(f"{client.resource}/v1.0/me")
    """

    def __init__(
        self,
        config: GraphConfig | None = None,
        token_provider: TokenProvider | None = None,
        *,
        transport: httpx.AsyncBaseTransport | None = None,
    ) -> None:
        """Initialize the client.

        Args:
            config: Endpoint/timeout settings. Defaults to GraphConfig().
            token_provider: Supplies the bearer token. If None, requests are
                sent without an Authorization header.
            transport: Optional httpx transport (tests pass httpx.MockTransport).
        """
        self._config = config or GraphConfig()
        self._token_provider = token_provider
        self._transport = transport
        self._client: httpx.AsyncClient | None = None
        self._request_count = 0

    @property
    def resource(self) -> str:
        """Base URL of the API, without trailing slash."""
        return self._config.resource

    @property
    def request_count(self) -> int:
        """Number of requests issued through this client."""
        return self._request_count

    async def __aenter__(self) -> "GraphClient":
        """Enter async context, create httpx client."""
        self._client = httpx.AsyncClient(
            timeout=self._config.request_timeout,
            verify=self._config.verify_ssl,
            transport=self._transport,
            follow_redirects=True,
        )
        return self

    async def __aexit__(self, exc_type: Any, exc_val: Any, exc_tb: Any) -> None:
        """Exit async context, close httpx client."""
        await self.aclose()

    async def aclose(self) -> None:
        """Close the HTTP client. Safe to call multiple times."""
        if self._client is not None:
            await self._client.aclose()
            self._client = None

    def _build_headers(self) -> dict[str, str]:
        headers = {
            "Accept": ACCEPT_HEADER,
            "User-Agent": self._config.user_agent,
        }
        if self._token_provider is not None:
            token = self._token_provider.get_access_token(self.resource)
            headers["Authorization"] = f"Bearer {token}"
        return headers

    async def get(self, url: str) -> dict[str, Any]:
        """GET a URL and return its decoded JSON object.

        Args:
            url: Absolute URL to request.

        Returns:
            The response body as a dict.

        Raises:
            FetchError: If the client is not initialized.
            TransportError: On connection error, timeout or other transport failure.
            HttpError: If the response status is >= 400.
            MalformedResponseError: If a successful response is not a JSON object.
            AuthError: If the token provider has no token.
        """
        if self._client is None:
            raise FetchError("Client not initialized. Use 'async with' context manager.")

        headers = self._build_headers()
        self._request_count += 1
        logger.debug("GET %s", url)
        try:
            response = await self._client.get(url, headers=headers)
        except httpx.ConnectError as e:
            logger.warning("Connection failed to %s: %s", url, e)
            raise TransportError(f"Connection failed: {e}") from e
        except httpx.TimeoutException as e:
            logger.warning("Request timed out: %s (timeout=%s)", url, self._config.request_timeout)
            raise TransportError(f"Request timed out: {e}") from e
        except httpx.HTTPError as e:
            raise TransportError(f"HTTP error occurred: {e}") from e

        if response.status_code >= 400:
            logger.debug("GET %s -> %d", url, response.status_code)
            raise HttpError(response.status_code, _decode_error_body(response))

        try:
            data = response.json()
        except ValueError as e:
            raise MalformedResponseError(f"Response from {url} is not valid JSON: {e}") from e

        if not isinstance(data, dict):
            raise MalformedResponseError(
                f"Expected a JSON object from {url}, got {type(data).__name__}"
            )
        return data


def _decode_error_body(response: httpx.Response) -> Any:
    """Decode an error response body, capped at MAX_ERROR_BODY_SIZE.

    Returns the parsed JSON object when the body is JSON, else the text.
    """
    raw = response.content[:MAX_ERROR_BODY_SIZE]
    text = raw.decode(errors="replace")
    try:
        return json.loads(text)
    except ValueError:
        return text
