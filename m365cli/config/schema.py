"""Pydantic models for m365cli configuration validation."""

from urllib.parse import urlparse

from pydantic import BaseModel, ConfigDict, Field, field_validator

from m365cli.core.constants import DEFAULT_ACCESS_TOKEN_ENV, DEFAULT_GRAPH_RESOURCE

# Hosts that are considered safe for HTTP (non-HTTPS) connections
_LOOPBACK_HOSTS = frozenset({"localhost", "127.0.0.1", "::1"})


class GraphConfig(BaseModel):
    """Configuration for the Graph API endpoint.

    Example in config.json:
        "graph": {
            "resource": "https://graph.microsoft.com",
            "request_timeout": 60.0
        }
    """

    model_config = ConfigDict(extra="forbid")

    resource: str = DEFAULT_GRAPH_RESOURCE
    """Base URL of the API; endpoints are built as '<resource>/v1.0/...'."""

    request_timeout: float = Field(default=60.0, gt=0)
    """Timeout per request in seconds."""

    verify_ssl: bool = True
    """Verify TLS certificates. Disable only for on-prem proxies you trust."""

    user_agent: str = Field(default="m365cli", min_length=1)
    """User-Agent header sent with every request."""

    @field_validator("resource")
    @classmethod
    def validate_resource(cls, v: str) -> str:
        """Require https, except for loopback hosts (local test servers)."""
        parsed = urlparse(v)
        scheme = parsed.scheme.lower()
        host = (parsed.hostname or "").lower()
        if scheme == "https":
            return v.rstrip("/")
        if scheme == "http" and host in _LOOPBACK_HOSTS:
            return v.rstrip("/")
        raise ValueError(
            f"resource '{v}' must use https:// (http:// is only allowed for localhost)"
        )


class AuthConfig(BaseModel):
    """Where the access token comes from."""

    model_config = ConfigDict(extra="forbid")

    access_token_env: str = Field(default=DEFAULT_ACCESS_TOKEN_ENV, min_length=1)
    """Environment variable containing the bearer token."""


class PaginationConfig(BaseModel):
    """Safety ceiling for paginated collection retrieval.

    A misbehaving server that keeps returning continuation links would
    otherwise keep a command running forever. When the ceiling is reached
    the command fails with a PaginationLimitError naming this setting;
    results are never silently truncated. Set to 0 to disable the ceiling.
    """

    model_config = ConfigDict(extra="forbid")

    max_pages: int = Field(default=1000, ge=0)
    """Maximum number of pages fetched for one collection (0 = unlimited)."""


class TelemetryConfig(BaseModel):
    """Usage telemetry settings."""

    model_config = ConfigDict(extra="forbid")

    enabled: bool = True
    """Record a telemetry event per command invocation."""


class Config(BaseModel):
    """Root configuration model.

    Example config.json:
        {
            "graph": {"resource": "https://graph.microsoft.com"},
            "auth": {"access_token_env": "M365_ACCESS_TOKEN"},
            "pagination": {"max_pages": 500},
            "telemetry": {"enabled": false}
        }
    """

    model_config = ConfigDict(extra="forbid")

    graph: GraphConfig = GraphConfig()
    auth: AuthConfig = AuthConfig()
    pagination: PaginationConfig = PaginationConfig()
    telemetry: TelemetryConfig = TelemetryConfig()
