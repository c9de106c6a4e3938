"""Access token providers for the Graph transport.

Token acquisition and refresh are handled outside m365cli (for example by
`az account get-access-token`). The transport only asks a provider for a
bearer token; these providers hand out one that already exists.
"""

import logging
import os
from typing import Protocol, runtime_checkable

from m365cli.core.constants import DEFAULT_ACCESS_TOKEN_ENV
from m365cli.core.errors import AuthError

logger = logging.getLogger(__name__)


@runtime_checkable
class TokenProvider(Protocol):
    """Supplies a bearer token for a resource."""

    def get_access_token(self, resource: str) -> str:
        """Return a valid access token for `resource`.

        Raises:
            AuthError: If no token is available.
        """
        ...


class StaticTokenProvider:
    """Provider returning a fixed token (tests, scripted use)."""

    def __init__(self, token: str) -> None:
        if not token:
            raise AuthError("Access token cannot be empty")
        self._token = token

    def get_access_token(self, resource: str) -> str:
        return self._token


class EnvTokenProvider:
    """Provider reading the token from an environment variable.

    The variable is read on every request so a token refreshed by an
    external tool between invocations is picked up.
    """

    def __init__(self, env_var: str = DEFAULT_ACCESS_TOKEN_ENV) -> None:
        self._env_var = env_var

    @property
    def env_var(self) -> str:
        return self._env_var

    def get_access_token(self, resource: str) -> str:
        token = os.environ.get(self._env_var, "").strip()
        if not token:
            raise AuthError(
                f"Access token not found. Set the {self._env_var} environment variable "
                f"to a bearer token for {resource} (or add it to a .env file)."
            )
        logger.debug("Using access token from %s", self._env_var)
        return token
