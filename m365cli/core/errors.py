"""Typed exception hierarchy and error translation for m365cli.

Every failure raised by the resource layer derives from M365Error. Commands
never surface these directly: the command framework routes them through
translate_error(), which normalizes any failure shape into one CommandError
carrying the message shown to the user.
"""

from __future__ import annotations

import json
from collections.abc import Iterable, Mapping
from typing import Any


class M365Error(Exception):
    """Base class for all m365cli errors."""

    def __init__(self, message: str) -> None:
        self.message = message
        super().__init__(message)


class ConfigError(M365Error):
    """Raised for configuration issues (missing file, invalid JSON, validation failure)."""


class AuthError(M365Error):
    """Raised when no access token can be obtained for a request."""


class CommandDefinitionError(M365Error):
    """Raised when a command's option/validator/telemetry registries are misused.

    These are programming errors surfaced while commands are constructed,
    never while they run.
    """


# === Resolution errors ===


class ResolutionError(M365Error):
    """A human-friendly name could not be turned into an identifier."""


class NotFoundError(ResolutionError):
    """The lookup returned no match."""


class AmbiguousMatchError(ResolutionError):
    """The lookup returned more than one match."""

    def __init__(self, message: str, candidates: Iterable[str] = ()) -> None:
        self.candidates = tuple(candidates)
        super().__init__(message)


# === Fetch errors ===


class FetchError(M365Error):
    """Base class for failures while talking to the API."""


class TransportError(FetchError):
    """The request never produced an HTTP response (connection, timeout)."""


class HttpError(FetchError):
    """The API answered with an error status.

    Attributes:
        status_code: HTTP status of the response.
        body: Decoded response body: a dict when the body was JSON,
            otherwise the (truncated) text.
    """

    def __init__(self, status_code: int, body: Any) -> None:
        self.status_code = status_code
        self.body = body
        detail = body if isinstance(body, str) else json.dumps(body)
        super().__init__(f"Request failed with status {status_code}: {detail}")


class PaginationLimitError(FetchError):
    """A paginated collection did not terminate within the page ceiling."""

    def __init__(self, url: str, max_pages: int) -> None:
        self.url = url
        self.max_pages = max_pages
        super().__init__(
            f"Stopped after {max_pages} pages while retrieving {url}: "
            "the server kept returning continuation links. "
            "Raise pagination.max_pages in config to allow more."
        )


class MalformedResponseError(M365Error):
    """A response arrived but its body does not have the expected shape."""


# === Command errors ===


class CommandError(M365Error):
    """The terminal failure of one command invocation.

    Immutable: the message is set once at construction.
    """

    def __setattr__(self, name: str, value: Any) -> None:
        if name in self.__dict__:
            raise AttributeError(f"CommandError.{name} is read-only")
        super().__setattr__(name, value)

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, CommandError):
            return NotImplemented
        return self.message == other.message

    def __hash__(self) -> int:
        return hash(self.message)

    def __repr__(self) -> str:
        return f"CommandError({self.message!r})"


def _platform_message(payload: Any) -> str | None:
    """Extract the message of a platform-structured error body.

    Recognizes both shapes the API uses:
        {"error": {"code": "...", "message": "..."}}
        {"odata.error": {"code": "...", "message": {"lang": "en-US", "value": "..."}}}

    JSON strings carrying one of these shapes are decoded first.
    """
    if isinstance(payload, str):
        try:
            payload = json.loads(payload)
        except ValueError:
            return None

    if not isinstance(payload, Mapping):
        return None

    odata_error = payload.get("odata.error")
    if isinstance(odata_error, Mapping):
        message = odata_error.get("message")
        if isinstance(message, Mapping) and message.get("value"):
            return str(message["value"])
        if isinstance(message, str) and message:
            return message

    error = payload.get("error")
    if isinstance(error, Mapping) and error.get("message"):
        return str(error["message"])
    if isinstance(error, str) and error:
        # Some endpoints nest the JSON error object as a string
        return _platform_message(error) or error

    return None


def translate_error(failure: Any) -> CommandError:
    """Normalize any failure into a single CommandError.

    Rules, in order:
        1. A CommandError is returned unchanged.
        2. An HttpError whose body holds a platform error object yields
           that object's message verbatim.
        3. A raw mapping holding a platform error object yields its message.
        4. Any other M365Error yields its message.
        5. Anything else yields its string representation.

    Never raises.
    """
    if isinstance(failure, CommandError):
        return failure

    if isinstance(failure, HttpError):
        message = _platform_message(failure.body)
        return CommandError(message if message is not None else failure.message)

    if isinstance(failure, Mapping):
        message = _platform_message(failure)
        if message is not None:
            return CommandError(message)

    if isinstance(failure, M365Error):
        return CommandError(failure.message)

    if isinstance(failure, str):
        return CommandError(failure)

    try:
        text = str(failure)
    except Exception:
        text = ""
    if not text and isinstance(failure, BaseException):
        text = type(failure).__name__
    return CommandError(text)
