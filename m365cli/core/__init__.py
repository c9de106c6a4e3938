"""Core types: errors, cancellation, value checks."""

from m365cli.core.cancel import CancellationToken
from m365cli.core.errors import (
    AmbiguousMatchError,
    AuthError,
    CommandDefinitionError,
    CommandError,
    ConfigError,
    FetchError,
    HttpError,
    M365Error,
    MalformedResponseError,
    NotFoundError,
    PaginationLimitError,
    ResolutionError,
    TransportError,
    translate_error,
)
from m365cli.core.validation import format_query_literal, is_valid_guid

__all__ = [
    "CancellationToken",
    # Errors
    "M365Error",
    "AmbiguousMatchError",
    "AuthError",
    "CommandDefinitionError",
    "CommandError",
    "ConfigError",
    "FetchError",
    "HttpError",
    "MalformedResponseError",
    "NotFoundError",
    "PaginationLimitError",
    "ResolutionError",
    "TransportError",
    "translate_error",
    # Validation
    "format_query_literal",
    "is_valid_guid",
]
