"""Value checks shared by command validators and the resource layer."""

from __future__ import annotations

import re
from urllib.parse import quote

# 8-4-4-4-12 hex digits, nothing around them
GUID_PATTERN = re.compile(
    r"[0-9a-f]{8}-[0-9a-f]{4}-[0-9a-f]{4}-[0-9a-f]{4}-[0-9a-f]{12}",
    re.IGNORECASE,
)


def is_valid_guid(value: object) -> bool:
    """Check if value is a GUID string.

    Braced or otherwise decorated forms are rejected: the value is placed
    in endpoint paths as-is.

    Args:
        value: The value to check. Non-strings are never GUIDs.

    Returns:
        True if valid, False otherwise.
    """
    if not isinstance(value, str):
        return False
    return GUID_PATTERN.fullmatch(value) is not None


def format_query_literal(value: str) -> str:
    """Escape a value for use inside a quoted OData string literal.

    Single quotes are doubled (OData escaping), then the result is
    percent-encoded so it can be placed in a query string.
    """
    return quote(value.replace("'", "''"), safe="")
