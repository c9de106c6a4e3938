"""Core constants and paths for m365cli.

Single source of truth for global paths and API defaults.
"""

from pathlib import Path

M365CLI_DIR_NAME = ".m365cli"

DEFAULT_GRAPH_RESOURCE = "https://graph.microsoft.com"
DEFAULT_ACCESS_TOKEN_ENV = "M365_ACCESS_TOKEN"

# Continuation link and item sequence fields of OData collection responses
ODATA_NEXT_LINK = "@odata.nextLink"
ODATA_VALUE = "value"


def get_m365cli_dir() -> Path:
    """Get ~/.m365cli (global config directory)."""
    return Path.home() / M365CLI_DIR_NAME
