"""Reading the JSON files behind each config layer.

An explicit `--config` file must exist (load_json_file); the global and
project layers are optional (load_json_file_optional). Either way a file
that is present has to hold a JSON object, and every problem is reported
as a ConfigError naming the file.
"""

from __future__ import annotations

import json
import logging
from pathlib import Path
from typing import Any

from m365cli.core.errors import ConfigError

logger = logging.getLogger(__name__)


def load_json_file(path: Path) -> dict[str, Any]:
    """Read one config layer.

    A UTF-8 BOM is tolerated; an empty file is an empty layer.

    Raises:
        ConfigError: If the file is missing or unreadable, or does not
            contain a JSON object.
    """
    resolved = path.resolve()

    if not resolved.exists():
        raise ConfigError(f"Config file not found: {path}")

    try:
        content = resolved.read_text(encoding="utf-8-sig").strip()
    except OSError as e:
        raise ConfigError(f"Failed to read config file {path}: {e}") from e

    if not content:
        return {}

    try:
        layer = json.loads(content)
    except json.JSONDecodeError as e:
        raise ConfigError(f"Invalid JSON in {path}: {e}") from e

    if not isinstance(layer, dict):
        raise ConfigError(
            f"Expected object in {path}, got {type(layer).__name__}: "
            "a config layer maps sections (graph, auth, ...) to settings"
        )
    return layer


def load_json_file_optional(path: Path) -> dict[str, Any] | None:
    """Read an optional config layer; None when the file is absent."""
    if not path.resolve().is_file():
        logger.debug("No config layer at %s", path)
        return None

    logger.debug("Loading config layer: %s", path)
    return load_json_file(path)
