"""Configuration loading with fail-fast behavior and layered merging.

Layers, later overriding earlier:
1. Global user config (~/.m365cli/config.json)
2. Project local config (cwd/.m365cli/config.json)

When neither exists the Pydantic defaults are used.
"""

import logging
from pathlib import Path
from typing import Any

from pydantic import ValidationError

from m365cli.config.load_utils import load_json_file, load_json_file_optional
from m365cli.config.schema import Config
from m365cli.core.constants import M365CLI_DIR_NAME, get_m365cli_dir
from m365cli.core.errors import ConfigError
from m365cli.core.utils import deep_merge

logger = logging.getLogger(__name__)


def load_config(path: Path | None = None, cwd: Path | None = None) -> Config:
    """Load configuration from file with layered merging.

    Args:
        path: Explicit config file path. If provided, skips layered loading.
        cwd: Working directory for the local layer. Defaults to Path.cwd().

    Returns:
        Validated Config object.

    Raises:
        ConfigError: If any config file contains invalid JSON or the merged
            config fails validation.
    """
    if path is not None:
        return _load_from_path(path)

    effective_cwd = cwd or Path.cwd()
    merged: dict[str, Any] = {}
    loaded_from: list[Path] = []

    global_config = get_m365cli_dir() / "config.json"
    local_config = effective_cwd / M365CLI_DIR_NAME / "config.json"

    layers = [global_config]
    if local_config.resolve() != global_config.resolve():
        layers.append(local_config)

    for layer in layers:
        data = load_json_file_optional(layer)
        if data:
            merged = deep_merge(merged, data)
            loaded_from.append(layer)

    if not loaded_from:
        logger.debug("No config files found, using defaults")
        return Config()

    logger.info("Config loaded from: %s", [str(p) for p in loaded_from])
    try:
        return Config.model_validate(merged)
    except ValidationError as e:
        sources = ", ".join(str(p) for p in loaded_from)
        raise ConfigError(f"Config validation failed (merged from {sources}): {e}") from e


def _load_from_path(path: Path) -> Config:
    """Load and validate config from a specific path.

    Raises:
        ConfigError: If file doesn't exist, contains invalid JSON, or fails validation.
    """
    data = load_json_file(path)
    try:
        return Config.model_validate(data)
    except ValidationError as e:
        raise ConfigError(f"Config validation failed for {path}: {e}") from e
