"""Shared utility functions for m365cli."""

from typing import Any


def deep_merge(base: dict[str, Any], override: dict[str, Any]) -> dict[str, Any]:
    """Overlay one config layer on another.

    Sections present in both layers are merged key by key, so a project
    file setting only `pagination.max_pages` keeps the user's `graph`
    settings. Anything that is not a section (lists included) is taken
    from `override` whole. Neither input is modified.
    """
    merged = dict(base)
    for key, value in override.items():
        current = merged.get(key)
        if isinstance(current, dict) and isinstance(value, dict):
            merged[key] = deep_merge(current, value)
        else:
            merged[key] = value
    return merged
