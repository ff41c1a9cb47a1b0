"""Formatting utilities for domain logic."""

from cmakeproj.core.models import CacheType


def cache_type_to_color(cache_type: CacheType) -> str:
    """Map a cache entry type to a color name.

    Args:
        cache_type: Type of a cache entry.

    Returns:
        Color name string:
        - BOOL -> "green"
        - PATH, FILEPATH -> "cyan"
        - STRING -> "yellow"
        - other kinds -> empty string
    """
    color_map = {
        CacheType.BOOL: "green",
        CacheType.PATH: "cyan",
        CacheType.FILEPATH: "cyan",
        CacheType.STRING: "yellow",
    }
    return color_map.get(cache_type, "")
