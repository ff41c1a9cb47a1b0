"""Shared formatting helpers for CLI commands."""

from __future__ import annotations

from typing import TYPE_CHECKING

from rich.table import Table
from rich.text import Text

from cmakeproj.core.formatting import cache_type_to_color


if TYPE_CHECKING:
    from cmakeproj.core.models import CacheEntry, CacheType


def _format_type_with_color(cache_type: CacheType) -> Text:
    """Format a cache type name with color coding."""
    color = cache_type_to_color(cache_type)
    return Text(cache_type.value, style=color) if color else Text(cache_type.value)


def _build_options_table(entries: list[CacheEntry]) -> Table:
    """Build a Rich table with one row per cache entry, sorted by name."""
    table = Table()
    table.add_column("Name")
    table.add_column("Type")
    table.add_column("Value")
    table.add_column("Description")

    for entry in sorted(entries, key=lambda e: e.name):
        table.add_row(
            entry.name,
            _format_type_with_color(entry.type),
            entry.value,
            entry.docstring,
        )
    return table
