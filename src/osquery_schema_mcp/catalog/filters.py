"""Filter pipeline over catalog tables.

Three filters are combined in a fixed order: platform, then category, then
text search. Each is a pure function that preserves the input order and never
raises; unknown platform or category selectors simply match nothing.
"""

from __future__ import annotations

from collections.abc import Sequence
from dataclasses import dataclass

from .categorizer import categorize, parse_category
from .constants import PLATFORM_IDS, Category, Platform
from .models import Table


@dataclass(frozen=True, slots=True)
class FilterParams:
    """Explicit filter inputs for one search request."""

    platform: Platform | str = Platform.ALL
    category: Category | str = Category.ALL
    query: str = ""


def _platform_value(platform: Platform | str) -> str:
    return platform.value if isinstance(platform, Platform) else platform


def filter_by_platform(tables: Sequence[Table], platform: Platform | str) -> list[Table]:
    """Keep tables available on ``platform``; ``"all"`` keeps everything."""
    value = _platform_value(platform)
    if value == Platform.ALL.value:
        return list(tables)
    if value not in PLATFORM_IDS:
        return []
    return [t for t in tables if value in t.platforms]


def filter_by_category(tables: Sequence[Table], category: Category | str) -> list[Table]:
    """Keep tables whose category is ``category``; ``"all"`` keeps everything."""
    wanted = parse_category(category)
    if wanted is None:
        return []
    if wanted is Category.ALL:
        return list(tables)
    return [t for t in tables if categorize(t) is wanted]


def table_matches(table: Table, needle: str) -> bool:
    """True when the lower-cased ``needle`` occurs in the table's name, description or any column name."""
    if needle in table.name.lower() or needle in table.description.lower():
        return True
    return any(needle in column.name.lower() for column in table.columns)


def search_tables(tables: Sequence[Table], query: str) -> list[Table]:
    """Case-insensitive substring search over tables.

    A blank query returns the input unchanged. Otherwise a table is kept when
    the query occurs in its name, its description, or the name of any of its
    columns (hidden columns included). Results keep catalog order.
    """
    needle = query.strip().lower()
    if not needle:
        return list(tables)
    return [t for t in tables if table_matches(t, needle)]


def apply_filters(tables: Sequence[Table], params: FilterParams) -> list[Table]:
    """Run the platform, category and text filters in that order."""
    result = filter_by_platform(tables, params.platform)
    result = filter_by_category(result, params.category)
    return search_tables(result, params.query)
