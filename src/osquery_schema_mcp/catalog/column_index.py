"""Column index derived from a (possibly filtered) table set.

Flattening turns tables into (column, table) pairs for column-mode search, and
the reverse lookup answers "which tables expose a column named X". Hidden
columns never appear in either.
"""

from __future__ import annotations

from collections.abc import Sequence

from .models import FlatColumn, Table


def flatten(tables: Sequence[Table]) -> list[FlatColumn]:
    """Return every non-hidden column paired with its table.

    Order is table order, then column declaration order within each table.
    """
    return [
        FlatColumn(column=column, table=table)
        for table in tables
        for column in table.columns
        if not column.hidden
    ]


def search_columns(flat_columns: Sequence[FlatColumn], query: str) -> list[FlatColumn]:
    """Filter flattened columns by a case-insensitive substring of name or description."""
    needle = query.strip().lower()
    if not needle:
        return list(flat_columns)
    return [
        fc
        for fc in flat_columns
        if needle in fc.column.name.lower() or needle in fc.column.description.lower()
    ]


def tables_containing(column_name: str, tables: Sequence[Table]) -> list[Table]:
    """Return the tables exposing a non-hidden column named ``column_name``.

    The name comparison is exact but case-insensitive; table order is kept.
    """
    wanted = column_name.lower()
    return [
        t
        for t in tables
        if any(c.name.lower() == wanted and not c.hidden for c in t.columns)
    ]


def multiplicity(column_name: str, tables: Sequence[Table]) -> int:
    """Number of tables exposing a non-hidden column named ``column_name``."""
    return len(tables_containing(column_name, tables))


def column_occurrences(tables: Sequence[Table]) -> dict[str, list[Table]]:
    """Map each lower-cased non-hidden column name to the tables exposing it.

    Equivalent to calling ``tables_containing`` for every name, in one pass.
    """
    occurrences: dict[str, list[Table]] = {}
    for table in tables:
        seen: set[str] = set()
        for column in table.columns:
            key = column.name.lower()
            if column.hidden or key in seen:
                continue
            seen.add(key)
            occurrences.setdefault(key, []).append(table)
    return occurrences
