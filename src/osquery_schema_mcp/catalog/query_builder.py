"""SELECT statement synthesis for a single table.

Generated text is meant for copy-paste into osqueryi or a fleet manager, so
values are inserted verbatim without escaping. The WHERE clause depends only
on the table's required columns, never on the selected columns:

    SELECT <cols>
    FROM <table>
    WHERE <col> = '<value>'
      AND <col> = '<value>';
"""

from __future__ import annotations

from collections.abc import Mapping, Sequence

from osquery_schema_mcp.models import QueryTemplate

from .constants import Constants
from .models import Table


def required_columns(table: Table) -> list[str]:
    """Names of the table's required columns in declaration order."""
    return [c.name for c in table.required_columns]


def build_where_clause(table: Table, where_values: Mapping[str, str] | None = None) -> str | None:
    """Render the required-column conditions, or None when there are none.

    Missing or empty values fall back to the ``<value>`` placeholder.
    """
    names = required_columns(table)
    if not names:
        return None
    values = where_values or {}
    clauses = [f"{name} = '{values.get(name) or Constants.VALUE_PLACEHOLDER}'" for name in names]
    return Constants.WHERE_SEPARATOR.join(clauses)


def build_select(
    table: Table,
    selected_columns: Sequence[str] | None = None,
    where_values: Mapping[str, str] | None = None,
) -> str:
    """Build a SELECT statement for ``table``.

    Args:
        table: Table to query
        selected_columns: Column names in the order they should appear; empty
            or None selects ``*``
        where_values: Values for required columns keyed by column name

    Returns:
        SQL text terminated with a semicolon
    """
    cols = Constants.COLUMN_SEPARATOR.join(selected_columns) if selected_columns else "*"
    query = f"SELECT {cols}\nFROM {table.name}"

    where = build_where_clause(table, where_values)
    if where:
        query += f"\nWHERE {where}"

    return query + ";"


def build_select_all_columns(
    table: Table, where_values: Mapping[str, str] | None = None
) -> str:
    """Build a SELECT naming every non-hidden column in declaration order."""
    return build_select(table, [c.name for c in table.visible_columns], where_values)


def build_column_select(table: Table, column_name: str) -> str:
    """Build a SELECT for a single column, keeping required WHERE clauses."""
    return build_select(table, [column_name])


def query_templates(table: Table) -> list[QueryTemplate]:
    """Ready-made queries for ``table``: SELECT *, all columns, then shipped examples."""
    suffix = " (with WHERE)" if table.required_columns else ""
    templates = [
        QueryTemplate(title=f"SELECT * Query{suffix}", sql=build_select(table), source="generated"),
        QueryTemplate(
            title=f"All Columns Query{suffix}",
            sql=build_select_all_columns(table),
            source="generated",
        ),
    ]
    templates.extend(
        QueryTemplate(title=f"Example {i}", sql=example, source="example")
        for i, example in enumerate(table.examples, start=1)
    )
    return templates
