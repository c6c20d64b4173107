"""Response builders for osquery-schema-mcp.

This module contains builder classes that construct response models from
catalog entities. Each builder is responsible for transforming tables and
flattened columns into structured models suitable for MCP responses.
"""

from __future__ import annotations

from collections.abc import Mapping, Sequence

from osquery_schema_mcp.catalog.categorizer import categorize, category_info
from osquery_schema_mcp.catalog.display import (
    docs_url,
    platform_label,
    type_hint,
    value_placeholder,
)
from osquery_schema_mcp.catalog.models import Column, FlatColumn, Table
from osquery_schema_mcp.catalog.query_builder import required_columns
from osquery_schema_mcp.models import ColumnHit, ColumnInfo, TableInfo, TableSummary


class TableSummaryBuilder:
    """Builder for TableSummary objects."""

    @staticmethod
    def build(table: Table) -> TableSummary:
        info = category_info(categorize(table))
        return TableSummary(
            name=table.name,
            description=table.description,
            category=info.category.value,
            category_label=info.label,
            platforms=list(table.platforms),
            required_columns=required_columns(table),
            evented=table.evented,
            column_count=len(table.visible_columns),
        )

    @staticmethod
    def build_all(tables: Sequence[Table]) -> list[TableSummary]:
        return [TableSummaryBuilder.build(t) for t in tables]


class TableInfoBuilder:
    """Builder for TableInfo objects."""

    @staticmethod
    def build(table: Table) -> TableInfo:
        """Build the full detail view of a table.

        Hidden columns are left out of the column list, but hidden required
        columns are still reported in ``required_columns``.
        """
        info = category_info(categorize(table))
        return TableInfo(
            name=table.name,
            description=table.description,
            category=info.category.value,
            category_label=info.label,
            platforms=list(table.platforms),
            platform_labels=[platform_label(p) for p in table.platforms],
            evented=table.evented,
            cacheable=table.cacheable,
            notes=table.notes,
            required_columns=required_columns(table),
            columns=[TableInfoBuilder._build_column(c, table) for c in table.visible_columns],
            examples=list(table.examples),
            docs_url=docs_url(table),
            spec_url=table.url,
        )

    @staticmethod
    def _build_column(column: Column, table: Table) -> ColumnInfo:
        return ColumnInfo(
            name=column.name,
            type=column.type,
            type_hint=type_hint(column.type),
            description=column.description,
            required=column.required,
            index=column.index,
            platforms=list(column.effective_platforms(table)),
            notes=column.notes,
            value_placeholder=value_placeholder(column) if column.required else None,
        )


class ColumnHitBuilder:
    """Builder for ColumnHit objects."""

    @staticmethod
    def build(flat_column: FlatColumn, occurrences: Mapping[str, Sequence[Table]]) -> ColumnHit:
        """Build a column search row.

        Args:
            flat_column: Column and owning table
            occurrences: Lower-cased column name to the tables exposing it,
                computed over the same result set the column came from
        """
        column, table = flat_column.column, flat_column.table
        related = occurrences.get(column.name.lower(), [table])
        return ColumnHit(
            column=column.name,
            table=table.name,
            type=column.type,
            type_hint=type_hint(column.type),
            description=column.description,
            required=column.required,
            multiplicity=len(related),
            related_tables=[t.name for t in related if t.name != table.name],
        )
