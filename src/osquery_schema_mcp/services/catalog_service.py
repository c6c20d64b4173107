"""Catalog service for osquery-schema-mcp.

This module provides the business logic orchestration over a loaded catalog.
It threads explicit request parameters through the filter pipeline, column
index and query builder, and hands the results to the response builders.
"""

from __future__ import annotations

from collections.abc import Mapping, Sequence

from osquery_schema_mcp.builders import ColumnHitBuilder, TableInfoBuilder, TableSummaryBuilder
from osquery_schema_mcp.catalog.categorizer import categorize, category_info
from osquery_schema_mcp.catalog.column_index import (
    column_occurrences,
    flatten,
    search_columns,
    tables_containing,
)
from osquery_schema_mcp.catalog.constants import Category, Constants, Platform
from osquery_schema_mcp.catalog.exceptions import TableNotFoundError
from osquery_schema_mcp.catalog.filters import FilterParams, apply_filters, filter_by_platform
from osquery_schema_mcp.catalog.models import Catalog, Table
from osquery_schema_mcp.catalog.query_builder import (
    build_select,
    build_select_all_columns,
    query_templates,
    required_columns,
)
from osquery_schema_mcp.catalog.query_validator import QueryValidator
from osquery_schema_mcp.models import (
    BuiltQuery,
    CategoryCount,
    ColumnLocation,
    ColumnResults,
    QueryTemplate,
    QueryValidationResult,
    SearchMode,
    TableInfo,
    TableResults,
)


class CatalogService:
    """Service for orchestrating catalog search and query synthesis."""

    def __init__(self, catalog: Catalog, *, result_limit: int = Constants.DEFAULT_RESULT_LIMIT) -> None:
        """Initialize the service over an already-loaded catalog.

        Args:
            catalog: Immutable catalog shared by every request
            result_limit: Default cap on items per search response
        """
        self.catalog = catalog
        self.result_limit = max(1, result_limit)
        self._validator = QueryValidator(catalog)

    # ---- lookup -----------------------------------------------------------
    def get_table(self, table_name: str) -> Table:
        """Return the named table.

        Raises:
            TableNotFoundError: If the catalog has no such table
        """
        table = self.catalog.get(table_name)
        if table is None:
            raise TableNotFoundError(table_name)
        return table

    def get_table_info(self, table_name: str) -> TableInfo:
        return TableInfoBuilder.build(self.get_table(table_name))

    # ---- search -----------------------------------------------------------
    def search(
        self,
        params: FilterParams,
        mode: SearchMode = "tables",
        limit: int | None = None,
    ) -> TableResults | ColumnResults:
        """Run the filter pipeline and shape the result for the requested mode.

        In table mode the filtered tables are returned. In column mode the
        filtered tables are flattened and the flattened columns are narrowed
        again by the query against column name and description.
        """
        cap = max(1, limit) if limit is not None else self.result_limit
        tables = apply_filters(self.catalog.tables, params)

        if mode == "columns":
            flat = search_columns(flatten(tables), params.query)
            occurrences = column_occurrences(tables)
            return ColumnResults(
                total=len(flat),
                truncated=len(flat) > cap,
                columns=[ColumnHitBuilder.build(fc, occurrences) for fc in flat[:cap]],
            )

        return TableResults(
            total=len(tables),
            truncated=len(tables) > cap,
            tables=TableSummaryBuilder.build_all(tables[:cap]),
        )

    def find_tables_with_column(
        self, column_name: str, platform: Platform | str = Platform.ALL
    ) -> ColumnLocation:
        """Reverse lookup of the tables exposing ``column_name`` on ``platform``."""
        tables = tables_containing(column_name, filter_by_platform(self.catalog.tables, platform))
        return ColumnLocation(
            column=column_name,
            multiplicity=len(tables),
            tables=TableSummaryBuilder.build_all(tables),
        )

    def list_categories(self, platform: Platform | str = Platform.ALL) -> list[CategoryCount]:
        """Count tables per category on ``platform``, in display order."""
        tables = filter_by_platform(self.catalog.tables, platform)
        counts = dict.fromkeys(Category, 0)
        counts[Category.ALL] = len(tables)
        for table in tables:
            counts[categorize(table)] += 1

        result: list[CategoryCount] = []
        for category, count in counts.items():
            info = category_info(category)
            result.append(
                CategoryCount(
                    category=category.value, label=info.label, rank=info.rank, table_count=count
                )
            )
        return sorted(result, key=lambda c: c.rank)

    # ---- queries ----------------------------------------------------------
    def build_query(
        self,
        table_name: str,
        columns: Sequence[str] | None = None,
        where_values: Mapping[str, str] | None = None,
        *,
        all_columns: bool = False,
    ) -> BuiltQuery:
        """Synthesize a SELECT for ``table_name``.

        Args:
            table_name: Table to query
            columns: Selected column names in output order; ignored when
                ``all_columns`` is true
            where_values: Values for required columns
            all_columns: Select every non-hidden column instead of ``*``
        """
        table = self.get_table(table_name)
        values = dict(where_values or {})
        hidden = {c.name.lower() for c in table.columns if c.hidden}
        if all_columns:
            sql = build_select_all_columns(table, values)
            selected: list[str] = []
        else:
            selected = list(columns or [])
            # Hidden columns never reach the generated column list.
            shown = [name for name in selected if name.lower() not in hidden]
            sql = build_select(table, shown, values)

        visible = {c.name.lower() for c in table.visible_columns}
        required = required_columns(table)
        return BuiltQuery(
            table=table.name,
            sql=sql,
            required_columns=required,
            missing_values=[name for name in required if not values.get(name)],
            unknown_columns=[name for name in selected if name.lower() not in visible],
            evented=table.evented,
        )

    def get_query_templates(self, table_name: str) -> list[QueryTemplate]:
        return query_templates(self.get_table(table_name))

    def validate_query(
        self, sql: str, platform: Platform | str = Platform.ALL
    ) -> QueryValidationResult:
        return self._validator.validate(sql, platform)
