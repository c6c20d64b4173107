"""MCP tool registration for schema catalog features.

Exposes a `register_catalog_tools` function that attaches tools to a FastMCP
instance while delegating actual logic to the `CatalogService` obtained via
`CatalogServiceManager`.
"""

from __future__ import annotations

from typing import Annotated, Literal

from fastmcp import Context, FastMCP
from fastmcp.utilities.logging import get_logger
from pydantic import Field

from osquery_schema_mcp.catalog.exceptions import CatalogError
from osquery_schema_mcp.catalog.filters import FilterParams
from osquery_schema_mcp.models import (
    BuiltQuery,
    CategoryCount,
    ColumnLocation,
    ColumnResults,
    QueryTemplate,
    QueryValidationResult,
    TableInfo,
    TableResults,
)
from osquery_schema_mcp.services.catalog_service import CatalogService
from osquery_schema_mcp.services.catalog_service_manager import CatalogServiceManager
from osquery_schema_mcp.services.config_service import ConfigService

_logger = get_logger(__name__)
MAX_QUERY_DISPLAY = 100

PlatformChoice = Literal["all", "darwin", "linux", "windows"]
CategoryChoice = Literal[
    "all",
    "process",
    "network",
    "filesystem",
    "hardware",
    "users",
    "logs",
    "system",
    "security",
    "applications",
    "other",
]


def _preview(text: str) -> str:
    return text[:MAX_QUERY_DISPLAY] + ("..." if len(text) > MAX_QUERY_DISPLAY else "")


def register_catalog_tools(mcp: FastMCP, manager: CatalogServiceManager | None = None) -> None:
    """Register osquery schema lookup and query-building tools."""

    mgr = manager or CatalogServiceManager.get_instance()

    async def _service(ctx: Context) -> CatalogService:
        try:
            return mgr.get_catalog_service()
        except CatalogError as exc:
            await ctx.error(f"Schema catalog not available: {exc}")
            raise

    @mcp.tool
    async def search_schema(  # pyright: ignore[reportUnusedFunction]
        ctx: Context,
        query: Annotated[
            str,
            Field(
                description=(
                    "Free text matched case-insensitively against table names, descriptions "
                    "and column names (column mode: column names and descriptions). "
                    "Empty returns everything that passes the other filters."
                )
            ),
        ] = "",
        platform: Annotated[
            PlatformChoice | None,
            Field(description="Platform filter; omit to use the configured default platform"),
        ] = None,
        category: Annotated[
            CategoryChoice, Field(description="Category filter; 'all' disables it")
        ] = "all",
        mode: Annotated[
            Literal["tables", "columns"],
            Field(description="'tables' returns tables, 'columns' returns flattened columns"),
        ] = "tables",
        limit: Annotated[
            int | None, Field(ge=1, description="Maximum number of items to return")
        ] = None,
    ) -> TableResults | ColumnResults:
        """Search the osquery schema by platform, category and free text.

        Filters apply in a fixed order: platform, then category, then text. In column mode
        each hit reports how many of the matching tables expose the same column name.
        """
        service = await _service(ctx)
        params = FilterParams(
            platform=platform or ConfigService.get_default_platform(),
            category=category,
            query=query,
        )
        _logger.info(
            "search_schema mode=%s platform=%s category=%s query=%s",
            mode,
            params.platform,
            params.category,
            _preview(query),
        )
        result = service.search(params, mode=mode, limit=limit)
        _logger.info("search_schema matched %d items", result.total)
        return result

    @mcp.tool
    async def get_table_info(  # pyright: ignore[reportUnusedFunction]
        ctx: Context,
        table_name: Annotated[str, Field(description="osquery table name, e.g. 'processes'")],
    ) -> TableInfo:
        """Describe a table: category, platforms, required WHERE columns, evented flag,
        visible columns with types, example queries and documentation links."""
        _logger.info("Retrieving table information for: %s", table_name)
        service = await _service(ctx)
        try:
            return service.get_table_info(table_name)
        except CatalogError as exc:
            await ctx.error(str(exc))
            raise

    @mcp.tool
    async def find_tables_with_column(  # pyright: ignore[reportUnusedFunction]
        ctx: Context,
        column_name: Annotated[
            str, Field(description="Exact column name (case-insensitive), e.g. 'pid'")
        ],
        platform: Annotated[
            PlatformChoice | None,
            Field(description="Platform filter; omit to use the configured default platform"),
        ] = None,
    ) -> ColumnLocation:
        """List every table exposing a column with this exact name, with the multiplicity."""
        service = await _service(ctx)
        effective = platform or ConfigService.get_default_platform()
        result = service.find_tables_with_column(column_name, effective)
        _logger.info(
            "Column %s found in %d tables on %s", column_name, result.multiplicity, effective
        )
        return result

    @mcp.tool
    async def build_select_query(  # pyright: ignore[reportUnusedFunction]
        ctx: Context,
        table_name: Annotated[str, Field(description="osquery table name")],
        columns: Annotated[
            list[str] | None,
            Field(description="Columns to select, in output order; omit for SELECT *"),
        ] = None,
        where_values: Annotated[
            dict[str, str] | None,
            Field(
                description=(
                    "Values for the table's required columns keyed by column name. "
                    "Missing values are rendered as the '<value>' placeholder."
                )
            ),
        ] = None,
        *,
        all_columns: Annotated[
            bool,
            Field(description="Select every visible column explicitly instead of '*'"),
        ] = False,
    ) -> BuiltQuery:
        """Generate a copy-paste ready SELECT for a table, including WHERE clauses for
        every required column."""
        service = await _service(ctx)
        try:
            return service.build_query(
                table_name, columns, where_values, all_columns=all_columns
            )
        except CatalogError as exc:
            await ctx.error(str(exc))
            raise

    @mcp.tool
    async def get_query_templates(  # pyright: ignore[reportUnusedFunction]
        ctx: Context,
        table_name: Annotated[str, Field(description="osquery table name")],
    ) -> list[QueryTemplate]:
        """Ready-made queries for a table: SELECT *, all columns, and shipped examples."""
        service = await _service(ctx)
        try:
            return service.get_query_templates(table_name)
        except CatalogError as exc:
            await ctx.error(str(exc))
            raise

    @mcp.tool
    async def list_categories(  # pyright: ignore[reportUnusedFunction]
        ctx: Context,
        platform: Annotated[
            PlatformChoice | None,
            Field(description="Platform filter; omit to use the configured default platform"),
        ] = None,
    ) -> list[CategoryCount]:
        """Table counts per category, in display order, for the category filter."""
        service = await _service(ctx)
        return service.list_categories(platform or ConfigService.get_default_platform())

    @mcp.tool
    async def validate_query(  # pyright: ignore[reportUnusedFunction]
        ctx: Context,
        sql: Annotated[str, Field(description="osquery SQL to check")],
        platform: Annotated[
            PlatformChoice | None,
            Field(description="Platform the query targets; omit to use the configured default"),
        ] = None,
    ) -> QueryValidationResult:
        """Check a query against the schema: unknown tables or columns, missing required
        WHERE constraints, evented tables and platform availability."""
        _logger.info("validate_query: %s", _preview(sql))
        service = await _service(ctx)
        return service.validate_query(sql, platform or ConfigService.get_default_platform())
