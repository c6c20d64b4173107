"""osquery-schema-mcp package for osquery schema lookup and query templates.

Provides Model Context Protocol (FastMCP) server capabilities for searching
the osquery schema catalog and generating copy-paste ready SELECT statements
that honor each table's required WHERE columns.
"""

from osquery_schema_mcp.models import (
    BuiltQuery,
    ColumnHit,
    ColumnResults,
    QueryValidationResult,
    SearchResults,
    TableInfo,
    TableResults,
    TableSummary,
)
from osquery_schema_mcp.services import CatalogService, CatalogServiceManager, ConfigService

__all__ = [  # noqa: RUF022
    # Core models
    "BuiltQuery",
    "ColumnHit",
    "ColumnResults",
    "QueryValidationResult",
    "SearchResults",
    "TableInfo",
    "TableResults",
    "TableSummary",
    # Services
    "CatalogService",
    "CatalogServiceManager",
    "ConfigService",
]
