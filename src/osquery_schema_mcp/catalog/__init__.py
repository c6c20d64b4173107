"""Schema catalog module for osquery-schema-mcp.

Provides the in-memory osquery schema index and the pure operations over it:
loading and validation, the platform/category/text filter pipeline, keyword
categorization, column flattening and reverse lookup, SELECT synthesis, and
query validation.

Main Components:
- SchemaStore: Loads and validates the dataset once into a Catalog
- Filters: filter_by_platform, filter_by_category, search_tables, apply_filters
- Categorizer: Ordered first-match-wins keyword rules
- Column Index: flatten, tables_containing, multiplicity
- Query Builder: build_select, build_select_all_columns, query_templates
- QueryValidator: sqlglot-backed checks of hand-written queries

Example Usage:
    >>> from osquery_schema_mcp.catalog import SchemaStore, FilterParams, apply_filters
    >>> from osquery_schema_mcp.catalog import build_select
    >>>
    >>> catalog = SchemaStore().load()
    >>> tables = apply_filters(catalog.tables, FilterParams(platform="linux", query="pid"))
    >>> print(build_select(tables[0]))
"""

from .categorizer import CATEGORY_RULES, CategoryInfo, CategoryRule, categorize, category_info
from .column_index import (
    column_occurrences,
    flatten,
    multiplicity,
    search_columns,
    tables_containing,
)
from .constants import Category, Platform
from .exceptions import (
    CatalogError,
    SchemaLoadError,
    SchemaValidationError,
    TableNotFoundError,
)
from .filters import (
    FilterParams,
    apply_filters,
    filter_by_category,
    filter_by_platform,
    search_tables,
)
from .models import Catalog, Column, FlatColumn, Table
from .query_builder import (
    build_column_select,
    build_select,
    build_select_all_columns,
    query_templates,
    required_columns,
)
from .query_validator import QueryValidator
from .store import SchemaStore, parse_catalog

__all__ = [
    "CATEGORY_RULES",
    "Catalog",
    "CatalogError",
    "Category",
    "CategoryInfo",
    "CategoryRule",
    "Column",
    "FilterParams",
    "FlatColumn",
    "Platform",
    "QueryValidator",
    "SchemaLoadError",
    "SchemaStore",
    "SchemaValidationError",
    "Table",
    "TableNotFoundError",
    "apply_filters",
    "build_column_select",
    "build_select",
    "build_select_all_columns",
    "categorize",
    "category_info",
    "column_occurrences",
    "filter_by_category",
    "filter_by_platform",
    "flatten",
    "multiplicity",
    "parse_catalog",
    "query_templates",
    "required_columns",
    "search_columns",
    "search_tables",
    "tables_containing",
]
