"""Pydantic models for MCP tool I/O.

Minimal, task-focused models returned by the MCP tools and produced by the
response builders. Search results are a tagged union discriminated by ``kind``
so callers never branch on request state to know what they received.
"""

from __future__ import annotations

from typing import Annotated, Literal

from pydantic import BaseModel, Field

# -----------------------
# Table models
# -----------------------


class TableSummary(BaseModel):
    """One row of a table search result."""

    name: str = Field(description="Table name")
    description: str = Field(description="What the table exposes")
    category: str = Field(description="Category identifier assigned by the keyword rules")
    category_label: str = Field(description="Human-readable category label")
    platforms: list[str] = Field(description="Platforms the table is available on")
    required_columns: list[str] = Field(
        description="Columns that must be constrained in WHERE for rows to be returned"
    )
    evented: bool = Field(description="Rows only appear when OS event publishers are enabled")
    column_count: int = Field(description="Number of non-hidden columns")


class ColumnInfo(BaseModel):
    """Column information for table detail views."""

    name: str = Field(description="Column name")
    type: str = Field(description="Declared osquery type (TEXT, INTEGER, BIGINT, DOUBLE, ...)")
    type_hint: Literal["integer", "text", "double", "other"] = Field(
        description="Normalized type family for display"
    )
    description: str = Field(description="Column description")
    required: bool = Field(description="Must be constrained in WHERE")
    index: bool = Field(description="Advisory index flag")
    platforms: list[str] = Field(description="Effective platforms of the column")
    notes: str = Field(default="", description="Free-form notes")
    value_placeholder: str | None = Field(
        default=None, description="Example value for required columns"
    )


class TableInfo(BaseModel):
    """Full detail for a single table."""

    name: str = Field(description="Table name")
    description: str = Field(description="What the table exposes")
    category: str = Field(description="Category identifier")
    category_label: str = Field(description="Human-readable category label")
    platforms: list[str] = Field(description="Platforms the table is available on")
    platform_labels: list[str] = Field(description="Display names of the platforms")
    evented: bool = Field(description="Rows only appear when OS event publishers are enabled")
    cacheable: bool = Field(description="Whether results may be cached by osquery")
    notes: str = Field(default="", description="Free-form notes")
    required_columns: list[str] = Field(description="Columns required in WHERE")
    columns: list[ColumnInfo] = Field(description="Non-hidden columns in declaration order")
    examples: list[str] = Field(default_factory=list, description="Example queries")
    docs_url: str = Field(description="osquery schema documentation link")
    spec_url: str = Field(description="Link to the table spec source")


# -----------------------
# Column models
# -----------------------


class ColumnHit(BaseModel):
    """One row of a column search result."""

    column: str = Field(description="Column name")
    table: str = Field(description="Owning table name")
    type: str = Field(description="Declared osquery type")
    type_hint: Literal["integer", "text", "double", "other"] = Field(
        description="Normalized type family for display"
    )
    description: str = Field(description="Column description")
    required: bool = Field(description="Must be constrained in WHERE")
    multiplicity: int = Field(
        description="Number of tables in the current result set exposing this column name"
    )
    related_tables: list[str] = Field(
        description="Other tables in the current result set exposing this column name"
    )


class ColumnLocation(BaseModel):
    """Reverse lookup result for a column name."""

    column: str = Field(description="Column name that was looked up")
    multiplicity: int = Field(description="Number of tables exposing the column")
    tables: list[TableSummary] = Field(description="Tables exposing the column, catalog order")


# -----------------------
# Search results (tagged union)
# -----------------------

SearchMode = Literal["tables", "columns"]


class TableResults(BaseModel):
    """Search results in table mode."""

    kind: Literal["tables"] = "tables"
    total: int = Field(description="Number of matches before truncation")
    truncated: bool = Field(description="True when results were capped by the result limit")
    tables: list[TableSummary] = Field(description="Matching tables in catalog order")


class ColumnResults(BaseModel):
    """Search results in column mode."""

    kind: Literal["columns"] = "columns"
    total: int = Field(description="Number of matches before truncation")
    truncated: bool = Field(description="True when results were capped by the result limit")
    columns: list[ColumnHit] = Field(
        description="Matching columns in table order, then column order"
    )


SearchResults = Annotated[TableResults | ColumnResults, Field(discriminator="kind")]


class CategoryCount(BaseModel):
    """Number of tables in a category."""

    category: str = Field(description="Category identifier")
    label: str = Field(description="Human-readable label")
    rank: int = Field(description="Display order")
    table_count: int = Field(description="Tables assigned to the category")


# -----------------------
# Query models
# -----------------------


class QueryTemplate(BaseModel):
    """A ready-to-copy query for a table."""

    title: str = Field(description="Short title of the template")
    sql: str = Field(description="Query text")
    source: Literal["generated", "example"] = Field(
        description="'generated' from the schema or 'example' shipped with the table"
    )


class BuiltQuery(BaseModel):
    """Result of synthesizing a SELECT statement."""

    table: str = Field(description="Table the query targets")
    sql: str = Field(description="Generated query text")
    required_columns: list[str] = Field(description="Columns constrained in WHERE")
    missing_values: list[str] = Field(
        description="Required columns still using the '<value>' placeholder"
    )
    unknown_columns: list[str] = Field(
        default_factory=list,
        description="Selected column names that are not visible columns of the table",
    )
    evented: bool = Field(description="Rows only appear when OS event publishers are enabled")


class QueryValidationResult(BaseModel):
    """Outcome of checking a query against the catalog."""

    is_valid: bool = Field(description="True when the query parses and references known tables")
    errors: list[str] = Field(default_factory=list, description="Blocking problems")
    warnings: list[str] = Field(
        default_factory=list, description="Likely problems (missing constraints, columns)"
    )
    notes: list[str] = Field(default_factory=list, description="Informational remarks")
    tables: list[str] = Field(default_factory=list, description="Catalog tables referenced")
    normalized_sql: str | None = Field(
        default=None, description="Pretty-printed SQL when parsing succeeds"
    )
