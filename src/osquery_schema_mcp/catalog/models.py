"""Data models for the schema catalog.

This module contains the entities the catalog is built from. Column and Table
are frozen pydantic models so that they double as the validation schema for
the raw dataset; Catalog and FlatColumn are plain frozen dataclasses derived
from validated tables.

Models:
- Column: A single column of an osquery table with query-relevant flags
- Table: An osquery table with platform availability and ordered columns
- Catalog: The complete immutable, ordered set of tables
- FlatColumn: A (column, owning table) pair produced by flattening
"""

from __future__ import annotations

from collections.abc import Iterator
from dataclasses import dataclass, field

from pydantic import BaseModel, ConfigDict, Field, field_validator


class Column(BaseModel):
    """A column of an osquery table.

    Attributes:
        name: Column name, unique within its table
        description: Human-readable description
        type: Declared type as free text (e.g. "TEXT", "BIGINT")
        notes: Free-form notes
        hidden: Excluded from listings and default SELECT lists
        required: Must be constrained in a WHERE clause for the table to return rows
        index: Advisory flag for indexed columns
        platforms: Platform subset for this column; None means the table's platforms
    """

    model_config = ConfigDict(frozen=True)

    name: str = Field(min_length=1)
    description: str = ""
    type: str = Field(min_length=1)
    notes: str = ""
    hidden: bool = False
    required: bool = False
    index: bool = False
    platforms: tuple[str, ...] | None = None

    @field_validator("name", "type", mode="before")
    @classmethod
    def _strip(cls, value: object) -> object:
        # Whitespace-only values must fail the min_length check.
        return value.strip() if isinstance(value, str) else value

    @field_validator("description", "notes", mode="before")
    @classmethod
    def _none_to_empty(cls, value: object) -> object:
        return "" if value is None else value

    def effective_platforms(self, table: Table) -> tuple[str, ...]:
        """Return the platforms this column is available on within ``table``."""
        return self.platforms if self.platforms is not None else table.platforms


class Table(BaseModel):
    """An osquery table.

    Attributes:
        name: Table name, unique across the catalog
        description: Human-readable description
        url: Link to the table's spec file
        platforms: Non-empty platform identifiers the table is available on
        evented: Rows only materialize when OS event subscription is active
        cacheable: Whether osquery may cache the table's results
        notes: Free-form notes
        examples: Example queries shipped with the table
        columns: Columns in declaration order
    """

    model_config = ConfigDict(frozen=True)

    name: str = Field(min_length=1)
    description: str = ""
    url: str = ""
    platforms: tuple[str, ...]
    evented: bool = False
    cacheable: bool = False
    notes: str = ""
    examples: tuple[str, ...] = ()
    columns: tuple[Column, ...] = ()

    @field_validator("name", mode="before")
    @classmethod
    def _strip_name(cls, value: object) -> object:
        return value.strip() if isinstance(value, str) else value

    @field_validator("description", "url", "notes", mode="before")
    @classmethod
    def _none_to_empty(cls, value: object) -> object:
        return "" if value is None else value

    @field_validator("examples", mode="before")
    @classmethod
    def _none_to_no_examples(cls, value: object) -> object:
        return () if value is None else value

    @property
    def visible_columns(self) -> list[Column]:
        """Columns that are not hidden, in declaration order."""
        return [c for c in self.columns if not c.hidden]

    @property
    def required_columns(self) -> list[Column]:
        """Columns that must appear in a WHERE clause, hidden ones included."""
        return [c for c in self.columns if c.required]

    def get_column(self, name: str) -> Column | None:
        """Look up a column by name, case-insensitively."""
        wanted = name.lower()
        for column in self.columns:
            if column.name.lower() == wanted:
                return column
        return None


@dataclass(frozen=True)
class Catalog:
    """Complete, immutable set of schema tables in dataset order."""

    tables: tuple[Table, ...]
    _by_name: dict[str, Table] = field(init=False, repr=False, compare=False)

    def __post_init__(self) -> None:
        object.__setattr__(self, "_by_name", {t.name: t for t in self.tables})

    def __iter__(self) -> Iterator[Table]:
        return iter(self.tables)

    def __len__(self) -> int:
        return len(self.tables)

    def __contains__(self, name: object) -> bool:
        return name in self._by_name

    def get(self, name: str) -> Table | None:
        """Return the table called ``name`` or None."""
        return self._by_name.get(name)

    @property
    def table_names(self) -> list[str]:
        return [t.name for t in self.tables]

    @property
    def column_count(self) -> int:
        return sum(len(t.columns) for t in self.tables)


@dataclass(frozen=True, slots=True)
class FlatColumn:
    """A column paired with the table that owns it."""

    column: Column
    table: Table

    @property
    def key(self) -> str:
        return f"{self.table.name}.{self.column.name}"
