"""Custom exception hierarchy for the schema catalog.

The hierarchy separates fatal load-time failures from lookup failures raised
by the service layer. Filtering, searching and query synthesis never raise for
user-supplied values; they are total over their input domain.

Exception Categories:
- Load errors for a missing, unreadable or malformed dataset
- Validation errors for structural violations, aggregated into one report
- Lookup errors for table names that are not in the catalog
"""

from __future__ import annotations


class CatalogError(Exception):
    """Base exception for schema catalog operations."""


class SchemaLoadError(CatalogError):
    """Raised when the schema dataset cannot be loaded.

    This exception is raised when:
    - The dataset file does not exist or cannot be read
    - The file content is not valid JSON
    - The top-level value is not a list of tables
    """


class SchemaValidationError(SchemaLoadError):
    """Raised when the dataset fails structural validation.

    Every violation found in the dataset is collected before raising, so a
    single error reports all of them at once.

    Attributes:
        violations: Human-readable description of each violation
    """

    def __init__(self, violations: list[str]) -> None:
        self.violations = list(violations)
        lines = "\n".join(f"  - {v}" for v in self.violations)
        super().__init__(
            f"Schema validation failed with {len(self.violations)} violation(s):\n{lines}"
        )


class TableNotFoundError(CatalogError, LookupError):
    """Raised when a requested table is not present in the catalog."""

    def __init__(self, table_name: str) -> None:
        self.table_name = table_name
        super().__init__(f"Unknown table: {table_name}")
