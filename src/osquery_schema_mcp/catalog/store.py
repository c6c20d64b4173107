"""Schema store: load and validate the osquery schema dataset.

The dataset is a JSON list of table objects in the layout osquery publishes
for its schema. Loading happens once; validation is strict and aggregated so
that a broken dataset reports every violation in a single error.

Functions:
- parse_catalog(): Validate an already-decoded dataset into a Catalog
- SchemaStore: Reads the dataset from disk (or the bundled copy) and caches it
"""

from __future__ import annotations

from importlib import resources
import json
from pathlib import Path
import threading

from fastmcp.utilities.logging import get_logger
from pydantic import ValidationError

from .constants import PLATFORM_IDS, Constants
from .exceptions import SchemaLoadError, SchemaValidationError
from .models import Catalog, Table

_logger = get_logger(__name__)


def _entry_label(entry: object, position: int) -> str:
    """Describe a raw dataset entry for violation messages."""
    if isinstance(entry, dict):
        name = entry.get("name")
        if isinstance(name, str) and name:
            return f"table[{position}] '{name}'"
    return f"table[{position}]"


def _format_pydantic_error(error: dict[str, object]) -> str:
    loc = error.get("loc") or ()
    path = ".".join(str(part) for part in loc) if isinstance(loc, tuple) else str(loc)
    return f"{path}: {error.get('msg')}" if path else str(error.get("msg"))


def _check_table(table: Table, label: str) -> list[str]:
    """Return the structural violations of an individually well-formed table."""
    problems: list[str] = []

    if not table.platforms:
        problems.append(f"{label}: platform set is empty")
    unknown = sorted(set(table.platforms) - PLATFORM_IDS)
    if unknown:
        problems.append(f"{label}: unknown platform(s) {', '.join(unknown)}")

    seen: set[str] = set()
    for column in table.columns:
        if column.name in seen:
            problems.append(f"{label}: duplicate column '{column.name}'")
        seen.add(column.name)

        if column.platforms is None:
            continue
        outside = sorted(set(column.platforms) - set(table.platforms))
        if outside:
            problems.append(
                f"{label}: column '{column.name}' lists platform(s) "
                f"{', '.join(outside)} not available on the table"
            )

    return problems


def parse_catalog(raw: object) -> Catalog:
    """Validate a decoded dataset and build an immutable Catalog.

    Args:
        raw: Decoded JSON value, expected to be a list of table objects

    Returns:
        Catalog containing every table in dataset order

    Raises:
        SchemaLoadError: If the value is not a non-empty list
        SchemaValidationError: If any table violates the structural rules
    """
    if not isinstance(raw, list):
        msg = f"Schema dataset must be a list of tables, got {type(raw).__name__}"
        raise SchemaLoadError(msg)
    if not raw:
        msg = "Schema dataset contains no tables"
        raise SchemaLoadError(msg)

    violations: list[str] = []
    tables: list[Table] = []
    seen_names: set[str] = set()

    for position, entry in enumerate(raw):
        label = _entry_label(entry, position)
        try:
            table = Table.model_validate(entry)
        except ValidationError as exc:
            violations.extend(
                f"{label}: {_format_pydantic_error(dict(err))}" for err in exc.errors()
            )
            continue

        violations.extend(_check_table(table, label))
        if table.name in seen_names:
            violations.append(f"{label}: duplicate table name")
        seen_names.add(table.name)
        tables.append(table)

    if violations:
        raise SchemaValidationError(violations)

    return Catalog(tables=tuple(tables))


class SchemaStore:
    """Loads the schema dataset once and returns the same Catalog afterwards.

    Attributes:
        source: Path of the JSON dataset, or None for the bundled dataset
    """

    def __init__(self, source: Path | str | None = None) -> None:
        self.source = Path(source) if source is not None else None
        self._catalog: Catalog | None = None
        self._lock = threading.Lock()

    @property
    def source_label(self) -> str:
        return str(self.source) if self.source else f"bundled:{Constants.BUNDLED_SCHEMA_FILE}"

    def load(self) -> Catalog:
        """Return the validated catalog, loading it on first use.

        Raises:
            SchemaLoadError: If the dataset is missing, unreadable or malformed
            SchemaValidationError: If the dataset fails structural validation
        """
        if self._catalog is not None:
            return self._catalog
        with self._lock:
            if self._catalog is None:
                self._catalog = self._load_uncached()
        return self._catalog

    def _read_text(self) -> str:
        try:
            if self.source is None:
                resource = resources.files("osquery_schema_mcp") / "data"
                return (resource / Constants.BUNDLED_SCHEMA_FILE).read_text(encoding="utf-8")
            return self.source.read_text(encoding="utf-8")
        except (OSError, UnicodeDecodeError) as exc:
            msg = f"Cannot read schema dataset {self.source_label}: {exc}"
            raise SchemaLoadError(msg) from exc

    def _load_uncached(self) -> Catalog:
        _logger.info("Loading schema dataset from %s", self.source_label)
        text = self._read_text()
        try:
            raw = json.loads(text)
        except json.JSONDecodeError as exc:
            msg = f"Schema dataset {self.source_label} is not valid JSON: {exc}"
            raise SchemaLoadError(msg) from exc

        catalog = parse_catalog(raw)
        _logger.info(
            "Loaded %d tables with %d columns", len(catalog), catalog.column_count
        )
        return catalog
