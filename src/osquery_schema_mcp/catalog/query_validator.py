"""Validation of hand-written osquery SQL against the catalog.

Uses sqlglot (SQLite dialect, which osquery speaks) to parse a query and then
checks the referenced tables and columns against the loaded catalog. Like the
rest of the catalog API it never raises on user input; problems are reported
in a typed result.
"""

from __future__ import annotations

from functools import lru_cache
import logging

import sqlglot
from sqlglot import expressions as sgl_exp
from sqlglot.errors import SqlglotError

from osquery_schema_mcp.models import QueryValidationResult

from .constants import PLATFORM_IDS, Platform
from .display import platform_label
from .models import Catalog, Table

OSQUERY_DIALECT = "sqlite"


@lru_cache(maxsize=256)
def _cached_parse(sql: str, dialect: str) -> tuple[sgl_exp.Expression | None, ...]:
    """Small cache for parse results to speed up repetitive calls."""
    return tuple(sqlglot.parse(sql, read=dialect))


def _constrained_columns(statement: sgl_exp.Expression) -> set[tuple[str, str]]:
    """Columns constrained by WHERE or JOIN conditions.

    Each entry is ``(qualifier, name)`` lower-cased, where the qualifier is the
    table alias written in the query or ``""`` for an unqualified column.
    """
    names: set[tuple[str, str]] = set()
    for clause in statement.find_all(sgl_exp.Where, sgl_exp.Join):
        for predicate in clause.find_all(sgl_exp.EQ, sgl_exp.In, sgl_exp.Like):
            names.update(
                (col.table.lower(), col.name.lower())
                for col in predicate.find_all(sgl_exp.Column)
            )
        if isinstance(clause, sgl_exp.Join):
            names.update(("", ident.name.lower()) for ident in clause.args.get("using") or [])
    return names


class QueryValidator:
    """Checks SELECT statements against a schema catalog.

    Attributes:
        catalog: Catalog the query is checked against
        dialect: sqlglot dialect used for parsing
    """

    def __init__(
        self,
        catalog: Catalog,
        dialect: str = OSQUERY_DIALECT,
        logger: logging.Logger | None = None,
    ) -> None:
        self.catalog = catalog
        self.dialect = dialect
        self._logger = logger or logging.getLogger(__name__)

    def validate(self, sql: str, platform: Platform | str = Platform.ALL) -> QueryValidationResult:
        """Parse ``sql`` and check it against the catalog.

        Args:
            sql: Query text to validate
            platform: Platform the query is meant to run on; ``"all"`` skips
                the availability check

        Returns:
            QueryValidationResult with errors, warnings and notes
        """
        if not sql.strip():
            return QueryValidationResult(is_valid=False, errors=["Query is empty"])

        try:
            statements = [s for s in _cached_parse(sql, self.dialect) if s is not None]
        except SqlglotError as exc:
            self._logger.debug("Parse failed: %s", exc)
            return QueryValidationResult(is_valid=False, errors=[f"SQL parsing error: {exc}"])

        if len(statements) != 1:
            return QueryValidationResult(
                is_valid=False,
                errors=[f"Expected a single statement, found {len(statements)}"],
            )

        statement = statements[0]
        if not isinstance(statement, sgl_exp.Query):
            return QueryValidationResult(
                is_valid=False,
                errors=["Only SELECT queries can be run against osquery tables"],
            )

        errors: list[str] = []
        warnings: list[str] = []
        notes: list[str] = []

        referenced = self._resolve_tables(statement, errors)
        tables = list(dict.fromkeys(referenced.values()))

        warnings.extend(self._check_columns(statement, referenced, tables))
        warnings.extend(self._check_required(statement, referenced))
        warnings.extend(self._check_platform(tables, platform))
        notes.extend(
            f"Table '{t.name}' is evented; rows only appear when its event publisher is enabled"
            for t in tables
            if t.evented
        )

        return QueryValidationResult(
            is_valid=not errors,
            errors=errors,
            warnings=warnings,
            notes=notes,
            tables=[t.name for t in tables],
            normalized_sql=statement.sql(dialect=self.dialect, pretty=True),
        )

    # ---- checks ---------------------------------------------------------
    def _resolve_tables(
        self, statement: sgl_exp.Expression, errors: list[str]
    ) -> dict[str, Table]:
        """Map each alias (or bare name) used in the query to its catalog table."""
        cte_names = {cte.alias_or_name.lower() for cte in statement.find_all(sgl_exp.CTE)}
        referenced: dict[str, Table] = {}
        unknown: list[str] = []

        for node in statement.find_all(sgl_exp.Table):
            name = node.name
            if not name or name.lower() in cte_names:
                continue
            table = self.catalog.get(name)
            if table is None:
                if name not in unknown:
                    unknown.append(name)
                continue
            referenced[node.alias_or_name.lower()] = table

        errors.extend(f"Unknown table: {name}" for name in unknown)
        return referenced

    def _check_columns(
        self,
        statement: sgl_exp.Expression,
        referenced: dict[str, Table],
        tables: list[Table],
    ) -> list[str]:
        if not tables:
            return []
        aliases = {a.alias.lower() for a in statement.find_all(sgl_exp.Alias) if a.alias}
        problems: list[str] = []

        for column in statement.find_all(sgl_exp.Column):
            name = column.name
            if not name or name == "*" or name.lower() in aliases:
                continue
            qualifier = column.table.lower()
            if qualifier:
                owner = referenced.get(qualifier)
                if owner is None:
                    continue
                candidates = [owner]
            else:
                candidates = tables
            if all(t.get_column(name) is None for t in candidates):
                where = ", ".join(t.name for t in candidates)
                message = f"Column '{name}' not found in {where}"
                if message not in problems:
                    problems.append(message)
        return problems

    def _check_required(
        self, statement: sgl_exp.Expression, referenced: dict[str, Table]
    ) -> list[str]:
        """Report required columns left unconstrained for each table reference.

        A qualified constraint only counts for the alias it names; an
        unqualified one counts for every referenced table.
        """
        constrained = _constrained_columns(statement)
        problems: list[str] = []
        for alias, table in referenced.items():
            missing = [
                c.name
                for c in table.required_columns
                if (alias, c.name.lower()) not in constrained
                and ("", c.name.lower()) not in constrained
            ]
            message = f"Table '{table.name}' requires a WHERE constraint on: {', '.join(missing)}"
            if missing and message not in problems:
                problems.append(message)
        return problems

    def _check_platform(self, tables: list[Table], platform: Platform | str) -> list[str]:
        value = platform.value if isinstance(platform, Platform) else platform
        if value == Platform.ALL.value:
            return []
        if value not in PLATFORM_IDS:
            return [f"Unknown platform: {value}"]
        label = platform_label(value)
        return [
            f"Table '{t.name}' is not available on {label}"
            for t in tables
            if value not in t.platforms
        ]
