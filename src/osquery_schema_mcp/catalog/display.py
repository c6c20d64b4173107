"""Display hints derived from catalog entities."""

from __future__ import annotations

from typing import Literal

from .constants import PLATFORM_LABELS, Constants
from .models import Column, Table

TypeHint = Literal["integer", "text", "double", "other"]


def type_hint(declared_type: str) -> TypeHint:
    """Classify a declared column type, case-insensitively."""
    upper = declared_type.strip().upper()
    if upper in Constants.INTEGER_TYPES:
        return "integer"
    if upper in Constants.TEXT_TYPES:
        return "text"
    if upper in Constants.DOUBLE_TYPES:
        return "double"
    return "other"


def value_placeholder(column: Column) -> str:
    """Example value shown next to an input for a required column."""
    return "e.g. 123" if type_hint(column.type) == "integer" else "e.g. value"


def platform_label(platform: str) -> str:
    return PLATFORM_LABELS.get(platform, platform)


def docs_url(table: Table) -> str:
    return f"{Constants.DOCS_BASE_URL}#{table.name}"
