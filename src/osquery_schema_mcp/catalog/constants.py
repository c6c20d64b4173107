"""Constants and enums for the schema catalog.

This module contains the closed platform and category sets, display labels,
and the literal values used when rendering query templates.
"""

from __future__ import annotations

from enum import Enum
from typing import Final


class Constants:
    """Configuration constants for the schema catalog."""

    # Defaults
    DEFAULT_PLATFORM: Final[str] = "darwin"
    DEFAULT_RESULT_LIMIT: Final[int] = 200
    BUNDLED_SCHEMA_FILE: Final[str] = "osquery_schema.json"

    # Query synthesis
    VALUE_PLACEHOLDER: Final[str] = "<value>"
    COLUMN_SEPARATOR: Final[str] = ",\n       "  # aligns under "SELECT "
    WHERE_SEPARATOR: Final[str] = "\n  AND "

    # Documentation links
    DOCS_BASE_URL: Final[str] = "https://osquery.io/schema/"

    # Type hints for display (upper-cased declared types)
    INTEGER_TYPES: Final[frozenset[str]] = frozenset(
        {"INTEGER", "BIGINT", "UNSIGNED_BIGINT", "UNSIGNED BIGINT"}
    )
    TEXT_TYPES: Final[frozenset[str]] = frozenset({"TEXT"})
    DOUBLE_TYPES: Final[frozenset[str]] = frozenset({"DOUBLE"})


class Platform(str, Enum):
    """Platform identifiers a table can be available on."""

    ALL = "all"  # Filter sentinel, never stored on a table
    DARWIN = "darwin"
    LINUX = "linux"
    WINDOWS = "windows"


# Identifiers allowed on tables and columns
PLATFORM_IDS: Final[frozenset[str]] = frozenset(
    p.value for p in Platform if p is not Platform.ALL
)

PLATFORM_LABELS: Final[dict[str, str]] = {
    Platform.DARWIN.value: "macOS",
    Platform.LINUX.value: "Linux",
    Platform.WINDOWS.value: "Windows",
    Platform.ALL.value: "All",
}


class Category(str, Enum):
    """Table categories in display order.

    ``ALL`` is the unfiltered sentinel and is never assigned to a table;
    ``OTHER`` is the fallback for tables no rule matches.
    """

    ALL = "all"
    PROCESS = "process"
    NETWORK = "network"
    FILESYSTEM = "filesystem"
    HARDWARE = "hardware"
    USERS = "users"
    LOGS = "logs"
    SYSTEM = "system"
    SECURITY = "security"
    APPLICATIONS = "applications"
    OTHER = "other"


CATEGORY_LABELS: Final[dict[Category, str]] = {
    Category.ALL: "All Categories",
    Category.PROCESS: "Processes",
    Category.NETWORK: "Network",
    Category.FILESYSTEM: "File System",
    Category.HARDWARE: "Hardware",
    Category.USERS: "Users & Groups",
    Category.LOGS: "Logs & Events",
    Category.SYSTEM: "System & Kernel",
    Category.SECURITY: "Security",
    Category.APPLICATIONS: "Applications",
    Category.OTHER: "Other",
}


__all__ = [
    "CATEGORY_LABELS",
    "PLATFORM_IDS",
    "PLATFORM_LABELS",
    "Category",
    "Constants",
    "Platform",
]
