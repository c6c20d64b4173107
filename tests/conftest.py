"""Shared fixtures: a small hand-written catalog covering the interesting flags."""

from __future__ import annotations

from collections.abc import Iterator
from typing import Any

import pytest

from osquery_schema_mcp.catalog import Catalog, parse_catalog
from osquery_schema_mcp.services import CatalogServiceManager


def _col(name: str, type_: str = "TEXT", description: str = "", **flags: Any) -> dict[str, Any]:
    return {"name": name, "type": type_, "description": description, **flags}


def raw_tables() -> list[dict[str, Any]]:
    """Dataset entries in the published osquery JSON layout."""
    return [
        {
            "name": "processes",
            "description": "All running processes on the host system.",
            "url": "https://example.invalid/processes.table",
            "platforms": ["darwin", "linux", "windows"],
            "examples": ["SELECT * FROM processes WHERE pid = 1;"],
            "columns": [
                _col("pid", "BIGINT", "Process (or thread) ID", index=True),
                _col("name", "TEXT", "The process path or shorthand argv[0]"),
                _col("upid", "BIGINT", "A 64bit pid that is never reused", hidden=True,
                     platforms=["darwin"]),
            ],
        },
        {
            "name": "process_open_sockets",
            "description": "Processes which have open network sockets on the system.",
            "platforms": ["darwin", "linux", "windows"],
            "columns": [
                _col("pid", "INTEGER", "Process (or thread) ID"),
                _col("remote_port", "INTEGER", "Socket remote port"),
            ],
        },
        {
            "name": "process_events",
            "description": "Track time/action process executions.",
            "platforms": ["darwin", "linux"],
            "evented": True,
            "columns": [
                _col("pid", "BIGINT", "Process (or thread) ID"),
                _col("eid", "TEXT", "Event ID", hidden=True),
            ],
        },
        {
            "name": "file",
            "description": "Interactive filesystem attributes and metadata.",
            "platforms": ["darwin", "linux", "windows"],
            "columns": [
                _col("path", "TEXT", "Absolute file path", required=True, index=True),
                _col("size", "BIGINT", "Size of file in bytes"),
            ],
        },
        {
            "name": "users",
            "description": "Local user accounts.",
            "platforms": ["darwin", "linux", "windows"],
            "columns": [
                _col("uid", "BIGINT", "User ID"),
                _col("username", "TEXT", "Username"),
            ],
        },
        {
            "name": "windows_eventlog",
            "description": "Table for querying all recorded Windows event logs.",
            "platforms": ["windows"],
            "columns": [
                _col("channel", "TEXT", "Source or channel of the event", required=True),
                _col("eventid", "INTEGER", "Event ID of the event", required=True),
                _col("secret_token", "TEXT", "Hidden lookup token", hidden=True),
            ],
        },
        {
            "name": "yara",
            "description": "Track YARA matches for files specified in configuration data.",
            "platforms": ["darwin", "linux"],
            "columns": [
                _col("path", "TEXT", "The path scanned", required=True),
                _col("sigfile", "TEXT", "Signature file used", required=True, hidden=True),
                _col("matches", "TEXT", "List of YARA matches"),
            ],
        },
        {
            "name": "zebra_widgets",
            "description": "Nothing any rule recognizes.",
            "platforms": ["linux"],
            "columns": [_col("stripes", "DOUBLE", "Stripe count")],
        },
    ]


@pytest.fixture
def raw_dataset() -> list[dict[str, Any]]:
    return raw_tables()


@pytest.fixture
def catalog(raw_dataset: list[dict[str, Any]]) -> Catalog:
    return parse_catalog(raw_dataset)


@pytest.fixture(autouse=True)
def _reset_manager() -> Iterator[None]:
    CatalogServiceManager.reset_instance()
    yield
    CatalogServiceManager.reset_instance()
