"""Tests for column flattening and reverse column lookup."""

from __future__ import annotations

from osquery_schema_mcp.catalog import (
    Catalog,
    column_occurrences,
    flatten,
    multiplicity,
    search_columns,
    tables_containing,
)


def test_flatten_skips_hidden_and_keeps_order(catalog: Catalog) -> None:
    flat = flatten(catalog.tables)
    keys = [fc.key for fc in flat]

    assert keys[:4] == [
        "processes.pid",
        "processes.name",
        "process_open_sockets.pid",
        "process_open_sockets.remote_port",
    ]
    assert "processes.upid" not in keys
    assert "yara.sigfile" not in keys
    assert len(flat) == sum(len(t.visible_columns) for t in catalog)


def test_tables_containing_is_case_insensitive(catalog: Catalog) -> None:
    names = [t.name for t in tables_containing("PID", catalog.tables)]
    assert names == ["processes", "process_open_sockets", "process_events"]


def test_tables_containing_is_exact_match(catalog: Catalog) -> None:
    assert tables_containing("pi", catalog.tables) == []


def test_tables_containing_ignores_hidden_columns(catalog: Catalog) -> None:
    assert tables_containing("upid", catalog.tables) == []
    assert tables_containing("sigfile", catalog.tables) == []


def test_multiplicity_matches_reverse_lookup(catalog: Catalog) -> None:
    assert multiplicity("pid", catalog.tables) == 3
    assert multiplicity("path", catalog.tables) == 2
    assert multiplicity("missing", catalog.tables) == 0
    for fc in flatten(catalog.tables):
        assert multiplicity(fc.column.name, catalog.tables) >= 1


def test_multiplicity_respects_subset(catalog: Catalog) -> None:
    linux_only = [t for t in catalog if "windows" not in t.platforms]
    assert multiplicity("pid", linux_only) == 1


def test_column_occurrences_agree_with_tables_containing(catalog: Catalog) -> None:
    occurrences = column_occurrences(catalog.tables)
    for name, tables in occurrences.items():
        assert tables == tables_containing(name, catalog.tables)
    assert "upid" not in occurrences


def test_search_columns_by_name_or_description(catalog: Catalog) -> None:
    flat = flatten(catalog.tables)
    assert [fc.key for fc in search_columns(flat, "port")] == ["process_open_sockets.remote_port"]
    by_description = [fc.key for fc in search_columns(flat, "bytes")]
    assert by_description == ["file.size"]
    assert search_columns(flat, "") == flat


def test_pid_lookup_over_two_process_tables(catalog: Catalog) -> None:
    subset = [t for t in catalog if t.name in {"processes", "process_open_sockets", "file"}]
    assert [t.name for t in tables_containing("pid", subset)] == [
        "processes",
        "process_open_sockets",
    ]
    assert multiplicity("pid", subset) == 2
