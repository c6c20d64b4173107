"""Tests for the catalog service and its singleton manager."""

from __future__ import annotations

import json
from pathlib import Path

from _pytest.monkeypatch import MonkeyPatch
import pytest

from osquery_schema_mcp.catalog import Catalog, FilterParams, SchemaLoadError, SchemaStore
from osquery_schema_mcp.catalog.exceptions import TableNotFoundError
from osquery_schema_mcp.models import ColumnResults, TableResults
from osquery_schema_mcp.services import CatalogService, CatalogServiceManager
from osquery_schema_mcp.services.state import CatalogLoadPhase


@pytest.fixture
def service(catalog: Catalog) -> CatalogService:
    return CatalogService(catalog, result_limit=50)


def test_search_tables_mode(service: CatalogService) -> None:
    res = service.search(FilterParams(platform="linux", category="process", query="pid"))
    assert isinstance(res, TableResults)
    assert res.kind == "tables"
    assert [t.name for t in res.tables] == ["processes", "process_open_sockets", "process_events"]
    assert res.total == 3
    assert res.truncated is False
    assert res.tables[2].evented is True


def test_search_truncates(service: CatalogService) -> None:
    res = service.search(FilterParams(), limit=2)
    assert isinstance(res, TableResults)
    assert len(res.tables) == 2
    assert res.total == 8
    assert res.truncated is True


def test_search_columns_mode(service: CatalogService) -> None:
    res = service.search(FilterParams(query="pid"), mode="columns")
    assert isinstance(res, ColumnResults)
    assert res.kind == "columns"
    assert [(c.table, c.column) for c in res.columns] == [
        ("processes", "pid"),
        ("process_open_sockets", "pid"),
        ("process_events", "pid"),
    ]
    first = res.columns[0]
    assert first.multiplicity == 3
    assert first.related_tables == ["process_open_sockets", "process_events"]
    assert first.type_hint == "integer"


def test_column_multiplicity_follows_filtered_set(service: CatalogService) -> None:
    res = service.search(FilterParams(platform="windows", query="pid"), mode="columns")
    assert isinstance(res, ColumnResults)
    assert {c.table for c in res.columns} == {"processes", "process_open_sockets"}
    assert all(c.multiplicity == 2 for c in res.columns)


def test_get_table_info_hides_hidden_columns(service: CatalogService) -> None:
    info = service.get_table_info("yara")
    assert info.category == "security"
    assert info.required_columns == ["path", "sigfile"]
    assert [c.name for c in info.columns] == ["path", "matches"]
    assert info.columns[0].value_placeholder == "e.g. value"
    assert info.columns[1].value_placeholder is None
    assert info.platform_labels == ["macOS", "Linux"]
    assert info.docs_url.endswith("#yara")


def test_unknown_table(service: CatalogService) -> None:
    with pytest.raises(TableNotFoundError, match="Unknown table: nope"):
        service.get_table_info("nope")
    with pytest.raises(LookupError):
        service.build_query("nope")


def test_find_tables_with_column(service: CatalogService) -> None:
    loc = service.find_tables_with_column("PID", "darwin")
    assert loc.multiplicity == 3
    assert [t.name for t in loc.tables] == ["processes", "process_open_sockets", "process_events"]
    assert service.find_tables_with_column("pid", "windows").multiplicity == 2


def test_list_categories(service: CatalogService) -> None:
    counts = service.list_categories("all")
    assert counts[0].category == "all"
    assert counts[0].table_count == 8
    by_name = {c.category: c.table_count for c in counts}
    assert by_name["process"] == 3
    assert by_name["other"] == 1
    assert by_name["hardware"] == 0
    assert sum(c.table_count for c in counts[1:]) == counts[0].table_count
    assert [c.rank for c in counts] == sorted(c.rank for c in counts)


def test_build_query_reports_missing_values(service: CatalogService) -> None:
    built = service.build_query("windows_eventlog", ["eventid", "bogus"], {"channel": "System"})
    assert built.sql.startswith("SELECT eventid,\n       bogus\nFROM windows_eventlog\n")
    assert built.required_columns == ["channel", "eventid"]
    assert built.missing_values == ["eventid"]
    assert built.unknown_columns == ["bogus"]


def test_build_query_drops_hidden_columns(service: CatalogService) -> None:
    built = service.build_query("processes", ["pid", "upid"])
    assert built.sql == "SELECT pid\nFROM processes;"
    assert "upid" not in built.sql
    assert built.unknown_columns == ["upid"]

    only_hidden = service.build_query("processes", ["UPID"])
    assert only_hidden.sql == "SELECT *\nFROM processes;"
    assert only_hidden.unknown_columns == ["UPID"]


def test_build_query_all_columns(service: CatalogService) -> None:
    built = service.build_query("processes", ["ignored"], all_columns=True)
    assert built.sql == "SELECT pid,\n       name\nFROM processes;"
    assert built.unknown_columns == []


def test_query_templates_and_validation(service: CatalogService) -> None:
    assert len(service.get_query_templates("processes")) == 3
    assert service.validate_query("SELECT * FROM users").is_valid is True


def test_manager_loads_once(tmp_path: Path, monkeypatch: MonkeyPatch, catalog: Catalog) -> None:
    calls: list[int] = []
    store = SchemaStore(tmp_path / "unused.json")

    def fake_load() -> Catalog:
        calls.append(1)
        return catalog

    monkeypatch.setattr(store, "load", fake_load)
    manager = CatalogServiceManager(store)

    assert manager.get_catalog_service() is manager.get_catalog_service()
    assert calls == [1]
    assert manager.state.phase is CatalogLoadPhase.READY


def test_manager_reports_failure_without_retry(tmp_path: Path) -> None:
    path = tmp_path / "schema.json"
    manager = CatalogServiceManager(SchemaStore(path))

    with pytest.raises(SchemaLoadError):
        manager.get_catalog_service()
    assert manager.state.phase is CatalogLoadPhase.FAILED

    path.write_text(json.dumps([{"name": "t", "platforms": ["linux"]}]), encoding="utf-8")
    with pytest.raises(SchemaLoadError, match="unavailable"):
        manager.get_catalog_service()


def test_singleton_uses_configured_path(tmp_path: Path, monkeypatch: MonkeyPatch) -> None:
    path = tmp_path / "schema.json"
    path.write_text(
        json.dumps([{"name": "only", "platforms": ["linux"], "columns": []}]), encoding="utf-8"
    )
    monkeypatch.setenv("OSQUERY_SCHEMA_MCP_SCHEMA_PATH", str(path))

    manager = CatalogServiceManager.get_instance()
    assert manager is CatalogServiceManager.get_instance()
    assert manager.get_catalog_service().catalog.table_names == ["only"]
    assert manager.state.source == str(path)
