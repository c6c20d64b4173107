"""Tests for the keyword categorization rules."""

from __future__ import annotations

import pytest

from osquery_schema_mcp.catalog import (
    CATEGORY_RULES,
    Catalog,
    Category,
    CategoryRule,
    SchemaStore,
    categorize,
    category_info,
)
from osquery_schema_mcp.catalog.categorizer import parse_category


@pytest.mark.parametrize(
    ("table_name", "expected"),
    [
        ("processes", Category.PROCESS),
        ("process_open_sockets", Category.PROCESS),
        ("process_events", Category.PROCESS),
        ("file", Category.FILESYSTEM),
        ("users", Category.USERS),
        ("windows_eventlog", Category.LOGS),
        ("yara", Category.SECURITY),
        ("zebra_widgets", Category.OTHER),
    ],
)
def test_categorize_fixture_tables(catalog: Catalog, table_name: str, expected: Category) -> None:
    table = catalog.get(table_name)
    assert table is not None
    assert categorize(table) is expected


def test_process_rule_precedes_logs_rule() -> None:
    order = [rule.category for rule in CATEGORY_RULES]
    assert order.index(Category.PROCESS) < order.index(Category.LOGS)


def test_rules_never_assign_sentinels() -> None:
    assigned = {rule.category for rule in CATEGORY_RULES}
    assert Category.ALL not in assigned
    assert Category.OTHER not in assigned


def test_rule_matches_lowercase_substring() -> None:
    rule = CategoryRule(Category.HARDWARE, ("usb", "pci"))
    assert rule.matches("usb_devices attached devices")
    assert not rule.matches("kernel_info")


def test_categorize_is_deterministic_and_total() -> None:
    catalog = SchemaStore().load()
    for table in catalog:
        first = categorize(table)
        assert first is not Category.ALL
        assert categorize(table) is first


def test_category_info_rank_follows_display_order() -> None:
    ranks = [category_info(c).rank for c in Category]
    assert ranks == sorted(ranks)
    assert category_info(Category.ALL).rank == 0
    assert category_info(Category.USERS).label == "Users & Groups"
    assert category_info(Category.OTHER).rank == len(Category) - 1


def test_parse_category() -> None:
    assert parse_category("network") is Category.NETWORK
    assert parse_category(Category.SYSTEM) is Category.SYSTEM
    assert parse_category("nonsense") is None


@pytest.mark.parametrize(
    ("table_name", "expected"),
    [
        ("processes", Category.PROCESS),
        ("process_events", Category.PROCESS),
        ("listening_ports", Category.PROCESS),
        ("mounts", Category.FILESYSTEM),
    ],
)
def test_categorize_bundled_tables(table_name: str, expected: Category) -> None:
    table = SchemaStore().load().get(table_name)
    assert table is not None
    assert categorize(table) is expected
