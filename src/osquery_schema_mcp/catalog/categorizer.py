"""Keyword heuristic that assigns every table to exactly one category.

Rules are evaluated top to bottom against the lower-cased table name followed
by its description; the first rule with a matching keyword wins. Rule order is
part of the behavior: ``process_events`` matches both the process and the logs
keywords and must resolve to process.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Final

from .constants import CATEGORY_LABELS, Category
from .models import Table


@dataclass(frozen=True, slots=True)
class CategoryRule:
    """A category together with the keywords that select it."""

    category: Category
    keywords: tuple[str, ...]

    def matches(self, text: str) -> bool:
        """True when any keyword is a substring of the lower-cased ``text``."""
        return any(keyword in text for keyword in self.keywords)


@dataclass(frozen=True, slots=True)
class CategoryInfo:
    """Display information for a category."""

    category: Category
    label: str
    rank: int


CATEGORY_RULES: Final[tuple[CategoryRule, ...]] = (
    CategoryRule(
        Category.PROCESS,
        ("processes", "process_", "process executions", "thread", "proc_", "pipes"),
    ),
    CategoryRule(
        Category.NETWORK,
        (
            "socket",
            "network",
            "interface",
            "route",
            "arp_",
            "dns",
            "ports",
            "wifi",
            "etc_hosts",
            "iptables",
            "curl",
            "connectivity",
        ),
    ),
    CategoryRule(
        Category.SECURITY,
        (
            "certificate",
            "keychain",
            "firewall",
            "gatekeeper",
            "secureboot",
            "secure boot",
            "yara",
            "selinux",
            "apparmor",
            "bitlocker",
            "encryption",
            "sudoers",
            "authorization",
            "antivirus",
            "xprotect",
            "signature",
        ),
    ),
    CategoryRule(
        Category.USERS,
        ("user", "group", "login", "logged_in", "account", "shadow", "password"),
    ),
    CategoryRule(Category.LOGS, ("log", "event", "audit", "journal")),
    CategoryRule(
        Category.APPLICATIONS,
        (
            "application",
            "apps",
            "package",
            "program",
            "extension",
            "browser",
            "chrome",
            "firefox",
            "safari",
            "homebrew",
            "plugin",
        ),
    ),
    CategoryRule(
        Category.FILESYSTEM,
        ("file", "director", "disk", "mount", "volume", "hash", "xattr", "extended_attributes"),
    ),
    CategoryRule(
        Category.HARDWARE,
        (
            "hardware",
            "usb",
            "pci",
            "cpu",
            "memory",
            "battery",
            "smbios",
            "bios",
            "device",
            "temperature",
            "acpi",
            "chassis",
        ),
    ),
    CategoryRule(
        Category.SYSTEM,
        (
            "system",
            "kernel",
            "os_version",
            "uptime",
            "boot",
            "module",
            "driver",
            "sysctl",
            "startup",
            "service",
            "registry",
            "environment",
            "cron",
            "schedule",
            "osquery",
            "time",
        ),
    ),
)


def _classification_text(table: Table) -> str:
    return f"{table.name} {table.description}".lower()


def categorize(table: Table) -> Category:
    """Return the category of ``table``; never returns ``Category.ALL``."""
    text = _classification_text(table)
    for rule in CATEGORY_RULES:
        if rule.matches(text):
            return rule.category
    return Category.OTHER


def category_info(category: Category) -> CategoryInfo:
    """Return the label and display rank for ``category``."""
    rank = list(Category).index(category)
    return CategoryInfo(category=category, label=CATEGORY_LABELS[category], rank=rank)


def parse_category(value: Category | str) -> Category | None:
    """Resolve a category selector, returning None for unknown values."""
    if isinstance(value, Category):
        return value
    try:
        return Category(value)
    except ValueError:
        return None
