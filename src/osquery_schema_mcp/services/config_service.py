"""Configuration service for osquery-schema-mcp.

This module centralizes environment variable handling: where the schema
dataset is read from, which platform searches default to, and how many items
a search response may carry.
"""

from __future__ import annotations

import os
from pathlib import Path

from fastmcp.utilities.logging import get_logger

from osquery_schema_mcp.catalog.constants import PLATFORM_IDS, Constants, Platform

_logger = get_logger(__name__)


class ConfigService:
    """Service for reading runtime configuration."""

    @staticmethod
    def get_schema_path() -> Path | None:
        """Get the schema dataset path from the environment.

        Returns:
            Path from OSQUERY_SCHEMA_MCP_SCHEMA_PATH, or None to use the
            bundled dataset
        """
        value = os.getenv("OSQUERY_SCHEMA_MCP_SCHEMA_PATH", "").strip()
        return Path(value).expanduser() if value else None

    @staticmethod
    def get_default_platform() -> str:
        """Platform used when a request does not name one.

        Reads OSQUERY_SCHEMA_MCP_DEFAULT_PLATFORM; unknown values fall back to
        the project default with a warning.
        """
        value = os.getenv("OSQUERY_SCHEMA_MCP_DEFAULT_PLATFORM", "").strip()
        if not value:
            return Constants.DEFAULT_PLATFORM
        if value == Platform.ALL.value or value in PLATFORM_IDS:
            return value
        _logger.warning(
            "Ignoring unknown default platform %r; using %s", value, Constants.DEFAULT_PLATFORM
        )
        return Constants.DEFAULT_PLATFORM

    @staticmethod
    def result_limit() -> int:
        """Maximum number of tables or columns returned by a search."""
        val = os.getenv("OSQUERY_SCHEMA_MCP_RESULT_LIMIT", str(Constants.DEFAULT_RESULT_LIMIT))
        try:
            limit = int(val)
        except ValueError:
            limit = Constants.DEFAULT_RESULT_LIMIT
        return max(1, limit)
