"""Builders package for osquery-schema-mcp.

This package contains builder classes that construct response models from
catalog entities. Builders transform tables and flattened columns into
structured pydantic models suitable for MCP responses.

Main Components:
- TableSummaryBuilder: Builds table search rows
- TableInfoBuilder: Builds full table detail views
- ColumnHitBuilder: Builds column search rows with multiplicity
"""

from .response_builders import ColumnHitBuilder, TableInfoBuilder, TableSummaryBuilder

__all__ = [
    "ColumnHitBuilder",
    "TableInfoBuilder",
    "TableSummaryBuilder",
]
