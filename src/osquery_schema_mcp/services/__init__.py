"""Services package for osquery-schema-mcp.

This package contains service classes that handle business logic and
orchestration. Services coordinate between the catalog module and the
response builders.

Main Components:
- ConfigService: Environment-driven configuration
- CatalogService: Search, lookup and query synthesis over a loaded catalog
- CatalogServiceManager: Process-wide, load-once access to CatalogService
"""

from .catalog_service import CatalogService
from .catalog_service_manager import CatalogServiceManager
from .config_service import ConfigService

__all__ = [
    "CatalogService",
    "CatalogServiceManager",
    "ConfigService",
]
