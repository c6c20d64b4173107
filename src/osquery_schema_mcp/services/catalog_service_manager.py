"""Catalog service manager for osquery-schema-mcp.

Provides a process-wide singleton `CatalogService`. The catalog is loaded
exactly once per process; a failed load is recorded and reported on every
later request instead of being retried, so a stale or broken dataset is never
silently served.
"""

from __future__ import annotations

from dataclasses import replace
import threading
import time
from typing import ClassVar

from fastmcp.utilities.logging import get_logger

from osquery_schema_mcp.catalog.exceptions import SchemaLoadError
from osquery_schema_mcp.catalog.store import SchemaStore
from osquery_schema_mcp.services.catalog_service import CatalogService
from osquery_schema_mcp.services.config_service import ConfigService
from osquery_schema_mcp.services.state import CatalogLoadPhase, CatalogLoadState


class CatalogServiceManager:
    """Singleton manager for the CatalogService instance."""

    _instance: ClassVar[CatalogServiceManager | None] = None
    _lock: ClassVar[threading.Lock] = threading.Lock()

    def __init__(self, store: SchemaStore | None = None) -> None:
        """Initialize the manager.

        Args:
            store: Schema store to load from; defaults to the configured source
        """
        self._store = store or SchemaStore(ConfigService.get_schema_path())
        self._service: CatalogService | None = None
        self._load_lock = threading.Lock()
        self._logger = get_logger(__name__)
        self._state = CatalogLoadState(
            phase=CatalogLoadPhase.IDLE, source=self._store.source_label
        )

    @classmethod
    def get_instance(cls) -> CatalogServiceManager:
        """Get the singleton instance of CatalogServiceManager."""
        if cls._instance is None:
            with cls._lock:
                if cls._instance is None:
                    cls._instance = cls()
        return cls._instance

    @classmethod
    def reset_instance(cls) -> None:
        """Reset the singleton instance (primarily for testing)."""
        with cls._lock:
            cls._instance = None

    @property
    def state(self) -> CatalogLoadState:
        return self._state

    def get_catalog_service(self) -> CatalogService:
        """Return the catalog service, loading the catalog on first use.

        Raises:
            SchemaLoadError: If the catalog failed to load, now or earlier
        """
        if self._service is not None:
            return self._service

        with self._load_lock:
            if self._service is not None:
                return self._service
            if self._state.phase is CatalogLoadPhase.FAILED:
                msg = f"Schema catalog unavailable: {self._state.error_message}"
                raise SchemaLoadError(msg)

            self._state = replace(
                self._state, phase=CatalogLoadPhase.LOADING, started_at=time.time()
            )
            try:
                catalog = self._store.load()
            except SchemaLoadError as exc:
                self._state = replace(
                    self._state,
                    phase=CatalogLoadPhase.FAILED,
                    error_message=str(exc),
                    completed_at=time.time(),
                )
                self._logger.exception("Schema catalog load failed")
                raise

            self._service = CatalogService(catalog, result_limit=ConfigService.result_limit())
            self._state = replace(
                self._state, phase=CatalogLoadPhase.READY, completed_at=time.time()
            )
            self._logger.info("Catalog service ready with %d tables", len(catalog))
            return self._service
