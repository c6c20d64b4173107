"""Typed load state for the catalog service.

Internal module providing strongly-typed lifecycle state for
`CatalogServiceManager`. Not exposed outside the process.
"""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum, auto


class CatalogLoadPhase(Enum):
    """Load phase of the process-wide catalog."""

    IDLE = auto()
    LOADING = auto()
    READY = auto()
    FAILED = auto()


@dataclass(frozen=True)
class CatalogLoadState:
    """Snapshot of load state with timestamps and error details."""

    phase: CatalogLoadPhase
    started_at: float | None = None
    completed_at: float | None = None
    error_message: str | None = None
    source: str | None = None
