"""Runtime models shared by the collector, the store and the dashboard."""

from __future__ import annotations

from dataclasses import dataclass, field
from datetime import datetime


@dataclass(frozen=True)
class HealthCheckResult:
    """Outcome of polling one endpoint during a collection cycle."""

    healthy: bool
    status_code: int | None = None
    message: str = ""
    latency_ms: float = 0.0


@dataclass(frozen=True)
class SystemSnapshot:
    """Point-in-time host metrics. Byte counts are raw, percentages 0-100."""

    cpu: tuple[float, ...] = ()
    memory_used: int = 0
    memory_total: int = 0
    memory_percent: float = 0.0
    disk_used: int = 0
    disk_total: int = 0
    disk_percent: float = 0.0
    captured_at: datetime | None = None  # None until the first cycle


@dataclass(frozen=True)
class PublishedState:
    """Snapshot + results from exactly one collection cycle.

    ``results`` is aligned index-for-index with the configured health checks.
    """

    snapshot: SystemSnapshot = field(default_factory=SystemSnapshot)
    results: tuple[HealthCheckResult, ...] = ()
    cycle: int = 0

    @classmethod
    def empty(cls, check_count: int) -> PublishedState:
        """Zero-valued state published before the first cycle completes."""
        pending = HealthCheckResult(healthy=False, message="pending")
        return cls(results=(pending,) * check_count)
