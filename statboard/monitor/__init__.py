"""Host metrics, endpoint checks and the shared published state."""

from .collector import Collector
from .models import HealthCheckResult, PublishedState, SystemSnapshot
from .store import ReadWriteLock, SnapshotStore
