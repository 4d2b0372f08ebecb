"""Host metric sampling via psutil.

Every sampler is best effort: failures are logged and reported as an empty
or ``None`` result so the collection cycle can carry on.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass

import psutil

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class Usage:
    """Used / total bytes and used percentage of a resource."""

    used: int
    total: int
    percent: float


def sample_cpu(per_core: bool = True) -> tuple[float, ...]:
    """Instantaneous CPU utilisation relative to the previous call.

    Uses a zero-length window (``interval=None``) so the collector never
    blocks here. The very first call after process start returns zeros.
    """
    try:
        percent = psutil.cpu_percent(interval=None, percpu=per_core)
    except Exception as e:
        logger.warning("Error getting CPU percent: %s", e)
        return ()

    values = tuple(percent) if per_core else (percent,)
    if not values:
        logger.warning("Error getting CPU percent: no data returned")
    return values


def sample_memory() -> Usage | None:
    """Virtual memory usage, or None if psutil fails."""
    try:
        vm = psutil.virtual_memory()
    except Exception as e:
        logger.warning("Error getting memory info: %s", e)
        return None
    return Usage(used=vm.used, total=vm.total, percent=vm.percent)


def sample_disk(path: str = "/") -> Usage | None:
    """Filesystem usage for ``path``, or None if psutil fails."""
    try:
        du = psutil.disk_usage(path)
    except Exception as e:
        logger.warning("Error getting disk info for %s: %s", path, e)
        return None
    return Usage(used=du.used, total=du.total, percent=du.percent)
