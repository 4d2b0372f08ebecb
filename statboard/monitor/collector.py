"""Background collector — samples host metrics and polls endpoints.

Once per refresh interval the collector builds a brand new PublishedState
(snapshot + aligned health results) and swaps it into the SnapshotStore in a
single publish. psutil and httpx calls are blocking, so each cycle runs them
in a thread pool to keep the event loop free for request handlers.
"""

from __future__ import annotations

import asyncio
import logging
from concurrent.futures import ThreadPoolExecutor
from datetime import datetime, timezone

import httpx

from ..site import SiteConfig
from .checks import run_health_checks
from .metrics import Usage, sample_cpu, sample_disk, sample_memory
from .models import PublishedState, SystemSnapshot
from .store import SnapshotStore

logger = logging.getLogger(__name__)


class Collector:
    """Runs collection cycles at the site's refresh interval."""

    def __init__(
        self,
        config: SiteConfig,
        store: SnapshotStore,
        timeout: float = 10.0,
        disk_path: str = "/",
        cpu_per_core: bool = True,
        transport: httpx.BaseTransport | None = None,
    ) -> None:
        self.config = config
        self.store = store
        self.interval = float(config.refresh_interval_seconds)
        self.timeout = timeout
        self.disk_path = disk_path
        self.cpu_per_core = cpu_per_core
        self.transport = transport
        self._executor: ThreadPoolExecutor | None = None
        self._task: asyncio.Task[None] | None = None
        self._running = False

    async def start(self) -> None:
        """Start the background collection loop."""
        if self._running:
            return
        self._running = True
        self._task = asyncio.create_task(self._collect_loop(), name="statboard-collector")
        logger.info(
            "Collector started: %d health checks, interval=%ss",
            len(self.config.healthchecks), self.interval,
        )

    async def stop(self) -> None:
        """Cancel the loop and wait for it to exit."""
        self._running = False
        if self._task:
            self._task.cancel()
            try:
                await self._task
            except asyncio.CancelledError:
                pass
            self._task = None
        if self._executor is not None:
            # an in-flight poll finishes on its own within the httpx timeout
            self._executor.shutdown(wait=False, cancel_futures=True)
            self._executor = None
        logger.info("Collector stopped")

    async def run_cycle(self) -> PublishedState:
        """Run one full collection cycle and publish its result."""
        loop = asyncio.get_running_loop()
        previous = self.store.read()
        executor = self._get_executor()

        snapshot = await loop.run_in_executor(executor, self._sample_system, previous.snapshot)
        results = await loop.run_in_executor(
            executor,
            run_health_checks,
            self.config.healthchecks,
            self.timeout,
            self.transport,
        )

        state = PublishedState(snapshot=snapshot, results=results, cycle=previous.cycle + 1)
        self.store.publish(state)

        logger.debug(
            "Cycle %d published: cpu=%s mem=%.1f%% disk=%.1f%% healthy=%d/%d",
            state.cycle, list(snapshot.cpu), snapshot.memory_percent, snapshot.disk_percent,
            sum(r.healthy for r in results), len(results),
        )
        return state

    def _get_executor(self) -> ThreadPoolExecutor:
        """Thread pool for blocking work; recreated after stop()."""
        if self._executor is None:
            self._executor = ThreadPoolExecutor(max_workers=2, thread_name_prefix="collector")
        return self._executor

    def _sample_system(self, previous: SystemSnapshot) -> SystemSnapshot:
        """Sample CPU, memory and disk; keep the previous values on failure."""
        cpu = sample_cpu(self.cpu_per_core)
        memory = sample_memory() or Usage(
            previous.memory_used, previous.memory_total, previous.memory_percent,
        )
        disk = sample_disk(self.disk_path) or Usage(
            previous.disk_used, previous.disk_total, previous.disk_percent,
        )
        return SystemSnapshot(
            cpu=cpu,
            memory_used=memory.used,
            memory_total=memory.total,
            memory_percent=memory.percent,
            disk_used=disk.used,
            disk_total=disk.total,
            disk_percent=disk.percent,
            captured_at=datetime.now(timezone.utc),
        )

    async def _collect_loop(self) -> None:
        """Collect, publish, sleep; until cancelled."""
        while self._running:
            try:
                await self.run_cycle()
            except asyncio.CancelledError:
                raise
            except Exception:
                logger.exception("Collection cycle failed")
            await asyncio.sleep(self.interval)
