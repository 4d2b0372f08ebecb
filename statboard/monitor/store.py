"""Snapshot store — the single shared, reader/writer-locked PublishedState.

One writer (the collector) replaces the whole state once per cycle; any
number of request handlers read it concurrently. States are immutable, so a
reader can keep using the object it got after the lock is released.
"""

from __future__ import annotations

import threading
from collections.abc import Iterator
from contextlib import contextmanager

from .models import PublishedState


class ReadWriteLock:
    """Many readers or one writer. Waiting writers block new readers."""

    def __init__(self) -> None:
        self._cond = threading.Condition(threading.Lock())
        self._readers = 0
        self._writer = False
        self._writers_waiting = 0

    def acquire_read(self) -> None:
        with self._cond:
            while self._writer or self._writers_waiting:
                self._cond.wait()
            self._readers += 1

    def release_read(self) -> None:
        with self._cond:
            self._readers -= 1
            if self._readers == 0:
                self._cond.notify_all()

    def acquire_write(self) -> None:
        with self._cond:
            self._writers_waiting += 1
            try:
                while self._writer or self._readers:
                    self._cond.wait()
            finally:
                self._writers_waiting -= 1
            self._writer = True

    def release_write(self) -> None:
        with self._cond:
            self._writer = False
            self._cond.notify_all()

    @contextmanager
    def read_locked(self) -> Iterator[None]:
        self.acquire_read()
        try:
            yield
        finally:
            self.release_read()

    @contextmanager
    def write_locked(self) -> Iterator[None]:
        self.acquire_write()
        try:
            yield
        finally:
            self.release_write()


class SnapshotStore:
    """Holds the latest PublishedState for concurrent readers."""

    def __init__(self, check_count: int) -> None:
        self.check_count = check_count
        self._lock = ReadWriteLock()
        self._state = PublishedState.empty(check_count)

    def publish(self, state: PublishedState) -> None:
        """Replace the whole state in one step under the exclusive lock."""
        if len(state.results) != self.check_count:
            raise ValueError(
                f"Expected {self.check_count} health check results, got {len(state.results)}"
            )
        with self._lock.write_locked():
            self._state = state

    def read(self) -> PublishedState:
        """Return the current state; safe to use after the lock is released."""
        with self._lock.read_locked():
            return self._state
