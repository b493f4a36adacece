"""In-memory key/value cache with per-entry expiration."""

import asyncio
import contextlib
import threading
import time
from collections.abc import Iterator
from dataclasses import dataclass
from datetime import timedelta

import structlog

logger = structlog.get_logger(__name__)


class ReadWriteLock:
    """Lock admitting many concurrent readers or one writer.

    Waiting writers block new readers so a steady stream of reads cannot
    starve Set/Delete/sweep.
    """

    def __init__(self) -> None:
        self._condition = threading.Condition(threading.Lock())
        self._readers = 0
        self._writer = False
        self._writers_waiting = 0

    @contextlib.contextmanager
    def read(self) -> Iterator[None]:
        with self._condition:
            while self._writer or self._writers_waiting:
                self._condition.wait()
            self._readers += 1
        try:
            yield
        finally:
            with self._condition:
                self._readers -= 1
                if self._readers == 0:
                    self._condition.notify_all()

    @contextlib.contextmanager
    def write(self) -> Iterator[None]:
        with self._condition:
            self._writers_waiting += 1
            try:
                while self._writer or self._readers:
                    self._condition.wait()
            finally:
                self._writers_waiting -= 1
            self._writer = True
        try:
            yield
        finally:
            with self._condition:
                self._writer = False
                self._condition.notify_all()


@dataclass(frozen=True, slots=True)
class CacheEntry[V]:
    value: V
    expires_at: float  # time.monotonic() deadline

    def is_expired(self, moment: float) -> bool:
        return self.expires_at <= moment


class ExpiringCache[V]:
    """Concurrency-safe cache where every entry carries its own time-to-live.

    Expired entries are never returned by get(), even before the background
    sweep has physically removed them. The sweep runs as an asyncio task
    between start() and stop().
    """

    def __init__(self, sweep_interval: float = 60.0) -> None:
        self._entries: dict[str, CacheEntry[V]] = {}
        self._lock = ReadWriteLock()
        self._sweep_interval = sweep_interval
        self._sweep_task: asyncio.Task[None] | None = None

    def __len__(self) -> int:
        """Number of physically stored entries, expired ones included."""
        with self._lock.read():
            return len(self._entries)

    def set(self, key: str, value: V, ttl: timedelta) -> None:
        """Insert or overwrite an entry expiring ttl from now."""
        entry = CacheEntry(value=value, expires_at=time.monotonic() + ttl.total_seconds())
        with self._lock.write():
            self._entries[key] = entry

    def get(self, key: str) -> V | None:
        """Return the live value for key, or None if absent or expired."""
        with self._lock.read():
            entry = self._entries.get(key)
        if entry is None or entry.is_expired(time.monotonic()):
            return None
        return entry.value

    def delete(self, key: str) -> None:
        with self._lock.write():
            self._entries.pop(key, None)

    def sweep(self) -> int:
        """Remove every expired entry and return how many were removed."""
        moment = time.monotonic()
        with self._lock.write():
            expired = [key for key, entry in self._entries.items() if entry.is_expired(moment)]
            for key in expired:
                del self._entries[key]
        return len(expired)

    @property
    def is_running(self) -> bool:
        return self._sweep_task is not None and not self._sweep_task.done()

    def start(self) -> None:
        """Start the periodic sweep on the running event loop."""
        if self.is_running:
            return
        self._sweep_task = asyncio.create_task(self._sweep_loop(), name="cache-sweep")

    async def stop(self) -> None:
        """Cancel the periodic sweep and wait for it to finish."""
        task, self._sweep_task = self._sweep_task, None
        if task is None:
            return
        task.cancel()
        with contextlib.suppress(asyncio.CancelledError):
            await task

    async def _sweep_loop(self) -> None:
        while True:
            await asyncio.sleep(self._sweep_interval)
            removed = self.sweep()
            if removed:
                logger.debug("cache_swept", removed=removed, remaining=len(self))
