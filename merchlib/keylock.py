"""Per-key mutual exclusion with periodic cleanup of idle locks."""

from __future__ import annotations

import threading
from datetime import timedelta

__all__ = ["KeyLock", "DEFAULT_CLEAN_INTERVAL"]

# Idle locks are dropped once a day by default.
DEFAULT_CLEAN_INTERVAL = 24 * 60 * 60.0


class _InnerLock:
    __slots__ = ("mutex", "count")

    def __init__(self) -> None:
        self.mutex = threading.Lock()
        self.count = 0


class KeyLock:
    """A set of mutexes addressed by string keys, created on demand."""

    def __init__(self, clean_interval: float | timedelta = DEFAULT_CLEAN_INTERVAL) -> None:
        if isinstance(clean_interval, timedelta):
            clean_interval = clean_interval.total_seconds()
        if clean_interval <= 0:
            raise ValueError("clean interval must be positive")
        self._clean_interval = float(clean_interval)
        self._locks: dict[str, _InnerLock] = {}
        self._guard = threading.Lock()
        self._stop = threading.Event()
        self._stopped = False
        self._threads: list[threading.Thread] = []

    def lock(self, key: str) -> None:
        """Block until the lock for ``key`` is held."""
        with self._guard:
            inner = self._locks.get(key)
            if inner is None:
                inner = self._locks[key] = _InnerLock()
            inner.count += 1
        inner.mutex.acquire()

    def unlock(self, key: str) -> None:
        """Release the lock for ``key``; unknown keys are ignored.

        Raises RuntimeError when the lock is known but not held.
        """
        with self._guard:
            inner = self._locks.get(key)
            if inner is None:
                return
            inner.count -= 1
        inner.mutex.release()

    def clean(self) -> None:
        """Forget locks that nobody holds or waits for."""
        with self._guard:
            idle = [key for key, inner in self._locks.items() if inner.count == 0]
            for key in idle:
                del self._locks[key]

    def start_clean_loop(self) -> None:
        """Run :meth:`clean` every clean interval in a background thread."""
        thread = threading.Thread(target=self._clean_loop, name="keylock-clean", daemon=True)
        self._threads.append(thread)
        thread.start()

    def stop_clean_loop(self) -> None:
        """Stop the background cleanup; raises RuntimeError if already stopped."""
        if self._stopped:
            raise RuntimeError("clean loop already stopped")
        self._stopped = True
        self._stop.set()
        for thread in self._threads:
            thread.join()
        self._threads.clear()

    def _clean_loop(self) -> None:
        while not self._stop.wait(self._clean_interval):
            self.clean()

    def __len__(self) -> int:
        with self._guard:
            return len(self._locks)