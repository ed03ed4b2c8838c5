"""Key-value cache interface and an in-memory implementation."""

from __future__ import annotations

import threading
import time
from abc import ABC, abstractmethod
from datetime import timedelta
from typing import Callable

__all__ = ["Cache", "MemoryCache"]


class Cache(ABC):
    """String key-value store with optional expiry."""

    @abstractmethod
    def set(self, key: str, value: str) -> None:
        """Store ``value`` under ``key`` without expiry."""

    @abstractmethod
    def delete(self, key: str) -> None:
        """Remove ``key``."""

    @abstractmethod
    def set_and_expire(self, key: str, value: str, expire: float | timedelta) -> None:
        """Store ``value`` under ``key`` for ``expire`` seconds."""

    @abstractmethod
    def get(self, key: str) -> str:
        """Return the value for ``key``, or ``""`` when absent."""


class MemoryCache(Cache):
    """Thread-safe in-process cache; an expiry of zero or less never expires."""

    def __init__(self, clock: Callable[[], float] = time.monotonic) -> None:
        self._clock = clock
        self._data: dict[str, tuple[str, float | None]] = {}
        self._lock = threading.Lock()

    def set(self, key: str, value: str) -> None:
        with self._lock:
            self._data[key] = (value, None)

    def delete(self, key: str) -> None:
        with self._lock:
            self._data.pop(key, None)

    def set_and_expire(self, key: str, value: str, expire: float | timedelta) -> None:
        seconds = expire.total_seconds() if isinstance(expire, timedelta) else float(expire)
        deadline = self._clock() + seconds if seconds > 0 else None
        with self._lock:
            self._data[key] = (value, deadline)

    def get(self, key: str) -> str:
        with self._lock:
            entry = self._data.get(key)
            if entry is None:
                return ""
            value, deadline = entry
            if deadline is not None and self._clock() >= deadline:
                del self._data[key]
                return ""
            return value