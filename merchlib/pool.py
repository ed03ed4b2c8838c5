"""Work queues and worker pools."""

from __future__ import annotations

import logging
import queue
import threading
from collections import deque
from concurrent.futures import Future, ThreadPoolExecutor
from dataclasses import dataclass, field
from typing import Any, Callable

__all__ = ["Queue", "Job", "JobFunc", "Collector", "Worker", "start_dispatcher"]

_log = logging.getLogger(__name__)

JobFunc = Callable[[int, Any], None]


class Queue:
    """Unbounded FIFO queue with blocking and non-blocking pops that can be closed."""

    def __init__(self) -> None:
        self._items: deque[Any] = deque()
        self._lock = threading.Lock()
        self._popable = threading.Condition(self._lock)
        self._drained = threading.Condition(self._lock)
        self._closed = False

    def push(self, value: Any) -> None:
        """Append ``value``; ignored once the queue is closed."""
        with self._lock:
            if not self._closed:
                self._items.append(value)
                self._popable.notify()

    def close(self) -> None:
        """Close the queue and wake every waiter."""
        with self._lock:
            if not self._closed:
                self._closed = True
                self._popable.notify_all()
                self._drained.notify_all()

    def pop(self) -> Any:
        """Block until an item is available; returns None once the queue is closed."""
        with self._lock:
            while not self._items and not self._closed:
                self._popable.wait()
            if self._closed:
                return None
            value = self._items.popleft()
            if not self._items:
                self._drained.notify_all()
            return value

    def try_pop(self) -> tuple[Any, bool]:
        """Return ``(item, True)``, ``(None, True)`` if closed and empty, else ``(None, False)``."""
        with self._lock:
            if self._items:
                value = self._items.popleft()
                if not self._items:
                    self._drained.notify_all()
                return value, True
            return None, self._closed

    def __len__(self) -> int:
        with self._lock:
            return len(self._items)

    def wait(self) -> None:
        """Block until the queue is empty or closed."""
        with self._lock:
            while self._items and not self._closed:
                self._drained.wait()


@dataclass
class Job:
    """A unit of work: ``job_func(worker_id, data)``."""

    data: Any
    job_func: JobFunc


class Collector:
    """Runs submitted jobs on a bounded pool of threads."""

    def __init__(self, worker_count: int) -> None:
        self.worker_count = worker_count
        self._executor = ThreadPoolExecutor(
            max_workers=worker_count if worker_count > 0 else None,
            thread_name_prefix="merchlib-pool",
        )
        self._running = 0
        self._lock = threading.Lock()

    def submit(self, job: Job) -> Future:
        """Schedule ``job``; the returned future holds any exception it raised."""
        with self._lock:
            if self.worker_count > 0 and self._running >= self.worker_count:
                _log.debug(
                    "worker count will full running: %d workerCount %d",
                    self._running,
                    self.worker_count,
                )
        future = self._executor.submit(self._run, job)
        future.add_done_callback(self._report)
        return future

    def _run(self, job: Job) -> None:
        with self._lock:
            self._running += 1
        try:
            job.job_func(0, job.data)
        finally:
            with self._lock:
                self._running -= 1

    @staticmethod
    def _report(future: Future) -> None:
        exc = future.exception()
        if exc is not None:
            _log.error("job failed: %s", exc)

    def shutdown(self) -> None:
        """Wait for submitted jobs to finish and refuse new ones."""
        self._executor.shutdown(wait=True)

    def __enter__(self) -> "Collector":
        return self

    def __exit__(self, *exc_info: Any) -> None:
        self.shutdown()


def start_dispatcher(worker_count: int) -> Collector:
    """Return a collector running at most ``worker_count`` jobs at once (unbounded if <= 0)."""
    return Collector(worker_count)


_STOP = object()


@dataclass(eq=False)
class Worker:
    """A thread that offers its channel on ``worker_channel`` and runs the jobs sent to it."""

    id: int
    worker_channel: queue.Queue = field(default_factory=queue.Queue)
    channel: queue.Queue = field(default_factory=queue.Queue)
    job_finished: queue.Queue = field(default_factory=queue.Queue)
    _thread: threading.Thread | None = field(default=None, init=False, repr=False)

    def start(self) -> None:
        """Start the worker thread."""
        self._thread = threading.Thread(target=self._loop, name=f"worker-{self.id}", daemon=True)
        self._thread.start()

    def _loop(self) -> None:
        while True:
            self.worker_channel.put(self.channel)
            job = self.channel.get()
            if job is _STOP:
                return
            if job is not None:
                job.job_func(self.id, job.data)
                self.job_finished.put(True)

    def stop(self) -> None:
        """Ask the worker to exit once it is idle."""
        _log.info("worker [%d] is stopping", self.id)
        self.channel.put(_STOP)