import threading
import time
from datetime import timedelta

import pytest

from merchlib.keylock import KeyLock


def test_same_key_is_mutually_exclusive():
    lock = KeyLock()
    state = {"inside": 0, "max": 0, "total": 0}
    guard = threading.Lock()

    def work():
        for _ in range(20):
            lock.lock("k")
            with guard:
                state["inside"] += 1
                state["max"] = max(state["max"], state["inside"])
            time.sleep(0.0005)
            with guard:
                state["inside"] -= 1
                state["total"] += 1
            lock.unlock("k")

    threads = [threading.Thread(target=work) for _ in range(4)]
    for t in threads:
        t.start()
    for t in threads:
        t.join()
    assert state["max"] == 1
    assert state["total"] == 80
    assert len(lock) == 1
    lock.clean()
    assert len(lock) == 0


def test_different_keys_do_not_block():
    lock = KeyLock()
    lock.lock("a")
    done = threading.Event()

    def other():
        lock.lock("b")
        lock.unlock("b")
        done.set()

    t = threading.Thread(target=other)
    t.start()
    assert done.wait(2)
    t.join()
    assert len(lock) == 2
    lock.unlock("a")
    lock.clean()
    assert len(lock) == 0


def test_clean_removes_only_idle_locks():
    lock = KeyLock()
    lock.lock("a")
    lock.unlock("a")
    lock.lock("b")
    assert len(lock) == 2
    lock.clean()
    assert len(lock) == 1
    lock.unlock("b")
    lock.clean()
    assert len(lock) == 0


def test_unlock_unknown_key_is_ignored():
    lock = KeyLock()
    lock.unlock("missing")
    assert len(lock) == 0


def test_unlock_not_held_raises():
    lock = KeyLock()
    lock.lock("a")
    lock.unlock("a")
    with pytest.raises(RuntimeError):
        lock.unlock("a")


def test_clean_loop_runs_and_stops():
    lock = KeyLock(timedelta(milliseconds=10))
    lock.lock("x")
    lock.unlock("x")
    lock.start_clean_loop()
    deadline = time.monotonic() + 2
    while len(lock) and time.monotonic() < deadline:
        time.sleep(0.01)
    lock.stop_clean_loop()
    assert len(lock) == 0
    with pytest.raises(RuntimeError):
        lock.stop_clean_loop()


def test_invalid_interval_rejected():
    with pytest.raises(ValueError):
        KeyLock(0)