from datetime import timedelta

import pytest

from merchlib.cache import Cache, MemoryCache


class FakeClock:
    def __init__(self):
        self.now = 1000.0

    def __call__(self):
        return self.now


def test_set_get_delete():
    cache = MemoryCache()
    cache.set("token", "uid@name")
    assert cache.get("token") == "uid@name"
    cache.delete("token")
    assert cache.get("token") == ""


def test_missing_key_gives_empty_string():
    assert MemoryCache().get("nothing") == ""


def test_expiry():
    clock = FakeClock()
    cache = MemoryCache(clock=clock)
    cache.set_and_expire("k", "v", 10)
    clock.now += 9
    assert cache.get("k") == "v"
    clock.now += 1
    assert cache.get("k") == ""


def test_timedelta_expiry_and_zero_means_forever():
    clock = FakeClock()
    cache = MemoryCache(clock=clock)
    cache.set_and_expire("short", "v", timedelta(seconds=5))
    cache.set_and_expire("forever", "w", 0)
    clock.now += 10_000
    assert cache.get("short") == ""
    assert cache.get("forever") == "w"


def test_set_clears_previous_expiry():
    clock = FakeClock()
    cache = MemoryCache(clock=clock)
    cache.set_and_expire("k", "old", 1)
    cache.set("k", "new")
    clock.now += 100
    assert cache.get("k") == "new"


def test_interface_is_abstract():
    with pytest.raises(TypeError):
        Cache()
    assert isinstance(MemoryCache(), Cache)