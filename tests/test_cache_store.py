import time

import pytest

from odds_proxy.domain.types import CacheEntry
from odds_proxy.services.cache_store import ResponseCache


class FakeClock:
    def __init__(self, now: float = 1_000.0) -> None:
        self.now = now

    def __call__(self) -> float:
        return self.now

    def advance(self, seconds: float) -> None:
        self.now += seconds


def test_get_missing_key_returns_none() -> None:
    assert ResponseCache().get("odds?{}") is None


def test_put_overwrites_whole_entry() -> None:
    clock = FakeClock()
    cache = ResponseCache(clock=clock)
    first = cache.new_entry(200, "[]")
    cache.put("k", first)
    clock.advance(5)
    second = cache.new_entry(404, '{"message":"not found"}')
    cache.put("k", second)

    assert cache.get("k") is second
    assert first.body == "[]"
    assert len(cache) == 1


def test_entries_are_immutable() -> None:
    entry = CacheEntry(timestamp=1.0, status_code=200, body="[]")
    with pytest.raises(AttributeError):
        entry.body = "changed"  # type: ignore[misc]


def test_freshness_boundary() -> None:
    clock = FakeClock()
    cache = ResponseCache(clock=clock)
    cache.put("k", cache.new_entry(200, "[]"))

    clock.advance(59.9)
    assert cache.lookup_fresh("k", 60) is not None

    clock.advance(0.1)
    assert cache.lookup_fresh("k", 60) is None
    # An expired entry is still stored until it is overwritten.
    assert cache.get("k") is not None


def test_ttl_is_evaluated_per_lookup() -> None:
    clock = FakeClock()
    cache = ResponseCache(clock=clock)
    cache.put("k", cache.new_entry(200, "[]"))
    clock.advance(30)

    assert cache.lookup_fresh("k", 10) is None
    assert cache.lookup_fresh("k", 120) is not None


def test_unbounded_by_default() -> None:
    cache = ResponseCache()
    for i in range(2_000):
        cache.put(f"k{i}", cache.new_entry(200, "[]"))
    assert len(cache) == 2_000
    assert cache.stats()["evictions"] == 0


def test_bounded_cache_evicts_least_recently_used() -> None:
    cache = ResponseCache(max_entries=2)
    cache.put("a", cache.new_entry(200, "a"))
    cache.put("b", cache.new_entry(200, "b"))
    cache.get("a")
    cache.put("c", cache.new_entry(200, "c"))

    assert cache.get("b") is None
    assert cache.get("a") is not None
    assert cache.get("c") is not None
    assert cache.stats() == {"entries": 2, "max_entries": 2, "evictions": 1}


def test_negative_bound_rejected() -> None:
    with pytest.raises(ValueError):
        ResponseCache(max_entries=-1)


def test_sweep_drops_only_old_entries() -> None:
    clock = FakeClock()
    cache = ResponseCache(clock=clock)
    cache.put("old", cache.new_entry(200, "[]"))
    clock.advance(100)
    cache.put("new", cache.new_entry(200, "[]"))
    clock.advance(10)

    removed = cache.sweep(50)

    assert removed == 1
    assert cache.get("old") is None
    assert cache.get("new") is not None


def test_clear() -> None:
    cache = ResponseCache()
    cache.put("k", cache.new_entry(200, "[]"))
    cache.clear()
    assert len(cache) == 0


def test_entry_rejects_invalid_status() -> None:
    with pytest.raises(ValueError):
        CacheEntry(timestamp=0.0, status_code=42, body="")


def test_default_clock_is_monotonic() -> None:
    before = time.monotonic()
    now = ResponseCache().now()
    after = time.monotonic()
    assert before <= now <= after
