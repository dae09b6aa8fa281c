"""Unit tests for the TTL/LRU cache store and the cache registry."""

import threading

import pytest

from conftest import FakeClock
from ambiant_scan.services.cache import CacheRegistry
from ambiant_scan.utils.cache import TTLCache


class TestTTLCacheInit:
    """Tests for TTLCache construction."""

    def test_parameters_are_exposed(self, clock) -> None:
        cache = TTLCache("geoip", 60, 10, clock)
        assert cache.name == "geoip"
        assert cache.ttl_seconds == 60
        assert cache.max_entries == 10
        assert len(cache) == 0

    def test_rejects_zero_capacity(self, clock) -> None:
        with pytest.raises(ValueError, match="max_entries"):
            TTLCache("bad", 60, 0, clock)

    def test_rejects_non_positive_ttl(self, clock) -> None:
        with pytest.raises(ValueError, match="ttl_seconds"):
            TTLCache("bad", 0, 10, clock)


class TestTTLCacheGetSet:
    """Tests for get/set, expiry and counters."""

    def setup_method(self) -> None:
        self.clock = FakeClock()
        self.cache: TTLCache[str, dict] = TTLCache("test", 10, 3, self.clock)

    def test_set_then_get_returns_same_value(self) -> None:
        value = {"city": "Montreal"}
        self.cache.set("k", value)
        assert self.cache.get("k") is value

    def test_missing_key_counts_a_miss(self) -> None:
        assert self.cache.get("nope") is None
        assert self.cache.misses == 1
        assert self.cache.hits == 0

    def test_hit_is_counted(self) -> None:
        self.cache.set("k", {"v": 1})
        self.cache.get("k")
        self.cache.get("k")
        assert self.cache.hits == 2
        assert self.cache.misses == 0

    def test_entry_live_exactly_at_expiry(self) -> None:
        self.cache.set("k", {"v": 1})
        self.clock.advance(10)
        assert self.cache.get("k") == {"v": 1}

    def test_expired_entry_is_removed_on_read(self) -> None:
        self.cache.set("k", {"v": 1})
        self.clock.advance(10.001)
        assert self.cache.get("k") is None
        assert "k" not in self.cache
        assert self.cache.misses == 1
        assert self.cache.stats().entries == 0

    def test_overwrite_resets_ttl(self) -> None:
        self.cache.set("k", {"v": 1})
        self.clock.advance(8)
        self.cache.set("k", {"v": 2})
        self.clock.advance(8)
        assert self.cache.get("k") == {"v": 2}

    def test_capacity_is_never_exceeded(self) -> None:
        for i in range(20):
            self.cache.set(f"k{i}", {"v": i})
            assert len(self.cache) <= 3
        assert self.cache.evictions == 17

    def test_evicts_least_recently_set(self) -> None:
        self.cache.set("a", {"v": "a"})
        self.cache.set("b", {"v": "b"})
        self.cache.set("c", {"v": "c"})
        self.cache.set("d", {"v": "d"})
        assert "a" not in self.cache
        assert "b" in self.cache and "c" in self.cache and "d" in self.cache
        assert self.cache.evictions == 1

    def test_get_promotes_entry(self) -> None:
        self.cache.set("a", {"v": "a"})
        self.cache.set("b", {"v": "b"})
        self.cache.set("c", {"v": "c"})
        self.cache.get("a")
        self.cache.set("d", {"v": "d"})
        assert "a" in self.cache
        assert "b" not in self.cache

    def test_overwrite_promotes_without_evicting(self) -> None:
        self.cache.set("a", {"v": "a"})
        self.cache.set("b", {"v": "b"})
        self.cache.set("c", {"v": "c"})
        self.cache.set("a", {"v": "a2"})
        assert len(self.cache) == 3
        assert self.cache.evictions == 0
        self.cache.set("d", {"v": "d"})
        assert "b" not in self.cache
        assert self.cache.get("a") == {"v": "a2"}

    def test_contains_does_not_touch_counters(self) -> None:
        self.cache.set("a", {"v": "a"})
        assert "a" in self.cache
        assert self.cache.hits == 0
        assert self.cache.misses == 0


class TestTTLCacheFlushAndStats:
    """Tests for flush() and stats()."""

    def setup_method(self) -> None:
        self.clock = FakeClock()
        self.cache: TTLCache[str, int] = TTLCache("environmental-data", 600, 5000, self.clock)

    def test_flush_twice(self) -> None:
        self.cache.set("a", 1)
        self.cache.set("b", 2)
        assert self.cache.flush() == 2
        assert self.cache.flush() == 0

    def test_flush_keeps_counters(self) -> None:
        self.cache.set("a", 1)
        self.cache.get("a")
        self.cache.get("b")
        self.cache.flush()
        stats = self.cache.stats()
        assert stats.entries == 0
        assert stats.hits == 1
        assert stats.misses == 1

    def test_hit_rate_without_lookups(self) -> None:
        assert self.cache.stats().hit_rate == "N/A"

    def test_hit_rate_percentage(self) -> None:
        self.cache.set("a", 1)
        self.cache.get("a")
        self.cache.get("a")
        self.cache.get("missing")
        assert self.cache.stats().hit_rate == "66.7%"

    def test_stats_purges_expired_entries(self) -> None:
        self.cache.set("old", 1)
        self.clock.advance(300)
        self.cache.set("new", 2)
        self.clock.advance(301)
        stats = self.cache.stats()
        assert stats.entries == 1
        assert "old" not in self.cache
        # Purging is not a lookup
        assert stats.misses == 0

    def test_stats_wire_names(self) -> None:
        dumped = self.cache.stats().model_dump(by_alias=True)
        assert dumped == {
            "name": "environmental-data",
            "entries": 0,
            "hits": 0,
            "misses": 0,
            "evictions": 0,
            "hitRate": "N/A",
            "ttlSeconds": 600,
            "maxEntries": 5000,
        }


class TestTTLCacheConcurrency:
    """Mixed get/set traffic from several threads on one store."""

    def test_counters_stay_consistent(self) -> None:
        capacity = 8
        thread_count = 8
        rounds = 500
        cache: TTLCache[str, int] = TTLCache("concurrent", 600, capacity)
        start = threading.Barrier(thread_count)

        def worker(worker_id: int) -> None:
            start.wait()
            for i in range(rounds):
                # Every set inserts a key no other call has used
                cache.set(f"w{worker_id}-{i}", i)
                cache.get(f"w{worker_id}-{i}")
                cache.get(f"w{(worker_id + 1) % thread_count}-{i}")

        threads = [threading.Thread(target=worker, args=(n,)) for n in range(thread_count)]
        for thread in threads:
            thread.start()
        for thread in threads:
            thread.join()

        stats = cache.stats()
        sets = thread_count * rounds
        assert stats.entries == len(cache) == capacity
        assert stats.hits + stats.misses == sets * 2
        assert stats.evictions == sets - stats.entries


class TestCacheRegistry:
    """Tests for the four-store registry."""

    def test_store_names_in_reporting_order(self) -> None:
        registry = CacheRegistry()
        assert [s.name for s in registry.stats()] == [
            "geo-reverse",
            "city-forward",
            "environmental-data",
            "geoip",
        ]

    def test_stores_are_independent(self, clock) -> None:
        registry = CacheRegistry(clock=clock)
        registry.geoip.set("1.2.3.4", "x")
        assert registry.reverse_geocode.get("1.2.3.4") is None
        assert registry.geoip.get("1.2.3.4") == "x"

    def test_ttls_per_domain(self) -> None:
        registry = CacheRegistry(data_ttl_seconds=600, geo_ttl_seconds=86400, max_entries=7)
        assert registry.environmental_data.ttl_seconds == 600
        assert registry.reverse_geocode.ttl_seconds == 86400
        assert registry.forward_geocode.ttl_seconds == 86400
        assert registry.geoip.ttl_seconds == 86400
        assert all(s.max_entries == 7 for s in registry.stores)

    def test_flush_all_sums_counts(self, clock) -> None:
        registry = CacheRegistry(clock=clock)
        registry.reverse_geocode.set("a", 1)
        registry.forward_geocode.set("b", 2)
        registry.environmental_data.set("c", 3)
        registry.geoip.set("d", 4)
        registry.geoip.set("e", 5)
        assert registry.flush_all() == 5
        assert registry.flush_all() == 0

    def test_build_city_key(self) -> None:
        assert CacheRegistry.build_city_key("  Montreal ") == "montreal"
        assert CacheRegistry.build_city_key("NEW YORK") == "new york"

    def test_build_coords_key(self) -> None:
        assert CacheRegistry.build_coords_key(45.5017, -73.5673) == "45.5,-73.57"
