"""Tests for reforester/cache.py expiry and stats."""

from __future__ import annotations

from reforester.cache import CacheEntry, ExpiringCache


class TestCacheEntry:
    def test_fresh_until_ttl_elapses(self) -> None:
        entry = CacheEntry(value=1, created_at=100.0, ttl=10.0)
        assert entry.is_fresh(109.9)
        assert not entry.is_fresh(110.0)


class TestExpiringCache:
    def test_miss_returns_none(self, cache) -> None:
        assert cache.get("soil:1.00,2.00") is None

    def test_hit_before_expiry(self, cache, clock) -> None:
        cache.set("k", {"a": 1}, ttl=60)
        clock.advance(59)
        assert cache.get("k") == {"a": 1}

    def test_expired_entry_is_evicted(self, cache, clock) -> None:
        cache.set("k", "v", ttl=60)
        clock.advance(60)
        assert cache.get("k") is None
        assert len(cache) == 0

    def test_default_ttl_applies(self, clock) -> None:
        cache = ExpiringCache(default_ttl=5, clock=clock)
        cache.set("k", "v")
        clock.advance(4)
        assert cache.get("k") == "v"
        clock.advance(1)
        assert cache.get("k") is None

    def test_set_overwrites_and_restarts_ttl(self, cache, clock) -> None:
        cache.set("k", "old", ttl=10)
        clock.advance(8)
        cache.set("k", "new", ttl=10)
        clock.advance(8)
        assert cache.get("k") == "new"

    def test_clear_reports_count(self, cache) -> None:
        cache.set("a", 1)
        cache.set("b", 2)
        assert cache.clear() == 2
        assert len(cache) == 0
        assert cache.clear() == 0


class TestCacheStats:
    def test_stats_shape(self, cache, clock) -> None:
        cache.set("rec:" + "9" * 80, "x", ttl=100)
        clock.advance(30)
        stats = cache.stats()

        assert stats["size"] == 1
        assert stats["ttl"] == 900
        entry = stats["entries"][0]
        assert entry["key"].endswith("...")
        assert len(entry["key"]) == 53
        assert entry["age"] == 30
        assert entry["ttlRemaining"] == 70

    def test_short_keys_not_marked_truncated(self, cache) -> None:
        cache.set("soil:-1.29,36.82", "x")
        assert cache.stats()["entries"][0]["key"] == "soil:-1.29,36.82"

    def test_empty_stats(self, cache) -> None:
        assert cache.stats() == {"size": 0, "ttl": 900, "entries": []}
