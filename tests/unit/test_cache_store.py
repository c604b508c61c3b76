"""Tests for the in-process cache tier (src/ems/core/cache/store.py)."""

from src.ems.core.cache import CacheStore
from tests.helpers import MutableClock


class TestGetSet:
    def test_get_returns_stored_value(self, cache_store: CacheStore) -> None:
        cache_store.set("k", {"a": 1})
        assert cache_store.get("k") == {"a": 1}

    def test_set_replaces_previous_value(self, cache_store: CacheStore) -> None:
        cache_store.set("k", "old", tags=["t1"])
        cache_store.set("k", "new", tags=["t2"])

        assert cache_store.get("k") == "new"
        assert cache_store.invalidate_by_tag("t1") == 0
        assert cache_store.get("k") == "new"

    def test_missing_key_is_none(self, cache_store: CacheStore) -> None:
        assert cache_store.get("nope") is None

    def test_delete(self, cache_store: CacheStore) -> None:
        cache_store.set("k", 1)
        assert cache_store.delete("k") is True
        assert cache_store.delete("k") is False
        assert cache_store.get("k") is None


class TestExpiry:
    def test_entry_alive_until_ttl_elapses(
        self, cache_store: CacheStore, clock: MutableClock
    ) -> None:
        cache_store.set("k", "v", ttl=10)

        clock.advance(10)
        assert cache_store.get("k") == "v"

        clock.advance(0.5)
        assert cache_store.get("k") is None
        assert len(cache_store) == 0

    def test_default_ttl_applies(self, clock: MutableClock) -> None:
        store = CacheStore(default_ttl=5, clock=clock)
        store.set("k", "v")

        clock.advance(6)
        assert store.get("k") is None

    def test_cleanup_purges_only_expired(
        self, cache_store: CacheStore, clock: MutableClock
    ) -> None:
        cache_store.set("short", 1, ttl=1, tags=["t"])
        cache_store.set("long", 2, ttl=100, tags=["t"])

        clock.advance(2)
        assert cache_store.cleanup() == 1
        assert cache_store.get("long") == 2
        assert cache_store.stats()["tags"] == ["t"]

    def test_writes_sweep_expired_entries_periodically(self, clock: MutableClock) -> None:
        store = CacheStore(default_ttl=60, clock=clock, cleanup_interval=60)
        for i in range(100):
            store.set(f"search={i}", i, ttl=1, tags=["departments"])

        clock.advance(3600)
        store.set("fresh", "v", tags=["departments"])

        assert len(store) == 1
        assert store.stats()["tags"] == ["departments"]
        assert store.invalidate_by_tag("departments") == 1

    def test_no_sweep_before_interval(self, clock: MutableClock) -> None:
        store = CacheStore(default_ttl=60, clock=clock, cleanup_interval=60)
        store.set("old", 1, ttl=1)

        clock.advance(30)
        store.set("new", 2)

        assert len(store) == 2


class TestTags:
    def test_invalidate_by_tag_removes_all_tagged_entries(self, cache_store: CacheStore) -> None:
        cache_store.set("a", 1, tags=["api", "departments"])
        cache_store.set("b", 2, tags=["api"])
        cache_store.set("c", 3, tags=["other"])

        assert cache_store.invalidate_by_tag("api") == 2
        assert cache_store.get("a") is None
        assert cache_store.get("b") is None
        assert cache_store.get("c") == 3

    def test_invalidated_entry_leaves_other_tag_indexes(self, cache_store: CacheStore) -> None:
        cache_store.set("a", 1, tags=["api", "departments"])
        cache_store.invalidate_by_tag("api")

        assert cache_store.invalidate_by_tag("departments") == 0
        assert cache_store.stats()["tags"] == []

    def test_unknown_tag_is_noop(self, cache_store: CacheStore) -> None:
        cache_store.set("a", 1)
        assert cache_store.invalidate_by_tag("missing") == 0
        assert cache_store.get("a") == 1

    def test_clear_returns_count(self, cache_store: CacheStore) -> None:
        cache_store.set("a", 1, tags=["t"])
        cache_store.set("b", 2)

        assert cache_store.clear() == 2
        assert len(cache_store) == 0
        assert cache_store.stats()["tags"] == []


def test_stats_count_hits_and_misses(cache_store: CacheStore) -> None:
    cache_store.set("a", 1)
    cache_store.get("a")
    cache_store.get("a")
    cache_store.get("b")

    stats = cache_store.stats()
    assert stats["size"] == 1
    assert stats["hits"] == 2
    assert stats["misses"] == 1
