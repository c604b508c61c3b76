"""In-process cache store with TTL expiry and tag invalidation.

A plain key/entry map local to one worker process. No I/O, no locking: all
access happens on the event loop thread.
"""

import time
from collections.abc import Callable, Iterable
from dataclasses import dataclass
from typing import Any

DEFAULT_TTL_SECONDS = 300
# Seconds between expiry sweeps triggered by writes
CLEANUP_INTERVAL_SECONDS = 60


@dataclass(slots=True)
class CacheEntry:
    """A cached value plus the metadata needed to expire and invalidate it."""

    value: Any
    created_at: float
    ttl: float
    tags: frozenset[str]

    def is_expired(self, now: float) -> bool:
        return now - self.created_at > self.ttl


class CacheStore:
    """Key to entry map with a reverse tag index."""

    def __init__(
        self,
        default_ttl: float = DEFAULT_TTL_SECONDS,
        clock: Callable[[], float] = time.monotonic,
        cleanup_interval: float = CLEANUP_INTERVAL_SECONDS,
    ):
        self.default_ttl = default_ttl
        self._clock = clock
        self.cleanup_interval = cleanup_interval
        self._last_cleanup = clock()
        self._entries: dict[str, CacheEntry] = {}
        self._tag_index: dict[str, set[str]] = {}
        self._hits = 0
        self._misses = 0

    def __len__(self) -> int:
        return len(self._entries)

    def set(
        self,
        key: str,
        value: Any,
        ttl: float | None = None,
        tags: Iterable[str] = (),
    ) -> None:
        """Store a value, replacing any previous entry and its tag links."""
        now = self._clock()
        if now - self._last_cleanup >= self.cleanup_interval:
            self.cleanup()
        self._remove(key)
        entry = CacheEntry(
            value=value,
            created_at=now,
            ttl=self.default_ttl if ttl is None else ttl,
            tags=frozenset(tags),
        )
        self._entries[key] = entry
        for tag in entry.tags:
            self._tag_index.setdefault(tag, set()).add(key)

    def get(self, key: str) -> Any | None:
        """Return the cached value, or None when absent or expired."""
        entry = self._entries.get(key)
        if entry is None:
            self._misses += 1
            return None
        if entry.is_expired(self._clock()):
            self._remove(key)
            self._misses += 1
            return None
        self._hits += 1
        return entry.value

    def delete(self, key: str) -> bool:
        return self._remove(key)

    def invalidate_by_tag(self, tag: str) -> int:
        """Drop every entry carrying `tag`. Returns the number removed."""
        keys = self._tag_index.pop(tag, set())
        removed = 0
        for key in list(keys):
            if self._remove(key):
                removed += 1
        return removed

    def clear(self) -> int:
        count = len(self._entries)
        self._entries.clear()
        self._tag_index.clear()
        return count

    def cleanup(self) -> int:
        """Purge expired entries. Returns the number removed."""
        now = self._clock()
        expired = [key for key, entry in self._entries.items() if entry.is_expired(now)]
        for key in expired:
            self._remove(key)
        self._last_cleanup = now
        return len(expired)

    def stats(self) -> dict[str, Any]:
        return {
            "size": len(self._entries),
            "hits": self._hits,
            "misses": self._misses,
            "tags": sorted(self._tag_index),
        }

    def _remove(self, key: str) -> bool:
        entry = self._entries.pop(key, None)
        if entry is None:
            return False
        for tag in entry.tags:
            keys = self._tag_index.get(tag)
            if keys is None:
                continue
            keys.discard(key)
            if not keys:
                del self._tag_index[tag]
        return True
