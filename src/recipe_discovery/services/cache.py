"""Time-windowed cache abstractions."""

from dataclasses import dataclass
from datetime import datetime, timedelta
from typing import Generic, Protocol, TypeVar

from recipe_discovery.services.clock import Clock, utc_now

K = TypeVar("K")
V = TypeVar("V")


@dataclass(frozen=True)
class CacheEntry(Generic[V]):
    """A cached value and the time it was computed."""

    value: V
    computed_at: datetime


class Cache(Protocol[K, V]):
    """Cache interface keyed by an arbitrary hashable key."""

    def get(self, key: K) -> CacheEntry[V] | None:
        """Return a fresh entry, or None if missing or stale."""

    def set(self, key: K, value: V) -> CacheEntry[V]:
        """Store a value stamped with the current time."""


class InMemoryCache(Generic[K, V]):
    """Process-local cache whose entries go stale after ``max_age``.

    Entries are never evicted; a stale entry stays in place until it is
    replaced. Writes swap in a new immutable entry with a single assignment,
    so readers see either the previous entry or the new one. Concurrent
    writers for the same key resolve to last write wins.
    """

    def __init__(self, max_age: timedelta, clock: Clock = utc_now) -> None:
        self.max_age = max_age
        self.clock = clock
        self._entries: dict[K, CacheEntry[V]] = {}

    def get(self, key: K) -> CacheEntry[V] | None:
        """Return the entry when it was computed within ``max_age``."""
        entry = self._entries.get(key)
        if entry is None:
            return None
        if self.clock() - entry.computed_at >= self.max_age:
            return None
        return entry

    def set(self, key: K, value: V) -> CacheEntry[V]:
        """Replace the entry for ``key``."""
        entry = CacheEntry(value=value, computed_at=self.clock())
        self._entries[key] = entry
        return entry

    def __len__(self) -> int:
        return len(self._entries)
