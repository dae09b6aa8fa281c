"""In-memory LRU cache with TTL expiration.

Process-level cache for geocoding, environmental and GeoIP responses.
Survives across requests in the same uvicorn worker, vanishes on restart.

Expiry is lazy: entries are only dropped when read or when stats are
collected. There is no background sweeper.
"""

import threading
import time
from collections import OrderedDict
from dataclasses import dataclass
from typing import Callable, Generic, Hashable, TypeVar

from ambiant_scan.models import CacheStats

K = TypeVar("K", bound=Hashable)
V = TypeVar("V")


@dataclass
class CacheEntry(Generic[V]):
    """A stored value and the clock reading after which it is stale."""

    value: V
    expires_at: float


class TTLCache(Generic[K, V]):
    """TTL-aware LRU cache with hit/miss/eviction counters.

    The OrderedDict doubles as the recency list: the first key is the least
    recently used one, ``move_to_end`` promotes in O(1).

    Every public method takes the store's own lock, so promotion on ``get``,
    ``set``, ``flush`` and ``stats`` are atomic with respect to each other.
    """

    def __init__(
        self,
        name: str,
        ttl_seconds: float,
        max_entries: int,
        clock: Callable[[], float] = time.monotonic,
    ) -> None:
        if max_entries < 1:
            raise ValueError(f"max_entries must be at least 1, got {max_entries}")
        if ttl_seconds <= 0:
            raise ValueError(f"ttl_seconds must be positive, got {ttl_seconds}")
        self.name = name
        self._ttl = ttl_seconds
        self._max_entries = max_entries
        self._clock = clock
        self._store: OrderedDict[K, CacheEntry[V]] = OrderedDict()
        self._lock = threading.Lock()
        self.hits = 0
        self.misses = 0
        self.evictions = 0

    @property
    def ttl_seconds(self) -> float:
        return self._ttl

    @property
    def max_entries(self) -> int:
        return self._max_entries

    def __len__(self) -> int:
        with self._lock:
            return len(self._store)

    def __contains__(self, key: object) -> bool:
        # Peek only: no promotion, no counters.
        with self._lock:
            return key in self._store

    def get(self, key: K) -> V | None:
        with self._lock:
            entry = self._store.get(key)
            if entry is None:
                self.misses += 1
                return None
            if self._clock() > entry.expires_at:
                del self._store[key]
                self.misses += 1
                return None
            self._store.move_to_end(key)
            self.hits += 1
            return entry.value

    def set(self, key: K, value: V) -> None:
        with self._lock:
            if key in self._store:
                del self._store[key]
            elif len(self._store) >= self._max_entries:
                self._store.popitem(last=False)
                self.evictions += 1
            self._store[key] = CacheEntry(value, self._clock() + self._ttl)

    def flush(self) -> int:
        """Drop every entry. Counters are left alone.

        Returns:
            Number of entries held just before the flush.
        """
        with self._lock:
            count = len(self._store)
            self._store.clear()
            return count

    def _purge_expired(self) -> None:
        """Remove stale entries (caller must hold lock)."""
        now = self._clock()
        expired = [key for key, entry in self._store.items() if now > entry.expires_at]
        for key in expired:
            del self._store[key]

    def stats(self) -> CacheStats:
        """Report counters after purging expired entries for an accurate count."""
        with self._lock:
            self._purge_expired()
            lookups = self.hits + self.misses
            hit_rate = f"{self.hits / lookups * 100:.1f}%" if lookups else "N/A"
            return CacheStats(
                name=self.name,
                entries=len(self._store),
                hits=self.hits,
                misses=self.misses,
                evictions=self.evictions,
                hit_rate=hit_rate,
                ttl_seconds=self._ttl,
                max_entries=self._max_entries,
            )
