"""
Thread-safe LRU cache of resolved host lists with TTL.
Bounded in size; entries are ordered by most recent access and expire
passively (a stale entry stays until it is overwritten or evicted).
"""

import logging
import threading
from collections import OrderedDict
from typing import NamedTuple

from clock import Clock
from config import Config

logger = logging.getLogger(__name__)


class CachedResult(NamedTuple):
    """Host list from one lookup, stamped with its creation time."""

    hosts: tuple[str, ...]
    created_ms: int


class DNSCache:
    """Thread-safe host list cache with LRU eviction and TTL expiration."""

    def __init__(
        self,
        max_entries: int = Config.DNS_CACHE_MAX_ENTRIES,
        ttl_seconds: int = Config.DNS_CACHE_TTL_SECONDS,
        clock: Clock | None = None,
    ):
        """
        Initialize the DNS cache.

        Args:
            max_entries: Maximum number of keys held before LRU eviction.
            ttl_seconds: Age after which an entry is considered stale.
            clock: Time source for timestamps (monotonic by default).
        """
        if max_entries < 1:
            raise ValueError(f"max_entries must be at least 1, got {max_entries}")
        self._cache: OrderedDict[str, CachedResult] = OrderedDict()
        self._lock = threading.Lock()
        self._clock = clock or Clock()
        self.max_entries = max_entries
        self.ttl_seconds = ttl_seconds
        self._hits = 0
        self._misses = 0
        self._evictions = 0

    def new_result(self, hosts: list[str] | tuple[str, ...]) -> CachedResult:
        """Stamp a host list with the current time."""
        return CachedResult(tuple(hosts), self._clock.now_ms())

    def get(self, key: str) -> CachedResult | None:
        """
        Get the cached result for a key, fresh or not.

        A hit moves the entry to the most recently used position.

        Args:
            key: Domain or IP literal, compared exactly.

        Returns:
            The stored CachedResult, or None if the key is absent.
        """
        with self._lock:
            result = self._cache.get(key)
            if result is None:
                self._misses += 1
                return None
            self._cache.move_to_end(key)
            self._hits += 1
            return result

    def put(self, key: str, result: CachedResult) -> None:
        """
        Insert or replace the result for a key.

        Evicts the least recently used entry if the cache grows past its bound.
        """
        with self._lock:
            self._cache[key] = result
            self._cache.move_to_end(key)
            while len(self._cache) > self.max_entries:
                evicted, _ = self._cache.popitem(last=False)
                self._evictions += 1
                logger.debug(f"Evicting least recently used cache entry '{evicted}'")

    def expired(self, result: CachedResult, ttl_seconds: int | None = None) -> bool:
        """Return True once the result is older than the TTL."""
        if ttl_seconds is None:
            ttl_seconds = self.ttl_seconds
        return self._clock.now_ms() - result.created_ms > ttl_seconds * 1000

    def clear(self) -> None:
        """Clear all cached entries (primarily for testing)."""
        with self._lock:
            self._cache.clear()

    def size(self) -> int:
        """Return the number of cached entries."""
        with self._lock:
            return len(self._cache)

    def get_stats(self) -> dict[str, int]:
        """
        Get cache statistics for monitoring.

        Returns:
            Dict with cache_size, max_entries, expired_count, hits, misses
            and evictions.
        """
        with self._lock:
            now_ms = self._clock.now_ms()
            expired_count = sum(
                1
                for result in self._cache.values()
                if now_ms - result.created_ms > self.ttl_seconds * 1000
            )
            return {
                "cache_size": len(self._cache),
                "max_entries": self.max_entries,
                "expired_count": expired_count,
                "hits": self._hits,
                "misses": self._misses,
                "evictions": self._evictions,
            }
