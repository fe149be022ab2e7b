"""Cache service implementation.

This module provides an abstract cache service interface and a concrete
in-memory implementation for caching upstream recipe responses.

Policy:
- Entries expire lazily: a read of an entry older than the TTL is a miss
  and purges the entry. There is no background sweep.
- Capacity is bounded: inserting a new key into a full cache first evicts
  the entry with the oldest write time. Reads never refresh an entry, so
  this is "oldest write wins", not LRU.

Cache Key Consistency:
- The same logical operation with the same parameters always maps to the
  same key, so repeated requests are served from the same entry.
"""

import logging
import threading
import time
from abc import ABC, abstractmethod
from dataclasses import dataclass
from typing import Any, Callable

logger = logging.getLogger(__name__)

DEFAULT_TTL_SECONDS = 300
DEFAULT_MAX_ENTRIES = 50


@dataclass
class CacheEntry:
    """A cached value stamped with the clock reading of its last write."""

    key: str
    value: Any
    stored_at: float


@dataclass
class CacheStats:
    """Point-in-time counters for diagnostics."""

    size: int
    max_entries: int
    ttl_seconds: float
    hits: int
    misses: int
    evictions: int
    expirations: int


class CacheService(ABC):
    """Abstract base class for cache services.

    Defines the get/put interface used by the fetch layer. Also provides
    static builders for the deterministic cache keys of every operation.
    """

    ALL_KEY = "all"
    RANDOM_KEY = "random"
    CATEGORIES_KEY = "categories"

    @abstractmethod
    def get(self, key: str) -> Any | None:
        """Retrieve a live cached value by key.

        Args:
            key: The cache key to look up.

        Returns:
            The cached value if present and not expired, None otherwise.
        """
        pass

    @abstractmethod
    def put(self, key: str, value: Any) -> None:
        """Store value under key, stamped with the current time.

        Args:
            key: The cache key to store under.
            value: The value to cache (JSON serializable).
        """
        pass

    @abstractmethod
    def stats(self) -> CacheStats:
        """Return a snapshot of the cache counters."""
        pass

    @staticmethod
    def build_search_key(name: str) -> str:
        """Generate cache key for a name search.

        The name is stripped and lowercased, so searches differing only in
        case or surrounding whitespace share one entry.

        Example:
            >>> CacheService.build_search_key("  Chicken ")
            'search_chicken'
        """
        return f"search_{name.strip().lower()}"

    @staticmethod
    def build_category_key(category: str) -> str:
        """Generate cache key for a category listing.

        Example:
            >>> CacheService.build_category_key("Seafood")
            'category_Seafood'
        """
        return f"category_{category.strip()}"


class MemoryCacheService(CacheService):
    """Bounded in-memory cache with lazy TTL expiry.

    Attributes:
        _entries: Entries keyed by cache key, in insertion order.
        _max_entries: Capacity; the store never holds more entries.
        _ttl: Maximum entry age in seconds.
        _clock: Monotonic time source, injectable for tests.
    """

    def __init__(
        self,
        max_entries: int = DEFAULT_MAX_ENTRIES,
        ttl_seconds: float = DEFAULT_TTL_SECONDS,
        clock: Callable[[], float] = time.monotonic,
    ) -> None:
        """Initialize the in-memory cache.

        Args:
            max_entries: Maximum number of entries. Must be positive.
            ttl_seconds: Time-to-live in seconds. Must be positive.
            clock: Callable returning the current time in seconds.

        Raises:
            ValueError: If max_entries or ttl_seconds is not positive.
        """
        if max_entries <= 0:
            raise ValueError(f"max_entries must be positive, got {max_entries}")
        if ttl_seconds <= 0:
            raise ValueError(f"ttl_seconds must be positive, got {ttl_seconds}")

        self._entries: dict[str, CacheEntry] = {}
        self._max_entries = max_entries
        self._ttl = ttl_seconds
        self._clock = clock
        self._lock = threading.Lock()

        self._hits = 0
        self._misses = 0
        self._evictions = 0
        self._expirations = 0

    def _is_live(self, entry: CacheEntry, now: float) -> bool:
        return now - entry.stored_at < self._ttl

    def get(self, key: str) -> Any | None:
        """Retrieve a live cached value by key.

        A stale entry counts as a miss and is removed.

        Args:
            key: The cache key to look up.

        Returns:
            The cached value, or None on a miss.
        """
        with self._lock:
            entry = self._entries.get(key)
            if entry is None:
                self._misses += 1
                logger.debug("[CACHE MISS] %s", key)
                return None

            if not self._is_live(entry, self._clock()):
                del self._entries[key]
                self._expirations += 1
                self._misses += 1
                logger.debug("[CACHE MISS] %s (expired)", key)
                return None

            self._hits += 1
            logger.debug("[CACHE HIT] %s", key)
            return entry.value

    def put(self, key: str, value: Any) -> None:
        """Insert or overwrite the entry for key.

        Inserting a new key into a full cache evicts the entry with the
        smallest write time first. Overwriting never evicts.

        Args:
            key: The cache key to store under.
            value: The value to cache.
        """
        with self._lock:
            if key not in self._entries and len(self._entries) >= self._max_entries:
                self._evict_oldest()
            self._entries[key] = CacheEntry(key=key, value=value, stored_at=self._clock())

    def _evict_oldest(self) -> None:
        # min() keeps the first of equal stored_at values in insertion order
        oldest = min(self._entries.values(), key=lambda entry: entry.stored_at)
        del self._entries[oldest.key]
        self._evictions += 1
        logger.debug("[CACHE EVICT] %s", oldest.key)

    def stats(self) -> CacheStats:
        with self._lock:
            return CacheStats(
                size=len(self._entries),
                max_entries=self._max_entries,
                ttl_seconds=self._ttl,
                hits=self._hits,
                misses=self._misses,
                evictions=self._evictions,
                expirations=self._expirations,
            )

    def __len__(self) -> int:
        with self._lock:
            return len(self._entries)

    def __contains__(self, key: object) -> bool:
        """Check for a live entry without touching the hit/miss counters."""
        with self._lock:
            entry = self._entries.get(key)  # type: ignore[arg-type]
            return entry is not None and self._is_live(entry, self._clock())

    @property
    def max_entries(self) -> int:
        """Get the capacity."""
        return self._max_entries

    @property
    def ttl_seconds(self) -> float:
        """Get the TTL in seconds."""
        return self._ttl
