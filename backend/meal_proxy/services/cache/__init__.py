"""Cache service module.

Bounded in-memory cache with lazy TTL expiry and oldest-write eviction.
"""

from .service import (
    CacheEntry,
    CacheService,
    CacheStats,
    MemoryCacheService,
)

__all__ = [
    "CacheEntry",
    "CacheService",
    "CacheStats",
    "MemoryCacheService",
]
