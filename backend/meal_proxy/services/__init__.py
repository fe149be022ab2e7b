"""Meal Proxy Services.

Service layer components:
- Cache: bounded in-memory cache with TTL expiry and oldest-write eviction
- MealDB: TheMealDB API client (httpx)
- Meals: cache-first orchestration and upstream fan-out
"""

from .cache import CacheEntry, CacheService, CacheStats, MemoryCacheService
from .mealdb import (
    MealDBClient,
    TheMealDBClient,
    MealDBError,
    UpstreamDataError,
    UpstreamUnavailableError,
)
from .meals import MealService

__all__ = [
    # Cache
    "CacheEntry",
    "CacheService",
    "CacheStats",
    "MemoryCacheService",
    # MealDB
    "MealDBClient",
    "TheMealDBClient",
    "MealDBError",
    "UpstreamDataError",
    "UpstreamUnavailableError",
    # Meals
    "MealService",
]
