"""Meal fetch service: cache-first access to the upstream recipe API.

Every operation follows the same template:
1. Build a deterministic cache key from the operation and its parameters
2. Return the cached value unchanged on a hit
3. On a miss, do the upstream work, cache the result, return it

The cache is written only after the whole operation succeeds. A failure
anywhere in a fan-out (list-all, list-by-category) propagates and leaves
the cache untouched. Concurrent misses on the same key are not coalesced;
both callers fetch.
"""

import logging
import string

from meal_proxy.services.cache import CacheService
from meal_proxy.services.mealdb import MealDBClient, UpstreamDataError
from meal_proxy.utils.concurrency import gather_or_cancel

logger = logging.getLogger(__name__)

DEFAULT_RESULT_LIMIT = 50

# One "search by first letter" request per letter, in this order
ALPHABET = string.ascii_lowercase


class MealService:
    """Cache-first orchestration of upstream meal queries."""

    def __init__(
        self,
        client: MealDBClient,
        cache: CacheService,
        result_limit: int = DEFAULT_RESULT_LIMIT,
    ) -> None:
        self._client = client
        self._cache = cache
        if result_limit < 1:
            raise ValueError(f"result_limit must be at least 1, got {result_limit}")
        self._limit = result_limit

    async def list_all(self) -> list[dict]:
        """Get the first meals across every starting letter.

        Issues 26 concurrent first-letter searches, concatenates the results
        in letter order and keeps the first ``result_limit`` meals.
        """
        key = CacheService.ALL_KEY
        cached = self._cache.get(key)
        if cached is not None:
            return cached

        per_letter = await gather_or_cancel(
            self._client.search_by_first_letter(letter) for letter in ALPHABET
        )
        meals = [meal for letter_meals in per_letter for meal in letter_meals][: self._limit]

        logger.info(f"[MEALS] all: {len(meals)} meals from {len(ALPHABET)} letters")
        self._cache.put(key, meals)
        return meals

    async def search(self, name: str = "") -> list[dict]:
        """Search meals by name.

        The name is stripped, then passed upstream unescaped. Upstream
        matching ignores case, so the cache key also folds case.
        """
        key = CacheService.build_search_key(name)
        cached = self._cache.get(key)
        if cached is not None:
            return cached

        meals = (await self._client.search_by_name(name.strip()))[: self._limit]
        self._cache.put(key, meals)
        return meals

    async def random(self) -> dict:
        """Get a random meal, caching the whole upstream payload."""
        key = CacheService.RANDOM_KEY
        cached = self._cache.get(key)
        if cached is not None:
            return cached

        payload = await self._client.random_meal()
        self._cache.put(key, payload)
        return payload

    async def list_categories(self) -> list[dict]:
        key = CacheService.CATEGORIES_KEY
        cached = self._cache.get(key)
        if cached is not None:
            return cached

        categories = await self._client.list_categories()
        self._cache.put(key, categories)
        return categories

    async def list_by_category(self, category: str) -> list[dict]:
        """Get fully detailed meals in a category.

        Two phases: filter by category for lightweight stubs (truncated to
        ``result_limit``), then one concurrent lookup per stub id. Results
        keep stub order. Any failed lookup fails the whole operation.
        """
        key = CacheService.build_category_key(category)
        cached = self._cache.get(key)
        if cached is not None:
            return cached

        stubs = (await self._client.filter_by_category(category.strip()))[: self._limit]
        meals = await gather_or_cancel(self._lookup(stub.get("idMeal")) for stub in stubs)

        logger.info(f"[MEALS] category {category!r}: {len(meals)} meals")
        self._cache.put(key, meals)
        return meals

    async def _lookup(self, meal_id: str | None) -> dict:
        if not meal_id:
            raise UpstreamDataError("Meal stub has no idMeal")
        meal = await self._client.lookup_by_id(meal_id)
        if meal is None:
            raise UpstreamDataError(f"Meal not found upstream: {meal_id}")
        return meal
