"""Shared fixtures: an in-memory MealDBClient double and meal factories."""

import asyncio

import pytest

from meal_proxy.services.mealdb import MealDBClient, UpstreamUnavailableError


def _make_meals(prefix: str, count: int) -> list[dict]:
    return [{"idMeal": f"{prefix}{i}", "strMeal": f"{prefix} meal {i}"} for i in range(count)]


class FakeMealDBClient(MealDBClient):
    """Records calls and serves canned data. Failures are configurable.

    ``in_flight`` / ``max_in_flight`` track how many requests were pending
    at the same time.
    """

    def __init__(self) -> None:
        self.letters: dict[str, list[dict]] = {}
        self.by_name: dict[str, list[dict]] = {}
        self.stubs: dict[str, list[dict]] = {}
        self.details: dict[str, dict] = {}
        self.categories: list[dict] = []
        self.random_payload: dict = {"meals": [{"idMeal": "52772"}]}
        self.failing_letters: set[str] = set()
        self.failing_ids: set[str] = set()
        self.fail_all = False
        self.calls: list[tuple[str, str]] = []
        self.in_flight = 0
        self.max_in_flight = 0

    def _check(self) -> None:
        if self.fail_all:
            raise UpstreamUnavailableError("upstream down", status_code=503)

    async def _pending(self) -> None:
        self.in_flight += 1
        self.max_in_flight = max(self.max_in_flight, self.in_flight)
        try:
            # Yield so sibling requests interleave
            await asyncio.sleep(0)
        finally:
            self.in_flight -= 1

    async def search_by_first_letter(self, letter: str) -> list[dict]:
        self.calls.append(("letter", letter))
        self._check()
        await self._pending()
        if letter in self.failing_letters:
            raise UpstreamUnavailableError(f"letter {letter} failed")
        return list(self.letters.get(letter, []))

    async def search_by_name(self, name: str) -> list[dict]:
        self.calls.append(("name", name))
        self._check()
        return list(self.by_name.get(name, []))

    async def filter_by_category(self, category: str) -> list[dict]:
        self.calls.append(("category", category))
        self._check()
        return list(self.stubs.get(category, []))

    async def lookup_by_id(self, meal_id: str) -> dict | None:
        self.calls.append(("lookup", meal_id))
        self._check()
        await self._pending()
        if meal_id in self.failing_ids:
            raise UpstreamUnavailableError(f"lookup {meal_id} failed")
        return self.details.get(meal_id)

    async def list_categories(self) -> list[dict]:
        self.calls.append(("categories", ""))
        self._check()
        return list(self.categories)

    async def random_meal(self) -> dict:
        self.calls.append(("random", ""))
        self._check()
        return self.random_payload

    def count(self, kind: str) -> int:
        return sum(1 for call_kind, _ in self.calls if call_kind == kind)


@pytest.fixture
def upstream() -> FakeMealDBClient:
    return FakeMealDBClient()


@pytest.fixture
def make_meals():
    """Factory for lists of distinct meal records."""
    return _make_meals
