"""Response models for the Meal Proxy API.

Meal and category records are passed through from TheMealDB untouched,
so they are typed as plain dicts. Only the envelopes are modelled.
"""

from enum import Enum

from pydantic import BaseModel, Field


class Operation(str, Enum):
    """Logical operations exposed to callers."""

    LIST_ALL = "list_all"
    SEARCH = "search"
    RANDOM = "random"
    LIST_CATEGORIES = "list_categories"
    LIST_BY_CATEGORY = "list_by_category"


# Generic messages shown to callers; internal causes are only logged
FAILURE_MESSAGES = {
    Operation.LIST_ALL: "Failed to fetch meals",
    Operation.SEARCH: "Failed to search meals",
    Operation.RANDOM: "Failed to fetch random meal",
    Operation.LIST_CATEGORIES: "Failed to fetch categories",
    Operation.LIST_BY_CATEGORY: "Failed to fetch meals by category",
}


class MealsResponse(BaseModel):
    """A list of meal records."""

    meals: list[dict] = Field(default_factory=list, description="Meal records")


class CategoriesResponse(BaseModel):
    """A list of meal categories."""

    categories: list[dict] = Field(
        default_factory=list, description="Category records"
    )


class ErrorResponse(BaseModel):
    """Generic operation-failed signal."""

    error: str = Field(..., description="Human-readable failure message")


class CacheStatsResponse(BaseModel):
    size: int
    max_entries: int
    ttl_seconds: float
    hits: int
    misses: int
    evictions: int
    expirations: int


class HealthResponse(BaseModel):
    status: str = "healthy"
    cache: CacheStatsResponse
