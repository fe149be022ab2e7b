from .core import (
    FAILURE_MESSAGES,
    CacheStatsResponse,
    CategoriesResponse,
    ErrorResponse,
    HealthResponse,
    MealsResponse,
    Operation,
)

__all__ = [
    "FAILURE_MESSAGES",
    "CacheStatsResponse",
    "CategoriesResponse",
    "ErrorResponse",
    "HealthResponse",
    "MealsResponse",
    "Operation",
]
