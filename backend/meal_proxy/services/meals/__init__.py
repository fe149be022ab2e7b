"""Meal fetch service module."""

from .service import ALPHABET, DEFAULT_RESULT_LIMIT, MealService

__all__ = [
    "ALPHABET",
    "DEFAULT_RESULT_LIMIT",
    "MealService",
]
