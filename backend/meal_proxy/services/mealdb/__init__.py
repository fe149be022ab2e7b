"""TheMealDB service module.

Provides the upstream recipe API client and its error types.
"""

from .errors import MealDBError, UpstreamDataError, UpstreamUnavailableError
from .service import DEFAULT_BASE_URL, MealDBClient, TheMealDBClient

__all__ = [
    "DEFAULT_BASE_URL",
    "MealDBClient",
    "TheMealDBClient",
    "MealDBError",
    "UpstreamDataError",
    "UpstreamUnavailableError",
]
