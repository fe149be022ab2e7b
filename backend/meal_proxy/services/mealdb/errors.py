"""Exceptions raised by the TheMealDB client."""


class MealDBError(Exception):
    """Base class for upstream recipe API failures."""


class UpstreamUnavailableError(MealDBError):
    """Transport failure, timeout or non-2xx response from upstream."""

    def __init__(self, message: str, status_code: int | None = None) -> None:
        super().__init__(message)
        self.status_code = status_code


class UpstreamDataError(MealDBError):
    """Upstream answered, but a record the caller requires is missing."""
