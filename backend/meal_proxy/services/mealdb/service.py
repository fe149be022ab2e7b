"""TheMealDB API client.

Free public recipe API, no key required beyond the shared test key baked
into the base URL.

Architecture:
- Abstract MealDBClient interface so the fetch layer can be tested with a
  double
- Shared httpx client with connection pooling
- Semaphore-bounded concurrency for fan-out requests
- Optional retry with backoff on transient failures (off by default)

List-shaped fields (``meals``, ``categories``) come back as ``null`` on a
miss; they are normalized to empty lists here, never treated as errors.
"""

import asyncio
import logging
from abc import ABC, abstractmethod
from typing import Any

import httpx

from .errors import UpstreamUnavailableError

logger = logging.getLogger(__name__)

DEFAULT_BASE_URL = "https://www.themealdb.com/api/json/v1/1"

# Status codes worth retrying when retries are enabled
RETRYABLE_STATUS_CODES = {429, 500, 502, 503, 504}


class MealDBClient(ABC):
    """Abstract base class for upstream recipe data access."""

    @abstractmethod
    async def search_by_first_letter(self, letter: str) -> list[dict]:
        pass

    @abstractmethod
    async def search_by_name(self, name: str) -> list[dict]:
        pass

    @abstractmethod
    async def filter_by_category(self, category: str) -> list[dict]:
        pass

    @abstractmethod
    async def lookup_by_id(self, meal_id: str) -> dict | None:
        pass

    @abstractmethod
    async def list_categories(self) -> list[dict]:
        pass

    @abstractmethod
    async def random_meal(self) -> dict:
        pass

    async def close(self) -> None:
        """Release any held resources."""


def _list_field(payload: Any, field: str) -> list[dict]:
    """Extract a list-shaped field, treating null or missing as empty."""
    if not isinstance(payload, dict):
        return []
    value = payload.get(field)
    return value if isinstance(value, list) else []


class TheMealDBClient(MealDBClient):
    """httpx-based client for the TheMealDB v1 JSON API.

    Uses a shared httpx client with connection pooling. The semaphore
    caps in-flight requests so a 26-way fan-out does not open 26 sockets.
    """

    HEADERS = {
        "User-Agent": "MealProxy/1.0",
        "Accept": "application/json",
    }

    def __init__(
        self,
        base_url: str = DEFAULT_BASE_URL,
        timeout: float = 10.0,
        max_concurrency: int = 10,
        max_retries: int = 0,
        retry_backoff: float = 0.5,
        transport: httpx.AsyncBaseTransport | None = None,
    ) -> None:
        if max_concurrency < 1:
            raise ValueError(f"max_concurrency must be at least 1, got {max_concurrency}")
        if max_retries < 0:
            raise ValueError(f"max_retries must not be negative, got {max_retries}")
        if timeout <= 0:
            raise ValueError(f"timeout must be positive, got {timeout}")
        self._base_url = base_url.rstrip("/")
        self._timeout = timeout
        self._max_retries = max_retries
        self._retry_backoff = retry_backoff
        self._transport = transport
        self._client: httpx.AsyncClient | None = None
        self._semaphore = asyncio.Semaphore(max_concurrency)

    def _get_client(self) -> httpx.AsyncClient:
        """Get or create the shared HTTP client."""
        if self._client is None or self._client.is_closed:
            self._client = httpx.AsyncClient(
                base_url=self._base_url,
                timeout=self._timeout,
                headers=self.HEADERS,
                limits=httpx.Limits(max_connections=20, max_keepalive_connections=10),
                follow_redirects=True,
                transport=self._transport,
            )
        return self._client

    async def close(self) -> None:
        if self._client and not self._client.is_closed:
            await self._client.aclose()
            self._client = None

    async def _get_json(self, path: str, params: dict | None = None) -> Any:
        """GET a JSON document, retrying transient failures if configured.

        Raises:
            UpstreamUnavailableError: On any httpx request error (timeout,
                connection, protocol, redirects), non-2xx status, or a
                body that is not JSON.
        """
        client = self._get_client()

        for attempt in range(self._max_retries + 1):
            can_retry = attempt < self._max_retries
            try:
                async with self._semaphore:
                    response = await client.get(path, params=params)
                    response.raise_for_status()
                    return response.json()
            except httpx.RequestError as e:
                if can_retry:
                    logger.info(
                        f"[MEALDB] Retry {attempt + 1}/{self._max_retries} for {path}: {type(e).__name__}"
                    )
                    await asyncio.sleep(self._retry_backoff * (attempt + 1))
                    continue
                raise UpstreamUnavailableError(f"{path} failed: {type(e).__name__}: {e}") from e
            except httpx.HTTPStatusError as e:
                status = e.response.status_code
                if can_retry and status in RETRYABLE_STATUS_CODES:
                    logger.info(f"[MEALDB] Retry {attempt + 1}/{self._max_retries} for {path}: HTTP {status}")
                    await asyncio.sleep(self._retry_backoff * (attempt + 1))
                    continue
                raise UpstreamUnavailableError(f"{path} returned HTTP {status}", status_code=status) from e
            except ValueError as e:
                raise UpstreamUnavailableError(f"{path} returned a non-JSON body") from e

        # Unreachable: the final attempt either returns or raises
        raise UpstreamUnavailableError(f"{path} failed")

    async def search_by_first_letter(self, letter: str) -> list[dict]:
        data = await self._get_json("/search.php", {"f": letter})
        return _list_field(data, "meals")

    async def search_by_name(self, name: str) -> list[dict]:
        """Search meals by name. An empty name matches everything upstream."""
        data = await self._get_json("/search.php", {"s": name})
        return _list_field(data, "meals")

    async def filter_by_category(self, category: str) -> list[dict]:
        """Return lightweight meal stubs (name, thumbnail, idMeal)."""
        data = await self._get_json("/filter.php", {"c": category})
        return _list_field(data, "meals")

    async def lookup_by_id(self, meal_id: str) -> dict | None:
        """Return the full meal record, or None if upstream has no such id."""
        data = await self._get_json("/lookup.php", {"i": meal_id})
        meals = _list_field(data, "meals")
        return meals[0] if meals else None

    async def list_categories(self) -> list[dict]:
        data = await self._get_json("/categories.php")
        return _list_field(data, "categories")

    async def random_meal(self) -> dict:
        """Return the raw upstream payload, ``{"meals": [meal]}``."""
        data = await self._get_json("/random.php")
        if not isinstance(data, dict):
            return {"meals": []}
        return data
