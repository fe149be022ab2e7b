"""API routes for Meal Proxy.

Thin wrappers over MealService. Response shapes match what the frontend
reads: ``{"meals": [...]}``, ``{"categories": [...]}``, the raw random
payload, or ``{"error": "..."}`` with status 500 on failure.
"""

import logging

from fastapi import APIRouter, Depends

from meal_proxy.api.errors import OperationFailedError
from meal_proxy.config import settings
from meal_proxy.models import CategoriesResponse, ErrorResponse, MealsResponse, Operation
from meal_proxy.services import MealDBClient, MealService, MemoryCacheService, TheMealDBClient

logger = logging.getLogger(__name__)

router = APIRouter()

ERROR_RESPONSES = {500: {"model": ErrorResponse}}


# Service instances
_cache_service: MemoryCacheService | None = None
_mealdb_client: MealDBClient | None = None
_meal_service: MealService | None = None


def get_cache_service() -> MemoryCacheService:
    global _cache_service
    if _cache_service is None:
        _cache_service = MemoryCacheService(
            max_entries=settings.cache_max_entries,
            ttl_seconds=settings.cache_ttl_seconds,
        )
    return _cache_service


def get_mealdb_client() -> MealDBClient:
    global _mealdb_client
    if _mealdb_client is None:
        _mealdb_client = TheMealDBClient(
            base_url=settings.mealdb_base_url,
            timeout=settings.upstream_timeout_seconds,
            max_concurrency=settings.upstream_max_concurrency,
            max_retries=settings.upstream_max_retries,
        )
    return _mealdb_client


def get_meal_service() -> MealService:
    global _meal_service
    if _meal_service is None:
        _meal_service = MealService(
            client=get_mealdb_client(),
            cache=get_cache_service(),
            result_limit=settings.result_limit,
        )
    return _meal_service


async def close_services() -> None:
    """Close the shared upstream client, if one was created."""
    global _mealdb_client, _meal_service
    if _mealdb_client is not None:
        await _mealdb_client.close()
    _mealdb_client = None
    _meal_service = None


@router.get("/all", response_model=MealsResponse, responses=ERROR_RESPONSES)
async def list_all_meals(
    service: MealService = Depends(get_meal_service),
) -> MealsResponse:
    """Get the first 50 meals across all starting letters."""
    try:
        meals = await service.list_all()
    except Exception as e:
        raise OperationFailedError(Operation.LIST_ALL) from e
    return MealsResponse(meals=meals)


@router.get("/search", response_model=MealsResponse, responses=ERROR_RESPONSES)
async def search_meals(
    name: str = "",
    service: MealService = Depends(get_meal_service),
) -> MealsResponse:
    """Search meals by name (top 50). An empty name matches everything."""
    try:
        meals = await service.search(name)
    except Exception as e:
        raise OperationFailedError(Operation.SEARCH) from e
    return MealsResponse(meals=meals)


@router.get("/random", responses=ERROR_RESPONSES)
async def random_meal(
    service: MealService = Depends(get_meal_service),
) -> dict:
    """Get a random meal. Returns the upstream payload unchanged."""
    try:
        return await service.random()
    except Exception as e:
        raise OperationFailedError(Operation.RANDOM) from e


@router.get("/categories", response_model=CategoriesResponse, responses=ERROR_RESPONSES)
async def list_categories(
    service: MealService = Depends(get_meal_service),
) -> CategoriesResponse:
    try:
        categories = await service.list_categories()
    except Exception as e:
        raise OperationFailedError(Operation.LIST_CATEGORIES) from e
    return CategoriesResponse(categories=categories)


@router.get("/category/{name}", response_model=MealsResponse, responses=ERROR_RESPONSES)
async def list_meals_by_category(
    name: str,
    service: MealService = Depends(get_meal_service),
) -> MealsResponse:
    """Get meals in a category with full details."""
    try:
        meals = await service.list_by_category(name)
    except Exception as e:
        raise OperationFailedError(Operation.LIST_BY_CATEGORY) from e
    return MealsResponse(meals=meals)
