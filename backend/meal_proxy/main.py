"""Meal Proxy FastAPI Application.

Main entry point for the caching proxy in front of TheMealDB.
"""

import logging
from contextlib import asynccontextmanager

from fastapi import Depends, FastAPI, Request
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse

from meal_proxy.api import router
from meal_proxy.api.errors import OperationFailedError
from meal_proxy.api.routes import close_services, get_cache_service
from meal_proxy.config import settings
from meal_proxy.models import CacheStatsResponse, HealthResponse
from meal_proxy.services import CacheService

# Configure logging
logging.basicConfig(
    level=settings.log_level,
    format="%(asctime)s %(levelname)s [%(name)s] %(message)s",
    datefmt="%H:%M:%S",
)

logger = logging.getLogger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI):
    """Application lifespan handler."""
    # Startup
    yield
    # Shutdown - release the shared upstream HTTP client
    await close_services()


app = FastAPI(
    title="Meal Proxy API",
    description="Caching proxy for TheMealDB recipe API",
    version="0.1.0",
    lifespan=lifespan,
)

# CORS configuration
app.add_middleware(
    CORSMiddleware,
    allow_origins=settings.cors_origins,
    allow_methods=["*"],
    allow_headers=["*"],
)


# Global exception handlers
@app.exception_handler(OperationFailedError)
async def operation_failed_handler(request: Request, exc: OperationFailedError):
    """Log the internal cause, return only the generic message."""
    logger.error(
        "%s failed: %r",
        exc.operation.value,
        exc.__cause__,
        exc_info=exc.__cause__ or exc,
    )
    return JSONResponse(status_code=exc.status_code, content={"error": exc.user_message})


@app.exception_handler(Exception)
async def general_exception_handler(request: Request, exc: Exception):
    """Handle unexpected errors."""
    logger.exception("Unhandled error", exc_info=exc)
    return JSONResponse(status_code=500, content={"error": "Internal server error"})


# Include API routes
app.include_router(router, prefix="/api")


@app.get("/health", response_model=HealthResponse)
async def health_check(cache: CacheService = Depends(get_cache_service)) -> HealthResponse:
    """Health check endpoint with cache counters."""
    stats = cache.stats()
    return HealthResponse(cache=CacheStatsResponse(**vars(stats)))
