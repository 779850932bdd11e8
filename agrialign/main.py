"""FastAPI application entrypoint — lifespan, routers, middleware."""

import logging
from collections.abc import AsyncIterator
from contextlib import asynccontextmanager

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware
from redis.asyncio import Redis
from redis.exceptions import RedisError

from agrialign.config import get_settings
from agrialign.data import sample_data
from agrialign.middleware.logging import RequestLoggingMiddleware, configure_structured_logging
from agrialign.middleware.rate_limit import RateLimitMiddleware
from agrialign.repositories.farmer_repo import InMemoryFarmerRepository
from agrialign.repositories.reference_data import ReferenceData
from agrialign.routes import data, forecast

logger = logging.getLogger("agrialign")


async def _connect_redis(url: str) -> Redis | None:
    """Open a Redis client, or return None so the API runs uncached."""
    if not url:
        return None

    redis = Redis.from_url(url, decode_responses=True)
    try:
        await redis.ping()
    except (RedisError, OSError) as exc:
        logger.warning("redis unavailable, caching disabled", extra={"error": str(exc)})
        await redis.aclose()
        return None
    return redis


@asynccontextmanager
async def lifespan(app: FastAPI) -> AsyncIterator[None]:
    """Application startup / shutdown lifecycle.

    Startup:
      1. Initialize structured logging
      2. Load reference tables and seed the farmer repository
      3. Connect to Redis when configured

    Shutdown:
      1. Close Redis connection pool
    """
    configure_structured_logging()
    settings = get_settings()
    logger.info(
        "AgriAlign starting",
        extra={
            "log_level": settings.log_level,
            "default_region_id": settings.default_region_id,
        },
    )

    app.state.reference_data = ReferenceData.from_sample_data()
    app.state.farmer_repository = InMemoryFarmerRepository(sample_data.FARMERS)
    redis = await _connect_redis(settings.redis_url)
    app.state.redis = redis

    yield

    logger.info("AgriAlign shutting down")
    if redis is not None:
        await redis.aclose()


app = FastAPI(
    title="AgriAlign API",
    description=(
        "Agricultural supply-chain coordination API that forecasts harvest inflow "
        "per farmer, detects transport stress and recommends cold-storage "
        "reservations for a district."
    ),
    version="0.1.0",
    lifespan=lifespan,
    docs_url="/docs",
    redoc_url="/redoc",
)

# ── Middleware ──────────────────────────────────────────────────────────────
app.add_middleware(RateLimitMiddleware)
app.add_middleware(
    CORSMiddleware,
    allow_origins=get_settings().cors_allow_origins,
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)
app.add_middleware(RequestLoggingMiddleware)


# ── Health check ────────────────────────────────────────────────────────────
@app.get("/health", tags=["system"])
async def health_check() -> dict[str, str]:
    """Basic health check — verifies the API process is alive."""
    return {
        "status": "ok",
        "service": "agrialign",
        "version": "0.1.0",
    }


# ── Router registration ────────────────────────────────────────────────────
app.include_router(forecast.router, prefix="/api/v1")
app.include_router(data.router, prefix="/api/v1")
