"""Health check and metrics endpoints."""

import secrets
import time
from typing import Any

from fastapi import Depends, FastAPI, HTTPException, Request, status
from fastapi.responses import JSONResponse
from fastapi.security import APIKeyHeader
from prometheus_client import CollectorRegistry
from prometheus_fastapi_instrumentator import Instrumentator
from sqlalchemy import text

from src.ems.core.config import Settings
from src.ems.core.logging import get_logger

logger = get_logger(__name__)

HEALTH_CACHE_TTL = 10  # seconds


class HealthCache:
    """Last health result, reused for HEALTH_CACHE_TTL seconds."""

    def __init__(self, ttl: float = HEALTH_CACHE_TTL):
        self.ttl = ttl
        self.result: dict[str, Any] | None = None
        self.checked_at: float = 0

    def get(self, now: float) -> dict[str, Any] | None:
        if self.result is None or now - self.checked_at >= self.ttl:
            return None
        return self.result

    def put(self, result: dict[str, Any], now: float) -> None:
        self.result = result
        self.checked_at = now

    def reset(self) -> None:
        self.result = None
        self.checked_at = 0


def _status_code(health_status: dict[str, Any]) -> int:
    # A degraded cache still serves traffic from the database
    return 503 if health_status["status"] == "unhealthy" else 200


async def check_health(request: Request) -> dict[str, Any]:
    """Check the database and the cache; only the database is required."""
    state = request.app.state
    health_status: dict[str, Any] = {
        "status": "healthy",
        "database": "unknown",
        "cache": "not_configured",
        "cached": False,
        "timestamp": time.time(),
    }

    try:
        async with state.session_factory() as session:
            await session.execute(text("SELECT 1"))
        health_status["database"] = "healthy"
    except Exception as e:
        logger.warning("Database health check failed", error=str(e))
        health_status["database"] = f"unhealthy: {e!s}"
        health_status["status"] = "unhealthy"

    cache = state.cache_service
    if cache.is_configured:
        if await cache.is_healthy():
            health_status["cache"] = "healthy"
        else:
            health_status["cache"] = "unhealthy"
            if health_status["status"] == "healthy":
                health_status["status"] = "degraded"

    return health_status


def setup_health_endpoint(app: FastAPI) -> None:
    """Configure the health check endpoint."""
    app.state.health_cache = HealthCache()

    @app.get("/health", tags=["health"])
    async def health(request: Request) -> JSONResponse:
        """Health check with dependency validation and caching."""
        cache: HealthCache = request.app.state.health_cache
        now = time.time()

        cached = cache.get(now)
        if cached is not None:
            response = {**cached, "cached": True, "cache_age_seconds": round(now - cache.checked_at, 1)}
            return JSONResponse(content=response, status_code=_status_code(cached))

        health_status = await check_health(request)
        cache.put(health_status, now)
        return JSONResponse(content=health_status, status_code=_status_code(health_status))


def setup_metrics(app: FastAPI, settings: Settings) -> None:
    """Configure Prometheus metrics with optional API key protection."""
    instrumentator = Instrumentator(registry=CollectorRegistry()).instrument(app)

    if settings.metrics_api_key:
        api_key_header = APIKeyHeader(name="X-Metrics-Key", auto_error=False)

        async def verify_metrics_key(
            api_key: str | None = Depends(api_key_header),
        ) -> None:
            if (
                api_key is None
                or settings.metrics_api_key is None
                or not secrets.compare_digest(api_key, settings.metrics_api_key)
            ):
                raise HTTPException(
                    status_code=status.HTTP_401_UNAUTHORIZED,
                    detail="Invalid or missing metrics API key",
                )

        instrumentator.expose(app, endpoint="/metrics", dependencies=[Depends(verify_metrics_key)])
    else:
        instrumentator.expose(app, endpoint="/metrics")
