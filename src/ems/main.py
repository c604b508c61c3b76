from collections.abc import AsyncGenerator
from contextlib import asynccontextmanager

from fastapi import FastAPI
from sqlalchemy.ext.asyncio import AsyncEngine

from src.ems.api.middlewares import setup_middlewares
from src.ems.api.v1.router import api_router
from src.ems.core.cache import CacheService, CacheStore
from src.ems.core.config import Settings, get_settings
from src.ems.core.db import create_engine, create_session_factory
from src.ems.core.exceptions import setup_exception_handlers
from src.ems.core.health import setup_health_endpoint, setup_metrics
from src.ems.core.logging import get_logger, setup_logging
from src.ems.core.rate_limit import limiter
from src.ems.core.security import PasswordHasher, TokenService

logger = get_logger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI) -> AsyncGenerator[None]:
    """Application lifespan - startup and shutdown."""
    settings: Settings = app.state.settings
    setup_logging(settings.debug, app_name=settings.app_name, env=settings.app_env)
    logger.info("Starting application", app_name=settings.app_name, env=settings.app_env)

    await app.state.cache_service.connect()

    yield

    logger.info("Closing connections...")
    await app.state.cache_service.disconnect()
    await app.state.engine.dispose()
    logger.info("Shutdown complete")


OPENAPI_TAGS = [
    {"name": "auth", "description": "Signup, login and token management"},
    {"name": "reference-data", "description": "Departments and designations"},
    {"name": "admin", "description": "Cache administration (admins only)"},
    {"name": "health", "description": "Liveness and dependency checks"},
]


def create_app(
    settings: Settings | None = None,
    *,
    engine: AsyncEngine | None = None,
    cache_service: CacheService | None = None,
    token_service: TokenService | None = None,
) -> FastAPI:
    """Build the application and its long-lived collaborators.

    Every collaborator can be passed in; anything omitted is built from
    settings. Nothing connects here: Redis is pinged in the lifespan and the
    engine connects lazily.
    """
    settings = settings or get_settings()
    engine = engine or create_engine(settings)
    token_service = token_service or TokenService.from_settings(settings)

    app = FastAPI(
        title=settings.app_name,
        description="Multi-tenant employee management API",
        version="0.1.0",
        openapi_tags=OPENAPI_TAGS,
        lifespan=lifespan,
        docs_url="/docs" if settings.enable_openapi else None,
        redoc_url="/redoc" if settings.enable_openapi else None,
        openapi_url="/openapi.json" if settings.enable_openapi else None,
    )

    app.state.settings = settings
    app.state.engine = engine
    app.state.session_factory = create_session_factory(engine)
    app.state.cache_service = cache_service or CacheService.from_settings(settings)
    app.state.response_cache = CacheStore(default_ttl=settings.cache_default_ttl)
    app.state.token_service = token_service
    app.state.password_hasher = PasswordHasher.from_settings(settings)
    app.state.limiter = limiter

    setup_exception_handlers(app)
    setup_middlewares(app, settings, token_service, app.state.response_cache)

    app.include_router(api_router)
    setup_health_endpoint(app)
    setup_metrics(app, settings)

    return app


app = create_app()
