"""Application middlewares."""

from asgi_correlation_id import CorrelationIdMiddleware
from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from src.ems.core.cache import CacheStore
from src.ems.core.config import Settings
from src.ems.core.security import TokenService

from .auth_context import AuthContextMiddleware, extract_bearer_token
from .logging_context import logging_context_middleware
from .response_cache import CACHE_STATUS_HEADER, CachedResponse, ResponseCacheMiddleware
from .security_headers import DOCS_CSP, STRICT_CSP, SecurityHeadersMiddleware

__all__ = [
    "setup_middlewares",
    "AuthContextMiddleware",
    "CACHE_STATUS_HEADER",
    "CachedResponse",
    "ResponseCacheMiddleware",
    "SecurityHeadersMiddleware",
    "extract_bearer_token",
    "logging_context_middleware",
]


def setup_middlewares(
    app: FastAPI,
    settings: Settings,
    token_service: TokenService,
    response_cache: CacheStore,
) -> None:
    """Configure all application middlewares.

    Each add_middleware call wraps the previous ones, so they are added
    innermost first. Request flow:
    correlation id -> CORS -> security headers -> logging context ->
    auth context -> response cache -> route.
    """
    # Response cache - needs request.state.claims from the auth context
    app.add_middleware(
        ResponseCacheMiddleware,
        store=response_cache,
        enabled=settings.response_cache_enabled,
    )

    # Auth context - decodes the bearer token once per request
    app.add_middleware(AuthContextMiddleware, token_service=token_service)

    # Logging context - binds request_id to structlog context
    @app.middleware("http")
    async def _logging_context(request, call_next):  # type: ignore[no-untyped-def]
        return await logging_context_middleware(request, call_next)

    # Security headers (Helmet-style); Swagger UI needs the relaxed CSP
    csp = DOCS_CSP if settings.enable_openapi else STRICT_CSP
    app.add_middleware(
        SecurityHeadersMiddleware,
        content_security_policy=csp,
        enable_hsts=settings.is_production,
    )

    # CORS - handle cross-origin requests
    app.add_middleware(
        CORSMiddleware,
        allow_origins=settings.cors_origins,
        allow_credentials=True,
        allow_methods=["GET", "POST", "PUT", "PATCH", "DELETE"],
        allow_headers=["Authorization", "Content-Type", "X-Workspace-ID", "X-Request-ID"],
        expose_headers=[CACHE_STATUS_HEADER, "X-Request-ID"],
    )

    # Correlation ID - generates/propagates X-Request-ID (outermost)
    app.add_middleware(CorrelationIdMiddleware)
