"""Exception handlers that render the error envelope with request context."""

import traceback
from datetime import UTC, datetime
from typing import Any

from asgi_correlation_id import correlation_id
from fastapi import FastAPI, Request
from fastapi.encoders import jsonable_encoder
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse
from slowapi.errors import RateLimitExceeded
from sqlalchemy.exc import IntegrityError
from starlette.exceptions import HTTPException as StarletteHTTPException

from src.ems.core.config import get_settings
from src.ems.core.errors import AppError
from src.ems.core.logging import get_logger

logger = get_logger(__name__)

_HTTP_CODES = {
    400: "BAD_REQUEST",
    401: "UNAUTHORIZED",
    403: "FORBIDDEN",
    404: "NOT_FOUND",
    405: "METHOD_NOT_ALLOWED",
    409: "CONFLICT",
    422: "VALIDATION_ERROR",
    429: "TOO_MANY_REQUESTS",
}


def error_response(
    request: Request,
    *,
    status_code: int,
    message: str,
    code: str,
    details: list[dict[str, Any]] | None = None,
    exc: BaseException | None = None,
    headers: dict[str, str] | None = None,
) -> JSONResponse:
    """Build the `{"error": {...}}` envelope for a failed request."""
    body: dict[str, Any] = {
        "isError": True,
        "message": message,
        "code": code,
        "origin": request.url.path,
        "timestamp": datetime.now(UTC).isoformat(),
        "requestId": correlation_id.get(),
    }
    if details:
        body["details"] = details
    settings = getattr(request.app.state, "settings", None) or get_settings()
    if exc is not None and exc.__traceback__ is not None and not settings.is_production:
        body["stack"] = traceback.format_exception(exc)

    return JSONResponse(
        status_code=status_code,
        content=jsonable_encoder({"error": body}),
        headers=headers,
    )


def _log_context(request: Request) -> dict[str, Any]:
    context: dict[str, Any] = {"method": request.method, "path": request.url.path}
    claims = getattr(request.state, "claims", None)
    if claims is not None:
        context["user_id"] = str(claims.user_id)
    return context


def setup_exception_handlers(app: FastAPI) -> None:
    """Configure exception handlers that render every failure as an error envelope."""

    @app.exception_handler(AppError)
    async def app_error_handler(request: Request, exc: AppError) -> JSONResponse:
        if exc.status_code >= 500:
            logger.error(
                "Request failed",
                code=exc.code,
                status_code=exc.status_code,
                error=exc.message,
                exc_info=exc,
                **_log_context(request),
            )
        else:
            logger.info(
                "Request rejected",
                code=exc.code,
                status_code=exc.status_code,
                error=exc.message,
                **_log_context(request),
            )
        return error_response(
            request,
            status_code=exc.status_code,
            message=exc.message,
            code=exc.code,
            details=exc.details,
            exc=exc if exc.status_code >= 500 else None,
        )

    @app.exception_handler(RequestValidationError)
    async def validation_exception_handler(
        request: Request, exc: RequestValidationError
    ) -> JSONResponse:
        details = [
            {
                "field": ".".join(str(part) for part in error["loc"] if part != "body"),
                "message": error["msg"],
                "type": error["type"],
            }
            for error in exc.errors()
        ]
        logger.info("Request validation failed", errors=len(details), **_log_context(request))
        return error_response(
            request,
            status_code=422,
            message="Request validation failed",
            code="VALIDATION_ERROR",
            details=details,
        )

    @app.exception_handler(IntegrityError)
    async def integrity_error_handler(request: Request, exc: IntegrityError) -> JSONResponse:
        if "foreign key" in str(exc.orig).lower():
            status_code, code, message = 400, "VALIDATION_ERROR", "Invalid reference"
        else:
            status_code, code, message = 409, "CONFLICT", "Resource already exists"
        logger.warning(
            "Constraint violation",
            code=code,
            error=str(exc.orig),
            **_log_context(request),
        )
        return error_response(request, status_code=status_code, message=message, code=code)

    @app.exception_handler(RateLimitExceeded)
    async def rate_limit_handler(request: Request, exc: RateLimitExceeded) -> JSONResponse:
        logger.warning("Rate limit exceeded", limit=str(exc.detail), **_log_context(request))
        return error_response(
            request,
            status_code=429,
            message="Too many requests. Please slow down.",
            code="TOO_MANY_REQUESTS",
            headers={"Retry-After": "60"},
        )

    @app.exception_handler(StarletteHTTPException)
    async def http_exception_handler(
        request: Request, exc: StarletteHTTPException
    ) -> JSONResponse:
        return error_response(
            request,
            status_code=exc.status_code,
            message=str(exc.detail),
            code=_HTTP_CODES.get(exc.status_code, "HTTP_ERROR"),
            headers=getattr(exc, "headers", None),
        )

    @app.exception_handler(Exception)
    async def generic_exception_handler(request: Request, exc: Exception) -> JSONResponse:
        logger.exception(
            "Unhandled exception",
            exc_info=exc,
            **_log_context(request),
        )
        return error_response(
            request,
            status_code=500,
            message="Internal server error",
            code="INTERNAL_ERROR",
            exc=exc,
        )
