"""Tests for error envelopes rendered by core/exceptions.py."""

from collections.abc import AsyncGenerator

import pytest
from asgi_correlation_id import CorrelationIdMiddleware
from fastapi import FastAPI
from httpx import ASGITransport, AsyncClient
from pydantic import BaseModel
from sqlalchemy.exc import IntegrityError

from src.ems.core.errors import (
    AuthorizationError,
    ConflictError,
    InternalError,
    NotFoundError,
    TokenExpiredError,
)
from src.ems.core.exceptions import setup_exception_handlers

pytestmark = pytest.mark.unit


class Item(BaseModel):
    name: str


def _build_app() -> FastAPI:
    app = FastAPI()
    setup_exception_handlers(app)
    app.add_middleware(CorrelationIdMiddleware)

    @app.get("/not-found")
    async def not_found() -> None:
        raise NotFoundError("User does not exist.")

    @app.get("/conflict")
    async def conflict() -> None:
        raise ConflictError("User with this email already exists.")

    @app.get("/forbidden")
    async def forbidden() -> None:
        raise AuthorizationError("Admin privileges required")

    @app.get("/expired")
    async def expired() -> None:
        raise TokenExpiredError()

    @app.get("/internal")
    async def internal() -> None:
        raise InternalError("Token could not be issued", code="TOKEN_ISSUANCE_FAILED")

    @app.get("/fk")
    async def foreign_key() -> None:
        raise IntegrityError("INSERT", {}, Exception("FOREIGN KEY constraint failed"))

    @app.get("/unique")
    async def unique() -> None:
        raise IntegrityError("INSERT", {}, Exception("UNIQUE constraint failed: x.y"))

    @app.get("/boom")
    async def boom() -> None:
        raise RuntimeError("kaboom")

    @app.post("/items")
    async def create_item(item: Item) -> Item:
        return item

    return app


@pytest.fixture
async def client() -> AsyncGenerator[AsyncClient]:
    transport = ASGITransport(app=_build_app(), raise_app_exceptions=False)
    async with AsyncClient(transport=transport, base_url="http://test") as client:
        yield client


@pytest.mark.parametrize(
    ("path", "status_code", "code", "message"),
    [
        ("/not-found", 404, "NOT_FOUND", "User does not exist."),
        ("/conflict", 409, "CONFLICT", "User with this email already exists."),
        ("/forbidden", 403, "AUTHORIZATION_ERROR", "Admin privileges required"),
        ("/expired", 401, "TOKEN_EXPIRED", "Token has expired"),
        ("/fk", 400, "VALIDATION_ERROR", "Invalid reference"),
        ("/unique", 409, "CONFLICT", "Resource already exists"),
    ],
)
async def test_expected_errors(
    client: AsyncClient, path: str, status_code: int, code: str, message: str
) -> None:
    response = await client.get(path)

    assert response.status_code == status_code
    error = response.json()["error"]
    assert error["isError"] is True
    assert error["code"] == code
    assert error["message"] == message
    assert error["origin"] == path
    assert error["requestId"] == response.headers["X-Request-ID"]
    assert "stack" not in error


async def test_internal_error_includes_stack_outside_production(client: AsyncClient) -> None:
    response = await client.get("/internal")

    assert response.status_code == 500
    error = response.json()["error"]
    assert error["code"] == "TOKEN_ISSUANCE_FAILED"
    assert error["stack"]


async def test_unhandled_exception_is_masked(client: AsyncClient) -> None:
    response = await client.get("/boom")

    assert response.status_code == 500
    error = response.json()["error"]
    assert error["code"] == "INTERNAL_ERROR"
    assert error["message"] == "Internal server error"
    assert "kaboom" not in error["message"]


async def test_request_validation_details(client: AsyncClient) -> None:
    response = await client.post("/items", json={})

    assert response.status_code == 422
    error = response.json()["error"]
    assert error["code"] == "VALIDATION_ERROR"
    assert error["details"][0]["field"] == "name"
    assert error["details"][0]["type"] == "missing"


async def test_unknown_route_uses_envelope(client: AsyncClient) -> None:
    response = await client.get("/missing")

    assert response.status_code == 404
    assert response.json()["error"]["code"] == "NOT_FOUND"
