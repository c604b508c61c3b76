"""Integration tests for the in-process response cache."""

from typing import Any

import pytest
from httpx import ASGITransport, AsyncClient
from sqlalchemy.ext.asyncio import AsyncEngine

from src.ems.core.cache import CacheService
from src.ems.core.config import Settings
from src.ems.main import create_app
from tests.helpers import auth_headers, signup_payload

pytestmark = [pytest.mark.integration, pytest.mark.asyncio]

DEPARTMENTS_URL = "/api/v1/departments"


async def test_second_request_is_a_hit(
    client: AsyncClient, workspace_owner: dict[str, Any]
) -> None:
    headers = auth_headers(workspace_owner["token"], workspace_owner["workspace_id"])

    first = await client.get(DEPARTMENTS_URL, headers=headers)
    second = await client.get(DEPARTMENTS_URL, headers=headers)

    assert first.headers["X-Cache"] == "MISS"
    assert second.headers["X-Cache"] == "HIT"
    assert second.headers["Cache-Control"] == "private, max-age=1800"
    assert second.json() == first.json()


async def test_query_string_is_part_of_the_key(
    client: AsyncClient, workspace_owner: dict[str, Any]
) -> None:
    headers = auth_headers(workspace_owner["token"], workspace_owner["workspace_id"])

    await client.get(DEPARTMENTS_URL, headers=headers)
    response = await client.get(DEPARTMENTS_URL, params={"offset": 10}, headers=headers)

    assert response.headers["X-Cache"] == "MISS"
    assert response.json()["data"]["count"] == 2


async def test_cached_response_is_not_served_to_another_workspace(
    client: AsyncClient, workspace_owner: dict[str, Any]
) -> None:
    await client.get(
        DEPARTMENTS_URL,
        headers=auth_headers(workspace_owner["token"], workspace_owner["workspace_id"]),
    )
    other = await client.post(
        "/api/v1/auth/signup", json=signup_payload(emailId="b@x.com", workspaceName="Other")
    )
    other_token = other.json()["data"]["token"]

    response = await client.get(
        DEPARTMENTS_URL, headers=auth_headers(other_token, workspace_owner["workspace_id"])
    )

    assert response.status_code == 403
    assert "X-Cache" not in response.headers


async def test_failed_responses_are_not_cached(
    client: AsyncClient, workspace_owner: dict[str, Any]
) -> None:
    headers = auth_headers(workspace_owner["token"], workspace_owner["workspace_id"])

    await client.get(DEPARTMENTS_URL, params={"limit": 500}, headers=headers)
    response = await client.get(DEPARTMENTS_URL, params={"limit": 500}, headers=headers)

    assert response.status_code == 422
    assert "X-Cache" not in response.headers


async def test_auth_routes_bypass_the_cache(
    client: AsyncClient, workspace_owner: dict[str, Any]
) -> None:
    headers = auth_headers(workspace_owner["token"], workspace_owner["workspace_id"])

    await client.get("/api/v1/auth/me", headers=headers)
    response = await client.get("/api/v1/auth/me", headers=headers)

    assert "X-Cache" not in response.headers
    assert response.headers["Cache-Control"] == "no-store, no-cache, must-revalidate"
    assert response.headers["Pragma"] == "no-cache"


async def test_clearing_a_tag_forces_a_miss(
    client: AsyncClient, workspace_owner: dict[str, Any]
) -> None:
    headers = auth_headers(workspace_owner["token"], workspace_owner["workspace_id"])
    await client.get(DEPARTMENTS_URL, headers=headers)

    cleared = await client.post(
        "/api/v1/admin/cache/clear", json={"tag": "departments"}, headers=headers
    )
    response = await client.get(DEPARTMENTS_URL, headers=headers)

    assert cleared.status_code == 200
    assert cleared.json()["data"]["responseEntries"] == 1
    assert response.headers["X-Cache"] == "MISS"


async def test_cache_can_be_disabled(
    db_settings: Settings, engine: AsyncEngine, cache_service: CacheService
) -> None:
    app = create_app(
        db_settings.model_copy(update={"response_cache_enabled": False}),
        engine=engine,
        cache_service=cache_service,
    )
    async with AsyncClient(transport=ASGITransport(app=app), base_url="http://test") as client:
        signup = await client.post("/api/v1/auth/signup", json=signup_payload())
        data = signup.json()["data"]
        headers = auth_headers(data["token"], data["workspace"]["id"])

        await client.get(DEPARTMENTS_URL, headers=headers)
        response = await client.get(DEPARTMENTS_URL, headers=headers)

    assert response.status_code == 200
    assert "X-Cache" not in response.headers
