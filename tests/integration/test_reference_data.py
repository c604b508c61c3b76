"""Integration tests for the department and designation listings."""

from typing import Any

import pytest
from httpx import AsyncClient
from redis.asyncio import Redis
from sqlalchemy import update
from sqlalchemy.ext.asyncio import AsyncSession

from src.ems.models import MasterDepartment
from tests.helpers import auth_headers

pytestmark = [pytest.mark.integration, pytest.mark.asyncio]

DEPARTMENTS_URL = "/api/v1/departments"
DESIGNATIONS_URL = "/api/v1/designations"


@pytest.fixture
def owner_headers(workspace_owner: dict[str, Any]) -> dict[str, str]:
    return auth_headers(workspace_owner["token"], workspace_owner["workspace_id"])


class TestListing:
    async def test_first_page_with_links(
        self, client: AsyncClient, owner_headers: dict[str, str]
    ) -> None:
        response = await client.get(DEPARTMENTS_URL, headers=owner_headers)

        assert response.status_code == 200
        body = response.json()
        assert body["meta"]["message"] == "SUCCESSFULLY_FETCHED"
        page = body["data"]
        assert page["count"] == 10
        assert page["totalCount"] == 12
        assert [item["id"] for item in page["items"]] == list(range(1, 11))
        assert page["items"][0]["name"] == "Engineering"

        pagination = page["pagination"]
        assert pagination["totalPages"] == 2
        assert pagination["currentPage"] == 1
        assert pagination["previousPage"] is None
        assert pagination["nextPage"] == 2
        links = pagination["links"]
        assert links["previousPageLink"] is None
        assert links["nextPageLink"] == "http://localhost:3000/api/v1/departments?offset=10&limit=10"
        assert links["lastPageLink"] == "http://localhost:3000/api/v1/departments?offset=10&limit=10"

    async def test_pages_do_not_overlap(
        self, client: AsyncClient, owner_headers: dict[str, str]
    ) -> None:
        first = await client.get(DEPARTMENTS_URL, params={"limit": 5}, headers=owner_headers)
        second = await client.get(
            DEPARTMENTS_URL, params={"offset": 5, "limit": 5}, headers=owner_headers
        )

        first_ids = [item["id"] for item in first.json()["data"]["items"]]
        second_ids = [item["id"] for item in second.json()["data"]["items"]]
        assert first_ids == [1, 2, 3, 4, 5]
        assert second_ids == [6, 7, 8, 9, 10]
        assert second.json()["data"]["pagination"]["previousPage"] == 1

    async def test_search_is_case_insensitive(
        self, client: AsyncClient, owner_headers: dict[str, str]
    ) -> None:
        departments = await client.get(
            DEPARTMENTS_URL, params={"search": "ENG"}, headers=owner_headers
        )
        designations = await client.get(
            DESIGNATIONS_URL, params={"search": "eng"}, headers=owner_headers
        )

        assert [item["name"] for item in departments.json()["data"]["items"]] == ["Engineering"]
        assert designations.json()["data"]["totalCount"] == 4

    async def test_search_without_matches(
        self, client: AsyncClient, owner_headers: dict[str, str]
    ) -> None:
        response = await client.get(
            DEPARTMENTS_URL, params={"search": "zzz"}, headers=owner_headers
        )

        page = response.json()["data"]
        assert page["items"] == []
        assert page["totalCount"] == 0
        assert page["pagination"]["totalPages"] == 0

    async def test_deleted_and_inactive_rows_are_hidden(
        self, client: AsyncClient, db_session: AsyncSession, owner_headers: dict[str, str]
    ) -> None:
        await db_session.execute(
            update(MasterDepartment).where(MasterDepartment.id == 1).values(is_deleted=True)
        )
        await db_session.execute(
            update(MasterDepartment).where(MasterDepartment.id == 2).values(is_active=False)
        )
        await db_session.commit()

        response = await client.get(DEPARTMENTS_URL, headers=owner_headers)

        page = response.json()["data"]
        assert page["totalCount"] == 10
        ids = [item["id"] for item in page["items"]]
        assert 1 not in ids
        assert 2 not in ids

    async def test_limit_above_maximum_is_rejected(
        self, client: AsyncClient, owner_headers: dict[str, str]
    ) -> None:
        response = await client.get(DEPARTMENTS_URL, params={"limit": 101}, headers=owner_headers)

        assert response.status_code == 422
        assert response.json()["error"]["code"] == "VALIDATION_ERROR"


class TestWorkspaceAccess:
    async def test_missing_token(self, client: AsyncClient) -> None:
        response = await client.get(DEPARTMENTS_URL)

        assert response.status_code == 401
        assert response.json()["error"]["code"] == "AUTHENTICATION_REQUIRED"

    async def test_missing_workspace_header(
        self, client: AsyncClient, workspace_owner: dict[str, Any]
    ) -> None:
        response = await client.get(DEPARTMENTS_URL, headers=auth_headers(workspace_owner["token"]))

        assert response.status_code == 401
        assert response.json()["error"]["code"] == "WORKSPACE_REQUIRED"

    async def test_other_workspace_is_forbidden(
        self, client: AsyncClient, workspace_owner: dict[str, Any]
    ) -> None:
        headers = auth_headers(workspace_owner["token"], "00000000-0000-0000-0000-000000000001")
        response = await client.get(DEPARTMENTS_URL, headers=headers)

        assert response.status_code == 403
        assert response.json()["error"]["code"] == "AUTHORIZATION_ERROR"

    async def test_malformed_workspace_header_is_forbidden(
        self, client: AsyncClient, workspace_owner: dict[str, Any]
    ) -> None:
        headers = auth_headers(workspace_owner["token"], "not-a-uuid")
        response = await client.get(DEPARTMENTS_URL, headers=headers)

        assert response.status_code == 403


class TestDataCache:
    async def test_page_is_cached_in_redis(
        self, client: AsyncClient, fake_redis: Redis, owner_headers: dict[str, str]
    ) -> None:
        await client.get(DEPARTMENTS_URL, headers=owner_headers)

        key = "test:data:departments:list:search=:offset=0:limit=10"
        assert await fake_redis.exists(key) == 1
        assert await fake_redis.sismember("test:tag:departments", key)

    async def test_cached_page_is_served_without_database(
        self,
        client: AsyncClient,
        db_session: AsyncSession,
        fake_redis: Redis,
        owner_headers: dict[str, str],
    ) -> None:
        await client.get(DEPARTMENTS_URL, headers=owner_headers)
        await db_session.execute(
            update(MasterDepartment).where(MasterDepartment.id == 1).values(name="Renamed")
        )
        await db_session.commit()

        # A different URL skips the response cache but hits the same data key
        response = await client.get(
            DEPARTMENTS_URL, params={"search": ""}, headers=owner_headers
        )

        assert response.headers["X-Cache"] == "MISS"
        assert response.json()["data"]["items"][0]["name"] == "Engineering"

    async def test_listing_works_without_redis(
        self, degraded_client: AsyncClient, workspace_owner: dict[str, Any]
    ) -> None:
        headers = auth_headers(workspace_owner["token"], workspace_owner["workspace_id"])
        response = await degraded_client.get(DEPARTMENTS_URL, headers=headers)

        assert response.status_code == 200
        assert response.json()["data"]["totalCount"] == 12
