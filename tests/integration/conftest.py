"""Integration test fixtures for database and HTTP client operations.

Each test gets its own SQLite database file (aiosqlite, foreign keys on)
with the schema created from SQLModel metadata and master data seeded.
Redis is replaced by fakeredis.
"""

from collections.abc import AsyncGenerator
from pathlib import Path
from typing import Any

import pytest
from fastapi import FastAPI
from httpx import ASGITransport, AsyncClient
from sqlalchemy.ext.asyncio import AsyncEngine, AsyncSession
from sqlmodel import SQLModel

from src.ems.core.cache import CacheService
from src.ems.core.config import Settings
from src.ems.core.db import create_engine
from src.ems.main import create_app
from src.ems.models import (
    MasterDepartment,
    MasterDesignation,
    MasterGender,
    MasterUserRole,
    MasterUserStatus,
)
from src.ems.models.seed import DEPARTMENTS, DESIGNATIONS, GENDERS, ROLES, STATUSES
from tests.helpers import signup_payload

_SEED = (
    (MasterUserRole, ROLES),
    (MasterUserStatus, STATUSES),
    (MasterGender, GENDERS),
    (MasterDepartment, DEPARTMENTS),
    (MasterDesignation, DESIGNATIONS),
)


async def seed_master_data(session: AsyncSession) -> None:
    for model, rows in _SEED:
        session.add_all(model(**row) for row in rows)
    await session.commit()


@pytest.fixture
def db_settings(settings: Settings, tmp_path: Path) -> Settings:
    return settings.model_copy(
        update={"database_url": f"sqlite+aiosqlite:///{tmp_path / 'ems.db'}"}
    )


@pytest.fixture
async def engine(db_settings: Settings) -> AsyncGenerator[AsyncEngine]:
    """Create a fresh database with every table and the master data."""
    test_engine = create_engine(db_settings)
    async with test_engine.begin() as conn:
        await conn.run_sync(SQLModel.metadata.create_all)

    async with AsyncSession(test_engine, expire_on_commit=False) as session:
        await seed_master_data(session)

    yield test_engine
    await test_engine.dispose()


@pytest.fixture
async def db_session(engine: AsyncEngine) -> AsyncGenerator[AsyncSession]:
    """Provide an async session for database operations.

    The session does NOT auto-commit; call `await session.commit()` to
    persist changes the app under test should see.
    """
    async with AsyncSession(engine, expire_on_commit=False) as session:
        yield session


@pytest.fixture
def app(db_settings: Settings, engine: AsyncEngine, cache_service: CacheService) -> FastAPI:
    return create_app(db_settings, engine=engine, cache_service=cache_service)


@pytest.fixture
async def client(app: FastAPI) -> AsyncGenerator[AsyncClient]:
    async with AsyncClient(transport=ASGITransport(app=app), base_url="http://test") as client:
        yield client


@pytest.fixture
async def degraded_client(
    db_settings: Settings, engine: AsyncEngine, unavailable_cache: CacheService
) -> AsyncGenerator[AsyncClient]:
    """Client for an app whose Redis is unreachable."""
    app = create_app(db_settings, engine=engine, cache_service=unavailable_cache)
    async with AsyncClient(transport=ASGITransport(app=app), base_url="http://test") as client:
        yield client


@pytest.fixture
async def workspace_owner(client: AsyncClient) -> dict[str, Any]:
    """Sign up a@x.com with workspace Acme and return the response data."""
    response = await client.post("/api/v1/auth/signup", json=signup_payload())
    assert response.status_code == 201, response.text
    data = response.json()["data"]
    return {
        "token": data["token"],
        "refresh_token": data["refreshToken"],
        "workspace_id": data["workspace"]["id"],
        "user_id": data["user"]["id"],
        "email": data["user"]["emailId"],
    }
