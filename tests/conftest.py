"""Root test fixtures shared across all test types.

This conftest contains fixtures that can be used by both unit and integration tests.
Database-specific fixtures are in tests/integration/conftest.py.
"""

import os

# Set the environment before any app imports: testing disables rate limiting,
# and cheap Argon2 parameters keep signup/login tests fast
os.environ.setdefault("APP_ENV", "testing")
os.environ.setdefault("DATABASE_URL", "sqlite+aiosqlite:///./ems-test.db")
os.environ.setdefault("JWT_SECRET_KEY", "test-signing-key-0123456789abcdef0123456789")
os.environ.setdefault("ARGON2_TIME_COST", "1")
os.environ.setdefault("ARGON2_MEMORY_COST", "1024")

# ruff: noqa: E402 - Imports must be after env var setup
from collections.abc import AsyncGenerator

import pytest
from fakeredis import FakeServer
from fakeredis import aioredis as fakeredis_aio
from redis.asyncio import Redis

from src.ems.core.cache import CacheService, CacheStore
from src.ems.core.config import Settings, get_settings
from src.ems.core.security import PasswordHasher, TokenService
from tests.helpers import MutableClock

# Clear settings cache to ensure test environment variables are picked up
get_settings.cache_clear()


@pytest.fixture
def settings() -> Settings:
    return get_settings()


@pytest.fixture
def clock() -> MutableClock:
    return MutableClock()


@pytest.fixture
def token_service(settings: Settings) -> TokenService:
    return TokenService.from_settings(settings)


@pytest.fixture
def password_hasher(settings: Settings) -> PasswordHasher:
    return PasswordHasher.from_settings(settings)


@pytest.fixture
def cache_store(clock: MutableClock) -> CacheStore:
    return CacheStore(default_ttl=60, clock=clock)


# --- Redis Test Fixtures (shared) ---


@pytest.fixture
async def fake_redis() -> AsyncGenerator[Redis]:
    """Provides a fakeredis client for testing.

    Returns an in-memory Redis implementation that behaves like
    a real Redis server but doesn't require external dependencies.
    """
    client = fakeredis_aio.FakeRedis(decode_responses=True)
    yield client
    await client.flushall()
    await client.aclose()


@pytest.fixture
async def cache_service(fake_redis: Redis) -> CacheService:
    """A connected CacheService backed by fakeredis."""
    service = CacheService(fake_redis, prefix="test:", default_ttl=60)
    await service.connect()
    return service


@pytest.fixture
async def unavailable_cache() -> AsyncGenerator[CacheService]:
    """A CacheService whose Redis server refuses every connection."""
    server = FakeServer()
    server.connected = False
    client = fakeredis_aio.FakeRedis(server=server, decode_responses=True)
    service = CacheService(client, prefix="test:", default_ttl=60)
    await service.connect()
    yield service
    await client.aclose()
