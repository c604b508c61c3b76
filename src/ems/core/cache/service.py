"""Redis-backed cache service with namespaces, tags and graceful degradation.

Entries are stored as a JSON envelope::

    {"data": ..., "timestamp": <epoch seconds>, "ttl": <seconds>,
     "tags": [...], "namespace": "..."}

under ``<prefix><namespace>:<key>`` with the native Redis expiry set to the
TTL. Tags map to Redis sets at ``<prefix>tag:<tag>`` holding full keys.

No public method raises. When Redis is missing, unreachable or misbehaving,
reads return None and writes return False (or 0), so callers fall through
to the database.
"""

import json
import time
from collections.abc import Awaitable, Callable, Iterable
from typing import Any, TypeVar

from redis.asyncio import Redis
from redis.exceptions import ConnectionError as RedisConnectionError
from redis.exceptions import RedisError
from redis.exceptions import TimeoutError as RedisTimeoutError

from src.ems.core.config import Settings
from src.ems.core.logging import get_logger
from src.ems.core.redis import create_redis_client

logger = get_logger(__name__)

T = TypeVar("T")

DEFAULT_NAMESPACE = "default"
DEFAULT_PREFIX = "ems:"
# Seconds to wait before probing a Redis that failed to answer
RECONNECT_INTERVAL = 30.0
_SCAN_BATCH = 500

_CONNECTION_ERRORS = (RedisConnectionError, RedisTimeoutError, OSError)
_OPERATION_ERRORS = (RedisError, OSError, TypeError, ValueError)


class CacheService:
    """Namespaced, TTL'd, tag-invalidatable cache over Redis.

    Construct once at startup (see `from_settings`), call `connect()` in the
    application lifespan and `disconnect()` on shutdown.
    """

    def __init__(
        self,
        client: Redis | None = None,
        *,
        prefix: str = DEFAULT_PREFIX,
        default_ttl: int = 300,
        client_factory: Callable[[], Redis | None] | None = None,
        clock: Callable[[], float] = time.time,
        reconnect_interval: float = RECONNECT_INTERVAL,
    ):
        self._client = client
        self._client_factory = client_factory
        self.prefix = prefix
        self.default_ttl = default_ttl
        self._clock = clock
        self._reconnect_interval = reconnect_interval
        self._connected = False
        self._last_attempt: float | None = None

    @classmethod
    def from_settings(cls, settings: Settings) -> "CacheService":
        return cls(
            prefix=settings.redis_key_prefix,
            default_ttl=settings.cache_default_ttl,
            client_factory=(lambda: create_redis_client(settings)) if settings.redis_url else None,
        )

    @property
    def is_connected(self) -> bool:
        return self._connected and self._client is not None

    @property
    def is_configured(self) -> bool:
        return self._client is not None or self._client_factory is not None

    # --- Connection lifecycle ---

    async def connect(self) -> bool:
        """Establish the Redis connection. Returns True when Redis answered a PING."""
        if self._client is None and self._client_factory is not None:
            self._client = self._client_factory()
        if self._client is None:
            logger.info("Redis not configured (REDIS_URL not set), cache disabled")
            return False

        self._last_attempt = time.monotonic()
        try:
            await self._client.ping()
        except _OPERATION_ERRORS as e:
            self._connected = False
            logger.warning("Redis connection failed, cache disabled", error=str(e))
            return False

        self._connected = True
        logger.info("Redis cache connected", prefix=self.prefix)
        return True

    async def disconnect(self) -> None:
        """Close the Redis connection. Call on app shutdown."""
        if self._client is not None:
            try:
                await self._client.aclose()
            except _OPERATION_ERRORS as e:
                logger.warning("Error closing Redis connection", error=str(e))
            logger.info("Redis cache disconnected")
        self._connected = False
        if self._client_factory is not None:
            self._client = None

    async def _reconnect(self) -> bool:
        """Drop a broken client and try once to get a working one back."""
        self._connected = False
        if self._client_factory is not None and self._client is not None:
            try:
                await self._client.aclose()
            except _OPERATION_ERRORS as e:
                logger.debug("Error closing broken Redis client", error=str(e))
            self._client = None
        return await self.connect()

    async def _ensure_connected(self) -> bool:
        if self.is_connected:
            return True
        if self._client is None and self._client_factory is None:
            return False
        if (
            self._last_attempt is not None
            and time.monotonic() - self._last_attempt < self._reconnect_interval
        ):
            return False
        return await self.connect()

    async def _execute(
        self,
        operation: str,
        func: Callable[[Redis], Awaitable[T]],
        default: T,
    ) -> T:
        """Run `func` against Redis, degrading to `default` on any failure."""
        if not await self._ensure_connected() or self._client is None:
            return default
        try:
            return await func(self._client)
        except _CONNECTION_ERRORS as e:
            logger.warning("Redis connection lost", operation=operation, error=str(e))
            if await self._reconnect() and self._client is not None:
                try:
                    return await func(self._client)
                except _OPERATION_ERRORS as retry_error:
                    logger.warning(
                        "Cache operation failed after reconnect",
                        operation=operation,
                        error=str(retry_error),
                    )
            return default
        except _OPERATION_ERRORS as e:
            logger.warning("Cache operation failed", operation=operation, error=str(e))
            return default

    # --- Key layout ---

    def build_key(self, key: str, namespace: str = DEFAULT_NAMESPACE) -> str:
        return f"{self.prefix}{namespace}:{key}"

    def tag_key(self, tag: str) -> str:
        return f"{self.prefix}tag:{tag}"

    # --- Entry operations ---

    async def set(
        self,
        key: str,
        value: Any,
        *,
        ttl: int | None = None,
        tags: Iterable[str] = (),
        namespace: str = DEFAULT_NAMESPACE,
    ) -> bool:
        """Store `value` under the namespaced key. Returns True on success."""
        ttl = self.default_ttl if ttl is None else ttl
        if ttl <= 0:
            logger.warning("Cache set skipped, TTL must be positive", key=key, ttl=ttl)
            return False

        tag_list = list(tags)
        full_key = self.build_key(key, namespace)

        async def _set(client: Redis) -> bool:
            payload = json.dumps(
                {
                    "data": value,
                    "timestamp": self._clock(),
                    "ttl": ttl,
                    "tags": tag_list,
                    "namespace": namespace,
                }
            )
            tag_keys = [self.tag_key(tag) for tag in tag_list]
            async with client.pipeline(transaction=True) as pipe:
                pipe.setex(full_key, ttl, payload)
                for tag_key in tag_keys:
                    pipe.sadd(tag_key, full_key)
                    pipe.ttl(tag_key)
                results = await pipe.execute()

            # A tag set lives at least as long as its longest-lived member
            tag_ttls = results[2::2]
            for tag_key, tag_ttl in zip(tag_keys, tag_ttls, strict=True):
                if tag_ttl < ttl:
                    await client.expire(tag_key, ttl)
            logger.debug("Cache SET", key=full_key, ttl=ttl, tags=tag_list)
            return True

        return await self._execute("set", _set, False)

    async def get(self, key: str, namespace: str = DEFAULT_NAMESPACE) -> Any | None:
        """Return the cached value, or None on miss, expiry or failure."""
        full_key = self.build_key(key, namespace)

        async def _get(client: Redis) -> Any | None:
            raw = await client.get(full_key)
            if raw is None:
                logger.debug("Cache MISS", key=full_key)
                return None
            try:
                envelope = json.loads(raw)
                data = envelope["data"]
                timestamp = float(envelope["timestamp"])
                ttl = float(envelope["ttl"])
            except (ValueError, TypeError, KeyError) as e:
                logger.warning("Discarding unreadable cache entry", key=full_key, error=str(e))
                return None
            if self._clock() - timestamp > ttl:
                await client.delete(full_key)
                logger.debug("Cache EXPIRED", key=full_key)
                return None
            logger.debug("Cache HIT", key=full_key)
            return data

        return await self._execute("get", _get, None)

    async def delete(self, key: str, namespace: str = DEFAULT_NAMESPACE) -> bool:
        full_key = self.build_key(key, namespace)

        async def _delete(client: Redis) -> bool:
            return bool(await client.delete(full_key))

        return await self._execute("delete", _delete, False)

    async def exists(self, key: str, namespace: str = DEFAULT_NAMESPACE) -> bool:
        full_key = self.build_key(key, namespace)

        async def _exists(client: Redis) -> bool:
            return bool(await client.exists(full_key))

        return await self._execute("exists", _exists, False)

    async def expire(self, key: str, ttl: int, namespace: str = DEFAULT_NAMESPACE) -> bool:
        full_key = self.build_key(key, namespace)

        async def _expire(client: Redis) -> bool:
            return bool(await client.expire(full_key, ttl))

        return await self._execute("expire", _expire, False)

    async def ttl(self, key: str, namespace: str = DEFAULT_NAMESPACE) -> int:
        """Remaining native TTL in seconds (-2 when missing or unavailable)."""
        full_key = self.build_key(key, namespace)

        async def _ttl(client: Redis) -> int:
            return int(await client.ttl(full_key))

        return await self._execute("ttl", _ttl, -2)

    # --- Bulk invalidation ---

    async def invalidate_by_tag(self, tag: str) -> int:
        """Delete every key indexed under `tag`, then the tag index itself."""
        tag_key = self.tag_key(tag)

        async def _invalidate(client: Redis) -> int:
            members = await client.smembers(tag_key)
            deleted = 0
            if members:
                deleted = int(await client.delete(*members))
            await client.delete(tag_key)
            logger.info("Cache tag invalidated", tag=tag, deleted=deleted)
            return deleted

        return await self._execute("invalidate_by_tag", _invalidate, 0)

    async def invalidate_by_namespace(self, namespace: str) -> int:
        """Delete every key under `namespace` using SCAN (never KEYS)."""
        pattern = f"{self.prefix}{namespace}:*"

        async def _invalidate(client: Redis) -> int:
            deleted = await self._delete_matching(client, pattern)
            logger.info("Cache namespace invalidated", namespace=namespace, deleted=deleted)
            return deleted

        return await self._execute("invalidate_by_namespace", _invalidate, 0)

    async def clear(self) -> bool:
        """Delete every key under the service prefix, tag indexes included."""

        async def _clear(client: Redis) -> bool:
            deleted = await self._delete_matching(client, f"{self.prefix}*")
            logger.info("Cache cleared", prefix=self.prefix, deleted=deleted)
            return True

        return await self._execute("clear", _clear, False)

    async def _delete_matching(self, client: Redis, pattern: str) -> int:
        deleted = 0
        batch: list[str] = []
        async for key in client.scan_iter(match=pattern, count=_SCAN_BATCH):
            batch.append(key)
            if len(batch) >= _SCAN_BATCH:
                deleted += int(await client.delete(*batch))
                batch = []
        if batch:
            deleted += int(await client.delete(*batch))
        return deleted

    # --- Health ---

    async def ping(self) -> bool:
        async def _ping(client: Redis) -> bool:
            return bool(await client.ping())

        return await self._execute("ping", _ping, False)

    async def is_healthy(self) -> bool:
        return await self.ping()

    async def get_stats(self) -> dict[str, Any]:
        """Connection state and key count under the prefix."""

        async def _stats(client: Redis) -> dict[str, Any]:
            keys = 0
            async for _ in client.scan_iter(match=f"{self.prefix}*", count=_SCAN_BATCH):
                keys += 1
            return {"connected": True, "prefix": self.prefix, "keys": keys}

        return await self._execute(
            "get_stats",
            _stats,
            {"connected": False, "prefix": self.prefix, "keys": 0},
        )
