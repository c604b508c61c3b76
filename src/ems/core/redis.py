"""Redis client construction.

The client is built once at startup and handed to the CacheService. Nothing
here pings the server; availability is decided by the service so an
unreachable Redis never blocks startup.
"""

from redis.asyncio import ConnectionPool, Redis

from src.ems.core.config import Settings


def create_redis_client(settings: Settings) -> Redis | None:
    """Create a pooled Redis client, or None when REDIS_URL is not set."""
    if not settings.redis_url:
        return None

    pool = ConnectionPool.from_url(
        settings.redis_url,
        max_connections=settings.redis_pool_size,
        decode_responses=True,  # Return strings instead of bytes
        socket_connect_timeout=settings.redis_connect_timeout,
        socket_timeout=settings.redis_command_timeout,
    )
    # from_pool hands pool ownership to the client so aclose() disconnects it
    return Redis.from_pool(pool)
