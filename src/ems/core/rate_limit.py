"""Rate limiting for credential endpoints.

Uses Redis for distributed rate limiting when REDIS_URL is configured.
Falls back to in-memory storage (per-process) when Redis is unavailable.
"""

from slowapi import Limiter
from slowapi.util import get_remote_address
from starlette.requests import Request

from src.ems.core.config import Settings, get_settings
from src.ems.core.logging import get_logger

logger = get_logger(__name__)

LOGIN_RATE_LIMIT = "5/minute"
SIGNUP_RATE_LIMIT = "3/minute"
REFRESH_RATE_LIMIT = "10/minute"
VERIFY_EMAIL_RATE_LIMIT = "10/minute"


def get_rate_limit_key(request: Request) -> str:
    """Rate limit key from client IP only.

    Never include user-controlled headers (like X-Workspace-ID) in the key:
    rotating header values would create unlimited new buckets.
    """
    return get_remote_address(request) or "unknown"


def create_limiter(settings: Settings) -> Limiter:
    """Create rate limiter with appropriate storage backend.

    Disabled in testing environment.
    """
    if settings.app_env == "testing":
        logger.info("Rate limiter disabled (testing environment)")
        return Limiter(key_func=get_rate_limit_key, enabled=False)

    # slowapi talks to Redis synchronously, so the plain redis:// URL is used
    if settings.redis_url:
        logger.info("Rate limiter using Redis backend")
        return Limiter(key_func=get_rate_limit_key, storage_uri=settings.redis_url)

    logger.info("Rate limiter using in-memory backend (not distributed)")
    return Limiter(key_func=get_rate_limit_key)


# Route decorators bind to this instance at import time
limiter = create_limiter(get_settings())
