"""Cache administration endpoints (Super Admin and Admin only)."""

from typing import Any

from fastapi import APIRouter
from pydantic import Field, model_validator

from src.ems.api.dependencies import AdminClaims, CacheServiceDep, ResponseCacheDep
from src.ems.core.logging import get_logger
from src.ems.schemas import CamelModel, Envelope, envelope

logger = get_logger(__name__)

router = APIRouter(prefix="/admin", tags=["admin"])


class CacheClearRequest(CamelModel):
    """Give `tag` or `namespace` to narrow the clear; omit both to flush everything.

    Namespaces exist only in the Redis tier, so a namespace clear leaves the
    response cache alone.
    """

    tag: str | None = Field(default=None, min_length=1, max_length=100)
    namespace: str | None = Field(default=None, min_length=1, max_length=100)

    @model_validator(mode="after")
    def one_scope_only(self) -> "CacheClearRequest":
        if self.tag and self.namespace:
            raise ValueError("Give either tag or namespace, not both")
        return self


class CacheClearResult(CamelModel):
    tag: str | None = None
    namespace: str | None = None
    response_entries: int
    data_entries: int | None = None
    data_cleared: bool


class CacheStats(CamelModel):
    response_cache: dict[str, Any]
    data_cache: dict[str, Any]


@router.get("/cache/stats", response_model=Envelope[CacheStats])
async def cache_stats(
    claims: AdminClaims, cache: CacheServiceDep, response_cache: ResponseCacheDep
) -> Envelope[CacheStats]:
    """Entry counts and hit rates for both cache tiers."""
    stats = CacheStats(response_cache=response_cache.stats(), data_cache=await cache.get_stats())
    return envelope(stats)


@router.post("/cache/clear", response_model=Envelope[CacheClearResult])
async def clear_cache(
    claims: AdminClaims,
    cache: CacheServiceDep,
    response_cache: ResponseCacheDep,
    body: CacheClearRequest | None = None,
) -> Envelope[CacheClearResult]:
    """Invalidate one tag in both tiers, one Redis namespace, or flush both tiers."""
    tag = body.tag if body else None
    namespace = body.namespace if body else None
    if tag:
        response_entries = response_cache.invalidate_by_tag(tag)
        data_entries = await cache.invalidate_by_tag(tag)
        result = CacheClearResult(
            tag=tag,
            response_entries=response_entries,
            data_entries=data_entries,
            data_cleared=cache.is_connected,
        )
    elif namespace:
        result = CacheClearResult(
            namespace=namespace,
            response_entries=0,
            data_entries=await cache.invalidate_by_namespace(namespace),
            data_cleared=cache.is_connected,
        )
    else:
        result = CacheClearResult(
            response_entries=response_cache.clear(),
            data_cleared=await cache.clear(),
        )
    logger.info(
        "Cache cleared",
        tag=tag,
        namespace=namespace,
        response_entries=result.response_entries,
        data_cleared=result.data_cleared,
        user_id=str(claims.user_id),
    )
    return envelope(result, "SUCCESSFULLY_CLEARED")
