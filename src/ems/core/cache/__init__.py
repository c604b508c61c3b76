"""Two-tier caching: in-process CacheStore and Redis-backed CacheService."""

from src.ems.core.cache.policy import (
    NAMESPACE_DATA,
    NO_STORE,
    TAG_API,
    TAG_DEPARTMENTS,
    TAG_DESIGNATIONS,
    cache_control_for_path,
    is_no_store_path,
    reference_list_key,
    response_tags_for_path,
    response_ttl_for_path,
)
from src.ems.core.cache.service import DEFAULT_NAMESPACE, CacheService
from src.ems.core.cache.store import CacheEntry, CacheStore

__all__ = [
    "DEFAULT_NAMESPACE",
    "NAMESPACE_DATA",
    "NO_STORE",
    "TAG_API",
    "TAG_DEPARTMENTS",
    "TAG_DESIGNATIONS",
    "CacheEntry",
    "CacheService",
    "CacheStore",
    "cache_control_for_path",
    "is_no_store_path",
    "reference_list_key",
    "response_tags_for_path",
    "response_ttl_for_path",
]
