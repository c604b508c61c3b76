"""Cache keys, TTLs and HTTP cache headers, in one place."""

from typing import Final

# TTLs in seconds
TTL_SHORT: Final[int] = 60
TTL_MEDIUM: Final[int] = 300
TTL_LONG: Final[int] = 1800
TTL_MASTER_DATA: Final[int] = 3600

# Namespaces and tags
NAMESPACE_DATA: Final[str] = "data"
TAG_API: Final[str] = "api"
TAG_DEPARTMENTS: Final[str] = "departments"
TAG_DESIGNATIONS: Final[str] = "designations"

_REFERENCE_LIST_SEGMENTS: Final[tuple[str, ...]] = ("/departments", "/designations")
_MASTER_DATA_SEGMENTS: Final[tuple[str, ...]] = ("/roles", "/statuses", "/genders")
_UNCACHED_SEGMENTS: Final[tuple[str, ...]] = ("/auth", "/admin", "/health", "/metrics")

NO_STORE: Final[str] = "no-store, no-cache, must-revalidate"


def reference_list_key(entity: str, *, search: str, offset: int, limit: int) -> str:
    """Key for one page of a reference-data listing."""
    return f"{entity}:list:search={search.strip().lower()}:offset={offset}:limit={limit}"


def response_ttl_for_path(path: str) -> int | None:
    """TTL for a cached GET response, or None when the path must not be cached."""
    if any(segment in path for segment in _UNCACHED_SEGMENTS):
        return None
    if any(segment in path for segment in _REFERENCE_LIST_SEGMENTS):
        return TTL_LONG
    if any(segment in path for segment in _MASTER_DATA_SEGMENTS):
        return TTL_MASTER_DATA
    return TTL_SHORT


def cache_control_for_path(path: str) -> str:
    """Cache-Control value for a response served from `path`."""
    ttl = response_ttl_for_path(path)
    if ttl is None:
        return NO_STORE
    # Every cacheable route sits behind a bearer token
    return f"private, max-age={ttl}"


def response_tags_for_path(path: str) -> list[str]:
    """Invalidation tags for a cached response: `api` plus the entity it lists."""
    tags = [TAG_API]
    tags += [segment.lstrip("/") for segment in _REFERENCE_LIST_SEGMENTS if segment in path]
    return tags


def is_no_store_path(path: str) -> bool:
    """Credential and admin endpoints whose responses must never be stored."""
    return "/auth" in path or "/admin" in path
