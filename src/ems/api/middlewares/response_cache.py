"""In-process HTTP response cache for authenticated GET endpoints.

Successful GET responses are kept in a `CacheStore` under a key made of the
caller's workspace and the full request URL, tagged `api` (plus the listed
entity) so admin invalidation can drop them. A stored response is served
only to a caller whose verified token matches the X-Workspace-ID header;
anyone else goes through to the route, which rejects them.
"""

from dataclasses import dataclass

from starlette.middleware.base import BaseHTTPMiddleware, RequestResponseEndpoint
from starlette.requests import Request
from starlette.responses import Response
from starlette.types import ASGIApp

from src.ems.core.cache import (
    CacheStore,
    cache_control_for_path,
    response_tags_for_path,
    response_ttl_for_path,
)
from src.ems.core.logging import get_logger

logger = get_logger(__name__)

CACHE_STATUS_HEADER = "X-Cache"


@dataclass(frozen=True, slots=True)
class CachedResponse:
    body: bytes
    media_type: str | None


def _workspace_key(request: Request) -> str | None:
    """Cache key for the caller, or None if the request must bypass the cache."""
    claims = getattr(request.state, "claims", None)
    workspace_id = request.headers.get("x-workspace-id")
    if claims is None or claims.workspace_id is None or not workspace_id:
        return None
    if str(claims.workspace_id) != workspace_id.lower():
        return None
    return f"{claims.workspace_id}:{request.url}"


class ResponseCacheMiddleware(BaseHTTPMiddleware):
    def __init__(self, app: ASGIApp, store: CacheStore, enabled: bool = True):
        super().__init__(app)
        self.store = store
        self.enabled = enabled

    async def dispatch(self, request: Request, call_next: RequestResponseEndpoint) -> Response:
        if not self.enabled or request.method != "GET":
            return await call_next(request)

        path = request.url.path
        ttl = response_ttl_for_path(path)
        key = _workspace_key(request) if ttl is not None else None
        if key is None:
            return await call_next(request)

        cached: CachedResponse | None = self.store.get(key)
        if cached is not None:
            logger.debug("Response cache hit", path=path)
            return Response(
                content=cached.body,
                status_code=200,
                media_type=cached.media_type,
                headers={
                    CACHE_STATUS_HEADER: "HIT",
                    "Cache-Control": cache_control_for_path(path),
                },
            )

        response = await call_next(request)
        if response.status_code != 200:
            return response

        body = b"".join([chunk async for chunk in response.body_iterator])
        self.store.set(
            key,
            CachedResponse(body=body, media_type=response.media_type),
            ttl=ttl,
            tags=response_tags_for_path(path),
        )

        fresh = Response(
            content=body,
            status_code=response.status_code,
            headers=dict(response.headers),
            media_type=response.media_type,
        )
        fresh.headers[CACHE_STATUS_HEADER] = "MISS"
        fresh.headers["Cache-Control"] = cache_control_for_path(path)
        return fresh
