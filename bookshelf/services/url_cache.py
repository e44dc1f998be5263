"""
URL-keyed HTTP Cache

Middleware that caches successful GET responses in Redis, keyed by the
request path and query string:

    GET /api/v1/authors/?page=2&sort=last_name,asc
        -> key "url:/api/v1/authors/?page=2&sort=last_name,asc"

Only paths registered with the middleware are cached. Writes that change
what a cached path would return call invalidate_url_cache(path) to drop
every cached URL under that path, whatever its query string.

Responses carry an X-Cache header (HIT or MISS) on cached paths.

Reads and invalidations are not coordinated: a GET that was computed
before a concurrent write invalidated its path can still store the old
body, which is then served until its TTL expires.
"""

import logging
from collections.abc import Iterable

from fastapi import Request
from starlette.concurrency import run_in_threadpool
from starlette.middleware.base import BaseHTTPMiddleware, RequestResponseEndpoint
from starlette.responses import Response
from starlette.types import ASGIApp

from bookshelf.services.cache import delete_matching, read_cached, write_cached

logger = logging.getLogger(__name__)

URL_CACHE_PREFIX = "url"
CACHE_HEADER = "X-Cache"


def url_cache_key(path: str, query: str = "") -> str:
    """Cache key for a request path and raw query string."""
    if query:
        return f"{URL_CACHE_PREFIX}:{path}?{query}"
    return f"{URL_CACHE_PREFIX}:{path}"


def invalidate_url_cache(path: str) -> int:
    """
    Drop every cached response whose URL starts with ``path``.

    Returns:
        Number of cached responses removed
    """
    deleted = delete_matching(f"{url_cache_key(path.rstrip('/'))}*")
    if deleted:
        logger.info(f"Invalidated {deleted} cached response(s) under {path}")
    return deleted


class URLCacheMiddleware(BaseHTTPMiddleware):
    """
    Cache JSON GET responses for a fixed set of paths.

    Args:
        app: The wrapped ASGI application
        paths: Paths to cache; trailing slashes are ignored when matching
        ttl: Time-to-live of cached responses (settings.cache_ttl if None)
    """

    def __init__(self, app: ASGIApp, paths: Iterable[str], ttl: int | None = None) -> None:
        super().__init__(app)
        self.paths = {path.rstrip("/") for path in paths}
        self.ttl = ttl

    def is_cached_path(self, path: str) -> bool:
        return path.rstrip("/") in self.paths

    async def dispatch(self, request: Request, call_next: RequestResponseEndpoint) -> Response:
        if request.method != "GET" or not self.is_cached_path(request.url.path):
            return await call_next(request)

        key = url_cache_key(request.url.path, request.url.query)

        cached = await run_in_threadpool(read_cached, key)
        if cached is not None:
            return Response(
                content=cached,
                media_type="application/json",
                headers={CACHE_HEADER: "HIT"},
            )

        response = await call_next(request)
        if response.status_code != 200 or response.headers.get("content-type") != "application/json":
            return response

        body = b"".join([chunk async for chunk in response.body_iterator])
        await run_in_threadpool(write_cached, key, body.decode("utf-8"), self.ttl)

        headers = dict(response.headers)
        headers[CACHE_HEADER] = "MISS"
        return Response(content=body, status_code=response.status_code, headers=headers)
