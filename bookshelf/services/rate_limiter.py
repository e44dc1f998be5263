"""
Rate Limiting Service

Per-client rate limiting with slowapi. SlowAPIMiddleware applies
settings.rate_limit_default to every route; counters live in Redis so
several API instances share them.

Clients are identified by their peer address. Behind a reverse proxy,
set TRUST_PROXY_HEADERS=true so X-Forwarded-For / X-Real-IP are used
instead; without a proxy those headers are client-controlled.
"""

import logging

from fastapi import Request
from slowapi import Limiter
from slowapi.errors import RateLimitExceeded
from slowapi.util import get_remote_address
from starlette.responses import JSONResponse

from bookshelf.config import get_settings

logger = logging.getLogger(__name__)
settings = get_settings()

DEFAULT_RETRY_AFTER = 60


def get_client_ip(request: Request) -> str:
    """Rate limit key: the client's address."""
    if settings.trust_proxy_headers:
        forwarded_for = request.headers.get("X-Forwarded-For")
        if forwarded_for:
            # Leftmost entry is the original client
            return forwarded_for.split(",")[0].strip()

        real_ip = request.headers.get("X-Real-IP")
        if real_ip:
            return real_ip.strip()

    return get_remote_address(request)


def create_limiter() -> Limiter:
    """Build the limiter from settings; in-memory storage when disabled."""
    storage_uri = settings.redis_url if settings.rate_limit_enabled else "memory://"

    limiter = Limiter(
        key_func=get_client_ip,
        default_limits=[settings.rate_limit_default],
        storage_uri=storage_uri,
        strategy="fixed-window",
        enabled=settings.rate_limit_enabled,
    )

    logger.info(
        f"Rate limiter initialized - enabled: {settings.rate_limit_enabled}, "
        f"default: {settings.rate_limit_default}"
    )

    return limiter


limiter = create_limiter()


def retry_after_seconds(exc: RateLimitExceeded) -> int:
    """Length of the exceeded limit's window, e.g. 60 for "100/minute"."""
    limit = getattr(exc, "limit", None)
    item = getattr(limit, "limit", None)
    if item is None:
        return DEFAULT_RETRY_AFTER
    return int(item.get_expiry())


def rate_limit_exceeded_handler(request: Request, exc: RateLimitExceeded) -> JSONResponse:
    """
    Answer 429 Too Many Requests.

    Retry-After is the length of the exceeded window, which is the longest
    the client can have to wait under the fixed-window strategy.
    """
    limit_detail = str(exc.detail)
    retry_after = retry_after_seconds(exc)

    logger.warning(f"Rate limit exceeded for {get_client_ip(request)}: {limit_detail}")

    return JSONResponse(
        status_code=429,
        content={
            "detail": "Too many requests. Please slow down.",
            "limit": limit_detail,
        },
        headers={
            "Retry-After": str(retry_after),
            "X-RateLimit-Limit": limit_detail,
        },
    )
