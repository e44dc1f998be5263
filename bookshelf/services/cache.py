"""
Redis Response Store

Holds the process-wide Redis client and the few operations the URL cache
needs on it:

- read_cached / write_cached: raw response bodies, stored with a TTL
- delete_matching: drop every key matching a glob pattern
- get_cache_stats: connection status and key counts for /health

Bodies are stored exactly as the API rendered them, so a cache hit is
served without re-encoding.

When caching is disabled or Redis cannot be reached, reads miss and
writes/deletes do nothing. Redis errors are logged, never raised.
"""

import logging
from typing import Optional

import redis
from redis.exceptions import RedisError

from bookshelf.config import get_settings

logger = logging.getLogger(__name__)

_redis_client: Optional[redis.Redis] = None


def get_redis_client() -> Optional[redis.Redis]:
    """
    Get or create the Redis client.

    Returns:
        Redis client instance, or None when caching is disabled or Redis
        is unreachable
    """
    global _redis_client

    if _redis_client is not None:
        return _redis_client

    settings = get_settings()
    if not settings.cache_enabled:
        return None

    try:
        client = redis.from_url(
            settings.redis_url,
            decode_responses=True,
            socket_connect_timeout=5,
            socket_timeout=5,
        )
        client.ping()
    except RedisError as e:
        logger.warning(f"Failed to connect to Redis: {e}. Responses will not be cached.")
        return None

    logger.info("Connected to Redis")
    _redis_client = client
    return _redis_client


def close_redis_connection() -> None:
    """Close the Redis client on shutdown."""
    global _redis_client
    if _redis_client is not None:
        _redis_client.close()
        _redis_client = None
        logger.info("Redis connection closed")


def read_cached(key: str) -> Optional[str]:
    """Return the body stored under ``key``, or None on a miss."""
    client = get_redis_client()
    if client is None:
        return None

    try:
        body = client.get(key)
    except RedisError as e:
        logger.warning(f"Cache read failed for {key}: {e}")
        return None

    logger.debug(f"Cache {'HIT' if body is not None else 'MISS'}: {key}")
    return body


def write_cached(key: str, body: str, ttl: Optional[int] = None) -> bool:
    """
    Store a response body for ``ttl`` seconds (settings.cache_ttl by default).

    Returns:
        True if the body was stored
    """
    client = get_redis_client()
    if client is None:
        return False

    if ttl is None:
        ttl = get_settings().cache_ttl

    try:
        client.setex(key, ttl, body)
    except RedisError as e:
        logger.warning(f"Cache write failed for {key}: {e}")
        return False

    logger.debug(f"Cache SET: {key} (TTL: {ttl}s)")
    return True


def delete_matching(pattern: str) -> int:
    """
    Delete every key matching a Redis glob pattern.

    Keys are found with SCAN, which does not block the server the way
    KEYS does.

    Returns:
        Number of keys deleted
    """
    client = get_redis_client()
    if client is None:
        return 0

    try:
        keys = list(client.scan_iter(match=pattern))
        if not keys:
            return 0
        deleted = client.delete(*keys)
    except RedisError as e:
        logger.warning(f"Cache delete failed for {pattern}: {e}")
        return 0

    logger.debug(f"Cache DELETE: {pattern} ({deleted} keys)")
    return deleted


def get_cache_stats() -> dict:
    """Cache status for the health endpoint."""
    if not get_settings().cache_enabled:
        return {"status": "disabled"}

    client = get_redis_client()
    if client is None:
        return {"status": "disconnected"}

    try:
        info = client.info("stats")
        return {
            "status": "connected",
            "hits": info.get("keyspace_hits", 0),
            "misses": info.get("keyspace_misses", 0),
            "keys": client.dbsize(),
        }
    except RedisError:
        return {"status": "error"}
