"""
Services Package

Cross-cutting services that are not tied to one domain:
- cache.py: Redis client and the raw response store
- url_cache.py: URL-keyed HTTP cache middleware and invalidation
- rate_limiter.py: Rate limiting with slowapi
"""
