"""
Tests for the Redis Cache and the URL Cache Middleware

Redis is replaced by a small in-memory fake, patched in where the cache
service looks up its client.
"""

from fnmatch import fnmatchcase
from unittest.mock import patch

import pytest
from fastapi import status

from bookshelf.services.cache import delete_matching, read_cached, write_cached
from bookshelf.services.url_cache import CACHE_HEADER, invalidate_url_cache, url_cache_key


class FakeRedis:
    """The subset of redis.Redis the cache service uses, backed by a dict."""

    def __init__(self):
        self.store = {}
        self.ttls = {}

    def ping(self):
        return True

    def get(self, key):
        return self.store.get(key)

    def setex(self, key, ttl, value):
        self.store[key] = value
        self.ttls[key] = ttl

    def delete(self, *keys):
        removed = 0
        for key in keys:
            if self.store.pop(key, None) is not None:
                removed += 1
        return removed

    def scan_iter(self, match="*"):
        return [key for key in list(self.store) if fnmatchcase(key, match)]

    def info(self, section=None):
        return {"keyspace_hits": 0, "keyspace_misses": 0}

    def dbsize(self):
        return len(self.store)

    def close(self):
        pass


@pytest.fixture
def fake_redis():
    """Route every cache call to a fresh FakeRedis."""
    fake = FakeRedis()
    with patch("bookshelf.services.cache.get_redis_client", return_value=fake):
        yield fake


class TestURLCacheKey:
    """Tests for url_cache_key()."""

    def test_path_only(self):
        assert url_cache_key("/api/v1/authors/") == "url:/api/v1/authors/"

    def test_with_query(self):
        assert (
            url_cache_key("/api/v1/authors/", "page=2&sort=last_name,asc")
            == "url:/api/v1/authors/?page=2&sort=last_name,asc"
        )


class TestResponseStore:
    """Tests for read/write/delete against the fake client."""

    def test_write_then_read(self, fake_redis):
        """Test bodies are stored verbatim with their TTL."""
        assert write_cached("k", '{"data": []}', ttl=60)

        assert read_cached("k") == '{"data": []}'
        assert fake_redis.ttls["k"] == 60

    def test_default_ttl(self, fake_redis):
        write_cached("k", "{}")

        assert fake_redis.ttls["k"] == 300

    def test_read_missing(self, fake_redis):
        assert read_cached("missing") is None

    def test_delete_matching(self, fake_redis):
        """Test only keys matching the pattern are removed."""
        write_cached("url:/api/v1/authors/", "1")
        write_cached("url:/api/v1/authors/?page=2", "2")
        write_cached("url:/api/v1/books/", "3")

        assert delete_matching("url:/api/v1/authors*") == 2
        assert list(fake_redis.store) == ["url:/api/v1/books/"]

    def test_delete_matching_nothing(self, fake_redis):
        assert delete_matching("url:/nowhere*") == 0

    def test_invalidate_url_cache_ignores_trailing_slash(self, fake_redis):
        write_cached("url:/api/v1/authors/?limit=5", "1")

        assert invalidate_url_cache("/api/v1/authors/") == 1

    def test_no_client(self):
        """Test every operation degrades quietly without Redis."""
        with patch("bookshelf.services.cache.get_redis_client", return_value=None):
            assert read_cached("k") is None
            assert write_cached("k", "1") is False
            assert delete_matching("*") == 0


class TestURLCacheMiddleware:
    """Tests for the cached author list."""

    def test_miss_then_hit(self, client, fake_redis, sample_author):
        """Test the second identical request is served from the cache."""
        first = client.get("/api/v1/authors/")
        second = client.get("/api/v1/authors/")

        assert first.headers[CACHE_HEADER] == "MISS"
        assert second.headers[CACHE_HEADER] == "HIT"
        assert second.json() == first.json()
        assert "url:/api/v1/authors/" in fake_redis.store

    def test_query_string_is_part_of_key(self, client, fake_redis, multiple_authors):
        """Test different query strings are cached separately."""
        client.get("/api/v1/authors/?limit=2")

        response = client.get("/api/v1/authors/?limit=3")

        assert response.headers[CACHE_HEADER] == "MISS"
        assert response.json()["meta"]["size"] == 3

    def test_cached_with_configured_ttl(self, client, fake_redis):
        client.get("/api/v1/authors/")

        assert fake_redis.ttls["url:/api/v1/authors/"] == 300

    def test_create_author_invalidates(self, client, fake_redis):
        """Test a new author is visible right after creation."""
        client.get("/api/v1/authors/")

        client.post("/api/v1/authors/", json={"first_name": "Jane", "last_name": "Austen"})
        response = client.get("/api/v1/authors/")

        assert response.headers[CACHE_HEADER] == "MISS"
        assert response.json()["meta"]["total"] == 1

    def test_delete_author_invalidates(self, client, fake_redis, sample_author):
        client.get("/api/v1/authors/")

        client.delete(f"/api/v1/authors/{sample_author.id}")
        response = client.get("/api/v1/authors/")

        assert response.json()["data"] == []

    def test_book_update_invalidates(self, client, fake_redis, sample_author, sample_book):
        """Test book writes drop cached author lists that embed the book."""
        client.get("/api/v1/authors/")

        client.put(
            f"/api/v1/books/{sample_book.id}",
            json={"title": "Renamed", "published_date": "1949-06-08", "description": "d"},
        )
        response = client.get("/api/v1/authors/")

        assert response.headers[CACHE_HEADER] == "MISS"
        assert response.json()["data"][0]["books"][0]["title"] == "Renamed"

    def test_errors_not_cached(self, client, fake_redis):
        """Test only successful responses are stored."""
        response = client.get("/api/v1/authors/?limit=0")

        assert response.status_code == status.HTTP_400_BAD_REQUEST
        assert CACHE_HEADER not in response.headers
        assert fake_redis.store == {}

    def test_other_paths_not_cached(self, client, fake_redis, sample_author):
        """Test book lists and single authors bypass the cache."""
        books = client.get("/api/v1/books/")
        author = client.get(f"/api/v1/authors/{sample_author.id}")

        assert CACHE_HEADER not in books.headers
        assert CACHE_HEADER not in author.headers
        assert fake_redis.store == {}

    def test_without_redis(self, client, sample_author):
        """Test the author list still works when Redis is unavailable."""
        first = client.get("/api/v1/authors/")
        second = client.get("/api/v1/authors/")

        assert first.status_code == status.HTTP_200_OK
        assert second.headers[CACHE_HEADER] == "MISS"
