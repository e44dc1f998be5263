"""
Test Suite for Bookshelf API

Test Organization:
- conftest.py: Shared fixtures (test database, client, sample data)
- test_authors.py: Tests for /api/v1/authors endpoints
- test_books.py: Tests for /api/v1/books endpoints, including search
- test_usecases.py: Use-case layer against fake repositories
- test_filters.py: Sort parsing and paging arithmetic
- test_cache.py: Redis cache helpers and the URL cache middleware
- test_rate_limiter.py: Client identification and 429 responses
- test_errors.py: Database and unhandled error responses
- test_health.py: /health and / endpoints

Running Tests:
    # Run all tests
    pytest

    # Run specific file
    pytest tests/test_books.py

    # Run with verbose output
    pytest -v
"""
