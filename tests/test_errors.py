"""
Tests for Application Exception Handlers

The author use-case is replaced with one that raises, so each handler
registered in main.py can be checked in isolation.
"""

from collections.abc import Generator
from unittest.mock import patch

import pytest
from fastapi import status
from fastapi.testclient import TestClient
from sqlalchemy.exc import IntegrityError, OperationalError

from bookshelf import main
from bookshelf.dependencies import get_author_usecase
from bookshelf.main import app


class RaisingAuthorUseCase:
    """Raises the given exception from every read."""

    def __init__(self, exc: Exception):
        self.exc = exc

    def read(self, author_id):
        raise self.exc


@pytest.fixture
def raise_from_read() -> Generator:
    """Return a setter that makes GET /authors/{id} raise an exception."""

    def set_exception(exc: Exception) -> None:
        app.dependency_overrides[get_author_usecase] = lambda: RaisingAuthorUseCase(exc)

    yield set_exception

    app.dependency_overrides.clear()


@pytest.fixture
def error_client() -> Generator[TestClient, None, None]:
    """Client that returns 500 responses instead of re-raising them."""
    with TestClient(app, raise_server_exceptions=False) as test_client:
        yield test_client


class TestDatabaseErrors:
    """Tests for the SQLAlchemy exception handlers."""

    def test_integrity_error(self, error_client, raise_from_read):
        """Test constraint violations are a 400 without database details."""
        raise_from_read(IntegrityError("INSERT ...", {}, Exception("duplicate key")))

        response = error_client.get("/api/v1/authors/1")

        assert response.status_code == status.HTTP_400_BAD_REQUEST
        assert response.json() == {"detail": "Bad request"}

    def test_database_error(self, error_client, raise_from_read):
        """Test other database errors are a 500 with a generic message."""
        raise_from_read(OperationalError("SELECT ...", {}, Exception("connection refused")))

        response = error_client.get("/api/v1/authors/1")

        assert response.status_code == status.HTTP_500_INTERNAL_SERVER_ERROR
        assert response.json() == {
            "detail": "A database error occurred. Please try again later."
        }
        assert "connection refused" not in response.text


class TestUnhandledErrors:
    """Tests for the catch-all exception handler."""

    def test_message_hidden(self, error_client, raise_from_read):
        """Test the error message is not shown outside debug mode."""
        raise_from_read(RuntimeError("secret internals"))

        response = error_client.get("/api/v1/authors/1")

        assert response.status_code == status.HTTP_500_INTERNAL_SERVER_ERROR
        assert response.json() == {"detail": "An internal error occurred."}

    def test_message_shown_in_debug(self, error_client, raise_from_read):
        """Test debug mode returns the error message."""
        raise_from_read(RuntimeError("secret internals"))

        with patch.object(main.settings, "debug", True):
            response = error_client.get("/api/v1/authors/1")

        assert response.status_code == status.HTTP_500_INTERNAL_SERVER_ERROR
        assert response.json() == {"detail": "secret internals"}
