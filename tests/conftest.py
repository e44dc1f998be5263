"""
pytest Fixtures for Bookshelf API Tests

This file contains shared fixtures used across all test files.

For database tests, we use:
- session scope for the engine (expensive to create)
- function scope for sessions (isolation between tests)

Repositories commit their own work. Each test session is bound to a
connection whose outer transaction is rolled back afterwards, so those
commits never outlive the test.
"""

# =============================================================================
# TEST ENVIRONMENT SETUP
# =============================================================================
# IMPORTANT: Set environment variables BEFORE importing the app.
# Settings are cached on first use, so later changes are ignored.
import os

os.environ["RATE_LIMIT_ENABLED"] = "false"
os.environ["CACHE_ENABLED"] = "false"
os.environ["DATABASE_URL"] = "sqlite:///:memory:"

from collections.abc import Generator
from datetime import UTC, date, datetime

import pytest
from fastapi.testclient import TestClient
from sqlalchemy import create_engine
from sqlalchemy.orm import Session, sessionmaker
from sqlalchemy.pool import StaticPool

from bookshelf.database import Base, get_db
from bookshelf.main import app
from bookshelf.models import Author, Book

# =============================================================================
# DATABASE FIXTURES
# =============================================================================
# SQLite in-memory keeps the suite fast and self-contained. Some PostgreSQL
# behaviour (timezone-aware timestamps, server-side now()) differs slightly.


@pytest.fixture(scope="session")
def engine():
    """
    Create a SQLite in-memory database engine.

    StaticPool keeps the single connection alive for the entire session.
    Without it, the in-memory database would disappear between connections.
    """
    engine = create_engine(
        "sqlite:///:memory:",
        connect_args={"check_same_thread": False},
        poolclass=StaticPool,
    )

    Base.metadata.create_all(bind=engine)

    yield engine

    Base.metadata.drop_all(bind=engine)


@pytest.fixture(scope="function")
def db_session(engine) -> Generator[Session, None, None]:
    """
    Create a fresh database session for each test.

    The session is wrapped in a transaction that's rolled back,
    ensuring test isolation without needing to recreate tables.
    """
    TestSessionLocal = sessionmaker(
        autocommit=False,
        autoflush=False,
        bind=engine,
    )

    connection = engine.connect()
    transaction = connection.begin()
    session = TestSessionLocal(bind=connection)

    yield session

    session.close()
    transaction.rollback()
    connection.close()


@pytest.fixture(scope="function")
def client(db_session: Session) -> Generator[TestClient, None, None]:
    """
    Create a test client that talks to the test database.

    get_db is overridden so every request shares the test session.
    """

    def override_get_db():
        """Provide test database session instead of real one."""
        try:
            yield db_session
        finally:
            pass  # Session cleanup handled by db_session fixture

    app.dependency_overrides[get_db] = override_get_db

    with TestClient(app) as test_client:
        yield test_client

    app.dependency_overrides.clear()


# =============================================================================
# SAMPLE DATA FIXTURES
# =============================================================================


@pytest.fixture
def sample_author(db_session: Session) -> Author:
    """George Orwell with one book, 1984."""
    author = Author(
        first_name="George",
        last_name="Orwell",
        books=[
            Book(
                title="1984",
                published_date=date(1949, 6, 8),
                description="A dystopian novel set in a totalitarian society.",
            ),
        ],
    )
    db_session.add(author)
    db_session.commit()
    db_session.refresh(author)
    return author


@pytest.fixture
def sample_book(sample_author: Author) -> Book:
    """The book written by sample_author."""
    return sample_author.books[0]


@pytest.fixture
def deleted_author(db_session: Session) -> Author:
    """An author that has already been soft-deleted."""
    author = Author(
        first_name="Deleted",
        last_name="Writer",
        deleted_at=datetime.now(UTC),
    )
    db_session.add(author)
    db_session.commit()
    db_session.refresh(author)
    return author


@pytest.fixture
def multiple_authors(db_session: Session) -> list[Author]:
    """Five authors, inserted out of alphabetical order."""
    names = [
        ("Jane", None, "Austen"),
        ("Isaac", None, "Asimov"),
        ("Ernest", "Miller", "Hemingway"),
        ("John", "Ronald Reuel", "Tolkien"),
        ("Mary", "Wollstonecraft", "Shelley"),
    ]
    authors = [
        Author(first_name=first, middle_name=middle, last_name=last)
        for first, middle, last in names
    ]
    db_session.add_all(authors)
    db_session.commit()
    for author in authors:
        db_session.refresh(author)
    return authors


@pytest.fixture
def multiple_books(db_session: Session) -> list[Book]:
    """Twelve books with distinct titles and publication years."""
    books = [
        Book(
            title=f"Test Book {i + 1:02d}",
            published_date=date(1950 + i, 1, 1),
            description=f"Description for book {i + 1}",
        )
        for i in range(12)
    ]
    db_session.add_all(books)
    db_session.commit()
    for book in books:
        db_session.refresh(book)
    return books
