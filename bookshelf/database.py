"""
Database Configuration Module

This module sets up SQLAlchemy 2.0 with PostgreSQL for the Bookshelf API.

We use SYNCHRONOUS SQLAlchemy: FastAPI runs sync route handlers in a
threadpool, and each request gets its own session, so the connection pool
is the only shared state.

Session Management Pattern
==========================
We use the "session per request" pattern:
1. Request arrives → create a new session
2. Repositories use that session for all database operations in the request
3. Repositories commit their own unit of work
4. Close session when request ends

This is implemented using FastAPI's dependency injection.
"""

from collections.abc import Generator
from typing import Any

from sqlalchemy import create_engine
from sqlalchemy.orm import DeclarativeBase, Session, sessionmaker

from bookshelf.config import get_settings

settings = get_settings()


# =============================================================================
# Database Engine
# =============================================================================
# Key parameters:
# - pool_size: Number of connections to keep open permanently
# - max_overflow: How many extra connections can be created during high load
# - pool_pre_ping: Test connection health before using (prevents stale connections)
# - echo: Log all SQL statements (debug mode only)

def _engine_options(database_url: str) -> dict[str, Any]:
    """Build create_engine() keyword arguments for the configured backend."""
    options: dict[str, Any] = {
        "pool_pre_ping": True,
        "echo": settings.debug,
    }
    if database_url.startswith("sqlite"):
        # SQLite is only used for local experiments; its pools take no sizing
        options["connect_args"] = {"check_same_thread": False}
    else:
        options["pool_size"] = settings.db_pool_size
        options["max_overflow"] = settings.db_max_overflow
    return options


engine = create_engine(settings.database_url, **_engine_options(settings.database_url))


# =============================================================================
# Session Factory
# =============================================================================
SessionLocal = sessionmaker(
    autocommit=False,
    autoflush=False,
    bind=engine,
)


# =============================================================================
# Base Model Class
# =============================================================================
class Base(DeclarativeBase):
    """
    Base class for all SQLAlchemy models.

    Alembic reads Base.metadata to discover tables for migrations.
    """
    pass


# =============================================================================
# Dependency Injection
# =============================================================================
def get_db() -> Generator[Session, None, None]:
    """
    Database session dependency for FastAPI.

    Creates a session, yields it to the request and always closes it,
    even if the handler raised.

    Yields:
        SQLAlchemy Session instance
    """
    db = SessionLocal()
    try:
        yield db
    finally:
        db.close()


# =============================================================================
# Utility Functions
# =============================================================================
def create_tables() -> None:
    """
    Create all database tables.

    Development and seeding helper; production schemas are managed by Alembic.
    """
    Base.metadata.create_all(bind=engine)
