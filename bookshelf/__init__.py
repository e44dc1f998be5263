"""
Bookshelf API Application Package

A layered CRUD service for authors and their books.

Package Structure:
- config.py: Application configuration using Pydantic Settings
- database.py: SQLAlchemy database connection and session management
- errors.py: Domain errors mapped to HTTP responses in main.py
- main.py: FastAPI application factory and configuration
- dependencies.py: Dependency injection functions (sessions, filters, use-cases)
- models/: SQLAlchemy ORM models
- schemas/: Pydantic request/response schemas and list filters
- repositories/: ORM-backed persistence, one module per domain
- usecases/: Business logic between routers and repositories
- routers/: API route handlers
- services/: Cross-cutting services (URL cache, rate limiting)
"""

__version__ = "0.1.0"
