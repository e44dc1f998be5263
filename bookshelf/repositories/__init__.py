"""
Repositories Package

ORM-backed persistence, one class per domain. A repository owns its
queries and commits, and hands back plain schemas (never ORM rows) so the
layers above it stay free of SQLAlchemy.
"""

from bookshelf.repositories.author import AuthorRepository
from bookshelf.repositories.book import BookRepository

__all__ = [
    "AuthorRepository",
    "BookRepository",
]
