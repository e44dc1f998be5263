"""
SQLAlchemy Models Package

Models are SQLAlchemy ORM classes that map to database tables.

Model Relationships:
- Author <-> Book: Many-to-Many through book_authors (an author writes many
                   books, a book can list several authors)

Both tables are soft-deleted: a row is live while deleted_at is NULL.

Import all models here so Alembic discovers them for migrations.
"""

# The order matters for SQLAlchemy to resolve relationships
from bookshelf.models.author import Author
from bookshelf.models.book import Book, book_authors

__all__ = [
    "Author",
    "Book",
    "book_authors",
]
