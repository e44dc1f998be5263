"""
Author Model

Represents an author in the bookshelf database.

SQLAlchemy 2.0 Features Used:
- mapped_column(): Define columns with full type support
- Mapped[]: Type hint wrapper for SQLAlchemy columns
- relationship(): Define relationships between models
- back_populates: Two-way relationship binding
"""

from datetime import datetime
from typing import TYPE_CHECKING

from sqlalchemy import DateTime, String, func
from sqlalchemy.orm import Mapped, mapped_column, relationship

from bookshelf.database import Base

if TYPE_CHECKING:
    from bookshelf.models.book import Book


class Author(Base):
    """
    Author model representing writers in the system.

    Table: authors

    Relationships:
    - books: Many-to-Many relationship through book_authors table

    Soft delete:
    - deleted_at is NULL for live rows; repositories filter on it

    Example:
        author = Author(first_name="George", last_name="Orwell")
        db.add(author)
        db.commit()
    """

    __tablename__ = "authors"

    id: Mapped[int] = mapped_column(primary_key=True)

    # -------------------------------------------------------------------------
    # Name Fields
    # -------------------------------------------------------------------------
    first_name: Mapped[str] = mapped_column(
        String(255),
        index=True,
        nullable=False,
        comment="Author's given name"
    )

    middle_name: Mapped[str | None] = mapped_column(
        String(255),
        nullable=True,
        comment="Author's middle name"
    )

    last_name: Mapped[str] = mapped_column(
        String(255),
        index=True,
        nullable=False,
        comment="Author's family name"
    )

    # -------------------------------------------------------------------------
    # Timestamps
    # -------------------------------------------------------------------------
    # Set by the database, so a freshly inserted row must be re-read to see them
    created_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True),
        server_default=func.now(),
        nullable=False,
        comment="When the author record was created"
    )

    updated_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True),
        server_default=func.now(),
        onupdate=func.now(),
        nullable=False,
        comment="When the author record was last updated"
    )

    deleted_at: Mapped[datetime | None] = mapped_column(
        DateTime(timezone=True),
        nullable=True,
        index=True,
        comment="When the author was soft-deleted, NULL while live"
    )

    # -------------------------------------------------------------------------
    # Relationships
    # -------------------------------------------------------------------------
    # Includes soft-deleted books; repositories drop them when mapping
    books: Mapped[list["Book"]] = relationship(
        "Book",
        secondary="book_authors",
        back_populates="authors",
    )

    @property
    def full_name(self) -> str:
        """First, middle and last name joined by single spaces."""
        parts = [self.first_name, self.middle_name, self.last_name]
        return " ".join(part for part in parts if part)

    def __repr__(self) -> str:
        return f"Author(id={self.id}, name='{self.full_name}')"
