"""
Book Repository

ORM-backed persistence for books. Reads see live rows only
(deleted_at IS NULL); results are mapped to plain BookSchema records.
"""

import logging
from datetime import UTC, datetime
from typing import List, Tuple

from sqlalchemy import Select, select
from sqlalchemy.orm import Session

from bookshelf.errors import RecordNotFoundError
from bookshelf.models import Book
from bookshelf.repositories.query import apply_order, apply_page, count_rows
from bookshelf.schemas import BookCreate, BookFilter, BookSchema, BookUpdate

logger = logging.getLogger(__name__)

# Columns a client may sort book lists by
BOOK_SORT_COLUMNS = {
    "title": Book.title,
    "published_date": Book.published_date,
    "created_at": Book.created_at,
    "updated_at": Book.updated_at,
}


class BookRepository:
    """Persistence operations for the books table."""

    def __init__(self, db: Session) -> None:
        self.db = db

    def create(self, data: BookCreate) -> int:
        """
        Insert a book.

        Returns:
            The new book's id
        """
        book = Book(
            title=data.title,
            published_date=data.published_date,
            image_url=data.image_url_str,
            description=data.description,
        )
        self.db.add(book)
        self.db.flush()
        book_id = book.id
        self.db.commit()

        logger.info(f"Created book {book_id}")
        return book_id

    def search(self, filters: BookFilter) -> Tuple[List[BookSchema], int]:
        """
        List live books matching the title, description and date filters.

        title and description are case-insensitive substring matches;
        published_date must match exactly. Filters that are not set are
        not applied.
        """
        stmt = self._live()

        if filters.title:
            stmt = stmt.where(Book.title.icontains(filters.title, autoescape=True))
        if filters.description:
            stmt = stmt.where(Book.description.icontains(filters.description, autoescape=True))
        if filters.published_date:
            stmt = stmt.where(Book.published_date == filters.published_date)

        return self._fetch_page(stmt, filters)

    def list(self, filters: BookFilter) -> Tuple[List[BookSchema], int]:
        """List every live book, sorted and paged."""
        return self._fetch_page(self._live(), filters)

    def read(self, book_id: int) -> BookSchema:
        """
        Get a live book by id.

        Raises:
            RecordNotFoundError: If no live book has this id
        """
        return BookSchema.model_validate(self._get_live(book_id))

    def update(self, book_id: int, data: BookUpdate) -> None:
        """
        Replace every writable field of a live book.

        Raises:
            RecordNotFoundError: If no live book has this id
        """
        book = self._get_live(book_id)
        book.title = data.title
        book.published_date = data.published_date
        book.image_url = data.image_url_str
        book.description = data.description
        self.db.commit()
        logger.info(f"Updated book {book_id}")

    def delete(self, book_id: int) -> None:
        """
        Soft-delete a live book.

        Raises:
            RecordNotFoundError: If no live book has this id
        """
        book = self._get_live(book_id)
        book.deleted_at = datetime.now(UTC)
        self.db.commit()
        logger.info(f"Deleted book {book_id}")

    def _live(self) -> Select:
        return select(Book).where(Book.deleted_at.is_(None))

    def _fetch_page(self, stmt: Select, filters: BookFilter) -> Tuple[List[BookSchema], int]:
        total = count_rows(self.db, stmt)

        stmt = apply_order(stmt, filters.base, BOOK_SORT_COLUMNS, Book.id)
        stmt = apply_page(stmt, filters.base)
        books = self.db.execute(stmt).scalars().all()

        return [BookSchema.model_validate(book) for book in books], total

    def _get_live(self, book_id: int) -> Book:
        stmt = select(Book).where(Book.id == book_id, Book.deleted_at.is_(None))
        book = self.db.execute(stmt).scalar_one_or_none()
        if book is None:
            raise RecordNotFoundError("Book", book_id)
        return book
