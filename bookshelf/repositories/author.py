"""
Author Repository

ORM-backed persistence for authors. Every query only sees live rows
(deleted_at IS NULL) and every result is mapped to a plain AuthorSchema
before it leaves this module.
"""

import logging
from datetime import UTC, datetime
from typing import List, Tuple

from sqlalchemy import select
from sqlalchemy.orm import Session, selectinload

from bookshelf.errors import RecordNotFoundError
from bookshelf.models import Author, Book
from bookshelf.repositories.query import apply_order, apply_page, count_rows
from bookshelf.schemas import (
    AuthorCreate,
    AuthorFilter,
    AuthorSchema,
    AuthorUpdate,
    BookSchema,
)

logger = logging.getLogger(__name__)

# Columns a client may sort author lists by
AUTHOR_SORT_COLUMNS = {
    "first_name": Author.first_name,
    "last_name": Author.last_name,
    "created_at": Author.created_at,
    "updated_at": Author.updated_at,
}


def to_author_schema(author: Author) -> AuthorSchema:
    """Map an Author row to an AuthorSchema, keeping only its live books."""
    books = [
        BookSchema.model_validate(book)
        for book in sorted(author.books, key=lambda b: b.id)
        if book.deleted_at is None
    ]
    return AuthorSchema(
        id=author.id,
        first_name=author.first_name,
        middle_name=author.middle_name,
        last_name=author.last_name,
        created_at=author.created_at,
        updated_at=author.updated_at,
        deleted_at=author.deleted_at,
        books=books,
    )


class AuthorRepository:
    """Persistence operations for the authors table."""

    def __init__(self, db: Session) -> None:
        self.db = db

    def create(self, data: AuthorCreate) -> int:
        """
        Insert an author together with any new books it lists.

        Books and author are written in one transaction.

        Returns:
            The new author's id
        """
        books = [
            Book(
                title=book.title,
                published_date=book.published_date,
                image_url=book.image_url_str,
                description=book.description,
            )
            for book in data.books
        ]
        author = Author(
            first_name=data.first_name,
            middle_name=data.middle_name,
            last_name=data.last_name,
            books=books,
        )

        self.db.add(author)
        self.db.flush()
        author_id = author.id
        self.db.commit()

        logger.info(f"Created author {author_id} with {len(books)} book(s)")
        return author_id

    def list(self, filters: AuthorFilter) -> Tuple[List[AuthorSchema], int]:
        """
        List live authors matching the name filters.

        Returns:
            The requested page of authors and the total number of matches
        """
        stmt = select(Author).where(Author.deleted_at.is_(None))

        if filters.first_name:
            stmt = stmt.where(Author.first_name.icontains(filters.first_name, autoescape=True))
        if filters.middle_name:
            stmt = stmt.where(Author.middle_name.icontains(filters.middle_name, autoescape=True))
        if filters.last_name:
            stmt = stmt.where(Author.last_name.icontains(filters.last_name, autoescape=True))

        total = count_rows(self.db, stmt)

        stmt = apply_order(stmt, filters.base, AUTHOR_SORT_COLUMNS, Author.id)
        stmt = apply_page(stmt, filters.base).options(selectinload(Author.books))
        authors = self.db.execute(stmt).scalars().all()

        return [to_author_schema(author) for author in authors], total

    def read(self, author_id: int) -> AuthorSchema:
        """
        Get a live author by id, with their live books.

        Raises:
            RecordNotFoundError: If no live author has this id
        """
        stmt = (
            select(Author)
            .options(selectinload(Author.books))
            .where(Author.id == author_id, Author.deleted_at.is_(None))
        )
        author = self.db.execute(stmt).scalar_one_or_none()
        if author is None:
            raise RecordNotFoundError("Author", author_id)
        return to_author_schema(author)

    def update(self, author_id: int, data: AuthorUpdate) -> None:
        """
        Replace the name fields of a live author.

        Raises:
            RecordNotFoundError: If no live author has this id
        """
        author = self._get_live(author_id)
        author.first_name = data.first_name
        author.middle_name = data.middle_name
        author.last_name = data.last_name
        self.db.commit()
        logger.info(f"Updated author {author_id}")

    def delete(self, author_id: int) -> None:
        """
        Soft-delete a live author. Their books are left as they are.

        Raises:
            RecordNotFoundError: If no live author has this id
        """
        author = self._get_live(author_id)
        author.deleted_at = datetime.now(UTC)
        self.db.commit()
        logger.info(f"Deleted author {author_id}")

    def _get_live(self, author_id: int) -> Author:
        stmt = select(Author).where(Author.id == author_id, Author.deleted_at.is_(None))
        author = self.db.execute(stmt).scalar_one_or_none()
        if author is None:
            raise RecordNotFoundError("Author", author_id)
        return author
