"""
Use case: Book management.

Same shape as the author use case, plus search. Create and update return
the record as read back from the database.
"""

import logging
from typing import List, Tuple

from bookshelf.repositories import BookRepository
from bookshelf.schemas import BookCreate, BookFilter, BookSchema, BookUpdate

logger = logging.getLogger(__name__)


class BookUseCase:
    """Book operations exposed to the HTTP layer."""

    def __init__(self, repository: BookRepository) -> None:
        self._repository = repository

    def create(self, data: BookCreate) -> BookSchema:
        book_id = self._repository.create(data)
        return self._repository.read(book_id)

    def list(self, filters: BookFilter) -> Tuple[List[BookSchema], int]:
        logger.debug(f"Listing books with {filters}")
        return self._repository.list(filters)

    def search(self, filters: BookFilter) -> Tuple[List[BookSchema], int]:
        logger.debug(f"Searching books with {filters}")
        return self._repository.search(filters)

    def read(self, book_id: int) -> BookSchema:
        return self._repository.read(book_id)

    def update(self, book_id: int, data: BookUpdate) -> BookSchema:
        self._repository.update(book_id, data)
        return self._repository.read(book_id)

    def delete(self, book_id: int) -> None:
        self._repository.delete(book_id)
