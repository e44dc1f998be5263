"""
Use case: Author management.

Sits between the authors router and AuthorRepository. Reads and deletes
pass straight through; create and update read the record back after
writing so callers get database-side timestamps and nested books.
"""

import logging
from typing import List, Tuple

from bookshelf.repositories import AuthorRepository
from bookshelf.schemas import AuthorCreate, AuthorFilter, AuthorSchema, AuthorUpdate

logger = logging.getLogger(__name__)


class AuthorUseCase:
    """Author operations exposed to the HTTP layer."""

    def __init__(self, repository: AuthorRepository) -> None:
        self._repository = repository

    def create(self, data: AuthorCreate) -> AuthorSchema:
        """Create an author (and any listed books), then return the stored record."""
        author_id = self._repository.create(data)
        return self._repository.read(author_id)

    def list(self, filters: AuthorFilter) -> Tuple[List[AuthorSchema], int]:
        logger.debug(f"Listing authors with {filters}")
        return self._repository.list(filters)

    def read(self, author_id: int) -> AuthorSchema:
        return self._repository.read(author_id)

    def update(self, author_id: int, data: AuthorUpdate) -> AuthorSchema:
        """Replace an author's names, then return the stored record."""
        self._repository.update(author_id, data)
        return self._repository.read(author_id)

    def delete(self, author_id: int) -> None:
        self._repository.delete(author_id)
