"""
Tests for the Use-case Layer

The use-cases are exercised against recording fakes, so these tests pin
down which repository calls each operation makes and what it returns.
"""

from datetime import date, datetime

import pytest

from bookshelf.errors import RecordNotFoundError
from bookshelf.schemas import (
    AuthorCreate,
    AuthorFilter,
    AuthorSchema,
    AuthorUpdate,
    BookCreate,
    BookFilter,
    BookSchema,
    BookUpdate,
)
from bookshelf.usecases import AuthorUseCase, BookUseCase

NOW = datetime(2024, 1, 1, 12, 0, 0)


def make_author(author_id: int = 1) -> AuthorSchema:
    return AuthorSchema(
        id=author_id,
        first_name="George",
        last_name="Orwell",
        created_at=NOW,
        updated_at=NOW,
    )


def make_book(book_id: int = 1) -> BookSchema:
    return BookSchema(
        id=book_id,
        title="1984",
        published_date=date(1949, 6, 8),
        description="A dystopian novel.",
        created_at=NOW,
        updated_at=NOW,
    )


class FakeRepository:
    """Records every call; returns canned records."""

    def __init__(self, record, missing: bool = False):
        self.record = record
        self.missing = missing
        self.calls = []

    def create(self, data):
        self.calls.append(("create", data))
        return self.record.id

    def list(self, filters):
        self.calls.append(("list", filters))
        return [self.record], 1

    def search(self, filters):
        self.calls.append(("search", filters))
        return [self.record], 1

    def read(self, record_id):
        self.calls.append(("read", record_id))
        if self.missing:
            raise RecordNotFoundError("Record", record_id)
        return self.record

    def update(self, record_id, data):
        self.calls.append(("update", record_id, data))
        if self.missing:
            raise RecordNotFoundError("Record", record_id)

    def delete(self, record_id):
        self.calls.append(("delete", record_id))
        if self.missing:
            raise RecordNotFoundError("Record", record_id)


class TestAuthorUseCase:
    """Tests for AuthorUseCase."""

    def test_create_reads_back(self):
        """Test create returns the record read after writing."""
        repository = FakeRepository(make_author(7))
        data = AuthorCreate(first_name="George", last_name="Orwell")

        result = AuthorUseCase(repository).create(data)

        assert result.id == 7
        assert repository.calls == [("create", data), ("read", 7)]

    def test_update_reads_back(self):
        """Test update returns the record read after writing."""
        repository = FakeRepository(make_author(3))
        data = AuthorUpdate(first_name="Eric", last_name="Blair")

        result = AuthorUseCase(repository).update(3, data)

        assert result == make_author(3)
        assert repository.calls == [("update", 3, data), ("read", 3)]

    def test_update_missing_skips_read(self):
        """Test a failed update propagates without reading."""
        repository = FakeRepository(make_author(), missing=True)

        with pytest.raises(RecordNotFoundError):
            AuthorUseCase(repository).update(5, AuthorUpdate(first_name="A", last_name="B"))

        assert [call[0] for call in repository.calls] == ["update"]

    def test_list_passes_through(self):
        """Test list returns the repository result unchanged."""
        repository = FakeRepository(make_author())
        filters = AuthorFilter(last_name="orw")

        items, total = AuthorUseCase(repository).list(filters)

        assert items == [make_author()]
        assert total == 1
        assert repository.calls == [("list", filters)]

    def test_read_passes_through(self):
        repository = FakeRepository(make_author(2))

        assert AuthorUseCase(repository).read(2).id == 2
        assert repository.calls == [("read", 2)]

    def test_delete_passes_through(self):
        repository = FakeRepository(make_author())

        assert AuthorUseCase(repository).delete(4) is None
        assert repository.calls == [("delete", 4)]

    def test_read_missing_raises(self):
        """Test not-found errors reach the caller."""
        repository = FakeRepository(make_author(), missing=True)

        with pytest.raises(RecordNotFoundError) as exc_info:
            AuthorUseCase(repository).read(9)

        assert exc_info.value.record_id == 9


class TestBookUseCase:
    """Tests for BookUseCase."""

    def test_create_reads_back(self):
        """Test create returns the record read after writing."""
        repository = FakeRepository(make_book(11))
        data = BookCreate(title="1984", published_date="1949-06-08", description="d")

        result = BookUseCase(repository).create(data)

        assert result.id == 11
        assert repository.calls == [("create", data), ("read", 11)]

    def test_update_reads_back(self):
        repository = FakeRepository(make_book(2))
        data = BookUpdate(title="1984", published_date="1949-06-08", description="d")

        result = BookUseCase(repository).update(2, data)

        assert result.id == 2
        assert repository.calls == [("update", 2, data), ("read", 2)]

    def test_search_and_list_are_distinct(self):
        """Test search and list call their own repository methods."""
        repository = FakeRepository(make_book())
        usecase = BookUseCase(repository)
        filters = BookFilter(search=True, title="19")

        usecase.search(filters)
        usecase.list(filters)

        assert repository.calls == [("search", filters), ("list", filters)]

    def test_delete_missing_raises(self):
        repository = FakeRepository(make_book(), missing=True)

        with pytest.raises(RecordNotFoundError):
            BookUseCase(repository).delete(1)
