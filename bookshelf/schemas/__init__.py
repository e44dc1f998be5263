"""
Pydantic Schemas Package

Request/response validation models and list filters.

Schema Naming Convention:
- XxxCreate: Fields required when creating a new record
- XxxUpdate: Fields sent when replacing a record (PUT)
- XxxSchema: Record returned by a repository (internal, all columns)
- XxxResponse: Fields returned in API responses
- XxxListResponse: Paged list envelope ({data, meta})
- XxxFilter: What a list endpoint was asked for
"""

from bookshelf.schemas.author import (
    AuthorBase,
    AuthorCreate,
    AuthorListResponse,
    AuthorResponse,
    AuthorSchema,
    AuthorUpdate,
)
from bookshelf.schemas.book import (
    BookBase,
    BookCreate,
    BookListResponse,
    BookResponse,
    BookSchema,
    BookUpdate,
)
from bookshelf.schemas.common import ErrorResponse, Meta, ValidationErrorItem
from bookshelf.schemas.filters import (
    AuthorFilter,
    BaseFilter,
    BookFilter,
    SortField,
    parse_sort,
)

__all__ = [
    # Author schemas
    "AuthorBase",
    "AuthorCreate",
    "AuthorUpdate",
    "AuthorSchema",
    "AuthorResponse",
    "AuthorListResponse",
    # Book schemas
    "BookBase",
    "BookCreate",
    "BookUpdate",
    "BookSchema",
    "BookResponse",
    "BookListResponse",
    # Shared
    "Meta",
    "ErrorResponse",
    "ValidationErrorItem",
    # Filters
    "BaseFilter",
    "AuthorFilter",
    "BookFilter",
    "SortField",
    "parse_sort",
]
