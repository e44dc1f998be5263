"""
FastAPI Dependencies Module

Dependencies are reusable components injected into route handlers.
FastAPI's Depends() function manages their lifecycle.

Provided here:
- DbSession: one SQLAlchemy session per request
- RecordId: validated positive integer path id
- AuthorFilters / BookFilters: list query parameters parsed into filters
- AuthorService / BookService: use-cases wired to their repositories
"""

from datetime import date
from typing import Annotated

from fastapi import Depends, Path, Query
from sqlalchemy.orm import Session

from bookshelf.config import get_settings
from bookshelf.database import get_db
from bookshelf.repositories import AuthorRepository, BookRepository
from bookshelf.schemas import AuthorFilter, BaseFilter, BookFilter
from bookshelf.usecases import AuthorUseCase, BookUseCase

settings = get_settings()

# =============================================================================
# Type Aliases with Annotated
# =============================================================================
# Instead of writing:
#   def get_authors(db: Session = Depends(get_db)):
#
# You can write:
#   def get_authors(db: DbSession):

DbSession = Annotated[Session, Depends(get_db)]

# Largest value of the Integer primary keys and of page/offset
MAX_INT = 2**31 - 1

RecordId = Annotated[int, Path(ge=1, le=MAX_INT, description="Record ID", examples=[1])]


# =============================================================================
# List Parameters
# =============================================================================
def get_base_filter(
    page: int = Query(
        default=1,
        ge=1,
        le=MAX_INT,
        description="Page number (1-indexed)",
        examples=[1, 2],
    ),
    limit: int = Query(
        default=settings.default_page_size,
        ge=1,
        le=settings.max_page_size,
        description=f"Number of items per page (max {settings.max_page_size})",
        examples=[10, 30],
    ),
    offset: int | None = Query(
        default=None,
        ge=0,
        le=MAX_INT,
        description="Rows to skip; overrides page when given",
    ),
    sort: list[str] | None = Query(
        default=None,
        description="Sort field and direction, repeatable. E.g. last_name,asc",
        examples=[["last_name,asc"]],
    ),
) -> BaseFilter:
    """
    Paging and sorting parameters shared by every list endpoint.

        GET /api/v1/authors/?page=2&limit=10&sort=first_name,desc
    """
    return BaseFilter.build(page=page, limit=limit, offset=offset, sort=sort)


Paging = Annotated[BaseFilter, Depends(get_base_filter)]


def get_author_filter(
    base: Paging,
    first_name: str | None = Query(
        default=None,
        max_length=255,
        description="Filter by first name (partial match, case-insensitive)",
        examples=["geo"],
    ),
    middle_name: str | None = Query(
        default=None,
        max_length=255,
        description="Filter by middle name (partial match, case-insensitive)",
    ),
    last_name: str | None = Query(
        default=None,
        max_length=255,
        description="Filter by last name (partial match, case-insensitive)",
        examples=["orwell"],
    ),
) -> AuthorFilter:
    """Author list parameters."""
    return AuthorFilter(
        base=base,
        first_name=first_name,
        middle_name=middle_name,
        last_name=last_name,
    )


def get_book_filter(
    base: Paging,
    search: bool = Query(
        default=False,
        description="Apply the title/description/published_date filters",
    ),
    title: str | None = Query(
        default=None,
        max_length=500,
        description="Search by title (partial match, case-insensitive)",
        examples=["1984"],
    ),
    description: str | None = Query(
        default=None,
        max_length=500,
        description="Search by description (partial match, case-insensitive)",
    ),
    published_date: date | None = Query(
        default=None,
        description="Search by exact publication date",
        examples=["1949-06-08"],
    ),
) -> BookFilter:
    """
    Book list parameters.

    The search filters only apply with search=true, e.g.
        GET /api/v1/books/?search=true&title=farm
    """
    return BookFilter(
        base=base,
        search=search,
        title=title,
        description=description,
        published_date=published_date,
    )


AuthorFilters = Annotated[AuthorFilter, Depends(get_author_filter)]
BookFilters = Annotated[BookFilter, Depends(get_book_filter)]


# =============================================================================
# Use-cases
# =============================================================================
def get_author_usecase(db: DbSession) -> AuthorUseCase:
    """Author use-case bound to this request's session."""
    return AuthorUseCase(AuthorRepository(db))


def get_book_usecase(db: DbSession) -> BookUseCase:
    """Book use-case bound to this request's session."""
    return BookUseCase(BookRepository(db))


AuthorService = Annotated[AuthorUseCase, Depends(get_author_usecase)]
BookService = Annotated[BookUseCase, Depends(get_book_usecase)]
