"""
Books Router

CRUD endpoints for books, plus search on the list endpoint:

    GET /api/v1/books/?page=1&limit=30&sort=published_date,desc
    GET /api/v1/books/?search=true&title=farm&published_date=1945-08-17

Authors embed their books, so book writes also drop cached author lists.
"""

from fastapi import APIRouter, Response, status

from bookshelf.dependencies import BookFilters, BookService, RecordId
from bookshelf.routers.authors import invalidate_author_lists
from bookshelf.schemas import (
    BookCreate,
    BookListResponse,
    BookResponse,
    BookUpdate,
    ErrorResponse,
    Meta,
)

router = APIRouter(
    prefix="/books",
    tags=["Books"],
    responses={
        400: {"model": ErrorResponse, "description": "Invalid request"},
        404: {"model": ErrorResponse, "description": "Book not found"},
    },
)


@router.post(
    "/",
    response_model=BookResponse,
    status_code=status.HTTP_201_CREATED,
    summary="Create a book",
)
def create_book(book_data: BookCreate, books: BookService) -> BookResponse:
    """Create a new book and return it as stored."""
    return BookResponse.model_validate(books.create(book_data))


@router.get(
    "/",
    response_model=BookListResponse,
    summary="List or search books",
    description="Paged list of books. With search=true the title, description "
                "and published_date filters are applied.",
)
def list_books(books: BookService, filters: BookFilters) -> BookListResponse:
    """
    List books, or search them when ``search=true``.

    Both paths share paging and sorting; only search narrows the rows.
    """
    if filters.search:
        items, total = books.search(filters)
    else:
        items, total = books.list(filters)

    return BookListResponse(
        data=[BookResponse.model_validate(book) for book in items],
        meta=Meta(size=len(items), total=total),
    )


@router.get(
    "/{book_id}",
    response_model=BookResponse,
    summary="Get a book",
)
def get_book(book_id: RecordId, books: BookService) -> BookResponse:
    return BookResponse.model_validate(books.read(book_id))


@router.put(
    "/{book_id}",
    response_model=BookResponse,
    summary="Update a book",
    description="Replace every field of a book.",
)
def update_book(book_id: RecordId, book_data: BookUpdate, books: BookService) -> BookResponse:
    """Update an existing book and return it as stored."""
    book = books.update(book_id, book_data)
    invalidate_author_lists()
    return BookResponse.model_validate(book)


@router.delete(
    "/{book_id}",
    status_code=status.HTTP_200_OK,
    summary="Delete a book",
    description="Soft-delete a book.",
)
def delete_book(book_id: RecordId, books: BookService) -> Response:
    books.delete(book_id)
    invalidate_author_lists()
    return Response(status_code=status.HTTP_200_OK)
