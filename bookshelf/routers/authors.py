"""
Authors Router

CRUD endpoints for authors. Handlers only translate HTTP into use-case
calls and use-case results into responses; not-found and database errors
are turned into status codes by the handlers registered in main.py.

The list endpoint is served through the URL cache, so every successful
write here drops the cached author lists.
"""

from fastapi import APIRouter, Response, status

from bookshelf.config import get_settings
from bookshelf.dependencies import AuthorFilters, AuthorService, RecordId
from bookshelf.schemas import (
    AuthorCreate,
    AuthorListResponse,
    AuthorResponse,
    AuthorUpdate,
    ErrorResponse,
    Meta,
)
from bookshelf.services.url_cache import invalidate_url_cache

settings = get_settings()

router = APIRouter(
    prefix="/authors",
    tags=["Authors"],
    responses={
        400: {"model": ErrorResponse, "description": "Invalid request"},
        404: {"model": ErrorResponse, "description": "Author not found"},
    },
)

# Cached by the URL cache middleware (see main.py)
AUTHOR_LIST_PATH = f"{settings.api_prefix}{router.prefix}"


def invalidate_author_lists() -> None:
    """Forget cached author lists; call after any write an author embeds."""
    invalidate_url_cache(AUTHOR_LIST_PATH)


@router.post(
    "/",
    response_model=AuthorResponse,
    status_code=status.HTTP_201_CREATED,
    summary="Create an author",
    description="Create an author, optionally with new books written by them.",
)
def create_author(author_data: AuthorCreate, authors: AuthorService) -> AuthorResponse:
    """Create a new author and return it as stored."""
    author = authors.create(author_data)
    invalidate_author_lists()
    return AuthorResponse.model_validate(author)


@router.get(
    "/",
    response_model=AuthorListResponse,
    summary="List authors",
    description="Paged list of authors, filterable by name and sortable. "
                "By default the first page of 30 authors is returned.",
)
def list_authors(authors: AuthorService, filters: AuthorFilters) -> AuthorListResponse:
    """List live authors with their books."""
    items, total = authors.list(filters)
    return AuthorListResponse(
        data=[AuthorResponse.model_validate(author) for author in items],
        meta=Meta(size=len(items), total=total),
    )


@router.get(
    "/{author_id}",
    response_model=AuthorResponse,
    summary="Get an author",
    description="Get an author and their books by id.",
)
def get_author(author_id: RecordId, authors: AuthorService) -> AuthorResponse:
    return AuthorResponse.model_validate(authors.read(author_id))


@router.put(
    "/{author_id}",
    response_model=AuthorResponse,
    summary="Update an author",
    description="Replace an author's first, middle and last name.",
)
def update_author(
    author_id: RecordId,
    author_data: AuthorUpdate,
    authors: AuthorService,
) -> AuthorResponse:
    """Update an existing author and return it as stored."""
    author = authors.update(author_id, author_data)
    invalidate_author_lists()
    return AuthorResponse.model_validate(author)


@router.delete(
    "/{author_id}",
    status_code=status.HTTP_200_OK,
    summary="Delete an author",
    description="Soft-delete an author. Their books are kept.",
)
def delete_author(author_id: RecordId, authors: AuthorService) -> Response:
    """Delete an author; the response has no body."""
    authors.delete(author_id)
    invalidate_author_lists()
    return Response(status_code=status.HTTP_200_OK)
