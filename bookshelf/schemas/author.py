"""
Author Pydantic Schemas

These schemas define the shape of data for Author-related API operations.

- AuthorCreate: request body for POST, may carry new books to create with it
- AuthorUpdate: request body for PUT (replaces the name fields)
- AuthorSchema: the record a repository returns, with the author's live books
- AuthorResponse: what the API renders
- AuthorListResponse: paged list envelope
"""

from datetime import datetime

from pydantic import BaseModel, ConfigDict, Field, field_validator

from bookshelf.schemas.book import BookCreate, BookResponse, BookSchema
from bookshelf.schemas.common import Meta


class AuthorBase(BaseModel):
    """
    Base schema with the writable author fields.

    first_name and last_name are required; middle_name is optional and a
    blank middle name is stored as NULL.
    """

    first_name: str = Field(
        ...,
        min_length=1,
        max_length=255,
        description="Author's given name",
        examples=["George", "Jane"],
    )

    middle_name: str | None = Field(
        default=None,
        max_length=255,
        description="Author's middle name",
        examples=["Herbert"],
    )

    last_name: str = Field(
        ...,
        min_length=1,
        max_length=255,
        description="Author's family name",
        examples=["Orwell", "Austen"],
    )

    @field_validator("first_name", "last_name")
    @classmethod
    def name_must_not_be_empty(cls, v: str) -> str:
        """
        Validate that a required name is not just whitespace.

        Args:
            v: The value being validated

        Returns:
            The value with surrounding whitespace stripped

        Raises:
            ValueError: If the name is blank
        """
        if not v.strip():
            raise ValueError("Name cannot be empty or whitespace")
        return v.strip()

    @field_validator("middle_name")
    @classmethod
    def blank_middle_name_is_none(cls, v: str | None) -> str | None:
        """Normalize a blank middle name to None."""
        if v is None or not v.strip():
            return None
        return v.strip()


class AuthorCreate(AuthorBase):
    """
    Schema for creating a new author.

    Books listed here are created in the same transaction and linked to the
    new author.

    Example request body:
    {
        "first_name": "George",
        "last_name": "Orwell",
        "books": [
            {"title": "1984", "published_date": "1949-06-08", "description": "..."}
        ]
    }
    """

    books: list[BookCreate] = Field(
        default_factory=list,
        description="Books to create together with the author",
    )


class AuthorUpdate(AuthorBase):
    """
    Schema for updating an existing author.

    PUT semantics: all name fields are sent; an omitted middle_name clears it.
    """
    pass


class AuthorSchema(BaseModel):
    """Author record as returned by the repository."""

    id: int
    first_name: str
    middle_name: str | None = None
    last_name: str
    created_at: datetime
    updated_at: datetime
    deleted_at: datetime | None = None
    books: list[BookSchema] = Field(default_factory=list)

    model_config = ConfigDict(from_attributes=True)


class AuthorResponse(BaseModel):
    """
    Schema for author responses.

    Nested books use BookResponse, so clients get the author's bibliography
    without extra requests.
    """

    id: int = Field(..., description="Unique identifier", examples=[1, 42])
    first_name: str = Field(..., description="Author's given name")
    middle_name: str | None = Field(default=None, description="Author's middle name")
    last_name: str = Field(..., description="Author's family name")
    books: list[BookResponse] = Field(default=[], description="Live books by this author")

    model_config = ConfigDict(
        from_attributes=True,
        json_schema_extra={
            "example": {
                "id": 1,
                "first_name": "George",
                "middle_name": None,
                "last_name": "Orwell",
                "books": [
                    {
                        "id": 1,
                        "title": "1984",
                        "published_date": "1949-06-08",
                        "image_url": None,
                        "description": "A dystopian novel about totalitarianism",
                    }
                ],
            }
        },
    )


class AuthorListResponse(BaseModel):
    """Paged list of authors."""

    data: list[AuthorResponse] = Field(..., description="Authors in this page")
    meta: Meta
