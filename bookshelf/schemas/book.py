"""
Book Pydantic Schemas

- BookCreate / BookUpdate: request bodies (PUT replaces every field)
- BookSchema: the record a repository returns, timestamps included
- BookResponse: what the API renders
- BookListResponse: paged list envelope
"""

from datetime import date, datetime

from pydantic import BaseModel, ConfigDict, Field, HttpUrl, field_validator

from bookshelf.schemas.common import Meta


class BookBase(BaseModel):
    """
    Base schema with the writable book fields.

    Contains validation for:
    - title (must not be blank)
    - published_date (ISO date, or an RFC 3339 timestamp reduced to its date)
    - image_url (http or https URL; an empty string means no image)
    """

    title: str = Field(
        ...,
        min_length=1,
        max_length=500,
        description="Book title",
        examples=["1984", "Pride and Prejudice"],
    )

    published_date: date = Field(
        ...,
        description="Date of publication",
        examples=["1949-06-08"],
    )

    image_url: HttpUrl | None = Field(
        default=None,
        description="Cover image URL",
        examples=["https://covers.example.com/1984.jpg"],
    )

    description: str = Field(
        ...,
        min_length=1,
        max_length=5000,
        description="Book description or summary",
        examples=["A dystopian novel set in a totalitarian society..."],
    )

    @field_validator("title", "description")
    @classmethod
    def must_not_be_blank(cls, v: str) -> str:
        """Reject whitespace-only values and strip the rest."""
        if not v.strip():
            raise ValueError("Value cannot be empty or whitespace")
        return v.strip()

    @field_validator("published_date", mode="before")
    @classmethod
    def timestamp_to_date(cls, v: object) -> object:
        """
        Accept full timestamps such as ``2020-01-02T15:04:05Z``.

        The ``T`` and ``Z`` markers are case-insensitive. Only the calendar
        date is stored. Anything that is not a timestamp is left for the
        date parser to accept or reject.
        """
        if isinstance(v, str) and "T" in v.upper():
            try:
                return datetime.fromisoformat(v.upper().replace("Z", "+00:00")).date()
            except ValueError:
                return v
        return v

    @field_validator("image_url", mode="before")
    @classmethod
    def empty_url_is_none(cls, v: object) -> object:
        """Treat an empty image_url as "no image"."""
        if isinstance(v, str) and not v.strip():
            return None
        return v

    @property
    def image_url_str(self) -> str | None:
        """image_url as the plain string stored in the database."""
        return str(self.image_url) if self.image_url is not None else None


class BookCreate(BookBase):
    """
    Schema for creating a new book.

    Example request body:
    {
        "title": "1984",
        "published_date": "1949-06-08",
        "image_url": "https://covers.example.com/1984.jpg",
        "description": "A dystopian novel..."
    }
    """
    pass


class BookUpdate(BookBase):
    """
    Schema for updating an existing book.

    PUT semantics: every field is sent and replaces the stored value.
    """
    pass


class BookSchema(BaseModel):
    """
    Book record as returned by the repository.

    Mirrors every column of the books table, so use-cases and tests can see
    the database-side timestamps.
    """

    id: int
    title: str
    published_date: date
    image_url: str | None = None
    description: str
    created_at: datetime
    updated_at: datetime
    deleted_at: datetime | None = None

    model_config = ConfigDict(from_attributes=True)


class BookResponse(BaseModel):
    """
    Schema for book responses.

    Timestamps are internal and not rendered.
    """

    id: int = Field(..., description="Unique identifier")
    title: str = Field(..., description="Book title")
    published_date: date = Field(..., description="Date of publication")
    image_url: str | None = Field(default=None, description="Cover image URL")
    description: str = Field(..., description="Book description")

    model_config = ConfigDict(
        from_attributes=True,
        json_schema_extra={
            "example": {
                "id": 1,
                "title": "1984",
                "published_date": "1949-06-08",
                "image_url": "https://covers.example.com/1984.jpg",
                "description": "A dystopian novel about totalitarianism",
            }
        },
    )


class BookListResponse(BaseModel):
    """Paged list of books."""

    data: list[BookResponse] = Field(..., description="Books in this page")
    meta: Meta
