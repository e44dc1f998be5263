"""
Shared Response Schemas

List endpoints answer with a standard envelope:

    {
        "data": [...],
        "meta": {"size": 2, "total": 42}
    }

- size: number of items in this page
- total: number of live records matching the filters, across all pages
"""

from pydantic import BaseModel, Field


class Meta(BaseModel):
    """Paging metadata attached to list responses."""

    size: int = Field(..., ge=0, description="Number of items in this page")
    total: int = Field(..., ge=0, description="Number of matching records")


class ValidationErrorItem(BaseModel):
    """One field that failed validation."""

    field: str = Field(..., description="Dotted location of the invalid value")
    message: str = Field(..., description="Why the value was rejected")


class ErrorResponse(BaseModel):
    """Body of every error response."""

    detail: str = Field(..., description="Human readable error message")
    errors: list[ValidationErrorItem] | None = Field(
        default=None,
        description="Per-field errors, present on validation failures",
    )
