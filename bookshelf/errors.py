"""
Domain errors for the Bookshelf API.

Repositories and use-cases raise these; the exception handlers registered
in main.py turn them into HTTP responses. No framework imports here.
"""


class BookshelfError(Exception):
    """Base error for all bookshelf domain errors."""

    def __init__(self, message: str) -> None:
        self.message = message
        super().__init__(self.message)


class RecordNotFoundError(BookshelfError):
    """Raised when a live (not soft-deleted) record does not exist."""

    def __init__(self, entity: str, record_id: int) -> None:
        super().__init__(f"{entity} with id {record_id} not found")
        self.entity = entity
        self.record_id = record_id
