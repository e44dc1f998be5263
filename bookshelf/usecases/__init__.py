"""
Use-cases Package

Business logic between routers and repositories. Routers never talk to a
repository directly; they get a use-case from dependencies.py.
"""

from bookshelf.usecases.author import AuthorUseCase
from bookshelf.usecases.book import BookUseCase

__all__ = [
    "AuthorUseCase",
    "BookUseCase",
]
