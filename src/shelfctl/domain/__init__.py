"""Domain layer: the Result contract, error values and book types."""

from shelfctl.domain.errors import RepositoryError, ServiceError, ShelfError
from shelfctl.domain.result import Failure, Result, Success, attempt
from shelfctl.domain.types import Book, BookId

__all__ = [
    "Book",
    "BookId",
    "Failure",
    "RepositoryError",
    "Result",
    "ServiceError",
    "ShelfError",
    "Success",
    "attempt",
]
