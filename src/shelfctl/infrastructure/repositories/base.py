"""BookRepository: the capability every book source provides."""

from __future__ import annotations

from typing import TYPE_CHECKING, Protocol, runtime_checkable

if TYPE_CHECKING:
    from shelfctl.domain.errors import RepositoryError
    from shelfctl.domain.result import Result
    from shelfctl.domain.types import Book, BookId


@runtime_checkable
class BookRepository(Protocol):
    """Read access to a source of books.

    INVARIANT: neither operation raises for a data-access fault. A
    malformed payload or a driver error comes back as
    ``Failure(RepositoryError)``; an empty source or a missing id is a
    ``Success`` (``[]`` / ``None``).
    """

    def fetch_all(self) -> Result[list[Book], RepositoryError]: ...

    def fetch_by_id(self, book_id: BookId) -> Result[Book | None, RepositoryError]: ...
