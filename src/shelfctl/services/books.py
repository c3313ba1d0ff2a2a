"""BookService: composes a primary and a secondary book repository.

The primary repository is authoritative: its outcome, with repository
errors translated into :class:`ServiceError`, is what the caller gets.

After a primary success the secondary repository is called as well and
its outcome is discarded. The secondary is not a fallback (it is skipped
when the primary fails) and its failures never reach the caller, whether
returned as a ``Failure`` or raised; they are only logged at DEBUG.
"""

from __future__ import annotations

import logging
from collections.abc import Callable
from typing import TYPE_CHECKING

from shelfctl.domain.errors import RepositoryError, ServiceError
from shelfctl.domain.result import Failure

if TYPE_CHECKING:
    from shelfctl.domain.result import Result
    from shelfctl.domain.types import Book, BookId
    from shelfctl.infrastructure.repositories.base import BookRepository

logger = logging.getLogger(__name__)


class BookService:
    """Service-layer access to books.

    Usage::

        service = BookService(DatabaseBookRepository(engine), DocumentBookRepository(raw))
        books = service.all().get_or_else(lambda err: [])
    """

    def __init__(self, primary: BookRepository, secondary: BookRepository) -> None:
        self._primary = primary
        self._secondary = secondary

    def all(self) -> Result[list[Book], ServiceError]:
        """Fetch every book from the primary repository."""
        return (
            self._primary.fetch_all()
            .on_success(lambda _: self._shadow("fetch_all", self._secondary.fetch_all))
            .map_error(lambda err: ServiceError("Error from service when get books", err))
        )

    def book_by_id(self, book_id: BookId) -> Result[Book | None, ServiceError]:
        """Fetch one book from the primary repository; absent is ``None``."""
        return (
            self._primary.fetch_by_id(book_id)
            .on_success(
                lambda _: self._shadow("fetch_by_id", lambda: self._secondary.fetch_by_id(book_id))
            )
            .map_error(lambda err: ServiceError("Error from service when get book", err))
        )

    def _shadow(self, op: str, call: Callable[[], Result[object, RepositoryError]]) -> None:
        """Run the secondary *call* and drop its outcome."""
        try:
            outcome = call()
        except Exception as exc:
            # Raised or returned, a secondary outcome never reaches the caller.
            logger.debug("Secondary %s via %r raised", op, self._secondary, exc_info=exc)
            return
        if isinstance(outcome, Failure):
            logger.debug(
                "Secondary %s via %r failed; result discarded",
                op,
                self._secondary,
                exc_info=outcome.error,
            )
