"""Error values carried by ``Failure`` results.

Errors subclass :class:`Exception` so the cause chain shows up in
tracebacks and ``exc_info`` logging, but they are returned inside a
Result rather than raised.

Taxonomy (lowest first):

* access-layer error: parser, file or driver exception
* :class:`RepositoryError`: wraps an access-layer error
* :class:`ServiceError`: wraps a :class:`RepositoryError`; the only kind a
  caller of the service sees
"""

from __future__ import annotations

from collections.abc import Iterator
from typing import Any, ClassVar, cast


class ShelfError(Exception):
    """Base error with a fixed message and an explicit cause."""

    code: ClassVar[str] = "SHELF_ERROR"

    def __init__(self, message: str, cause: BaseException) -> None:
        super().__init__(message)
        self._message = message
        self._cause = cause
        self.__cause__ = cause

    @property
    def message(self) -> str:
        return self._message

    @property
    def cause(self) -> BaseException:
        return self._cause

    def chain(self) -> Iterator[BaseException]:
        """Yield the causes below this error, nearest first."""
        current: BaseException | None = self._cause
        while current is not None:
            yield current
            current = current.__cause__

    def root_cause(self) -> BaseException:
        """Return the lowest-level error in the chain."""
        *_, last = self.chain()
        return last

    def to_dict(self) -> dict[str, Any]:
        """Structured payload for JSON output."""
        return {
            "code": self.code,
            "message": self.message,
            "detail": {
                "causes": [
                    {"type": type(exc).__name__, "message": _first_line(exc)}
                    for exc in self.chain()
                ],
            },
        }

    def __repr__(self) -> str:
        return f"{type(self).__name__}({self._message!r}, {self._cause!r})"


class RepositoryError(ShelfError):
    """A repository could not reach or decode its data source."""

    code: ClassVar[str] = "REPOSITORY_ERROR"


class ServiceError(ShelfError):
    """A service operation failed because its repository failed."""

    code: ClassVar[str] = "SERVICE_ERROR"

    def __init__(self, message: str, cause: RepositoryError) -> None:
        super().__init__(message, cause)

    @property
    def cause(self) -> RepositoryError:
        return cast(RepositoryError, self._cause)


def _first_line(exc: BaseException) -> str:
    text = str(exc).strip()
    return text.splitlines()[0] if text else ""
