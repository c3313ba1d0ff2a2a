"""Result: the typed success/failure contract shared by every layer.

INVARIANT: Repository and service operations return a Result; modeled
failures travel as ``Failure`` values and are never raised across a
component boundary.

A Result is exactly one of:

* :class:`Success` carrying the operation's value, or
* :class:`Failure` carrying a typed error.

Both variants are frozen. Callers inspect them explicitly (``match``,
``is_success()``) or extract a value at the program boundary with
:meth:`Success.get_or_else` / :meth:`Failure.get_or_else`.
"""

from __future__ import annotations

from collections.abc import Callable
from dataclasses import dataclass
from typing import Any, Generic, TypeVar, Union

T = TypeVar("T")
U = TypeVar("U")
E = TypeVar("E")
F = TypeVar("F")


@dataclass(frozen=True, slots=True)
class Success(Generic[T]):
    """Successful outcome holding ``value``."""

    value: T

    def is_success(self) -> bool:
        return True

    def is_failure(self) -> bool:
        return False

    def map(self, transform: Callable[[T], U]) -> Success[U]:
        """Apply *transform* to the value."""
        return Success(transform(self.value))

    def flat_map(self, transform: Callable[[T], Result[U, Any]]) -> Result[U, Any]:
        """Chain a Result-returning operation onto the value."""
        return transform(self.value)

    def map_error(self, transform: Callable[[Any], Any]) -> Success[T]:
        """No-op: a success has no error to transform."""
        return self

    def on_success(self, side_effect: Callable[[T], object]) -> Success[T]:
        """Run *side_effect* with the value, then return this result.

        Whatever *side_effect* returns is discarded, including a
        ``Failure`` from a Result-returning call.
        """
        side_effect(self.value)
        return self

    def on_failure(self, side_effect: Callable[[Any], object]) -> Success[T]:
        return self

    def get_or_else(self, fallback: Callable[[Any], T]) -> T:
        """Return the value; *fallback* is never invoked."""
        return self.value


@dataclass(frozen=True, slots=True)
class Failure(Generic[E]):
    """Failed outcome holding a typed ``error``."""

    error: E

    def is_success(self) -> bool:
        return False

    def is_failure(self) -> bool:
        return True

    def map(self, transform: Callable[[Any], Any]) -> Failure[E]:
        return self

    def flat_map(self, transform: Callable[[Any], Result[Any, Any]]) -> Failure[E]:
        return self

    def map_error(self, transform: Callable[[E], F]) -> Failure[F]:
        """Translate the error into another error kind."""
        return Failure(transform(self.error))

    def on_success(self, side_effect: Callable[[Any], object]) -> Failure[E]:
        return self

    def on_failure(self, side_effect: Callable[[E], object]) -> Failure[E]:
        """Run *side_effect* with the error, then return this result."""
        side_effect(self.error)
        return self

    def get_or_else(self, fallback: Callable[[E], T]) -> T:
        """Invoke *fallback* once with the error and return what it produces."""
        return fallback(self.error)


Result = Union[Success[T], Failure[E]]


def attempt(
    operation: Callable[[], T],
    *,
    catch: tuple[type[BaseException], ...],
    wrap: Callable[[Any], E],
) -> Result[T, E]:
    """Run *operation* and capture the expected exceptions as a ``Failure``.

    Exceptions listed in *catch* are handed to *wrap* to build the error
    value. Anything else is a defect and propagates unchanged.

    Usage::

        attempt(
            lambda: adapter.validate_json(raw),
            catch=(ValidationError,),
            wrap=lambda exc: RepositoryError("Error when get books", exc),
        )
    """
    try:
        value = operation()
    except catch as exc:
        return Failure(wrap(exc))
    return Success(value)
