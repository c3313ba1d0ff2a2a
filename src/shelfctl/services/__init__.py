"""Service layer: composes repositories and translates their errors."""

from shelfctl.services.books import BookService

__all__ = ["BookService"]
