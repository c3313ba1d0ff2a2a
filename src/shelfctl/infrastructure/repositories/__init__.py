"""Book repositories: one protocol, two interchangeable sources."""

from shelfctl.infrastructure.repositories.base import BookRepository
from shelfctl.infrastructure.repositories.database import DatabaseBookRepository
from shelfctl.infrastructure.repositories.document import DocumentBookRepository

__all__ = ["BookRepository", "DatabaseBookRepository", "DocumentBookRepository"]
