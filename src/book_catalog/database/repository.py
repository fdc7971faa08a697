"""
Book store interface for the Book Catalog MCP Server.

This module defines the capability set every storage backend implements
(create, get, update, delete, list) together with the parameter and response
models the operations share. MCP tools and resources only ever talk to a
``BookStore``, so either backend can be swapped in through configuration:

1. ``InMemoryBookStore`` keeps records in process memory
2. ``SqlBookStore`` keeps them in a SQL table through SQLAlchemy

Both must produce identical observable results for identical inputs.
"""

from abc import ABC, abstractmethod
from typing import Generic, TypeVar

from pydantic import BaseModel, Field

from ..errors import BookValidationError, CatalogError, NotFoundError, StorageError
from ..models.book import AddBook, Book, UpdateBook

ResponseSchemaType = TypeVar("ResponseSchemaType", bound=BaseModel)

DEFAULT_PAGE = 1
DEFAULT_LIMIT = 10
MAX_LIMIT = 100

__all__ = [
    "DEFAULT_LIMIT",
    "DEFAULT_PAGE",
    "MAX_LIMIT",
    "BookFilter",
    "BookStore",
    "BookValidationError",
    "CatalogError",
    "NotFoundError",
    "PaginatedResponse",
    "PaginationMeta",
    "PaginationParams",
    "StorageError",
]


class BookFilter(BaseModel):
    """
    Optional predicates for listing books. Every predicate given must match.

    - available: exact match on availability
    - author: case-insensitive substring of the stored author
    - year: exact match on publication year
    """

    available: bool | None = None
    author: str | None = None
    year: int | None = None


class PaginationParams(BaseModel):
    """Requested page window. Out-of-range values are clamped, not rejected."""

    page: int = DEFAULT_PAGE
    limit: int = DEFAULT_LIMIT

    @property
    def offset(self) -> int:
        """Calculate offset for SQL queries."""
        return (self.page - 1) * self.limit


class PaginationMeta(BaseModel):
    """Pagination metadata returned alongside each page."""

    page: int = Field(..., description="Current page number (1-indexed)")
    limit: int = Field(..., description="Maximum number of items per page")
    total_items: int = Field(..., description="Number of items matching the filter")
    total_pages: int = Field(..., description="Number of pages, 0 when nothing matches")


class PaginatedResponse(BaseModel, Generic[ResponseSchemaType]):
    """A page of results plus pagination metadata."""

    data: list[ResponseSchemaType]
    pagination: PaginationMeta


class BookStore(ABC):
    """
    Abstract book store.

    Implementations must be safe to call from several threads at once. Reads
    (``get_by_id``, ``list_books``, ``count``) may run concurrently with each
    other; writes (``create``, ``update_by_id``, ``delete_by_id``) need
    exclusive access.

    Domain failures are raised as ``BookValidationError`` or
    ``NotFoundError``. Backend failures are raised as ``StorageError``.
    """

    @abstractmethod
    def create(self, data: AddBook) -> Book:
        """
        Validate and store a new book.

        Args:
            data: The book to add

        Returns:
            The stored book with its assigned id and ``available=True``

        Raises:
            BookValidationError: If the book fails validation (nothing stored)
        """

    @abstractmethod
    def get_by_id(self, book_id: int) -> Book:
        """
        Get a book by id.

        Raises:
            NotFoundError: If no book has this id
        """

    @abstractmethod
    def update_by_id(self, book_id: int, patch: UpdateBook) -> Book:
        """
        Apply a partial update to a stored book.

        Only the fields set in ``patch`` change. The patched values are not
        validated.

        Returns:
            The full book after the update

        Raises:
            NotFoundError: If no book has this id
        """

    @abstractmethod
    def delete_by_id(self, book_id: int) -> None:
        """
        Delete a book by id.

        Raises:
            NotFoundError: If no book has this id
        """

    @abstractmethod
    def list_books(
        self,
        book_filter: BookFilter | None = None,
        pagination: PaginationParams | None = None,
    ) -> PaginatedResponse[Book]:
        """
        List books matching a filter, one page at a time, ordered by id.

        Never raises a domain error: no matches is an empty page with
        correct totals.
        """

    @abstractmethod
    def count(self) -> int:
        """Return the total number of stored books."""
