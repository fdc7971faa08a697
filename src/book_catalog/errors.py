"""
Error taxonomy for the Book Catalog.

Two kinds of failure reach callers of the book store:

1. **Domain errors** the caller can correct: a new book that fails validation
   (``BookValidationError``) or an operation on an id that does not exist
   (``NotFoundError``).
2. **Storage faults** the caller cannot correct (``StorageError``): lost
   connections, failed commits, corrupted rows. These are reported as a
   generic server fault and never retried by the store.
"""


class CatalogError(Exception):
    """Base exception for book store operations."""


class BookValidationError(CatalogError):
    """Raised when a new book fails one or more validation constraints."""

    def __init__(self, problems: list[str]):
        self.problems = list(problems)
        super().__init__("Invalid book: " + "; ".join(self.problems))


class NotFoundError(CatalogError):
    """Raised when an operation targets a book id that is not stored."""

    def __init__(self, book_id: int):
        self.book_id = book_id
        super().__init__(f"Book with id {book_id} not found")


class StorageError(CatalogError):
    """Raised when the storage backend fails underneath an operation."""
