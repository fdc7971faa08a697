"""
Book Catalog Models.

Pydantic models for the catalog:
- Book: a stored record with its store-assigned id
- AddBook: command for creating a record
- UpdateBook: partial patch for an existing record
"""

from .book import AddBook, Book, UpdateBook, clean_isbn

__all__ = [
    "AddBook",
    "Book",
    "UpdateBook",
    "clean_isbn",
]
