"""
Database package for the Book Catalog MCP Server.

This package provides:
- The ``BookStore`` interface and its shared parameter/response models
- ``InMemoryBookStore`` (lock-guarded memory) and ``SqlBookStore`` (SQLAlchemy)
- The filter/pagination engine both backends use
- Session management and schema for the SQL backend
- A provider that builds the configured store for MCP handlers
"""

from .locking import LockingError, SharedExclusiveLock
from .memory_store import InMemoryBookStore
from .provider import create_book_store, get_book_store, reset_book_store, set_book_store
from .repository import (
    DEFAULT_LIMIT,
    MAX_LIMIT,
    BookFilter,
    BookStore,
    BookValidationError,
    CatalogError,
    NotFoundError,
    PaginatedResponse,
    PaginationMeta,
    PaginationParams,
    StorageError,
)
from .schema import Base, BookRecord
from .seed import generate_sample_books, seed_store
from .session import DatabaseManager
from .sql_store import SqlBookStore

__all__ = [
    "DEFAULT_LIMIT",
    "MAX_LIMIT",
    "Base",
    "BookFilter",
    "BookRecord",
    "BookStore",
    "BookValidationError",
    "CatalogError",
    "DatabaseManager",
    "InMemoryBookStore",
    "LockingError",
    "NotFoundError",
    "PaginatedResponse",
    "PaginationMeta",
    "PaginationParams",
    "SharedExclusiveLock",
    "SqlBookStore",
    "StorageError",
    "create_book_store",
    "generate_sample_books",
    "get_book_store",
    "reset_book_store",
    "seed_store",
    "set_book_store",
]
