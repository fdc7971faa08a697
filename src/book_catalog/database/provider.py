"""
Store provider for the Book Catalog MCP Server.

MCP tools and resources share one book store per process. The backend is
chosen by ``CatalogConfig.storage_backend``:

- ``memory``: ``InMemoryBookStore``, contents vanish on restart
- ``sql``: ``SqlBookStore`` on the configured SQLite file
"""

import logging

from ..config import CatalogConfig, get_config
from .memory_store import InMemoryBookStore
from .repository import BookStore
from .session import DatabaseManager
from .sql_store import SqlBookStore

logger = logging.getLogger(__name__)


def create_book_store(config: CatalogConfig | None = None) -> BookStore:
    """
    Build the book store named by the configuration.

    Args:
        config: Configuration to read; defaults to the global one

    Returns:
        A new, ready-to-use book store
    """
    config = config or get_config()

    if config.storage_backend == "sql":
        logger.info("Using SQL book store at %s", config.database_path)
        return SqlBookStore(DatabaseManager(config.get_database_url()))

    logger.info("Using in-memory book store")
    return InMemoryBookStore()


class _StoreHolder:
    """Internal storage for the book store singleton."""

    _instance: BookStore | None = None


def get_book_store() -> BookStore:
    """Get or create the process-wide book store."""
    if _StoreHolder._instance is None:  # type: ignore[reportPrivateUsage]
        _StoreHolder._instance = create_book_store()  # type: ignore[reportPrivateUsage]
    return _StoreHolder._instance  # type: ignore[reportPrivateUsage]


def set_book_store(store: BookStore | None) -> None:
    """Install a specific store as the process-wide one (tests, scripts)."""
    _StoreHolder._instance = store  # type: ignore[reportPrivateUsage]


def reset_book_store() -> None:
    """Drop the process-wide store, closing its database if it has one."""
    store = _StoreHolder._instance  # type: ignore[reportPrivateUsage]
    if isinstance(store, SqlBookStore):
        store.db_manager.close()
    _StoreHolder._instance = None  # type: ignore[reportPrivateUsage]
