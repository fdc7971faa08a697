"""Test configuration and fixtures for the Book Catalog MCP Server.

1. Isolated stores - each test gets a fresh, empty book store
2. Backend parity - the ``store`` fixture runs a test against both backends
3. Configuration overrides - test-specific configurations, reset afterwards
4. Global store injection - MCP handlers see the test's store
"""

import os
from collections.abc import Generator
from pathlib import Path

import pytest

from book_catalog.config import CatalogConfig, reset_config
from book_catalog.database import (
    BookStore,
    DatabaseManager,
    InMemoryBookStore,
    SqlBookStore,
    reset_book_store,
    set_book_store,
)
from book_catalog.models import AddBook

# === Store Fixtures ===


@pytest.fixture
def memory_store() -> InMemoryBookStore:
    return InMemoryBookStore()


@pytest.fixture
def sql_store() -> Generator[SqlBookStore, None, None]:
    """SQL store on a private in-memory SQLite database."""
    db_manager = DatabaseManager("sqlite:///:memory:")
    store = SqlBookStore(db_manager)
    yield store
    db_manager.close()


@pytest.fixture
def test_db_path(tmp_path: Path) -> Path:
    """Provide a temporary database path for each test."""
    return tmp_path / "test_catalog.db"


@pytest.fixture
def file_sql_store(test_db_path: Path) -> Generator[SqlBookStore, None, None]:
    """SQL store on a SQLite file, for tests that reopen the database."""
    db_manager = DatabaseManager(f"sqlite:///{test_db_path}")
    store = SqlBookStore(db_manager)
    yield store
    db_manager.close()


@pytest.fixture(params=["memory", "sql"])
def store(request) -> Generator[BookStore, None, None]:
    """Run the requesting test once per backend."""
    if request.param == "memory":
        yield InMemoryBookStore()
    else:
        db_manager = DatabaseManager("sqlite:///:memory:")
        yield SqlBookStore(db_manager)
        db_manager.close()


@pytest.fixture
def catalog_store(store: BookStore) -> Generator[BookStore, None, None]:
    """Install the parametrized store as the one MCP handlers use."""
    set_book_store(store)
    yield store
    set_book_store(None)


# === Configuration Fixtures ===


@pytest.fixture
def test_config(test_db_path: Path) -> Generator[CatalogConfig, None, None]:
    """Provide a test-specific configuration."""
    reset_config()

    config = CatalogConfig(
        server_name="test-book-catalog",
        server_version="0.0.1-test",
        storage_backend="sql",
        database_path=test_db_path,
        debug=True,
        log_level="DEBUG",
    )

    yield config

    reset_config()


@pytest.fixture
def clean_env() -> Generator[None, None, None]:
    """Provide a clean environment without BOOK_CATALOG_* variables."""
    original_env = os.environ.copy()

    for key in list(os.environ.keys()):
        if key.startswith("BOOK_CATALOG_"):
            del os.environ[key]

    yield

    os.environ.clear()
    os.environ.update(original_env)


# === Test Data ===


def build_book(i: int = 1, **overrides) -> AddBook:
    """Build a valid AddBook numbered ``i``."""
    data = {
        "title": f"Book {i}",
        "author": "Author Name",
        "year": 2020,
        "isbn": "9781593278281",
    }
    data.update(overrides)
    return AddBook(**data)


@pytest.fixture
def make_book():
    """Factory for valid books: ``make_book(3, author="Tolkien")``."""
    return build_book


@pytest.fixture
def sample_book() -> AddBook:
    return AddBook(
        title="The Rust Programming Language",
        author="Steve Klabnik",
        year=2018,
        isbn="978-1593278281",
    )


# === Cleanup Fixtures ===


@pytest.fixture(autouse=True)
def cleanup_after_test():
    """Reset global configuration and the process-wide store after each test."""
    yield

    reset_config()
    reset_book_store()
