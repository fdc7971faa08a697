"""
SQLAlchemy database schema for the Book Catalog MCP Server.

A single ``books`` table backs ``SqlBookStore``. SQLite's ``AUTOINCREMENT``
is switched on so ids of deleted rows are never issued again, matching the
in-memory store's never-decremented counter.
"""

from sqlalchemy import Boolean, Column, Index, Integer, String, Text
from sqlalchemy.orm import declarative_base

# Base class for all SQLAlchemy models
Base = declarative_base()


class BookRecord(Base):
    """
    Books table - one row per catalogued book.

    Column layout:
    - id: assigned by the database, never reused
    - isbn: stored without hyphens
    - available: true for new books, flipped by partial updates
    """

    __tablename__ = "books"

    id = Column(Integer, primary_key=True, autoincrement=True)
    title = Column(Text, nullable=False)
    author = Column(Text, nullable=False)
    year = Column(Integer, nullable=False, default=0)
    isbn = Column(String(32), nullable=False)
    available = Column(Boolean, nullable=False, default=True)

    __table_args__ = (
        Index("idx_book_author", "author"),
        Index("idx_book_year", "year"),
        {"sqlite_autoincrement": True},
    )

    def __repr__(self) -> str:
        return f"<BookRecord(id={self.id}, title='{self.title}')>"
