"""Book Catalog MCP Resources Package

Resources are read-only data endpoints addressed by URI:

- library://health - liveness check
- library://books/list - first page of the catalog
- library://books/{book_id} - a single book
"""

from .books import book_resources

all_resources = book_resources

__all__ = [
    "all_resources",
    "book_resources",
]
