"""Book Resources - Catalog Access

Exposes catalog data via read-only resources.
Clients use these to check the service, browse the first page of books and
view a single book.

Resources:
- library://health - Returns "OK" while the server is up
- library://books/list - First page of the catalog with default pagination
- library://books/{book_id} - Individual book details by id
"""

import logging
from typing import Any

from fastmcp.exceptions import ResourceError

from ..database.provider import get_book_store
from ..errors import NotFoundError

logger = logging.getLogger(__name__)


async def health_handler() -> str:
    """Liveness check."""
    return "OK"


async def list_books_handler() -> dict[str, Any]:
    """Returns the first page of the catalog.

    For filters and other pages use the list_books tool.
    """
    try:
        result = get_book_store().list_books()
    except Exception as e:
        logger.exception("Error in books/list resource")
        raise ResourceError("Failed to retrieve book list") from e

    return result.model_dump()


async def get_book_handler(book_id: int) -> dict[str, Any]:
    """Returns details for a specific book."""
    logger.debug("MCP Resource Request - books/%s", book_id)
    try:
        book = get_book_store().get_by_id(int(book_id))
    except NotFoundError as e:
        raise ResourceError(str(e)) from e
    except Exception as e:
        logger.exception("Error in books/{book_id} resource")
        raise ResourceError("Failed to retrieve book details") from e

    return book.model_dump()


book_resources: list[dict[str, Any]] = [
    {
        "uri": "library://health",
        "name": "Health",
        "description": "Returns OK while the catalog server is running",
        "mime_type": "text/plain",
        "handler": health_handler,
    },
    {
        "uri": "library://books/list",
        "name": "Book Catalog",
        "description": "First page of the book catalog, ordered by id",
        "mime_type": "application/json",
        "handler": list_books_handler,
    },
    {
        "uri_template": "library://books/{book_id}",
        "name": "Book Details",
        "description": "Get detailed information about a specific book by id",
        "mime_type": "application/json",
        "handler": get_book_handler,
    },
]
