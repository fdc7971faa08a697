"""
Book catalog tools for the Book Catalog MCP Server.

Each tool performs exactly one book store operation:

- list_books: filtered, paginated listing
- add_book: validate and create a book
- get_book: fetch a book by id
- update_book: partial update of a book
- delete_book: remove a book

MCP TOOL RESPONSES:
Successful calls return a ``status`` plus the payload. Failures set
``isError`` and carry an ``error`` message. Domain errors (bad input, unknown
id) get a descriptive message; storage faults are logged with their traceback
and reported only as "Internal server error".
"""

import logging
from typing import Any

from ..database.provider import get_book_store
from ..database.repository import BookFilter, PaginationParams
from ..errors import BookValidationError, NotFoundError
from ..models.book import AddBook, UpdateBook

logger = logging.getLogger(__name__)

INTERNAL_ERROR_MESSAGE = "Internal server error"


# =============================================================================
# RESPONSE FORMATTING
# =============================================================================


def success_response(status: int, message: str, data: Any = None) -> dict[str, Any]:
    response: dict[str, Any] = {
        "status": status,
        "content": [{"type": "text", "text": message}],
    }
    if data is not None:
        response["data"] = data
    return response


def error_response(status: int, message: str) -> dict[str, Any]:
    """Build the error envelope: ``{"error": message}`` plus MCP content."""
    return {
        "isError": True,
        "status": status,
        "error": message,
        "content": [{"type": "text", "text": message}],
    }


def internal_error(operation: str) -> dict[str, Any]:
    logger.exception("Unexpected error in %s tool", operation)
    return error_response(500, INTERNAL_ERROR_MESSAGE)


# =============================================================================
# TOOL HANDLERS
# =============================================================================


async def list_books_handler(
    available: bool | None = None,
    author: str | None = None,
    year: int | None = None,
    page: int = 1,
    limit: int = 10,
) -> dict[str, Any]:
    """
    List books matching the given filters, one page at a time.

    Args:
        available: Only books with this availability
        author: Only books whose author contains this text (case-insensitive)
        year: Only books published in this year
        page: Page number, 1-indexed
        limit: Books per page, at most 100

    Returns:
        Page of books with pagination metadata
    """
    try:
        result = get_book_store().list_books(
            BookFilter(available=available, author=author, year=year),
            PaginationParams(page=page, limit=limit),
        )
    except Exception:
        return internal_error("list_books")

    meta = result.pagination
    if result.data:
        message = (
            f"Showing {len(result.data)} of {meta.total_items} book(s) "
            f"(page {meta.page} of {meta.total_pages})"
        )
    else:
        message = "No books found matching your criteria."

    return success_response(
        200,
        message,
        {
            "data": [book.model_dump() for book in result.data],
            "pagination": meta.model_dump(),
        },
    )


async def add_book_handler(title: str, author: str, year: int, isbn: str) -> dict[str, Any]:
    """
    Add a book to the catalog.

    The book is validated first: title and author must be non-empty, the year
    between 1000 and the current year, and the ISBN 13 digits once hyphens
    are removed. New books are always available.
    """
    try:
        book = get_book_store().create(AddBook(title=title, author=author, year=year, isbn=isbn))
    except BookValidationError as e:
        logger.warning("Rejected new book: %s", e)
        return error_response(400, str(e))
    except Exception:
        return internal_error("add_book")

    return success_response(201, f"Added '{book.title}' with id {book.id}", book.model_dump())


async def get_book_handler(book_id: int) -> dict[str, Any]:
    """Get a single book by id."""
    try:
        book = get_book_store().get_by_id(book_id)
    except NotFoundError as e:
        return error_response(404, str(e))
    except Exception:
        return internal_error("get_book")

    return success_response(200, f"Found '{book.title}'", book.model_dump())


async def update_book_handler(
    book_id: int,
    title: str | None = None,
    author: str | None = None,
    year: int | None = None,
    isbn: str | None = None,
    available: bool | None = None,
) -> dict[str, Any]:
    """
    Update some fields of a book.

    Only the fields provided are changed; everything else keeps its stored
    value. Updated values are not re-validated.
    """
    patch = UpdateBook(title=title, author=author, year=year, isbn=isbn, available=available)
    try:
        book = get_book_store().update_by_id(book_id, patch)
    except NotFoundError as e:
        return error_response(404, str(e))
    except Exception:
        return internal_error("update_book")

    return success_response(200, f"Updated book {book.id}", book.model_dump())


async def delete_book_handler(book_id: int) -> dict[str, Any]:
    """Delete a book by id."""
    try:
        get_book_store().delete_by_id(book_id)
    except NotFoundError as e:
        return error_response(404, str(e))
    except Exception:
        return internal_error("delete_book")

    return success_response(204, f"Deleted book {book_id}")


# =============================================================================
# TOOL REGISTRATION
# =============================================================================

book_tools: list[dict[str, Any]] = [
    {
        "name": "list_books",
        "description": (
            "List books in the catalog. Filter by availability, author (partial, "
            "case-insensitive) and publication year; paginate with page and limit."
        ),
        "handler": list_books_handler,
    },
    {
        "name": "add_book",
        "description": "Add a new book to the catalog. New books start out available.",
        "handler": add_book_handler,
    },
    {
        "name": "get_book",
        "description": "Get a book by its id.",
        "handler": get_book_handler,
    },
    {
        "name": "update_book",
        "description": "Change some fields of a book. Fields left out keep their value.",
        "handler": update_book_handler,
    },
    {
        "name": "delete_book",
        "description": "Delete a book by its id.",
        "handler": delete_book_handler,
    },
]
