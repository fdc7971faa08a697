"""
Filter and pagination engine shared by the book stores.

The in-memory store filters and slices Python lists with ``apply_filter`` and
``paginate``. The SQL store narrows and slices in the database, then hands the
window to ``build_page``. Either way the clamping rules and the page metadata
come from this module, which keeps both backends in step.
"""

from collections.abc import Iterable, Sequence

from ..models.book import Book
from .repository import (
    DEFAULT_LIMIT,
    MAX_LIMIT,
    BookFilter,
    PaginatedResponse,
    PaginationMeta,
    PaginationParams,
)


def normalize(pagination: PaginationParams | None) -> PaginationParams:
    """
    Clamp requested pagination to the supported range.

    - page is floored at 1
    - limit is capped at 100
    - a zero or negative limit falls back to the default of 10
    """
    if pagination is None:
        return PaginationParams()

    page = max(1, pagination.page)
    limit = pagination.limit if pagination.limit > 0 else DEFAULT_LIMIT
    limit = min(MAX_LIMIT, limit)
    return PaginationParams(page=page, limit=limit)


def matches(book: Book, book_filter: BookFilter) -> bool:
    """Check a single book against every predicate set on the filter."""
    if book_filter.available is not None and book.available != book_filter.available:
        return False
    if book_filter.author is not None and (
        book_filter.author.lower() not in book.author.lower()
    ):
        return False
    return book_filter.year is None or book.year == book_filter.year


def apply_filter(books: Iterable[Book], book_filter: BookFilter | None) -> list[Book]:
    if book_filter is None:
        return list(books)
    return [book for book in books if matches(book, book_filter)]


def count_pages(total_items: int, limit: int) -> int:
    """Number of pages needed for ``total_items``; zero items means zero pages."""
    return (total_items + limit - 1) // limit


def build_page(
    window: Sequence[Book], total_items: int, pagination: PaginationParams
) -> PaginatedResponse[Book]:
    """
    Wrap an already-sliced window with pagination metadata.

    Args:
        window: Books on the requested page
        total_items: Number of books matching the filter across all pages
        pagination: Normalized pagination parameters

    Returns:
        Paginated response for the page
    """
    return PaginatedResponse[Book](
        data=list(window),
        pagination=PaginationMeta(
            page=pagination.page,
            limit=pagination.limit,
            total_items=total_items,
            total_pages=count_pages(total_items, pagination.limit),
        ),
    )


def paginate(books: Sequence[Book], pagination: PaginationParams) -> PaginatedResponse[Book]:
    """Slice a filtered list into the requested page."""
    start = pagination.offset
    window = books[start : start + pagination.limit] if start < len(books) else []
    return build_page(window, len(books), pagination)
