"""
In-memory book store.

Records live in an insertion-ordered dict keyed by id, guarded by a
shared/exclusive lock. Ids come from a counter that only ever moves forward,
so a deleted id is never handed out again during the store's lifetime.

The store hands out copies of its records; callers cannot change stored
books except through ``update_by_id``.
"""

import logging

from ..errors import NotFoundError
from ..models.book import AddBook, Book, UpdateBook, clean_isbn
from ..validation import ensure_valid
from .locking import SharedExclusiveLock
from .pagination import apply_filter, normalize, paginate
from .repository import BookFilter, BookStore, PaginatedResponse, PaginationParams

logger = logging.getLogger(__name__)


class InMemoryBookStore(BookStore):
    """Book store backed by process memory. Contents vanish with the process."""

    def __init__(self) -> None:
        self._books: dict[int, Book] = {}
        self._next_id = 1
        self._lock = SharedExclusiveLock()

    def create(self, data: AddBook) -> Book:
        ensure_valid(data)

        with self._lock.exclusive():
            book = Book(
                id=self._next_id,
                title=data.title,
                author=data.author,
                year=data.year,
                isbn=clean_isbn(data.isbn),
                available=True,
            )
            self._books[book.id] = book
            self._next_id += 1

        logger.info("Created book %d: %s", book.id, book.title)
        return book.model_copy()

    def get_by_id(self, book_id: int) -> Book:
        with self._lock.shared():
            book = self._books.get(book_id)
            if book is None:
                raise NotFoundError(book_id)
            return book.model_copy()

    def update_by_id(self, book_id: int, patch: UpdateBook) -> Book:
        changes = patch.changes()

        with self._lock.exclusive():
            book = self._books.get(book_id)
            if book is None:
                raise NotFoundError(book_id)
            updated = book.model_copy(update=changes)
            self._books[book_id] = updated

        logger.debug("Updated book %d fields: %s", book_id, sorted(changes))
        return updated.model_copy()

    def delete_by_id(self, book_id: int) -> None:
        with self._lock.exclusive():
            if self._books.pop(book_id, None) is None:
                raise NotFoundError(book_id)

        logger.info("Deleted book %d", book_id)

    def list_books(
        self,
        book_filter: BookFilter | None = None,
        pagination: PaginationParams | None = None,
    ) -> PaginatedResponse[Book]:
        pagination = normalize(pagination)

        with self._lock.shared():
            matching = apply_filter(self._books.values(), book_filter)

        page = paginate(matching, pagination)
        page.data = [book.model_copy() for book in page.data]
        return page

    def count(self) -> int:
        with self._lock.shared():
            return len(self._books)
