"""
SQL-backed book store.

Each operation runs in its own transaction opened through
``DatabaseManager.session_scope``. Listing is pushed down to the database:
optional predicates become a parameterized ``WHERE`` clause, totals come from
``COUNT(*)`` and the page window from ``OFFSET``/``LIMIT``. The page metadata
is then built by the shared pagination engine so the result is identical to
the in-memory store's for the same data.

Ids come from the table's ``AUTOINCREMENT`` column and are never reused.
"""

import logging

from sqlalchemy import ColumnElement, delete, false, func, select

from ..errors import NotFoundError
from ..models.book import AddBook, Book, UpdateBook, clean_isbn
from ..validation import ensure_valid
from .locking import SharedExclusiveLock
from .pagination import build_page, normalize
from .repository import BookFilter, BookStore, PaginatedResponse, PaginationParams
from .schema import BookRecord
from .session import SQLITE_LOWER_FUNCTION, DatabaseManager

logger = logging.getLogger(__name__)

# SQL INTEGER columns hold signed 64-bit values
MIN_SQL_INTEGER = -(2**63)
MAX_SQL_INTEGER = 2**63 - 1


def fits_sql_integer(value: int) -> bool:
    return MIN_SQL_INTEGER <= value <= MAX_SQL_INTEGER


def filter_clauses(
    book_filter: BookFilter | None, lower_function: str = "lower"
) -> list[ColumnElement[bool]]:
    """
    Translate a filter into SQL predicates, skipping unset fields.

    The author match lowercases both sides and escapes LIKE wildcards so it
    behaves as a plain case-insensitive substring test. ``lower_function``
    names the SQL function used on the column side; SQLite stores pass the
    Unicode-aware one registered by ``DatabaseManager``. A year no SQL
    integer can hold matches nothing.
    """
    if book_filter is None:
        return []

    clauses: list[ColumnElement[bool]] = []
    if book_filter.available is not None:
        clauses.append(BookRecord.available == book_filter.available)
    if book_filter.author is not None:
        clauses.append(
            getattr(func, lower_function)(BookRecord.author).contains(
                book_filter.author.lower(), autoescape=True
            )
        )
    if book_filter.year is not None:
        if fits_sql_integer(book_filter.year):
            clauses.append(BookRecord.year == book_filter.year)
        else:
            clauses.append(false())
    return clauses


class SqlBookStore(BookStore):
    """
    Book store backed by the ``books`` table.

    Writes are serialized through a shared/exclusive lock. An in-memory
    SQLite database lives on a single shared connection, so for it reads
    take the exclusive side as well. File and server databases get their own
    connection per session and let reads overlap.
    """

    def __init__(self, db_manager: DatabaseManager, create_schema: bool = True):
        """
        Initialize the store.

        Args:
            db_manager: Source of sessions for every operation
            create_schema: Create the ``books`` table if it does not exist
        """
        self.db_manager = db_manager
        self._lock = SharedExclusiveLock()
        self._read_lock = self._lock.exclusive if db_manager.is_in_memory else self._lock.shared
        self._lower_function = SQLITE_LOWER_FUNCTION if db_manager.is_sqlite else "lower"
        if create_schema:
            db_manager.init_database()

    @staticmethod
    def _to_book(record: BookRecord) -> Book:
        return Book.model_validate(record, from_attributes=True)

    def create(self, data: AddBook) -> Book:
        ensure_valid(data)

        with self._lock.exclusive(), self.db_manager.session_scope() as session:
            record = BookRecord(
                title=data.title,
                author=data.author,
                year=data.year,
                isbn=clean_isbn(data.isbn),
                available=True,
            )
            session.add(record)
            session.flush()

        book = self._to_book(record)
        logger.info("Created book %d: %s", book.id, book.title)
        return book

    def get_by_id(self, book_id: int) -> Book:
        if not fits_sql_integer(book_id):
            raise NotFoundError(book_id)

        with self._read_lock(), self.db_manager.session_scope() as session:
            record = session.get(BookRecord, book_id)

        if record is None:
            raise NotFoundError(book_id)
        return self._to_book(record)

    def update_by_id(self, book_id: int, patch: UpdateBook) -> Book:
        if not fits_sql_integer(book_id):
            raise NotFoundError(book_id)
        changes = patch.changes()

        with self._lock.exclusive(), self.db_manager.session_scope() as session:
            record = session.get(BookRecord, book_id)
            if record is not None:
                for field, value in changes.items():
                    setattr(record, field, value)

        if record is None:
            raise NotFoundError(book_id)

        logger.debug("Updated book %d fields: %s", book_id, sorted(changes))
        return self._to_book(record)

    def delete_by_id(self, book_id: int) -> None:
        if not fits_sql_integer(book_id):
            raise NotFoundError(book_id)

        with self._lock.exclusive(), self.db_manager.session_scope() as session:
            result = session.execute(delete(BookRecord).where(BookRecord.id == book_id))
            deleted = result.rowcount

        if not deleted:
            raise NotFoundError(book_id)
        logger.info("Deleted book %d", book_id)

    def list_books(
        self,
        book_filter: BookFilter | None = None,
        pagination: PaginationParams | None = None,
    ) -> PaginatedResponse[Book]:
        pagination = normalize(pagination)
        clauses = filter_clauses(book_filter, self._lower_function)

        count_query = select(func.count()).select_from(BookRecord).where(*clauses)
        page_query = (
            select(BookRecord)
            .where(*clauses)
            .order_by(BookRecord.id.asc())
            .offset(pagination.offset)
            .limit(pagination.limit)
        )

        with self._read_lock(), self.db_manager.session_scope() as session:
            total = session.execute(count_query).scalar() or 0
            # Pages past the end are empty; skipping the query also keeps
            # offsets beyond the INTEGER range away from the driver.
            window = []
            if pagination.offset < total:
                records = session.execute(page_query).scalars().all()
                window = [self._to_book(record) for record in records]

        return build_page(window, total, pagination)

    def count(self) -> int:
        with self._read_lock(), self.db_manager.session_scope() as session:
            return session.execute(select(func.count()).select_from(BookRecord)).scalar() or 0
