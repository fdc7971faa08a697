"""
Database session management for the Book Catalog MCP Server.

This module provides connection management and session handling for
SQLAlchemy:

1. Thread Safety: tool handlers may call the store from several threads
2. Transaction Management: each store operation runs in one transaction
3. Connection Pooling: one shared connection for in-memory SQLite, a pool
   otherwise
4. Error Translation: SQLAlchemy failures surface as ``StorageError``
"""

import logging
from collections.abc import Generator
from contextlib import contextmanager

from sqlalchemy import create_engine, event, text
from sqlalchemy.engine import Engine, make_url
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import Session, sessionmaker
from sqlalchemy.pool import StaticPool

from ..config import get_config
from ..errors import StorageError
from .schema import Base

logger = logging.getLogger(__name__)

# Unicode-aware lower() registered on SQLite connections; the built-in one
# only folds ASCII letters.
SQLITE_LOWER_FUNCTION = "py_lower"


def _lower(value: str | None) -> str | None:
    return None if value is None else value.lower()


class DatabaseManager:
    """
    Manages database connections and sessions for the SQL book store.

    This class provides:
    - Lazily created engine tuned for SQLite or a server database
    - Session factory with explicit transactions
    - Schema creation for development and tests
    """

    def __init__(self, database_url: str | None = None):
        """
        Initialize the database manager.

        Args:
            database_url: SQLAlchemy database URL. If None, uses the configured
                SQLite file.
        """
        if database_url is None:
            db_path = get_config().database_path
            db_path.parent.mkdir(exist_ok=True, parents=True)
            database_url = f"sqlite:///{db_path}"
            logger.info("Using SQLite database at: %s", db_path)

        self.database_url = database_url
        self._engine: Engine | None = None
        self._session_factory: sessionmaker | None = None

    @property
    def is_sqlite(self) -> bool:
        return make_url(self.database_url).get_backend_name() == "sqlite"

    @property
    def is_in_memory(self) -> bool:
        """True for SQLite URLs without a database file (`sqlite://`, `:memory:`)."""
        return self.is_sqlite and make_url(self.database_url).database in (None, "", ":memory:")

    @property
    def engine(self) -> Engine:
        """
        Get or create the database engine.

        An in-memory SQLite database only exists on the connection that
        created it, so it is pinned to a single connection with StaticPool.
        """
        if self._engine is None:
            if self.is_in_memory:
                self._engine = create_engine(
                    self.database_url,
                    poolclass=StaticPool,
                    connect_args={"check_same_thread": False},
                    echo=False,
                )
            elif self.is_sqlite:
                self._engine = create_engine(
                    self.database_url,
                    connect_args={"check_same_thread": False},
                    echo=False,
                )
            else:
                # PostgreSQL or other databases
                self._engine = create_engine(
                    self.database_url,
                    pool_size=10,
                    max_overflow=20,
                    pool_pre_ping=True,  # Verify connections before use
                    echo=False,
                )

            if self.is_sqlite:

                @event.listens_for(self._engine, "connect")
                def register_functions(dbapi_connection, connection_record):  # noqa: ARG001
                    dbapi_connection.create_function(
                        SQLITE_LOWER_FUNCTION, 1, _lower, deterministic=True
                    )

            logger.info("Database engine created: %s", self._engine.url)

        return self._engine

    @property
    def session_factory(self) -> sessionmaker:
        """Get or create the session factory."""
        if self._session_factory is None:
            self._session_factory = sessionmaker(
                bind=self.engine,
                autocommit=False,
                autoflush=False,
                expire_on_commit=False,  # Keep objects usable after commit
            )
        return self._session_factory

    def create_session(self) -> Session:
        """
        Create a new database session.

        Sessions should be used with ``session_scope`` or closed explicitly.
        """
        return self.session_factory()

    @contextmanager
    def session_scope(self) -> Generator[Session, None, None]:
        """
        Provide a transactional scope for one store operation.

        ```python
        with db_manager.session_scope() as session:
            record = session.get(BookRecord, 1)
        # Session is automatically committed or rolled back
        ```

        Raises:
            StorageError: If the database fails inside the scope or on commit
        """
        session = self.create_session()
        try:
            yield session
            session.commit()
            logger.debug("Database transaction committed successfully")
        except (SQLAlchemyError, OverflowError) as e:
            # sqlite3 raises OverflowError for ints outside INTEGER range
            logger.exception("Database error, rolling back")
            session.rollback()
            raise StorageError(f"Database operation failed: {e!s}") from e
        except Exception:
            session.rollback()
            raise
        finally:
            session.close()

    def init_database(self, drop_existing: bool = False) -> None:
        """
        Initialize the database schema.

        Args:
            drop_existing: If True, drop all tables before creating
        """
        engine = self.engine

        if drop_existing:
            logger.warning("Dropping all existing tables...")
            Base.metadata.drop_all(bind=engine)

        logger.info("Creating database tables...")
        Base.metadata.create_all(bind=engine)
        logger.info("Database initialization complete")

    def verify_connection(self) -> bool:
        """
        Verify the database connection is working.

        Returns:
            True if connection is successful, False otherwise
        """
        try:
            with self.engine.connect() as conn:
                conn.execute(text("SELECT 1"))
            logger.info("Database connection verified")
            return True
        except SQLAlchemyError:
            logger.exception("Database connection failed")
            return False

    def close(self) -> None:
        """Close the database connection and cleanup resources."""
        if self._engine:
            self._engine.dispose()
            logger.info("Database engine disposed")
        self._engine = None
        self._session_factory = None
