#!/usr/bin/env python3
"""
Initialize the Book Catalog database.

This script:
1. Creates the books table
2. Optionally seeds sample books generated with Faker
3. Verifies the database is ready for MCP server use

Usage:
    python scripts/init_database.py [--drop-existing] [--sample-data N]
"""

import argparse
import logging
import sys

from sqlalchemy import inspect

from book_catalog.config import get_config
from book_catalog.database import DatabaseManager, SqlBookStore, seed_store

logging.basicConfig(
    level=logging.INFO, format="%(asctime)s - %(name)s - %(levelname)s - %(message)s"
)
logger = logging.getLogger(__name__)


def main():
    """Main entry point for database initialization."""
    parser = argparse.ArgumentParser(description="Initialize the Book Catalog database")
    parser.add_argument(
        "--drop-existing",
        action="store_true",
        help="Drop existing tables before creating new ones",
    )
    parser.add_argument(
        "--sample-data",
        type=int,
        default=0,
        metavar="N",
        help="Seed N sample books after creating tables",
    )
    parser.add_argument(
        "--database-url",
        help="Override the configured database URL",
    )

    args = parser.parse_args()

    db_manager = DatabaseManager(args.database_url or get_config().get_database_url())

    if not db_manager.verify_connection():
        logger.error("Failed to connect to database")
        sys.exit(1)

    try:
        logger.info("Creating database schema...")
        db_manager.init_database(drop_existing=args.drop_existing)

        tables = inspect(db_manager.engine).get_table_names()
        logger.info("Tables present: %s", ", ".join(tables))
        if "books" not in tables:
            logger.error("Missing expected table: books")
            sys.exit(1)

        store = SqlBookStore(db_manager, create_schema=False)
        if args.sample_data:
            seed_store(store, args.sample_data)

        logger.info("Database ready with %d book(s)", store.count())

    except Exception:
        logger.exception("Database initialization failed")
        sys.exit(1)
    finally:
        db_manager.close()


if __name__ == "__main__":
    main()
