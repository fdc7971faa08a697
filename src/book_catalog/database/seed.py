"""
Sample data generation for the Book Catalog.

Generates realistic ``AddBook`` commands with Faker so a fresh catalog has
something to browse. Seeding goes through ``BookStore.create`` and therefore
through the same validation as any other new book.
"""

import logging
import random
from datetime import datetime

from faker import Faker

from ..models.book import AddBook, Book
from .repository import BookStore

logger = logging.getLogger(__name__)


def generate_sample_books(count: int, seed: int | None = 42) -> list[AddBook]:
    """
    Generate ``count`` valid books.

    Args:
        count: Number of books to generate
        seed: Seed for Faker and random; the same seed yields the same books

    Returns:
        AddBook commands ready to pass to a store
    """
    fake = Faker()
    rng = random.Random(seed)
    if seed is not None:
        fake.seed_instance(seed)

    current_year = datetime.now().year
    books = []
    for _ in range(count):
        title = fake.catch_phrase().title()
        books.append(
            AddBook(
                title=title,
                author=fake.name(),
                year=rng.randint(1850, current_year),
                isbn=fake.isbn13(),
            )
        )
    return books


def seed_store(store: BookStore, count: int, seed: int | None = 42) -> list[Book]:
    """Create ``count`` sample books in ``store`` and return them."""
    created = [store.create(book) for book in generate_sample_books(count, seed)]
    logger.info("Seeded %d sample books", len(created))
    return created
