"""
Validation rules for books entering the catalog.

These checks run when a book is created. Updates are applied without
re-validation, so a patch can still store an empty title or an out-of-range
year.

The ISBN check is deliberately shallow: after removing hyphens the value must
be thirteen ASCII digits. The ISBN-13 check digit is not verified.
"""

from datetime import datetime

from .errors import BookValidationError
from .models.book import AddBook, clean_isbn

MIN_YEAR = 1000
ISBN_LENGTH = 13


def is_valid_year(year: int) -> bool:
    """Check that a year lies between 1000 and the current year, inclusive.

    The upper bound is read from the system clock at call time, so next
    year's books are rejected until the calendar catches up.
    """
    return MIN_YEAR <= year <= datetime.now().year


def is_valid_isbn(isbn: str) -> bool:
    """Check that an ISBN is 13 decimal digits once hyphens are stripped."""
    cleaned = clean_isbn(isbn)
    return len(cleaned) == ISBN_LENGTH and cleaned.isascii() and cleaned.isdigit()


def validation_problems(book: AddBook) -> list[str]:
    """
    List every constraint a new book violates.

    Args:
        book: The book about to be created

    Returns:
        One human-readable message per failed constraint, empty when valid
    """
    problems = []
    if not book.title:
        problems.append("title must not be empty")
    if not book.author:
        problems.append("author must not be empty")
    if not is_valid_year(book.year):
        problems.append(
            f"year must be between {MIN_YEAR} and {datetime.now().year}, got {book.year}"
        )
    if not is_valid_isbn(book.isbn):
        problems.append(f"isbn must contain exactly {ISBN_LENGTH} digits, got {book.isbn!r}")
    return problems


def is_valid(book: AddBook) -> bool:
    return not validation_problems(book)


def ensure_valid(book: AddBook) -> None:
    """
    Raise if a new book violates any constraint.

    Raises:
        BookValidationError: Listing every failed constraint
    """
    problems = validation_problems(book)
    if problems:
        raise BookValidationError(problems)
