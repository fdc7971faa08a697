"""
Behavioral tests for the book store.

Every test here runs against both backends through the parametrized
``store`` fixture, so the in-memory and SQL stores are held to the same
observable behavior.
"""

from datetime import datetime

import pytest

from book_catalog.database import (
    BookFilter,
    BookValidationError,
    NotFoundError,
    PaginationParams,
)
from book_catalog.models import AddBook, UpdateBook


class TestCreate:
    def test_create_returns_available_book_with_id(self, store, sample_book):
        book = store.create(sample_book)

        assert book.id == 1
        assert book.title == "The Rust Programming Language"
        assert book.author == "Steve Klabnik"
        assert book.year == 2018
        assert book.available is True

    def test_isbn_stored_without_hyphens(self, store, sample_book):
        book = store.create(sample_book)

        assert book.isbn == "9781593278281"
        assert store.get_by_id(book.id).isbn == "9781593278281"

    def test_ids_are_unique_and_increasing(self, store, make_book):
        ids = [store.create(make_book(i)).id for i in range(1, 6)]

        assert ids == [1, 2, 3, 4, 5]

    def test_ids_not_reused_after_delete(self, store, make_book):
        """Deleting the newest book must not hand its id out again."""
        for i in range(1, 4):
            store.create(make_book(i))

        store.delete_by_id(3)
        store.delete_by_id(1)
        book = store.create(make_book(4))

        assert book.id == 4
        assert [b.id for b in store.list_books().data] == [2, 4]

    @pytest.mark.parametrize(
        "overrides",
        [
            {"title": ""},
            {"author": ""},
            {"year": 999},
            {"year": datetime.now().year + 1},
            {"isbn": "bad-isbn"},
            {"isbn": "978159327828"},
        ],
    )
    def test_invalid_book_rejected_without_mutation(self, store, make_book, overrides):
        store.create(make_book(1))

        with pytest.raises(BookValidationError):
            store.create(make_book(2, **overrides))

        assert store.count() == 1
        assert store.list_books().pagination.total_items == 1

    def test_validation_error_lists_every_problem(self, store):
        with pytest.raises(BookValidationError) as exc_info:
            store.create(AddBook(title="", author="", year=1, isbn="x"))

        assert len(exc_info.value.problems) == 4

    def test_rejected_create_does_not_consume_an_id(self, store, make_book):
        with pytest.raises(BookValidationError):
            store.create(make_book(1, title=""))

        assert store.create(make_book(2)).id == 1


class TestGet:
    def test_get_existing(self, store, sample_book):
        created = store.create(sample_book)

        assert store.get_by_id(created.id) == created

    def test_get_is_idempotent(self, store, sample_book):
        created = store.create(sample_book)

        assert store.get_by_id(created.id) == store.get_by_id(created.id)

    def test_get_missing_raises_not_found_with_id(self, store):
        with pytest.raises(NotFoundError) as exc_info:
            store.get_by_id(99)

        assert exc_info.value.book_id == 99
        assert "99" in str(exc_info.value)

    @pytest.mark.parametrize("book_id", [2**63, -(2**63) - 1, 10**30])
    def test_id_beyond_integer_range_not_found(self, store, sample_book, book_id):
        store.create(sample_book)

        with pytest.raises(NotFoundError):
            store.get_by_id(book_id)
        with pytest.raises(NotFoundError):
            store.update_by_id(book_id, UpdateBook(title="Whatever"))
        with pytest.raises(NotFoundError):
            store.delete_by_id(book_id)
        assert store.count() == 1

    def test_returned_book_is_a_copy(self, store, sample_book):
        created = store.create(sample_book)
        created.title = "Changed locally"

        assert store.get_by_id(created.id).title == "The Rust Programming Language"


class TestUpdate:
    def test_update_title(self, store, make_book):
        store.create(make_book(1))

        book = store.update_by_id(1, UpdateBook(title="Updated Title"))

        assert book.title == "Updated Title"
        assert store.get_by_id(1).title == "Updated Title"

    def test_partial_update_preserves_other_fields(self, store, make_book):
        before = store.create(make_book(1))

        after = store.update_by_id(1, UpdateBook(available=False))

        assert after.available is False
        assert after.title == before.title
        assert after.author == before.author
        assert after.year == before.year
        assert after.isbn == before.isbn
        assert after.id == before.id

    def test_explicit_none_leaves_field_unchanged(self, store, make_book):
        store.create(make_book(1))

        book = store.update_by_id(1, UpdateBook(title=None, year=1999))

        assert book.title == "Book 1"
        assert book.year == 1999

    def test_empty_patch_changes_nothing(self, store, make_book):
        before = store.create(make_book(1))

        assert store.update_by_id(1, UpdateBook()) == before

    def test_update_does_not_revalidate(self, store, make_book):
        """Updates skip validation, so values create would reject are stored."""
        store.create(make_book(1))

        book = store.update_by_id(1, UpdateBook(title="", year=datetime.now().year + 5))

        assert book.title == ""
        assert book.year == datetime.now().year + 5

    def test_update_strips_isbn_hyphens(self, store, make_book):
        store.create(make_book(1))

        book = store.update_by_id(1, UpdateBook(isbn="978-0-340-96019-6"))

        assert book.isbn == "9780340960196"

    def test_update_missing_raises_not_found(self, store):
        with pytest.raises(NotFoundError) as exc_info:
            store.update_by_id(99, UpdateBook(title="Whatever"))

        assert "99" in str(exc_info.value)


class TestDelete:
    def test_delete_existing(self, store, make_book):
        store.create(make_book(1))

        assert store.delete_by_id(1) is None
        with pytest.raises(NotFoundError):
            store.get_by_id(1)

    def test_delete_missing_raises_not_found(self, store):
        with pytest.raises(NotFoundError) as exc_info:
            store.delete_by_id(99)

        assert "99" in str(exc_info.value)

    def test_delete_twice_raises_second_time(self, store, make_book):
        store.create(make_book(1))
        store.delete_by_id(1)

        with pytest.raises(NotFoundError):
            store.delete_by_id(1)

    def test_delete_one_of_many_leaves_rest_intact(self, store, make_book):
        ids = [store.create(make_book(i)).id for i in range(3)]

        store.delete_by_id(ids[1])

        remaining = [b.id for b in store.list_books().data]
        assert remaining == [ids[0], ids[2]]


class TestList:
    def test_empty_store(self, store):
        result = store.list_books()

        assert result.data == []
        assert result.pagination.total_items == 0
        assert result.pagination.total_pages == 0
        assert result.pagination.page == 1
        assert result.pagination.limit == 10

    def test_returns_all_in_id_order(self, store, make_book):
        for i in range(1, 4):
            store.create(make_book(i))

        result = store.list_books()

        assert [b.id for b in result.data] == [1, 2, 3]
        assert result.pagination.total_items == 3
        assert result.pagination.total_pages == 1

    def test_second_page_of_fifteen(self, store, make_book):
        created = [store.create(make_book(i)) for i in range(1, 16)]

        result = store.list_books(pagination=PaginationParams(page=2, limit=5))

        assert len(result.data) == 5
        assert result.pagination.page == 2
        assert result.pagination.limit == 5
        assert result.pagination.total_items == 15
        assert result.pagination.total_pages == 3
        assert result.data[0].id == created[5].id

    def test_last_page_is_partial(self, store, make_book):
        for i in range(1, 13):
            store.create(make_book(i))

        result = store.list_books(pagination=PaginationParams(page=3, limit=5))

        assert [b.title for b in result.data] == ["Book 11", "Book 12"]

    def test_page_beyond_total_is_empty_with_totals(self, store, make_book):
        for i in range(1, 4):
            store.create(make_book(i))

        result = store.list_books(pagination=PaginationParams(page=99, limit=10))

        assert result.data == []
        assert result.pagination.page == 99
        assert result.pagination.total_items == 3
        assert result.pagination.total_pages == 1

    def test_huge_page_is_empty_with_totals(self, store, make_book):
        for i in range(1, 4):
            store.create(make_book(i))

        result = store.list_books(pagination=PaginationParams(page=10**19, limit=10))

        assert result.data == []
        assert result.pagination.page == 10**19
        assert result.pagination.total_items == 3
        assert result.pagination.total_pages == 1

    def test_limit_capped_at_100(self, store, make_book):
        for i in range(1, 111):
            store.create(make_book(i))

        result = store.list_books(pagination=PaginationParams(limit=200))

        assert result.pagination.limit == 100
        assert len(result.data) == 100
        assert result.pagination.total_pages == 2

    @pytest.mark.parametrize("limit", [0, -5])
    def test_non_positive_limit_uses_default(self, store, make_book, limit):
        for i in range(1, 13):
            store.create(make_book(i))

        result = store.list_books(pagination=PaginationParams(limit=limit))

        assert result.pagination.limit == 10
        assert len(result.data) == 10
        assert result.pagination.total_pages == 2

    @pytest.mark.parametrize("page", [0, -3])
    def test_non_positive_page_floored_to_one(self, store, make_book, page):
        for i in range(1, 4):
            store.create(make_book(i))

        result = store.list_books(pagination=PaginationParams(page=page))

        assert result.pagination.page == 1
        assert [b.id for b in result.data] == [1, 2, 3]

    @pytest.mark.parametrize("limit", [1, 3, 4, 7, 10])
    def test_pages_partition_filtered_set(self, store, make_book, limit):
        for i in range(1, 11):
            store.create(make_book(i, author="Tolkien" if i % 3 else "Martin"))
        book_filter = BookFilter(author="tolk")

        first = store.list_books(book_filter, PaginationParams(page=1, limit=limit))
        total, pages = first.pagination.total_items, first.pagination.total_pages
        seen: list[int] = []
        for page in range(1, pages + 1):
            result = store.list_books(book_filter, PaginationParams(page=page, limit=limit))
            seen.extend(b.id for b in result.data)

        assert total == 7
        assert len(seen) == total
        assert len(set(seen)) == total


class TestFilters:
    def test_author_filter_case_insensitive_substring(self, store, make_book):
        store.create(make_book(1, author="J.R.R. Tolkien"))
        store.create(make_book(2, author="George R.R. Martin"))

        result = store.list_books(BookFilter(author="TOLK"))

        assert [b.author for b in result.data] == ["J.R.R. Tolkien"]

    def test_author_filter_matches_several(self, store, make_book):
        store.create(make_book(1, author="George Orwell"))
        store.create(make_book(2, author="George R.R. Martin"))
        store.create(make_book(3, author="Isaac Asimov"))

        result = store.list_books(BookFilter(author="george"))

        assert len(result.data) == 2
        assert all("george" in b.author.lower() for b in result.data)

    def test_author_filter_treats_wildcards_literally(self, store, make_book):
        store.create(make_book(1, author="100% Human"))
        store.create(make_book(2, author="Plain Author"))

        assert store.list_books(BookFilter(author="%")).pagination.total_items == 1
        assert store.list_books(BookFilter(author="_")).pagination.total_items == 0

    def test_author_filter_folds_non_ascii_case(self, store, make_book):
        store.create(make_book(1, author="Émile Zola"))
        store.create(make_book(2, author="ÅSA LARSSON"))
        store.create(make_book(3, author="Emile Ajar"))

        assert [b.id for b in store.list_books(BookFilter(author="émile")).data] == [1]
        assert [b.id for b in store.list_books(BookFilter(author="ÉMILE")).data] == [1]
        assert [b.id for b in store.list_books(BookFilter(author="åsa")).data] == [2]

    def test_availability_filter(self, store, make_book):
        store.create(make_book(1))
        store.create(make_book(2))
        store.update_by_id(2, UpdateBook(available=False))

        unavailable = store.list_books(BookFilter(available=False))
        available = store.list_books(BookFilter(available=True))

        assert [b.id for b in unavailable.data] == [2]
        assert [b.id for b in available.data] == [1]

    def test_year_filter(self, store, make_book):
        store.create(make_book(1, year=2010))
        store.create(make_book(2, year=2020))

        result = store.list_books(BookFilter(year=2010))

        assert [b.year for b in result.data] == [2010]

    def test_filters_are_anded(self, store, make_book):
        store.create(make_book(1, author="Tolkien", year=1954))
        store.create(make_book(2, author="Tolkien", year=1937))
        store.create(make_book(3, author="Lewis", year=1954))
        store.update_by_id(1, UpdateBook(available=False))

        result = store.list_books(BookFilter(author="tolkien", year=1954, available=False))

        assert [b.id for b in result.data] == [1]

    def test_year_beyond_integer_range_matches_nothing(self, store, make_book):
        store.create(make_book(1))

        result = store.list_books(BookFilter(year=10**19))

        assert result.data == []
        assert result.pagination.total_items == 0

    def test_no_match_gives_empty_page(self, store, make_book):
        store.create(make_book(1))

        result = store.list_books(BookFilter(year=1500))

        assert result.data == []
        assert result.pagination.total_items == 0
        assert result.pagination.total_pages == 0

    def test_filtered_totals_count_only_matches(self, store, make_book):
        for i in range(1, 13):
            store.create(make_book(i, year=2000 if i % 2 else 2001))

        result = store.list_books(BookFilter(year=2000), PaginationParams(page=2, limit=5))

        assert result.pagination.total_items == 6
        assert result.pagination.total_pages == 2
        assert [b.id for b in result.data] == [11]


class TestCount:
    def test_count_tracks_creates_and_deletes(self, store, make_book):
        assert store.count() == 0
        store.create(make_book(1))
        store.create(make_book(2))
        store.delete_by_id(1)

        assert store.count() == 1
