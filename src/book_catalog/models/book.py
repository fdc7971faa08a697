"""
Book models for the Book Catalog MCP Server.

``Book`` is the stored record returned by every store operation. ``AddBook``
and ``UpdateBook`` are the commands callers send to change the catalog.

The command models only enforce types. Content rules (non-empty title,
plausible year, well-formed ISBN) belong to ``book_catalog.validation`` so the
store can report them as a ``BookValidationError`` instead of a schema error.
"""

from typing import Any

from pydantic import BaseModel, ConfigDict, Field


def clean_isbn(isbn: str) -> str:
    """Return the canonical storage form of an ISBN (hyphens removed)."""
    return isbn.replace("-", "")


class Book(BaseModel):
    """
    A book record held by the catalog.

    The id is assigned by the store on creation and never changes. Every other
    field can be changed through a partial update.
    """

    id: int = Field(
        ...,
        description="Store-assigned identifier, unique and never reused",
        gt=0,
        examples=[1, 42],
    )

    title: str = Field(
        ...,
        description="The title of the book",
        examples=["The Rust Programming Language", "Dune"],
    )

    author: str = Field(
        ...,
        description="Author name as a single string",
        examples=["Steve Klabnik", "Frank Herbert"],
    )

    year: int = Field(
        ...,
        description="Publication year",
        examples=[2018, 1965],
    )

    isbn: str = Field(
        ...,
        description="ISBN-13 stored without hyphens",
        examples=["9781593278281"],
    )

    available: bool = Field(
        default=True,
        description="Whether the book can currently be lent",
    )

    model_config = ConfigDict(
        from_attributes=True,
        json_schema_extra={
            "example": {
                "id": 1,
                "title": "The Rust Programming Language",
                "author": "Steve Klabnik",
                "year": 2018,
                "isbn": "9781593278281",
                "available": True,
            }
        },
    )


class AddBook(BaseModel):
    """Command for adding a book. New books always start out available."""

    title: str = Field(..., description="The title of the book")
    author: str = Field(..., description="Author name")
    year: int = Field(..., description="Publication year, 1000 up to the current year")
    isbn: str = Field(
        ...,
        description="ISBN-13, hyphens allowed",
        examples=["978-1593278281", "9781593278281"],
    )


class UpdateBook(BaseModel):
    """
    Partial update for a stored book.

    Fields left out (or sent as null) keep their stored value. Sending
    ``{"available": false}`` only flips availability.
    """

    title: str | None = None
    author: str | None = None
    year: int | None = None
    isbn: str | None = None
    available: bool | None = None

    def changes(self) -> dict[str, Any]:
        """Return the fields this patch sets, ISBN in canonical form."""
        changes = self.model_dump(exclude_unset=True, exclude_none=True)
        if "isbn" in changes:
            changes["isbn"] = clean_isbn(changes["isbn"])
        return changes
