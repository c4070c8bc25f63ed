"""
Book Pydantic Schemas

The book write body also accepts an "idAuthor" key. It is read from the
raw JSON by the books router rather than declared here, so an unknown
author id never fails validation.
"""

from pydantic import Field

from bookshelf.schemas.author import AuthorView
from bookshelf.schemas.common import AUTHOR_READ, BOOK_READ, WireModel, visible


class BookPayload(WireModel):
    """
    Schema for creating or replacing a book.

    Example request body:
    {
        "title": "Dune",
        "coverText": "Set on the desert planet Arrakis...",
        "comment": "First of the series",
        "idAuthor": 1
    }
    """

    title: str = Field(
        ...,
        min_length=3,
        max_length=50,
        description="Book title",
        examples=["Dune", "The Dispossessed"],
    )

    cover_text: str | None = Field(
        default=None,
        description="Back-cover text",
    )

    comment: str | None = Field(
        default=None,
        description="Editorial comment",
    )


class BookView(WireModel):
    """
    Serialized book.

    comment is only part of the output from API version 2.0 onward.
    """

    id: int = Field(
        ...,
        description="Unique identifier",
        json_schema_extra=visible(AUTHOR_READ, BOOK_READ),
    )

    title: str = Field(
        ...,
        description="Book title",
        json_schema_extra=visible(AUTHOR_READ, BOOK_READ),
    )

    cover_text: str | None = Field(
        default=None,
        description="Back-cover text",
        json_schema_extra=visible(AUTHOR_READ, BOOK_READ),
    )

    author: AuthorView | None = Field(
        default=None,
        description="Author of the book",
        json_schema_extra=visible(BOOK_READ),
    )

    comment: str | None = Field(
        default=None,
        description="Editorial comment",
        json_schema_extra=visible(BOOK_READ, since="2.0"),
    )
