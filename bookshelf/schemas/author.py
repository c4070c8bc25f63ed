"""
Author Pydantic Schemas

- AuthorPayload: request body for create/update, carries the field
  constraints (3-50 characters for both names)
- AuthorView: response shape, each field tagged with the groups in
  which it is serialized
"""

from typing import TYPE_CHECKING

from pydantic import Field

from bookshelf.schemas.common import AUTHOR_READ, BOOK_READ, WireModel, visible

if TYPE_CHECKING:
    from bookshelf.schemas.book import BookView


class AuthorPayload(WireModel):
    """
    Schema for creating or replacing an author.

    Example request body:
    {
        "firstName": "Ursula",
        "lastName": "Le Guin"
    }
    """

    first_name: str = Field(
        ...,
        min_length=3,
        max_length=50,
        description="Author's first name",
        examples=["Ursula", "Frank"],
    )

    last_name: str = Field(
        ...,
        min_length=3,
        max_length=50,
        description="Author's last name",
        examples=["Le Guin", "Herbert"],
    )


class AuthorView(WireModel):
    """
    Serialized author.

    In the author view the author's books are nested; in the book view
    only the author's identity and names appear.
    """

    id: int = Field(
        ...,
        description="Unique identifier",
        json_schema_extra=visible(AUTHOR_READ, BOOK_READ),
    )

    first_name: str = Field(
        ...,
        description="Author's first name",
        json_schema_extra=visible(AUTHOR_READ, BOOK_READ),
    )

    last_name: str = Field(
        ...,
        description="Author's last name",
        json_schema_extra=visible(AUTHOR_READ, BOOK_READ),
    )

    books: list["BookView"] = Field(
        default=[],
        description="Books written by this author",
        json_schema_extra=visible(AUTHOR_READ),
    )
