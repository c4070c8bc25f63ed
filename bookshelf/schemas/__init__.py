"""
Pydantic Schemas Package

Schema Naming Convention:
- XxxPayload: Request body for create/update, carries field constraints
- XxxView: Response shape, fields tagged with serialization groups
"""

from bookshelf.schemas.author import AuthorPayload, AuthorView
from bookshelf.schemas.book import BookPayload, BookView
from bookshelf.schemas.common import AUTHOR_READ, BOOK_READ, WireModel, visible
from bookshelf.schemas.user import TokenResponse

# AuthorView.books refers to BookView, which is defined after it
AuthorView.model_rebuild(_types_namespace={"BookView": BookView})
BookView.model_rebuild()

__all__ = [
    "AUTHOR_READ",
    "BOOK_READ",
    "WireModel",
    "visible",
    # Author schemas
    "AuthorPayload",
    "AuthorView",
    # Book schemas
    "BookPayload",
    "BookView",
    # Auth schemas
    "TokenResponse",
]
