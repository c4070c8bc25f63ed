"""
Books Router

CRUD endpoints for books.

This router demonstrates:
- Cached, paginated listing
- Versioned serialization (comment appears from API version 2.0)
- Author association through the "idAuthor" body key
- Administrator-only writes with catalog cache invalidation

Author Association
==================
The write body may carry "idAuthor". On create, a missing or unknown id
leaves the book without an author. On update, a missing key keeps the
current author and an unknown id clears it. Neither case is an error.
"""

import logging
from typing import Any

from fastapi import APIRouter, Body, Request, Response, status
from sqlalchemy.orm import Session

from bookshelf.dependencies import AdminUser, ApiVersion, Cache, DbSession, OptionalUser, Pagination
from bookshelf.models import Author, Book
from bookshelf.routers.responses import (
    BOOK_OUT_EXAMPLE,
    LINKS_NOTE,
    VERSION_NOTE,
    documented,
    entity_links,
    is_admin,
    json_response,
)
from bookshelf.schemas import BOOK_READ, BookPayload, BookView
from bookshelf.services.cache import CATALOG_TAG, invalidate_catalog, make_cache_key
from bookshelf.services.repository import AuthorRepository, BookRepository
from bookshelf.services.serializer import dumps, serialize
from bookshelf.services.validation import (
    apply_payload,
    merge_payload,
    require_object,
    validate_payload,
)

logger = logging.getLogger(__name__)

BOOK_GROUPS = (BOOK_READ,)
AUTHOR_ID_KEY = "idAuthor"
NO_AUTHOR = -1

BOOK_EXAMPLE = {
    "title": "Dune",
    "coverText": "Set on the desert planet Arrakis...",
    "comment": "First novel of the cycle",
    "idAuthor": 1,
}

router = APIRouter(
    prefix="/books",
    tags=["Books"],
    responses={
        404: {"description": "Book not found"},
    },
)


# =============================================================================
# Helper Functions
# =============================================================================
def resolve_author(db: Session, raw_id: Any) -> Author | None:
    """
    Look up the author referenced by an "idAuthor" value.

    Integers and numeric strings are looked up; anything else, and ids
    with no matching author, resolve to None.
    """
    if isinstance(raw_id, bool):
        return None
    if isinstance(raw_id, str) and raw_id.strip().lstrip("-").isdigit():
        raw_id = int(raw_id)
    if not isinstance(raw_id, int) or raw_id == NO_AUTHOR:
        return None
    author = AuthorRepository(db).get(raw_id)
    if author is None:
        logger.info(f"Author {raw_id} not found, book left without author")
    return author


# =============================================================================
# CRUD Endpoints
# =============================================================================

@router.get(
    "",
    name="book_list",
    summary="List books",
    description="Get one page of books, ordered by id, with their author.",
    responses={200: documented(f"One page of books. {LINKS_NOTE}", [BOOK_OUT_EXAMPLE])},
)
def list_books(
    request: Request,
    db: DbSession,
    cache: Cache,
    pagination: Pagination,
) -> Response:
    """
    List books with pagination.

    Pages are rendered at the baseline API version and cached under
    "books:limit=N:page=N" until the next write on any author or book.
    """
    cache_key = make_cache_key("books", page=pagination.page, limit=pagination.limit)

    def produce() -> str:
        books = BookRepository(db).list_page(pagination.page, pagination.limit)
        items = serialize(list(books), BookView, BOOK_GROUPS)
        for book, item in zip(books, items):
            item["_links"] = entity_links(request, "book", book.id)
        return dumps(items)

    return json_response(cache.get(cache_key, produce, tags=[CATALOG_TAG]))


@router.get(
    "/{book_id}",
    name="book_show",
    summary="Get a book by ID",
    description="Retrieve a book. Send 'Accept: application/json; version=2.0' "
                "to include the comment field.",
    responses={200: documented(f"The book. {LINKS_NOTE} {VERSION_NOTE}", BOOK_OUT_EXAMPLE)},
)
def get_book(
    request: Request,
    book_id: int,
    db: DbSession,
    version: ApiVersion,
    user: OptionalUser,
) -> Response:
    """Get a single book by ID, serialized for the requested API version."""
    book = BookRepository(db).get_or_404(book_id)
    data = serialize(book, BookView, BOOK_GROUPS, version)
    data["_links"] = entity_links(request, "book", book.id, admin=is_admin(user))
    return json_response(dumps(data))


@router.post(
    "",
    name="book_create",
    status_code=status.HTTP_201_CREATED,
    summary="Create a new book",
    description="Create a book, optionally attached to the author given by idAuthor. "
                "Requires an administrator token.",
    responses={
        201: documented(f"The created book. {LINKS_NOTE}", BOOK_OUT_EXAMPLE),
        400: {"description": "Validation failed"},
    },
)
def create_book(
    request: Request,
    db: DbSession,
    cache: Cache,
    admin: AdminUser,
    version: ApiVersion,
    body: Any = Body(default=None, examples=[BOOK_EXAMPLE]),
) -> Response:
    """
    Create a new book.

    Returns 201 with a Location header pointing at the new book.
    """
    body = require_object(body)
    payload = validate_payload(BookPayload, body)

    repo = BookRepository(db)
    book = apply_payload(Book(), payload)
    book.author = resolve_author(db, body.get(AUTHOR_ID_KEY, NO_AUTHOR))
    repo.add(book)
    repo.commit()
    repo.refresh(book)

    invalidate_catalog(cache)
    logger.info(f"Book {book.id} created by user {admin.id}")

    data = serialize(book, BookView, BOOK_GROUPS, version)
    data["_links"] = entity_links(request, "book", book.id, admin=True)
    location = str(request.url_for("book_show", book_id=book.id))
    return json_response(
        dumps(data),
        status_code=status.HTTP_201_CREATED,
        headers={"Location": location},
    )


@router.put(
    "/{book_id}",
    name="book_update",
    status_code=status.HTTP_204_NO_CONTENT,
    summary="Update a book",
    description="Replace a book's fields. Omitted fields keep their value. "
                "Requires an administrator token.",
    responses={400: {"description": "Validation failed"}},
)
def update_book(
    book_id: int,
    db: DbSession,
    cache: Cache,
    admin: AdminUser,
    body: Any = Body(default=None, examples=[BOOK_EXAMPLE]),
) -> Response:
    """
    Update an existing book.

    The body is merged over the current values and the merged state is
    validated; on failure nothing is changed.
    """
    repo = BookRepository(db)
    book = repo.get_or_404(book_id)

    body = require_object(body)
    merged = merge_payload(BookPayload, book, body)
    apply_payload(book, validate_payload(BookPayload, merged))
    if AUTHOR_ID_KEY in body:
        book.author = resolve_author(db, body[AUTHOR_ID_KEY])
    repo.commit()

    invalidate_catalog(cache)
    logger.info(f"Book {book_id} updated by user {admin.id}")

    return Response(status_code=status.HTTP_204_NO_CONTENT)


@router.delete(
    "/{book_id}",
    name="book_delete",
    status_code=status.HTTP_204_NO_CONTENT,
    summary="Delete a book",
    description="Permanently delete a book. Requires an administrator token.",
)
def delete_book(
    book_id: int,
    db: DbSession,
    cache: Cache,
    admin: AdminUser,
) -> Response:
    """Delete a book."""
    repo = BookRepository(db)
    book = repo.get_or_404(book_id)
    repo.delete(book)
    repo.commit()

    invalidate_catalog(cache)
    logger.info(f"Book {book_id} deleted by user {admin.id}")

    return Response(status_code=status.HTTP_204_NO_CONTENT)
