"""
Authors Router

CRUD endpoints for authors.

- Reads are anonymous; the list is served from the tag-aware cache
- Writes require an administrator and invalidate the catalog cache tag
"""

import logging
from typing import Any

from fastapi import APIRouter, Body, Request, Response, status

from bookshelf.dependencies import AdminUser, ApiVersion, Cache, DbSession, OptionalUser, Pagination
from bookshelf.models import Author
from bookshelf.routers.responses import (
    AUTHOR_OUT_EXAMPLE,
    LINKS_NOTE,
    VERSION_NOTE,
    documented,
    entity_links,
    is_admin,
    json_response,
)
from bookshelf.schemas import AUTHOR_READ, AuthorPayload, AuthorView
from bookshelf.services.cache import CATALOG_TAG, invalidate_catalog, make_cache_key
from bookshelf.services.repository import AuthorRepository
from bookshelf.services.serializer import dumps, serialize
from bookshelf.services.validation import (
    apply_payload,
    merge_payload,
    require_object,
    validate_payload,
)

logger = logging.getLogger(__name__)

AUTHOR_GROUPS = (AUTHOR_READ,)

router = APIRouter(
    prefix="/authors",
    tags=["Authors"],
    responses={
        404: {"description": "Author not found"},
    },
)


@router.get(
    "",
    name="author_list",
    summary="List authors",
    description="Get one page of authors, ordered by id, with their books.",
    responses={200: documented(f"One page of authors. {LINKS_NOTE}", [AUTHOR_OUT_EXAMPLE])},
)
def list_authors(
    request: Request,
    db: DbSession,
    cache: Cache,
    pagination: Pagination,
) -> Response:
    """
    List authors with pagination.

    The rendered page is cached under "authors:limit=N:page=N" until the
    next write on any author or book.
    """
    cache_key = make_cache_key("authors", page=pagination.page, limit=pagination.limit)

    def produce() -> str:
        authors = AuthorRepository(db).list_page(pagination.page, pagination.limit)
        items = serialize(list(authors), AuthorView, AUTHOR_GROUPS)
        for author, item in zip(authors, items):
            item["_links"] = entity_links(request, "author", author.id)
        return dumps(items)

    return json_response(cache.get(cache_key, produce, tags=[CATALOG_TAG]))


@router.get(
    "/{author_id}",
    name="author_show",
    summary="Get an author by ID",
    description="Retrieve an author and their books.",
    responses={200: documented(f"The author. {LINKS_NOTE} {VERSION_NOTE}", AUTHOR_OUT_EXAMPLE)},
)
def get_author(
    request: Request,
    author_id: int,
    db: DbSession,
    version: ApiVersion,
    user: OptionalUser,
) -> Response:
    """Get a single author by ID."""
    author = AuthorRepository(db).get_or_404(author_id)
    data = serialize(author, AuthorView, AUTHOR_GROUPS, version)
    data["_links"] = entity_links(request, "author", author.id, admin=is_admin(user))
    return json_response(dumps(data))


@router.post(
    "",
    name="author_create",
    status_code=status.HTTP_201_CREATED,
    summary="Create a new author",
    description="Create an author. Requires an administrator token.",
    responses={
        201: documented(f"The created author. {LINKS_NOTE}", AUTHOR_OUT_EXAMPLE),
        400: {"description": "Validation failed"},
    },
)
def create_author(
    request: Request,
    db: DbSession,
    cache: Cache,
    admin: AdminUser,
    body: Any = Body(default=None, examples=[{"firstName": "Ursula", "lastName": "Le Guin"}]),
) -> Response:
    """
    Create a new author.

    Returns 201 with a Location header pointing at the new author.
    """
    payload = validate_payload(AuthorPayload, require_object(body))

    repo = AuthorRepository(db)
    author = apply_payload(Author(), payload)
    repo.add(author)
    repo.commit()
    repo.refresh(author)

    invalidate_catalog(cache)
    logger.info(f"Author {author.id} created by user {admin.id}")

    data = serialize(author, AuthorView, AUTHOR_GROUPS)
    data["_links"] = entity_links(request, "author", author.id, admin=True)
    location = str(request.url_for("author_show", author_id=author.id))
    return json_response(
        dumps(data),
        status_code=status.HTTP_201_CREATED,
        headers={"Location": location},
    )


@router.put(
    "/{author_id}",
    name="author_update",
    status_code=status.HTTP_204_NO_CONTENT,
    summary="Update an author",
    description="Replace an author's names. Omitted fields keep their value. "
                "Requires an administrator token.",
    responses={400: {"description": "Validation failed"}},
)
def update_author(
    author_id: int,
    db: DbSession,
    cache: Cache,
    admin: AdminUser,
    body: Any = Body(default=None, examples=[{"firstName": "Ursula", "lastName": "Le Guin"}]),
) -> Response:
    """
    Update an existing author.

    The body is merged over the current values and the merged state is
    validated; on failure nothing is changed.
    """
    repo = AuthorRepository(db)
    author = repo.get_or_404(author_id)

    merged = merge_payload(AuthorPayload, author, require_object(body))
    apply_payload(author, validate_payload(AuthorPayload, merged))
    repo.commit()

    invalidate_catalog(cache)
    logger.info(f"Author {author_id} updated by user {admin.id}")

    return Response(status_code=status.HTTP_204_NO_CONTENT)


@router.delete(
    "/{author_id}",
    name="author_delete",
    status_code=status.HTTP_204_NO_CONTENT,
    summary="Delete an author",
    description="Delete an author and all of their books. Requires an administrator token.",
)
def delete_author(
    author_id: int,
    db: DbSession,
    cache: Cache,
    admin: AdminUser,
) -> Response:
    """Delete an author; their books are deleted with them."""
    repo = AuthorRepository(db)
    author = repo.get_or_404(author_id)
    book_count = len(author.books)
    repo.delete(author)
    repo.commit()

    invalidate_catalog(cache)
    logger.info(f"Author {author_id} and {book_count} book(s) deleted by user {admin.id}")

    return Response(status_code=status.HTTP_204_NO_CONTENT)
