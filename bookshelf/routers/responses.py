"""
Response Helpers

Routers serialize entities themselves (see services.serializer) and send
the resulting JSON text as-is, so a cached body is returned byte for byte.

Each serialized entity carries hypermedia links:
- self: always
- update, delete: only for administrators, and never in cached lists
  (the cache is shared by every caller)
"""

from typing import Any

from fastapi import Request, Response

from bookshelf.models.user import User


def json_response(
    body: str,
    status_code: int = 200,
    headers: dict[str, str] | None = None,
) -> Response:
    """Wrap pre-rendered JSON text in a response."""
    return Response(
        content=body,
        status_code=status_code,
        media_type="application/json",
        headers=headers,
    )


def is_admin(user: User | None) -> bool:
    return bool(user is not None and user.is_active and user.is_superuser)


def entity_links(
    request: Request,
    resource: str,
    entity_id: int,
    admin: bool = False,
) -> dict[str, dict[str, str]]:
    """
    Build the _links object for one entity.

    Route names follow "<resource>_<action>" and the path parameter is
    "<resource>_id", e.g. author_show with author_id.
    """
    params = {f"{resource}_id": entity_id}
    links = {"self": {"href": str(request.app.url_path_for(f"{resource}_show", **params))}}
    if admin:
        links["update"] = {"href": str(request.app.url_path_for(f"{resource}_update", **params))}
        links["delete"] = {"href": str(request.app.url_path_for(f"{resource}_delete", **params))}
    return links


# =============================================================================
# OpenAPI Documentation
# =============================================================================
# Bodies are rendered by the serializer, not by a response_model, so the
# documented shape is given as an example.

AUTHOR_OUT_EXAMPLE = {
    "id": 1,
    "firstName": "Frank",
    "lastName": "Herbert",
    "books": [{"id": 1, "title": "Dune", "coverText": "Set on the desert planet Arrakis..."}],
    "_links": {"self": {"href": "/api/authors/1"}},
}

BOOK_OUT_EXAMPLE = {
    "id": 1,
    "title": "Dune",
    "coverText": "Set on the desert planet Arrakis...",
    "author": {"id": 1, "firstName": "Frank", "lastName": "Herbert"},
    "comment": "First novel of the cycle",
    "_links": {"self": {"href": "/api/books/1"}},
}

LINKS_NOTE = (
    "Each entity carries _links.self; administrators also get "
    "_links.update and _links.delete outside cached lists."
)
VERSION_NOTE = "Fields introduced after the requested API version are omitted."


def documented(description: str, example: Any) -> dict[str, Any]:
    """An OpenAPI response entry with a JSON example body."""
    return {
        "description": description,
        "content": {"application/json": {"example": example}},
    }
