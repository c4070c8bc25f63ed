"""
FastAPI Dependencies Module

Dependencies are reusable components injected into route handlers.
FastAPI's Depends() function manages their lifecycle.

Common Dependency Patterns:
- Database sessions (per-request)
- Pagination parameters
- API version negotiation
- Cache access
- Authentication and the administrator guard
"""

import logging
from typing import Annotated

from fastapi import Depends, Header, HTTPException, Query, status
from fastapi.security import OAuth2PasswordBearer
from sqlalchemy import select
from sqlalchemy.orm import Session

from bookshelf.config import get_settings
from bookshelf.database import get_db
from bookshelf.models.user import User
from bookshelf.services.cache import TagAwareCache, get_cache
from bookshelf.services.security import access_token_user_id
from bookshelf.services.serializer import parse_version

logger = logging.getLogger(__name__)
settings = get_settings()

# =============================================================================
# Type Aliases with Annotated
# =============================================================================
# Instead of writing:
#   def list_books(db: Session = Depends(get_db)):
# You can write:
#   def list_books(db: DbSession):

DbSession = Annotated[Session, Depends(get_db)]
Cache = Annotated[TagAwareCache, Depends(get_cache)]


# =============================================================================
# Pagination Parameters
# =============================================================================
class PaginationParams:
    """
    Pagination parameters for list endpoints.

    - page: Which page to return (1-indexed)
    - limit: How many items per page

    Usage in route:
        @router.get("/books")
        def list_books(db: DbSession, pagination: Pagination):
            repo.list_page(pagination.page, pagination.limit)
    """

    def __init__(
        self,
        page: int = Query(
            default=1,
            ge=1,
            description="Page number (1-indexed)",
            examples=[1, 2, 3],
        ),
        limit: int = Query(
            default=settings.default_page_limit,
            ge=1,
            le=settings.max_page_limit,
            description=f"Number of items per page (max {settings.max_page_limit})",
            examples=[3, 10],
        ),
    ) -> None:
        self.page = page
        self.limit = limit


Pagination = Annotated[PaginationParams, Depends()]


# =============================================================================
# API Version Negotiation
# =============================================================================
def get_api_version(
    accept: str | None = Header(
        default=None,
        description="Media type with an optional version, e.g. application/json; version=2.0",
    ),
) -> str:
    """
    Read the requested serialization version from the Accept header.

    Accept: application/json; version=2.0  → "2.0"
    No version parameter, or a malformed one → settings.default_api_version
    """
    if accept:
        for media_range in accept.split(","):
            for param in media_range.split(";")[1:]:
                name, _, value = param.partition("=")
                if name.strip().lower() != "version":
                    continue
                value = value.strip().strip('"')
                try:
                    parse_version(value)
                except ValueError:
                    logger.debug(f"Ignoring malformed API version {value!r}")
                    continue
                return value
    return settings.default_api_version


ApiVersion = Annotated[str, Depends(get_api_version)]


# =============================================================================
# JWT Authentication
# =============================================================================
# OAuth2PasswordBearer extracts the token from "Authorization: Bearer <token>"
# and adds the "Authorize" button to Swagger UI.

oauth2_scheme = OAuth2PasswordBearer(
    tokenUrl=f"{settings.api_prefix}/auth/login",
    auto_error=True,  # Raise 401 if token missing
)

oauth2_scheme_optional = OAuth2PasswordBearer(
    tokenUrl=f"{settings.api_prefix}/auth/login",
    auto_error=False,
)


def _user_from_token(db: Session, token: str) -> User | None:
    user_id = access_token_user_id(token)
    if user_id is None:
        return None

    stmt = select(User).where(User.id == user_id)
    return db.execute(stmt).scalar_one_or_none()


def get_current_user(
    token: str = Depends(oauth2_scheme),
    db: Session = Depends(get_db),
):
    """
    Extract and validate the current user from the JWT token.

    Raises:
        HTTPException: 401 if token is invalid or user not found
    """
    user = _user_from_token(db, token)
    if user is None:
        raise HTTPException(
            status_code=status.HTTP_401_UNAUTHORIZED,
            detail="Could not validate credentials",
            headers={"WWW-Authenticate": "Bearer"},
        )
    return user


def get_current_active_user(
    current_user=Depends(get_current_user),
):
    """
    Verify the current user is active.

    Raises:
        HTTPException: 403 if user is inactive
    """
    if not current_user.is_active:
        raise HTTPException(
            status_code=status.HTTP_403_FORBIDDEN,
            detail="Account is inactive",
        )
    return current_user


def get_current_admin(
    current_user=Depends(get_current_active_user),
):
    """
    Guard for write endpoints: the caller must be an administrator.

    Runs before the route body, so a rejected request never touches
    the database or the cache.

    Raises:
        HTTPException: 403 if user is not a superuser
    """
    if not current_user.is_superuser:
        logger.info(f"Write access denied for user {current_user.id}")
        raise HTTPException(
            status_code=status.HTTP_403_FORBIDDEN,
            detail="Administrator privileges required",
        )
    return current_user


def get_optional_user(
    token: str | None = Depends(oauth2_scheme_optional),
    db: Session = Depends(get_db),
):
    """
    Get current user if authenticated, None otherwise.

    Used by read endpoints to decide which hypermedia links to show.
    """
    if not token:
        return None
    user = _user_from_token(db, token)
    if user is None or not user.is_active:
        return None
    return user


AdminUser = Annotated[User, Depends(get_current_admin)]
OptionalUser = Annotated[User | None, Depends(get_optional_user)]
