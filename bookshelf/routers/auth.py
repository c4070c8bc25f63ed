"""
Authentication Router

- Login (email/password → JWT access token)

Security:
=========
- Passwords are hashed with bcrypt before storage
- Plain text passwords are never logged or stored
- The access token is sent as "Authorization: Bearer <token>" on write
  requests; only administrators may write
"""

import logging
from datetime import UTC, datetime

from fastapi import APIRouter, Depends, HTTPException, status
from fastapi.security import OAuth2PasswordRequestForm
from sqlalchemy import select

from bookshelf.config import get_settings
from bookshelf.dependencies import DbSession
from bookshelf.models.user import User
from bookshelf.schemas import TokenResponse
from bookshelf.services.security import create_access_token, verify_password

logger = logging.getLogger(__name__)
settings = get_settings()

router = APIRouter(
    prefix="/auth",
    tags=["Authentication"],
    responses={
        401: {"description": "Unauthorized"},
    },
)


@router.post(
    "/login",
    response_model=TokenResponse,
    summary="Login with email and password",
    description="""
    Authenticate with email and password to receive a JWT access token.

    **Usage:**
    Include the access token in the Authorization header:
    ```
    Authorization: Bearer <access_token>
    ```

    **Note:** Use the email address in the 'username' field (OAuth2 standard).
    """,
)
def login(
    db: DbSession,
    form_data: OAuth2PasswordRequestForm = Depends(),
) -> TokenResponse:
    """
    Authenticate user and return a JWT access token.

    Uses OAuth2 password flow (form data with username/password).
    """
    email = form_data.username

    stmt = select(User).where(User.email == email)
    user = db.execute(stmt).scalar_one_or_none()

    if user is None or not verify_password(form_data.password, user.hashed_password):
        logger.warning(f"Login failed for {email}")
        raise HTTPException(
            status_code=status.HTTP_401_UNAUTHORIZED,
            detail="Incorrect email or password",
            headers={"WWW-Authenticate": "Bearer"},
        )

    if not user.is_active:
        logger.warning(f"Login failed: inactive account {email}")
        raise HTTPException(
            status_code=status.HTTP_403_FORBIDDEN,
            detail="Account is inactive",
        )

    access_token = create_access_token(user.id)

    user.last_login_at = datetime.now(UTC)
    db.commit()

    logger.info(f"User logged in: {user.email}")

    return TokenResponse(
        access_token=access_token,
        token_type="bearer",
        expires_in=settings.access_token_expire_minutes * 60,
    )
