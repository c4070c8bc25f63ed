"""
Credentials and Bearer Tokens

Administrators log in with email and password and receive a signed
token naming their user id. Write endpoints turn that token back into a
user through access_token_user_id.
"""

import logging
from datetime import UTC, datetime, timedelta

from jose import JWTError, jwt
from passlib.context import CryptContext

from bookshelf.config import get_settings

logger = logging.getLogger(__name__)
settings = get_settings()

pwd_context = CryptContext(schemes=["bcrypt"], deprecated="auto")

ALGORITHM = "HS256"
ACCESS_TOKEN_TYPE = "access"


def hash_password(password: str) -> str:
    return pwd_context.hash(password)


def verify_password(password: str, stored_hash: str) -> bool:
    """
    Check a login password against a stored hash.

    A stored value passlib cannot identify counts as a mismatch.
    """
    try:
        return pwd_context.verify(password, stored_hash)
    except ValueError as e:
        logger.warning(f"Unusable password hash: {e}")
        return False


def create_access_token(user_id: int, lifetime: timedelta | None = None) -> str:
    """
    Sign a bearer token for a user.

    Args:
        user_id: Stored as the "sub" claim
        lifetime: Defaults to ACCESS_TOKEN_EXPIRE_MINUTES; a negative
            value yields an already expired token

    Returns:
        Compact JWS string
    """
    if lifetime is None:
        lifetime = timedelta(minutes=settings.access_token_expire_minutes)
    claims = {
        "sub": str(user_id),
        "type": ACCESS_TOKEN_TYPE,
        "exp": datetime.now(UTC) + lifetime,
    }
    return jwt.encode(claims, settings.secret_key, algorithm=ALGORITHM)


def decode_token(token: str) -> dict | None:
    """Verified claims, or None for a bad signature, expiry or garbage."""
    try:
        return jwt.decode(token, settings.secret_key, algorithms=[ALGORITHM])
    except JWTError as e:
        logger.warning(f"Rejected bearer token: {e}")
        return None


def access_token_user_id(token: str) -> int | None:
    """User id carried by a valid access token, None otherwise."""
    claims = decode_token(token)
    if claims is None:
        return None
    if claims.get("type") != ACCESS_TOKEN_TYPE:
        logger.warning(f"Bearer token has type {claims.get('type')!r}")
        return None

    subject = str(claims.get("sub", ""))
    return int(subject) if subject.isdigit() else None
