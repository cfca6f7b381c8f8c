"""FastAPI authentication dependencies for route protection."""

import uuid

from fastapi import Depends, HTTPException, status
from fastapi.security import HTTPAuthorizationCredentials, HTTPBearer
from jose import JWTError
from sqlalchemy.ext.asyncio import AsyncSession

from staypoint.auth.jwt import ACCESS, decode_token
from staypoint.config import settings
from staypoint.database import get_db
from staypoint.models.user import User

# Strict bearer: raises 403 automatically if no token provided
_bearer_scheme = HTTPBearer()

# Optional bearer: returns None if no token provided
_bearer_scheme_optional = HTTPBearer(auto_error=False)


def is_admin(user: User) -> bool:
    """Return True for approved admin accounts or a configured admin email.

    An admin sign-up has no admin access until another admin approves it.
    """
    if user.email.lower() in settings.admin_emails:
        return True
    return user.role == "admin" and user.status == "approved"


async def _user_from_token(token: str, db: AsyncSession) -> User | None:
    """Resolve an access token to an active user, or None if it doesn't resolve."""
    try:
        payload = decode_token(token)
    except JWTError:
        return None

    # Refresh tokens must not authenticate requests
    if payload.get("type") != ACCESS:
        return None

    try:
        user_id = uuid.UUID(payload.get("sub") or "")
    except ValueError:
        return None

    user = await db.get(User, user_id)
    if user is None or not user.is_active:
        return None
    return user


async def get_current_user(
    credentials: HTTPAuthorizationCredentials = Depends(_bearer_scheme),
    db: AsyncSession = Depends(get_db),
) -> User:
    """Return the authenticated user for the request's Bearer token.

    Raises:
        HTTPException 401: If the token is invalid, expired, of the wrong
            type, or belongs to a missing or inactive user.
    """
    user = await _user_from_token(credentials.credentials, db)
    if user is None:
        raise HTTPException(
            status_code=status.HTTP_401_UNAUTHORIZED,
            detail="Could not validate credentials",
            headers={"WWW-Authenticate": "Bearer"},
        )
    return user


async def get_optional_user(
    credentials: HTTPAuthorizationCredentials | None = Depends(_bearer_scheme_optional),
    db: AsyncSession = Depends(get_db),
) -> User | None:
    """Optionally authenticate a user from a Bearer token.

    Returns ``None`` instead of raising, so anonymous guests can still book.
    """
    if credentials is None:
        return None
    return await _user_from_token(credentials.credentials, db)


async def get_admin_user(
    user: User = Depends(get_current_user),
) -> User:
    """Return the current user only if they have admin access.

    Raises:
        HTTPException 403: If the user is not an admin.
    """
    if not is_admin(user):
        raise HTTPException(
            status_code=status.HTTP_403_FORBIDDEN,
            detail="Admin access required",
        )
    return user
