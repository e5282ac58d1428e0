"""FastAPI dependency injection functions for authentication, database and AI access."""

import logging
from typing import Callable

from fastapi import Depends, HTTPException, status
from fastapi.security import OAuth2PasswordBearer
from sqlalchemy.orm import Session

from app.core.exceptions import AIServiceException
from app.core.security import decode_token
from app.crud import crud_user
from app.database import get_db
from app.models.user import User
from app.services.content_generator import ContentGenerator, get_content_generator

logger = logging.getLogger(__name__)

# OAuth2 Bearer token scheme
oauth2_scheme = OAuth2PasswordBearer(tokenUrl="/api/auth/login")

ADMIN_ROLES = ("admin", "editor")


def get_current_user(
    token: str = Depends(oauth2_scheme),
    db: Session = Depends(get_db)
) -> User:
    """
    Dependency to get current authenticated user from JWT token.

    Args:
        token: JWT token from Authorization header
        db: Database session

    Returns:
        User: Authenticated user model

    Raises:
        HTTPException: 401 if token is invalid or user not found
    """
    credentials_exception = HTTPException(
        status_code=status.HTTP_401_UNAUTHORIZED,
        detail="Could not validate credentials",
        headers={"WWW-Authenticate": "Bearer"},
    )

    payload = decode_token(token)
    email = payload.get("sub")
    if not email:
        logger.warning("[AUTH] Token has no subject")
        raise credentials_exception

    user = crud_user.get_by_email(db, email)
    if user is None:
        logger.warning(f"[AUTH] User not found for email: {email}")
        raise credentials_exception

    return user


def get_current_active_user(
    current_user: User = Depends(get_current_user)
) -> User:
    """
    Dependency to verify current user is active.

    Raises:
        HTTPException: 403 if user is inactive
    """
    if not current_user.is_active:
        raise HTTPException(
            status_code=status.HTTP_403_FORBIDDEN,
            detail="Inactive user"
        )
    return current_user


def require_role(*allowed_roles: str) -> Callable:
    """
    Factory function to create role-based access control dependency.

    Args:
        *allowed_roles: User roles allowed to access the endpoint

    Returns:
        Callable: Dependency function that checks user role

    Raises:
        HTTPException: 403 if user role not in allowed_roles

    Example:
        @router.get("/posts")
        async def list_posts(current_user: User = Depends(require_role("admin", "editor"))):
            ...
    """
    async def role_checker(
        current_user: User = Depends(get_current_active_user)
    ) -> User:
        if current_user.role not in allowed_roles:
            raise HTTPException(
                status_code=status.HTTP_403_FORBIDDEN,
                detail=f"Not enough permissions. Required role(s): {', '.join(allowed_roles)}"
            )
        return current_user

    return role_checker


# Shared guard for every admin-area route
require_admin = require_role(*ADMIN_ROLES)


def get_generator() -> ContentGenerator:
    """Content generator dependency; 500 when the AI service is not configured."""
    try:
        return get_content_generator()
    except ValueError as e:
        logger.error(f"AI service unavailable: {str(e)}")
        raise AIServiceException(str(e))


__all__ = [
    "oauth2_scheme",
    "get_db",
    "get_current_user",
    "get_current_active_user",
    "require_role",
    "require_admin",
    "get_generator",
]
