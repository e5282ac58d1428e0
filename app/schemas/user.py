"""Pydantic schemas for User."""

from datetime import datetime
from typing import Optional

from pydantic import BaseModel

from .common import CamelModel


class AuthorSummary(CamelModel):
    id: int
    name: Optional[str] = None
    image: Optional[str] = None


class UserResponse(AuthorSummary):
    email: str
    role: str
    is_active: bool
    created_at: Optional[datetime] = None


class TokenResponse(BaseModel):
    """OAuth2 token payload; top-level keys stay snake_case for OAuth2 clients."""
    access_token: str
    token_type: str = "bearer"
    user: UserResponse
