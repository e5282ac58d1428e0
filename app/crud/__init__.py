"""CRUD operations package - exports singleton instances for all models."""

from .base import CRUDBase
from .user import crud_user
from .category import crud_category
from .tag import crud_tag
from .post import crud_post
from .ai_usage import crud_ai_usage
from .analytics import crud_site_analytics


__all__ = [
    # Base
    "CRUDBase",
    # CRUD instances
    "crud_user",
    "crud_category",
    "crud_tag",
    "crud_post",
    "crud_ai_usage",
    "crud_site_analytics",
]
