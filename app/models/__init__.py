"""
SQLAlchemy Models for AutoBlog
"""

from ..database import Base
from .user import User
from .category import Category
from .tag import Tag, post_tags
from .post import Post, PostStatus
from .analytics import PostAnalytics, SiteAnalytics
from .ai_usage import AIUsage

# Export all models
__all__ = [
    "Base",
    "User",
    "Category",
    "Tag",
    "post_tags",
    "Post",
    "PostStatus",
    "PostAnalytics",
    "SiteAnalytics",
    "AIUsage",
]
