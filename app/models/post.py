"""Post model for blog articles."""

from enum import Enum
from sqlalchemy import Column, Integer, String, Text, TIMESTAMP, ForeignKey, Index, Boolean, JSON, Enum as SQLEnum
from sqlalchemy.sql import func
from sqlalchemy.orm import relationship
from ..database import Base
from .tag import post_tags


class PostStatus(str, Enum):
    """Post lifecycle states. Transitions are caller-driven."""
    DRAFT = "draft"
    PUBLISHED = "published"
    SCHEDULED = "scheduled"
    ARCHIVED = "archived"


class Post(Base):
    """Blog post with SEO metadata."""

    __tablename__ = "posts"

    id = Column(Integer, primary_key=True, index=True)

    # Foreign Keys
    category_id = Column(
        Integer,
        ForeignKey("categories.id"),
        nullable=False,
        index=True
    )
    author_id = Column(
        Integer,
        ForeignKey("users.id"),
        nullable=False,
        index=True
    )

    # Content
    title = Column(String(200), nullable=False)
    slug = Column(String(255), nullable=False, unique=True, index=True)
    excerpt = Column(Text, nullable=False, default="")
    content = Column(Text, nullable=False)
    featured_image = Column(String(500), nullable=True)

    # Lifecycle
    status = Column(
        SQLEnum(PostStatus, name="post_status", values_callable=lambda e: [m.value for m in e]),
        nullable=False,
        default=PostStatus.DRAFT,
        index=True
    )
    scheduled_for = Column(TIMESTAMP, nullable=True)
    published_at = Column(TIMESTAMP, nullable=True, index=True)

    # Metadata
    views = Column(Integer, nullable=False, default=0, index=True)
    is_ai_generated = Column(Boolean, default=False)

    # SEO
    meta_title = Column(String(200), nullable=True)
    meta_description = Column(String(300), nullable=True)
    keywords = Column(JSON, nullable=False, default=list)

    # Timestamps
    created_at = Column(TIMESTAMP, server_default=func.now(), index=True)
    updated_at = Column(TIMESTAMP, server_default=func.now(), onupdate=func.now())

    __table_args__ = (
        Index('idx_post_status_published', 'status', 'published_at'),
        Index('idx_post_category_published', 'category_id', 'published_at'),
    )

    # Relationships
    author = relationship("User", back_populates="posts")
    category = relationship("Category", back_populates="posts")
    tags = relationship(
        "Tag",
        secondary=post_tags,
        back_populates="posts",
        order_by="Tag.slug",
    )
    analytics = relationship(
        "PostAnalytics",
        back_populates="post",
        uselist=False,
        cascade="all, delete-orphan",
    )
