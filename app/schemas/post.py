"""Pydantic schemas for Post."""

from datetime import datetime
from typing import List, Optional

from pydantic import Field, HttpUrl, TypeAdapter, ValidationError, field_validator

from app.models.post import PostStatus
from .category import CategorySummary
from .common import CamelModel
from .tag import TagResponse
from .user import AuthorSummary

_http_url = TypeAdapter(HttpUrl)


def _normalize_status(v):
    if isinstance(v, str):
        return v.strip().lower()
    return v


def _normalize_image(v: Optional[str]) -> Optional[str]:
    """Empty string clears the image; anything else must be an http(s) URL."""
    if v is None or not v.strip():
        return None
    try:
        _http_url.validate_python(v)
    except ValidationError:
        raise ValueError("must be a valid http or https URL")
    return v


class PostBase(CamelModel):
    """Fields shared by create and update payloads."""
    slug: Optional[str] = Field(None, max_length=255, description="URL slug, derived from title when omitted")
    excerpt: Optional[str] = Field(None, max_length=300)
    tags: Optional[List[str]] = Field(None, description="Tag names; unknown tags are created")
    featured_image: Optional[str] = Field(None, max_length=500)
    status: Optional[PostStatus] = None
    scheduled_for: Optional[datetime] = None
    meta_title: Optional[str] = Field(None, max_length=60)
    meta_description: Optional[str] = Field(None, max_length=160)
    keywords: Optional[List[str]] = None
    is_ai_generated: Optional[bool] = None

    @field_validator("status", mode="before")
    @classmethod
    def validate_status(cls, v):
        return _normalize_status(v)

    @field_validator("featured_image")
    @classmethod
    def validate_featured_image(cls, v: Optional[str]) -> Optional[str]:
        return _normalize_image(v)

    @field_validator("slug", mode="before")
    @classmethod
    def validate_slug(cls, v: Optional[str]) -> Optional[str]:
        if isinstance(v, str) and not v.strip():
            return None
        return v


class PostCreate(PostBase):
    """Schema for creating a new post."""
    title: str = Field(..., min_length=1, max_length=200)
    content: str = Field(..., min_length=1)
    category_id: int = Field(..., gt=0)
    author_id: Optional[int] = Field(None, gt=0, description="Defaults to the authenticated user")


class PostUpdate(PostBase):
    """Schema for updating a post. Every field is optional."""
    title: Optional[str] = Field(None, min_length=1, max_length=200)
    content: Optional[str] = Field(None, min_length=1)
    category_id: Optional[int] = Field(None, gt=0)


class PostAnalyticsResponse(CamelModel):
    total_views: int = 0
    unique_visitors: int = 0
    avg_time_on_page: float = 0.0
    bounce_rate: float = 0.0
    likes: int = 0
    shares: int = 0
    ad_revenue: float = 0.0
    affiliate_revenue: float = 0.0


class PostResponse(CamelModel):
    """Schema for Post response."""
    id: int
    title: str
    slug: str
    excerpt: str = ""
    content: str
    featured_image: Optional[str] = None
    status: PostStatus
    views: int = 0
    scheduled_for: Optional[datetime] = None
    published_at: Optional[datetime] = None
    meta_title: Optional[str] = None
    meta_description: Optional[str] = None
    keywords: List[str] = []
    is_ai_generated: bool = False
    category_id: int
    author_id: int
    author: Optional[AuthorSummary] = None
    category: Optional[CategorySummary] = None
    tags: List[TagResponse] = []
    created_at: Optional[datetime] = None
    updated_at: Optional[datetime] = None


class PostDetailResponse(PostResponse):
    """Post with its analytics counters."""
    analytics: Optional[PostAnalyticsResponse] = None


class PostCard(CamelModel):
    """Public listing card."""
    id: int
    title: str
    slug: str
    excerpt: str = ""
    featured_image: Optional[str] = None
    published_at: Optional[datetime] = None
    views: int = 0
    category: CategorySummary
    author: AuthorSummary
    reading_time: int
    tags: List[TagResponse] = []


class BlogPostDetail(PostCard):
    """Public post page."""
    content: str
    meta_title: Optional[str] = None
    meta_description: Optional[str] = None
    keywords: List[str] = []
    analytics: Optional[PostAnalyticsResponse] = None
    related_posts: List[PostCard] = []


class BlogHome(CamelModel):
    featured: Optional[PostCard] = None
    recent: List[PostCard] = []
    trending: List[PostCard] = []
