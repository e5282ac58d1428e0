"""Pydantic schemas for the admin dashboard."""

from datetime import datetime
from typing import List, Optional

from app.models.post import PostStatus
from .common import CamelModel


class DashboardCounters(CamelModel):
    total_posts: int
    published_posts: int
    draft_posts: int
    scheduled_posts: int
    total_views: int
    today_views: int
    today_revenue: float
    views_change: float
    revenue_change: float


class DashboardPost(CamelModel):
    id: int
    title: str
    slug: str
    status: PostStatus
    views: int
    category_name: Optional[str] = None
    author_name: Optional[str] = None
    created_at: Optional[datetime] = None


class AIUsageSummary(CamelModel):
    cost: float
    requests: int


class DashboardStats(CamelModel):
    stats: DashboardCounters
    recent_posts: List[DashboardPost]
    top_posts: List[DashboardPost]
    ai_usage: AIUsageSummary
