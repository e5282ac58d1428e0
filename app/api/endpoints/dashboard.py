"""Admin dashboard statistics."""

from datetime import date, datetime, time, timedelta
from typing import List, Optional

from fastapi import APIRouter, Depends
from sqlalchemy.orm import Session

from app.api.deps import get_db, require_admin
from app.crud import crud_ai_usage, crud_post, crud_site_analytics
from app.models.post import Post, PostStatus
from app.models.user import User
from app.schemas.common import ApiResponse
from app.schemas.dashboard import AIUsageSummary, DashboardCounters, DashboardPost, DashboardStats

router = APIRouter(
    prefix="/dashboard",
    tags=["Dashboard"],
)


def percentage_change(today: float, yesterday: Optional[float]) -> float:
    """Relative change in percent; 0 when there is nothing to compare against."""
    if not yesterday:
        return 0.0
    return round((today - yesterday) / yesterday * 100, 2)


def _dashboard_posts(posts: List[Post]) -> List[DashboardPost]:
    return [
        DashboardPost(
            id=p.id,
            title=p.title,
            slug=p.slug,
            status=p.status,
            views=p.views,
            category_name=p.category.name if p.category else None,
            author_name=p.author.name if p.author else None,
            created_at=p.created_at,
        )
        for p in posts
    ]


@router.get(
    "/stats",
    response_model=ApiResponse[DashboardStats],
    summary="Dashboard statistics",
)
async def get_stats(
    db: Session = Depends(get_db),
    current_user: User = Depends(require_admin),
) -> ApiResponse[DashboardStats]:
    """
    Post counts, views, today's traffic against yesterday, latest and top
    posts, and today's AI spend.
    """
    counts = crud_post.count_by_status(db)
    today = date.today()
    today_stats = crud_site_analytics.get_by_date(db, day=today)
    yesterday_stats = crud_site_analytics.get_by_date(db, day=today - timedelta(days=1))

    today_views = today_stats.total_views if today_stats else 0
    today_revenue = today_stats.total_revenue if today_stats else 0.0

    # Ledger timestamps are stored in UTC
    ai_cost, ai_requests = crud_ai_usage.summary_since(
        db, since=datetime.combine(datetime.utcnow().date(), time.min)
    )

    stats = DashboardStats(
        stats=DashboardCounters(
            total_posts=sum(counts.values()),
            published_posts=counts[PostStatus.PUBLISHED],
            draft_posts=counts[PostStatus.DRAFT],
            scheduled_posts=counts[PostStatus.SCHEDULED],
            total_views=crud_post.sum_published_views(db),
            today_views=today_views,
            today_revenue=today_revenue,
            views_change=percentage_change(
                today_views, yesterday_stats.total_views if yesterday_stats else None
            ),
            revenue_change=percentage_change(
                today_revenue, yesterday_stats.total_revenue if yesterday_stats else None
            ),
        ),
        recent_posts=_dashboard_posts(crud_post.get_latest(db)),
        top_posts=_dashboard_posts(crud_post.get_top_viewed(db)),
        ai_usage=AIUsageSummary(cost=ai_cost, requests=ai_requests),
    )
    return ApiResponse(data=stats)


__all__ = ["router"]
