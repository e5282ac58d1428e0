"""Public blog endpoints. Only published posts are visible here."""

import logging
from typing import List, Optional

from fastapi import APIRouter, Depends, Query
from sqlalchemy.orm import Session

from app.api.deps import get_db
from app.config import settings
from app.core.exceptions import PostNotFoundException
from app.crud import crud_category, crud_post
from app.models.post import Post
from app.schemas.category import CategoryResponse, CategorySummary
from app.schemas.common import ApiResponse, Pagination
from app.schemas.tag import TagResponse
from app.schemas.user import AuthorSummary
from app.schemas.post import BlogHome, BlogPostDetail, PostAnalyticsResponse, PostCard
from app.utils.text import calculate_reading_time

logger = logging.getLogger(__name__)

router = APIRouter(
    prefix="/blog",
    tags=["Blog"],
)

CARD_TAG_LIMIT = 3


def _card(post: Post) -> PostCard:
    return PostCard(
        id=post.id,
        title=post.title,
        slug=post.slug,
        excerpt=post.excerpt or "",
        featured_image=post.featured_image,
        published_at=post.published_at,
        views=post.views,
        category=CategorySummary.model_validate(post.category),
        author=AuthorSummary.model_validate(post.author),
        reading_time=calculate_reading_time(post.content),
        tags=[TagResponse.model_validate(t) for t in post.tags[:CARD_TAG_LIMIT]],
    )


def _detail(post: Post, related: List[Post]) -> BlogPostDetail:
    card = _card(post)
    return BlogPostDetail(
        **card.model_dump(exclude={"tags"}),
        tags=[TagResponse.model_validate(t) for t in post.tags],
        content=post.content,
        meta_title=post.meta_title or post.title,
        meta_description=post.meta_description,
        keywords=post.keywords or [],
        analytics=PostAnalyticsResponse.model_validate(post.analytics) if post.analytics else None,
        related_posts=[_card(p) for p in related],
    )


@router.get(
    "/posts",
    response_model=ApiResponse[List[PostCard]],
    summary="List published posts",
)
async def list_published_posts(
    category: Optional[str] = Query(None, description="Category slug"),
    search: Optional[str] = Query(None, max_length=200),
    page: int = Query(1, ge=1),
    db: Session = Depends(get_db),
) -> ApiResponse[List[PostCard]]:
    """Published posts, newest first, in pages of ``POSTS_PER_PAGE``."""
    page_size = settings.POSTS_PER_PAGE
    posts, total = crud_post.get_filtered(
        db,
        published_only=True,
        category_slug=category,
        search=search.strip() if search else None,
        sort_by="publishedAt",
        sort_order="desc",
        skip=(page - 1) * page_size,
        limit=page_size,
    )
    return ApiResponse(
        data=[_card(p) for p in posts],
        pagination=Pagination.build(total=total, page=page, page_size=page_size),
    )


@router.get(
    "/posts/{slug}",
    response_model=ApiResponse[BlogPostDetail],
    summary="Read a published post",
)
async def read_post(
    slug: str,
    db: Session = Depends(get_db),
) -> ApiResponse[BlogPostDetail]:
    """
    Published post page. Every read counts one view.

    Raises:
        HTTPException 404: Unknown slug, or the post is not published
    """
    post = crud_post.get_published_by_slug(db, slug=slug)
    if not post:
        raise PostNotFoundException()

    post = crud_post.increment_views(db, post=post)
    related = crud_post.get_related(db, post=post)
    return ApiResponse(data=_detail(post, related))


@router.get(
    "/home",
    response_model=ApiResponse[BlogHome],
    summary="Home page sections",
)
async def home(
    db: Session = Depends(get_db),
) -> ApiResponse[BlogHome]:
    """Featured (most viewed), recent and trending (last 7 days) posts."""
    featured = crud_post.get_most_viewed(db)
    return ApiResponse(
        data=BlogHome(
            featured=_card(featured) if featured else None,
            recent=[_card(p) for p in crud_post.get_recent_published(db)],
            trending=[_card(p) for p in crud_post.get_trending(db)],
        )
    )


@router.get(
    "/categories",
    response_model=ApiResponse[List[CategoryResponse]],
    summary="Active categories with published post counts",
)
async def list_blog_categories(
    db: Session = Depends(get_db),
) -> ApiResponse[List[CategoryResponse]]:
    rows = crud_category.get_all_with_counts(db, active_only=True, published_only=True)
    data = []
    for category, count in rows:
        item = CategoryResponse.model_validate(category)
        item.post_count = count
        data.append(item)
    return ApiResponse(data=data)


__all__ = ["router"]
