"""Post management endpoints (admin area)."""

import logging
from typing import List, Optional

from fastapi import APIRouter, Depends, HTTPException, Query, status
from sqlalchemy.exc import IntegrityError
from sqlalchemy.orm import Session

from app.api.deps import get_db, require_admin
from app.core.exceptions import (
    CategoryNotFoundException,
    PostNotFoundException,
    SlugAlreadyExistsException,
    UserNotFoundException,
)
from app.crud import crud_category, crud_post, crud_user
from app.models.post import PostStatus
from app.models.user import User
from app.schemas.common import ApiResponse, Pagination
from app.schemas.post import PostCreate, PostDetailResponse, PostResponse, PostUpdate
from app.services.slugs import resolve_slug

logger = logging.getLogger(__name__)

router = APIRouter(
    prefix="/posts",
    tags=["Posts"],
)

# Columns that cannot be cleared by sending null
NON_NULLABLE_FIELDS = {"title", "content", "category_id", "status", "excerpt", "keywords", "is_ai_generated"}


def _parse_status(value: Optional[str]) -> Optional[PostStatus]:
    if value is None or value.strip().lower() in ("", "all"):
        return None
    try:
        return PostStatus(value.strip().lower())
    except ValueError:
        allowed = ", ".join(s.value for s in PostStatus)
        raise HTTPException(
            status_code=status.HTTP_400_BAD_REQUEST,
            detail=f"Invalid status '{value}'. Allowed: all, {allowed}",
        )


@router.get(
    "",
    response_model=ApiResponse[List[PostResponse]],
    summary="List posts",
)
async def list_posts(
    status_filter: Optional[str] = Query(None, alias="status", description="'all' or a post status"),
    category_id: Optional[int] = Query(None, alias="categoryId", gt=0),
    search: Optional[str] = Query(None, max_length=200),
    page: int = Query(1, ge=1),
    page_size: int = Query(10, alias="pageSize", ge=1, le=100),
    sort_by: str = Query("createdAt", alias="sortBy", pattern="^(createdAt|updatedAt|publishedAt|views|title)$"),
    sort_order: str = Query("desc", alias="sortOrder", pattern="^(asc|desc)$"),
    db: Session = Depends(get_db),
    current_user: User = Depends(require_admin),
) -> ApiResponse[List[PostResponse]]:
    """
    List posts of every status with author, category and tags.

    Search is a case-insensitive substring match over title, excerpt and content.
    """
    posts, total = crud_post.get_filtered(
        db,
        status=_parse_status(status_filter),
        category_id=category_id,
        search=search.strip() if search else None,
        sort_by=sort_by,
        sort_order=sort_order,
        skip=(page - 1) * page_size,
        limit=page_size,
    )
    return ApiResponse(
        data=[PostResponse.model_validate(p) for p in posts],
        pagination=Pagination.build(total=total, page=page, page_size=page_size),
    )


@router.post(
    "",
    response_model=ApiResponse[PostResponse],
    status_code=status.HTTP_201_CREATED,
    summary="Create post",
)
async def create_post(
    post_in: PostCreate,
    db: Session = Depends(get_db),
    current_user: User = Depends(require_admin),
) -> ApiResponse[PostResponse]:
    """
    Create a post.

    The slug comes from ``slug`` when given, otherwise from the title. A slug
    that is already used is rejected rather than suffixed.

    Raises:
        HTTPException 400: Invalid or duplicate slug
        HTTPException 404: Category or author does not exist
    """
    author_id = post_in.author_id or current_user.id
    if not crud_user.get(db, author_id):
        raise UserNotFoundException()
    if not crud_category.get(db, post_in.category_id):
        raise CategoryNotFoundException()

    slug = resolve_slug(db, crud_post, post_in.slug or post_in.title)

    try:
        post = crud_post.create_post(db, obj_in=post_in, slug=slug, author_id=author_id)
    except IntegrityError:
        # Lost a race with a concurrent insert of the same slug
        raise SlugAlreadyExistsException(slug)

    logger.info(f"Post created: id={post.id}, slug={post.slug}, by user={current_user.id}")
    return ApiResponse(
        data=PostResponse.model_validate(post),
        message="Post created",
    )


@router.get(
    "/{post_id}",
    response_model=ApiResponse[PostDetailResponse],
    summary="Get post",
)
async def get_post(
    post_id: int,
    db: Session = Depends(get_db),
    current_user: User = Depends(require_admin),
) -> ApiResponse[PostDetailResponse]:
    post = crud_post.get_with_relations(db, post_id=post_id)
    if not post:
        raise PostNotFoundException()
    return ApiResponse(data=PostDetailResponse.model_validate(post))


@router.put(
    "/{post_id}",
    response_model=ApiResponse[PostResponse],
    summary="Update post",
)
async def update_post(
    post_id: int,
    post_in: PostUpdate,
    db: Session = Depends(get_db),
    current_user: User = Depends(require_admin),
) -> ApiResponse[PostResponse]:
    """
    Partially update a post.

    A new title re-derives the slug unless a slug is sent explicitly. Sending
    ``tags`` replaces the whole tag set.
    """
    post = crud_post.get(db, post_id)
    if not post:
        raise PostNotFoundException()

    update_data = post_in.model_dump(exclude_unset=True)
    tags = update_data.pop("tags", None)
    requested_slug = update_data.pop("slug", None)
    update_data = {
        k: v for k, v in update_data.items()
        if v is not None or k not in NON_NULLABLE_FIELDS
    }

    new_title = update_data.get("title")
    slug_source = requested_slug or (new_title if new_title and new_title != post.title else None)
    if slug_source:
        slug = resolve_slug(db, crud_post, slug_source, exclude_id=post.id)
        if slug != post.slug:
            update_data["slug"] = slug

    if "category_id" in update_data and not crud_category.get(db, update_data["category_id"]):
        raise CategoryNotFoundException()

    try:
        crud_post.update_post(db, db_obj=post, update_data=update_data, tags=tags)
    except IntegrityError:
        raise SlugAlreadyExistsException(update_data.get("slug", post.slug))

    logger.info(f"Post updated: id={post.id}, fields={sorted(update_data)}")
    return ApiResponse(
        data=PostResponse.model_validate(crud_post.get_with_relations(db, post_id=post_id)),
        message="Post updated",
    )


@router.delete(
    "/{post_id}",
    response_model=ApiResponse[None],
    summary="Delete post",
)
async def delete_post(
    post_id: int,
    db: Session = Depends(get_db),
    current_user: User = Depends(require_admin),
) -> ApiResponse[None]:
    """Delete a post together with its analytics row and tag links."""
    post = crud_post.delete(db, id=post_id)
    if not post:
        raise PostNotFoundException()
    logger.info(f"Post deleted: id={post_id}")
    return ApiResponse(message="Post deleted")


__all__ = ["router"]
