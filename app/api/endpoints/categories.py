"""Category endpoints. Listing and reading are public; changes need an admin."""

import logging
from typing import List

from fastapi import APIRouter, Depends, Query, status
from sqlalchemy.exc import IntegrityError
from sqlalchemy.orm import Session

from app.api.deps import get_db, require_admin
from app.core.exceptions import (
    CategoryHasPostsException,
    CategoryNotFoundException,
    SlugAlreadyExistsException,
)
from app.crud import crud_category
from app.models.category import Category
from app.models.user import User
from app.schemas.category import CategoryCreate, CategoryResponse, CategoryUpdate
from app.schemas.common import ApiResponse
from app.services.slugs import resolve_slug

logger = logging.getLogger(__name__)

router = APIRouter(
    prefix="/categories",
    tags=["Categories"],
)


def _to_response(category: Category, post_count=None) -> CategoryResponse:
    response = CategoryResponse.model_validate(category)
    response.post_count = post_count
    return response


@router.get(
    "",
    response_model=ApiResponse[List[CategoryResponse]],
    summary="List categories",
)
async def list_categories(
    include_count: bool = Query(False, alias="includeCount"),
    active_only: bool = Query(False, alias="activeOnly"),
    db: Session = Depends(get_db),
) -> ApiResponse[List[CategoryResponse]]:
    """List categories ordered by name, optionally with their post counts."""
    if include_count:
        rows = crud_category.get_all_with_counts(db, active_only=active_only)
        data = [_to_response(category, count) for category, count in rows]
    else:
        data = [_to_response(c) for c in crud_category.get_all(db, active_only=active_only)]
    return ApiResponse(data=data)


@router.post(
    "",
    response_model=ApiResponse[CategoryResponse],
    status_code=status.HTTP_201_CREATED,
    summary="Create category",
)
async def create_category(
    category_in: CategoryCreate,
    db: Session = Depends(get_db),
    current_user: User = Depends(require_admin),
) -> ApiResponse[CategoryResponse]:
    """
    Create a category. The slug is derived from the name unless given.

    Raises:
        HTTPException 400: Invalid or duplicate slug
    """
    slug = resolve_slug(db, crud_category, category_in.slug or category_in.name)
    try:
        category = crud_category.create_category(db, obj_in=category_in, slug=slug)
    except IntegrityError:
        raise SlugAlreadyExistsException(slug)

    logger.info(f"Category created: id={category.id}, slug={category.slug}")
    return ApiResponse(data=_to_response(category, 0), message="Category created")


@router.get(
    "/{category_id}",
    response_model=ApiResponse[CategoryResponse],
    summary="Get category",
)
async def get_category(
    category_id: int,
    db: Session = Depends(get_db),
) -> ApiResponse[CategoryResponse]:
    category = crud_category.get(db, category_id)
    if not category:
        raise CategoryNotFoundException()
    count = crud_category.count_posts(db, category_id=category_id)
    return ApiResponse(data=_to_response(category, count))


@router.put(
    "/{category_id}",
    response_model=ApiResponse[CategoryResponse],
    summary="Update category",
)
async def update_category(
    category_id: int,
    category_in: CategoryUpdate,
    db: Session = Depends(get_db),
    current_user: User = Depends(require_admin),
) -> ApiResponse[CategoryResponse]:
    """Partially update a category; a new name re-derives the slug unless one is sent."""
    category = crud_category.get(db, category_id)
    if not category:
        raise CategoryNotFoundException()

    update_data = category_in.model_dump(exclude_unset=True)
    requested_slug = update_data.pop("slug", None)
    for field in ("name", "color", "is_active"):
        if field in update_data and update_data[field] is None:
            del update_data[field]

    new_name = update_data.get("name")
    slug_source = requested_slug or (new_name if new_name and new_name != category.name else None)
    if slug_source:
        update_data["slug"] = resolve_slug(db, crud_category, slug_source, exclude_id=category.id)

    try:
        category = crud_category.update(db, db_obj=category, obj_in=update_data)
    except IntegrityError:
        raise SlugAlreadyExistsException(update_data.get("slug", category.slug))

    count = crud_category.count_posts(db, category_id=category_id)
    return ApiResponse(data=_to_response(category, count), message="Category updated")


@router.delete(
    "/{category_id}",
    response_model=ApiResponse[None],
    summary="Delete category",
)
async def delete_category(
    category_id: int,
    db: Session = Depends(get_db),
    current_user: User = Depends(require_admin),
) -> ApiResponse[None]:
    """
    Delete a category that no post references.

    Raises:
        HTTPException 400: Posts still use the category
        HTTPException 404: Category not found
    """
    category = crud_category.get(db, category_id)
    if not category:
        raise CategoryNotFoundException()

    post_count = crud_category.count_posts(db, category_id=category_id)
    if post_count > 0:
        raise CategoryHasPostsException(post_count)

    crud_category.delete(db, id=category_id)
    logger.info(f"Category deleted: id={category_id}")
    return ApiResponse(message="Category deleted")


__all__ = ["router"]
