"""Slug assignment shared by posts and categories."""

from typing import Optional

from sqlalchemy.orm import Session

from app.core.exceptions import InvalidSlugException, SlugAlreadyExistsException
from app.crud.base import CRUDBase
from app.utils.text import create_slug, is_valid_slug


def resolve_slug(
    db: Session,
    crud: CRUDBase,
    source: str,
    *,
    exclude_id: Optional[int] = None,
) -> str:
    """
    Normalize ``source`` into a slug and make sure no other record uses it.

    Args:
        db: Database session
        crud: CRUD helper of the model that owns the slug column
        source: Requested slug or the title/name to derive it from
        exclude_id: Record being updated, ignored in the uniqueness check

    Raises:
        InvalidSlugException: 400 if nothing URL-safe is left after normalization
        SlugAlreadyExistsException: 400 if the slug is taken
    """
    slug = create_slug(source)
    if not is_valid_slug(slug):
        raise InvalidSlugException()
    if crud.slug_taken(db, slug, exclude_id=exclude_id):
        raise SlugAlreadyExistsException(slug)
    return slug
