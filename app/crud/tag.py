"""CRUD operations for Tag."""

from typing import Dict, Iterable, List

from pydantic import BaseModel
from sqlalchemy import select
from sqlalchemy.orm import Session

from app.crud.base import CRUDBase
from app.models.tag import Tag
from app.utils.text import create_slug


class CRUDTag(CRUDBase[Tag, BaseModel, BaseModel]):
    """CRUD operations for Tag."""

    def connect_or_create(self, db: Session, names: Iterable[str]) -> List[Tag]:
        """Resolve tag names to Tag rows keyed by slug, creating missing ones.

        Names that share a slug collapse to one tag; names with no usable slug
        are skipped. New tags are added to the session but not committed.
        """
        wanted: Dict[str, str] = {}
        for name in names:
            slug = create_slug(name)
            if slug and slug not in wanted:
                wanted[slug] = name.strip()

        if not wanted:
            return []

        stmt = select(Tag).where(Tag.slug.in_(list(wanted)))
        existing = {tag.slug: tag for tag in db.scalars(stmt).all()}

        tags: List[Tag] = []
        for slug, name in wanted.items():
            tag = existing.get(slug)
            if tag is None:
                tag = Tag(name=name, slug=slug)
                db.add(tag)
            tags.append(tag)
        return tags


# Singleton instance
crud_tag = CRUDTag(Tag)
