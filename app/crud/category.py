"""CRUD operations for Category."""

from typing import List, Optional, Tuple

from sqlalchemy import func, select
from sqlalchemy.orm import Session

from app.crud.base import CRUDBase
from app.models.category import Category
from app.models.post import Post, PostStatus
from app.schemas.category import CategoryCreate, CategoryUpdate


class CRUDCategory(CRUDBase[Category, CategoryCreate, CategoryUpdate]):
    """CRUD operations for Category."""

    def get_all(self, db: Session, *, active_only: bool = False) -> List[Category]:
        """Get categories ordered by name."""
        stmt = select(Category).order_by(Category.name)
        if active_only:
            stmt = stmt.where(Category.is_active == True)
        return list(db.scalars(stmt).all())

    def get_all_with_counts(
        self,
        db: Session,
        *,
        active_only: bool = False,
        published_only: bool = False,
    ) -> List[Tuple[Category, int]]:
        """Get categories ordered by name together with their post counts."""
        join_on = Post.category_id == Category.id
        if published_only:
            join_on = join_on & (Post.status == PostStatus.PUBLISHED) & Post.published_at.is_not(None)

        stmt = (
            select(Category, func.count(Post.id))
            .outerjoin(Post, join_on)
            .group_by(Category.id)
            .order_by(Category.name)
        )
        if active_only:
            stmt = stmt.where(Category.is_active == True)
        return [(category, count) for category, count in db.execute(stmt).all()]

    def count_posts(self, db: Session, *, category_id: int) -> int:
        stmt = select(func.count(Post.id)).where(Post.category_id == category_id)
        return db.scalar(stmt) or 0

    def create_category(
        self,
        db: Session,
        *,
        obj_in: CategoryCreate,
        slug: str,
    ) -> Category:
        data = obj_in.model_dump(exclude_unset=True, exclude={"slug"})
        data = {k: v for k, v in data.items() if v is not None}
        return self.create(db, obj_in={**data, "slug": slug})

    def get_name(self, db: Session, *, category_id: int) -> Optional[str]:
        return db.scalar(select(Category.name).where(Category.id == category_id))


# Singleton instance
crud_category = CRUDCategory(Category)
