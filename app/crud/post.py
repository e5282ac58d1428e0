"""CRUD operations for Post."""

from datetime import datetime, timedelta
from typing import Any, Dict, List, Optional, Tuple

from sqlalchemy import Select, asc, desc, func, or_, select, update
from sqlalchemy.orm import Session, joinedload, selectinload

from app.crud.base import CRUDBase
from app.crud.tag import crud_tag
from app.models.analytics import PostAnalytics
from app.models.category import Category
from app.models.post import Post, PostStatus
from app.schemas.post import PostCreate, PostUpdate
from app.utils.text import generate_meta_description

# Accepted sort keys (camelCase as sent by the admin client, and snake_case)
SORT_FIELDS = {
    "createdAt": Post.created_at,
    "updatedAt": Post.updated_at,
    "publishedAt": Post.published_at,
    "views": Post.views,
    "title": Post.title,
}


def _with_relations(stmt: Select) -> Select:
    return stmt.options(
        joinedload(Post.author),
        joinedload(Post.category),
        selectinload(Post.tags),
    )


def _published(stmt: Select) -> Select:
    return stmt.where(Post.status == PostStatus.PUBLISHED, Post.published_at.is_not(None))


class CRUDPost(CRUDBase[Post, PostCreate, PostUpdate]):
    """CRUD operations for Post."""

    # ----- Listing -----
    def _filtered(
        self,
        stmt: Select,
        *,
        status: Optional[PostStatus] = None,
        category_id: Optional[int] = None,
        category_slug: Optional[str] = None,
        search: Optional[str] = None,
        published_only: bool = False,
    ) -> Select:
        if published_only:
            stmt = _published(stmt)
        if status is not None:
            stmt = stmt.where(Post.status == status)
        if category_id is not None:
            stmt = stmt.where(Post.category_id == category_id)
        if category_slug:
            stmt = stmt.where(Post.category.has(Category.slug == category_slug))
        if search:
            stmt = stmt.where(
                or_(
                    Post.title.icontains(search, autoescape=True),
                    Post.excerpt.icontains(search, autoescape=True),
                    Post.content.icontains(search, autoescape=True),
                )
            )
        return stmt

    def get_filtered(
        self,
        db: Session,
        *,
        status: Optional[PostStatus] = None,
        category_id: Optional[int] = None,
        category_slug: Optional[str] = None,
        search: Optional[str] = None,
        published_only: bool = False,
        sort_by: str = "createdAt",
        sort_order: str = "desc",
        skip: int = 0,
        limit: int = 10,
    ) -> Tuple[List[Post], int]:
        """Get one page of posts matching the filters, plus the total match count."""
        filters = dict(
            status=status,
            category_id=category_id,
            category_slug=category_slug,
            search=search,
            published_only=published_only,
        )

        count_stmt = self._filtered(select(func.count(Post.id)), **filters)
        total = db.scalar(count_stmt) or 0

        column = SORT_FIELDS.get(sort_by, Post.created_at)
        direction = asc if sort_order == "asc" else desc
        stmt = self._filtered(_with_relations(select(Post)), **filters)
        stmt = stmt.order_by(direction(column), direction(Post.id)).offset(skip).limit(limit)
        return list(db.scalars(stmt).unique().all()), total

    def get_with_relations(self, db: Session, *, post_id: int) -> Optional[Post]:
        stmt = _with_relations(select(Post)).where(Post.id == post_id).options(joinedload(Post.analytics))
        return db.scalars(stmt).unique().first()

    # ----- Create / Update -----
    def create_post(
        self,
        db: Session,
        *,
        obj_in: PostCreate,
        slug: str,
        author_id: int,
    ) -> Post:
        """Create a post with its tags and an empty analytics row."""
        status = obj_in.status or PostStatus.DRAFT
        post = Post(
            title=obj_in.title,
            slug=slug,
            excerpt=obj_in.excerpt or "",
            content=obj_in.content,
            featured_image=obj_in.featured_image,
            category_id=obj_in.category_id,
            author_id=author_id,
            status=status,
            scheduled_for=obj_in.scheduled_for,
            published_at=datetime.utcnow() if status == PostStatus.PUBLISHED else None,
            meta_title=obj_in.meta_title or obj_in.title,
            meta_description=obj_in.meta_description or generate_meta_description(obj_in.content),
            keywords=obj_in.keywords or [],
            is_ai_generated=bool(obj_in.is_ai_generated),
        )
        if obj_in.tags:
            post.tags = crud_tag.connect_or_create(db, obj_in.tags)
        post.analytics = PostAnalytics()

        try:
            db.add(post)
            db.commit()
            db.refresh(post)
        except Exception:
            db.rollback()
            raise
        return post

    def update_post(
        self,
        db: Session,
        *,
        db_obj: Post,
        update_data: Dict[str, Any],
        tags: Optional[List[str]] = None,
    ) -> Post:
        """Apply field changes; ``tags`` (when given) replaces the whole tag set."""
        was_published = db_obj.status == PostStatus.PUBLISHED

        for field, value in update_data.items():
            if hasattr(db_obj, field):
                setattr(db_obj, field, value)

        if update_data.get("status") == PostStatus.PUBLISHED and not was_published:
            db_obj.published_at = datetime.utcnow()

        if tags is not None:
            db_obj.tags = crud_tag.connect_or_create(db, tags)

        try:
            db.add(db_obj)
            db.commit()
            db.refresh(db_obj)
        except Exception:
            db.rollback()
            raise
        return db_obj

    # ----- Public blog -----
    def get_published_by_slug(self, db: Session, *, slug: str) -> Optional[Post]:
        stmt = _published(_with_relations(select(Post))).where(Post.slug == slug)
        return db.scalars(stmt.options(joinedload(Post.analytics))).unique().first()

    def increment_views(self, db: Session, *, post: Post) -> Post:
        db.execute(update(Post).where(Post.id == post.id).values(views=Post.views + 1))
        db.commit()
        db.refresh(post)
        return post

    def get_related(self, db: Session, *, post: Post, limit: int = 3) -> List[Post]:
        """Other published posts in the same category, newest first."""
        stmt = (
            _published(_with_relations(select(Post)))
            .where(Post.category_id == post.category_id, Post.id != post.id)
            .order_by(desc(Post.published_at), desc(Post.id))
            .limit(limit)
        )
        return list(db.scalars(stmt).unique().all())

    def get_most_viewed(self, db: Session) -> Optional[Post]:
        stmt = _published(_with_relations(select(Post))).order_by(desc(Post.views), desc(Post.id)).limit(1)
        return db.scalars(stmt).unique().first()

    def get_recent_published(self, db: Session, *, limit: int = 6) -> List[Post]:
        stmt = (
            _published(_with_relations(select(Post)))
            .order_by(desc(Post.published_at), desc(Post.id))
            .limit(limit)
        )
        return list(db.scalars(stmt).unique().all())

    def get_trending(self, db: Session, *, days: int = 7, limit: int = 3) -> List[Post]:
        """Most viewed posts published within the last ``days`` days."""
        since = datetime.utcnow() - timedelta(days=days)
        stmt = (
            _published(_with_relations(select(Post)))
            .where(Post.published_at >= since)
            .order_by(desc(Post.views), desc(Post.id))
            .limit(limit)
        )
        return list(db.scalars(stmt).unique().all())

    # ----- Dashboard -----
    def count_by_status(self, db: Session) -> Dict[PostStatus, int]:
        stmt = select(Post.status, func.count(Post.id)).group_by(Post.status)
        counts = {status: 0 for status in PostStatus}
        for status, count in db.execute(stmt).all():
            counts[status] = count
        return counts

    def sum_published_views(self, db: Session) -> int:
        stmt = select(func.coalesce(func.sum(Post.views), 0)).where(Post.status == PostStatus.PUBLISHED)
        return db.scalar(stmt) or 0

    def get_latest(self, db: Session, *, limit: int = 5) -> List[Post]:
        stmt = _with_relations(select(Post)).order_by(desc(Post.created_at), desc(Post.id)).limit(limit)
        return list(db.scalars(stmt).unique().all())

    def get_top_viewed(self, db: Session, *, limit: int = 5) -> List[Post]:
        stmt = (
            _with_relations(select(Post))
            .where(Post.status == PostStatus.PUBLISHED)
            .order_by(desc(Post.views), desc(Post.id))
            .limit(limit)
        )
        return list(db.scalars(stmt).unique().all())


# Singleton instance
crud_post = CRUDPost(Post)
