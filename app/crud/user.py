"""CRUD operations for `User` model."""

from __future__ import annotations

from typing import Optional

from pydantic import BaseModel
from sqlalchemy import select
from sqlalchemy.orm import Session

from app.core.security import get_password_hash, verify_password
from app.crud.base import CRUDBase
from app.models.user import User


class CRUDUser(CRUDBase[User, BaseModel, BaseModel]):
    def get_by_email(self, db: Session, email: Optional[str]) -> Optional[User]:
        if not email:
            return None
        stmt = select(User).where(User.email == email.strip().lower()).limit(1)
        return db.scalars(stmt).first()

    def create_user(
        self,
        db: Session,
        *,
        email: str,
        password: str,
        name: Optional[str] = None,
        role: str = "author",
        image: Optional[str] = None,
    ) -> User:
        return self.create(
            db,
            obj_in={
                "email": email.strip().lower(),
                "password_hash": get_password_hash(password),
                "name": name,
                "role": role,
                "image": image,
            },
        )

    def authenticate(self, db: Session, *, email: str, password: str) -> Optional[User]:
        user = self.get_by_email(db, email)
        if not user or not verify_password(password, user.password_hash):
            return None
        return user


crud_user = CRUDUser(User)
