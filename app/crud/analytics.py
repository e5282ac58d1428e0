"""CRUD operations for site analytics."""

from datetime import date
from typing import Optional

from pydantic import BaseModel
from sqlalchemy import select
from sqlalchemy.orm import Session

from app.crud.base import CRUDBase
from app.models.analytics import SiteAnalytics


class CRUDSiteAnalytics(CRUDBase[SiteAnalytics, BaseModel, BaseModel]):
    def get_by_date(self, db: Session, *, day: date) -> Optional[SiteAnalytics]:
        stmt = select(SiteAnalytics).where(SiteAnalytics.date == day).limit(1)
        return db.scalars(stmt).first()


crud_site_analytics = CRUDSiteAnalytics(SiteAnalytics)
