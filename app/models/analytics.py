"""Denormalized analytics counters. Populated by the seed command."""

from sqlalchemy import Column, Integer, Float, Date, TIMESTAMP, ForeignKey
from sqlalchemy.sql import func
from sqlalchemy.orm import relationship
from ..database import Base


class PostAnalytics(Base):
    """Per-post counters, one row per post."""

    __tablename__ = "post_analytics"

    id = Column(Integer, primary_key=True, index=True)
    post_id = Column(
        Integer,
        ForeignKey("posts.id", ondelete="CASCADE"),
        nullable=False,
        unique=True,
        index=True
    )

    total_views = Column(Integer, default=0)
    unique_visitors = Column(Integer, default=0)
    avg_time_on_page = Column(Float, default=0.0)  # seconds
    bounce_rate = Column(Float, default=0.0)
    likes = Column(Integer, default=0)
    shares = Column(Integer, default=0)
    ad_revenue = Column(Float, default=0.0)
    affiliate_revenue = Column(Float, default=0.0)

    created_at = Column(TIMESTAMP, server_default=func.now())
    updated_at = Column(TIMESTAMP, server_default=func.now(), onupdate=func.now())

    post = relationship("Post", back_populates="analytics")


class SiteAnalytics(Base):
    """Site-wide daily counters."""

    __tablename__ = "site_analytics"

    id = Column(Integer, primary_key=True, index=True)
    date = Column(Date, nullable=False, unique=True, index=True)

    total_views = Column(Integer, default=0)
    unique_visitors = Column(Integer, default=0)
    total_revenue = Column(Float, default=0.0)
    ad_revenue = Column(Float, default=0.0)
    affiliate_revenue = Column(Float, default=0.0)

    created_at = Column(TIMESTAMP, server_default=func.now())
