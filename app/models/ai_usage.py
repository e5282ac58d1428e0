"""Append-only ledger of generative AI calls."""

from sqlalchemy import Column, Integer, String, Float, Boolean, Text, TIMESTAMP
from sqlalchemy.sql import func
from ..database import Base


class AIUsage(Base):
    __tablename__ = "ai_usage"

    id = Column(Integer, primary_key=True, index=True)

    model = Column(String(100), nullable=False)
    purpose = Column(String(50), nullable=False, index=True)  # post_generation, content_improvement, ...

    # Token Usage Tracking
    prompt_tokens = Column(Integer, default=0)
    completion_tokens = Column(Integer, default=0)
    total_tokens = Column(Integer, default=0)
    cost = Column(Float, default=0.0)

    success = Column(Boolean, default=True, index=True)
    error = Column(Text, nullable=True)

    created_at = Column(TIMESTAMP, server_default=func.now(), index=True)
