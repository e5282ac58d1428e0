"""CRUD operations for the AI usage ledger."""

import logging
from datetime import datetime
from typing import Optional, Tuple

from pydantic import BaseModel
from sqlalchemy import func, select
from sqlalchemy.orm import Session

from app.crud.base import CRUDBase
from app.models.ai_usage import AIUsage

logger = logging.getLogger(__name__)


class CRUDAIUsage(CRUDBase[AIUsage, BaseModel, BaseModel]):
    """Append-only: rows are only ever inserted."""

    def log(
        self,
        db: Session,
        *,
        model: str,
        purpose: str,
        prompt_tokens: int = 0,
        completion_tokens: int = 0,
        cost: float = 0.0,
        success: bool = True,
        error: Optional[str] = None,
    ) -> Optional[AIUsage]:
        """Record one AI call.

        Best-effort: a failed write is rolled back and logged, never raised.
        """
        entry = AIUsage(
            model=model,
            purpose=purpose,
            prompt_tokens=prompt_tokens,
            completion_tokens=completion_tokens,
            total_tokens=prompt_tokens + completion_tokens,
            cost=cost,
            success=success,
            error=error,
        )
        try:
            db.add(entry)
            db.commit()
        except Exception as e:
            db.rollback()
            logger.error(f"Failed to log AI usage ({purpose}): {str(e)}")
            return None
        return entry

    def summary_since(self, db: Session, *, since: datetime) -> Tuple[float, int]:
        """Total cost and request count of calls made since ``since``."""
        stmt = select(
            func.coalesce(func.sum(AIUsage.cost), 0.0),
            func.count(AIUsage.id),
        ).where(AIUsage.created_at >= since)
        cost, requests = db.execute(stmt).one()
        return float(cost or 0.0), int(requests or 0)


crud_ai_usage = CRUDAIUsage(AIUsage)
