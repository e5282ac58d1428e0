"""Shared response envelope and base schema."""

from typing import Any, Generic, List, Optional, TypeVar

from pydantic import BaseModel, ConfigDict
from pydantic.alias_generators import to_camel

DataT = TypeVar("DataT")


class CamelModel(BaseModel):
    """Serializes as camelCase; accepts camelCase or snake_case input."""
    model_config = ConfigDict(
        alias_generator=to_camel,
        populate_by_name=True,
        from_attributes=True,
    )


class Pagination(CamelModel):
    total: int
    page: int
    page_size: int
    total_pages: int
    has_next: bool
    has_prev: bool

    @classmethod
    def build(cls, *, total: int, page: int, page_size: int) -> "Pagination":
        return cls(
            total=total,
            page=page,
            page_size=page_size,
            total_pages=-(-total // page_size),
            has_next=page * page_size < total,
            has_prev=page > 1,
        )


class AIUsageStats(CamelModel):
    prompt_tokens: int
    completion_tokens: int
    total_tokens: int
    cost: float


class ApiResponse(CamelModel, Generic[DataT]):
    """Uniform envelope for every endpoint."""
    success: bool = True
    data: Optional[DataT] = None
    error: Optional[str] = None
    message: Optional[str] = None
    details: Optional[List[Any]] = None
    pagination: Optional[Pagination] = None
    usage: Optional[AIUsageStats] = None
