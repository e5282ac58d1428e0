"""Pydantic schemas for Category."""

from datetime import datetime
from typing import Optional

from pydantic import Field, field_validator

from .common import CamelModel

HEX_COLOR_PATTERN = r"^#[0-9A-Fa-f]{6}$"


def _blank_to_none(v: Optional[str]) -> Optional[str]:
    if v is not None and not v.strip():
        return None
    return v


class CategoryBase(CamelModel):
    """Base schema for Category."""
    name: str = Field(..., min_length=1, max_length=100, description="Category name")
    slug: Optional[str] = Field(None, max_length=120, description="URL slug, derived from name when omitted")
    description: Optional[str] = Field(None, max_length=500)
    image: Optional[str] = Field(None, max_length=500, description="Image URL")
    color: Optional[str] = Field(None, pattern=HEX_COLOR_PATTERN, description="Hex color, e.g. #3B82F6")
    is_active: Optional[bool] = None

    @field_validator("slug", "image", mode="before")
    @classmethod
    def normalize_blank(cls, v: Optional[str]) -> Optional[str]:
        return _blank_to_none(v)


class CategoryCreate(CategoryBase):
    """Schema for creating a new category."""
    pass


class CategoryUpdate(CamelModel):
    """Schema for updating a category."""
    name: Optional[str] = Field(None, min_length=1, max_length=100)
    slug: Optional[str] = Field(None, max_length=120)
    description: Optional[str] = Field(None, max_length=500)
    image: Optional[str] = Field(None, max_length=500)
    color: Optional[str] = Field(None, pattern=HEX_COLOR_PATTERN)
    is_active: Optional[bool] = None

    @field_validator("slug", "image", mode="before")
    @classmethod
    def normalize_blank(cls, v: Optional[str]) -> Optional[str]:
        return _blank_to_none(v)


class CategorySummary(CamelModel):
    """Category as embedded in a post."""
    id: int
    name: str
    slug: str
    color: Optional[str] = None


class CategoryResponse(CategorySummary):
    """Schema for Category response."""
    description: Optional[str] = None
    image: Optional[str] = None
    is_active: bool
    post_count: Optional[int] = None
    created_at: Optional[datetime] = None
    updated_at: Optional[datetime] = None
