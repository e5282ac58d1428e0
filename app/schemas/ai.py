"""Pydantic schemas for AI content generation."""

from enum import Enum
from typing import List, Optional

from pydantic import Field, field_validator

from .common import CamelModel


class Tone(str, Enum):
    PROFESSIONAL = "professional"
    CASUAL = "casual"
    TECHNICAL = "technical"
    FRIENDLY = "friendly"


class Language(str, Enum):
    TR = "tr"
    EN = "en"


def _require_text(v: str) -> str:
    if not v or not v.strip():
        raise ValueError("must not be blank")
    return v.strip()


class GenerateRequest(CamelModel):
    topic: str = Field(..., min_length=1, max_length=500)
    keywords: List[str] = []
    tone: Tone = Tone.PROFESSIONAL
    word_count: int = Field(1000, ge=300, le=3000)
    language: Language = Language.TR
    category_id: Optional[int] = Field(None, gt=0)

    @field_validator("topic")
    @classmethod
    def validate_topic(cls, v: str) -> str:
        return _require_text(v)

    @field_validator("keywords")
    @classmethod
    def validate_keywords(cls, v: List[str]) -> List[str]:
        return [k.strip() for k in v if k and k.strip()]


class ImproveRequest(CamelModel):
    content: str = Field(..., min_length=1)
    instructions: str = Field(..., min_length=1, max_length=2000)

    @field_validator("content", "instructions")
    @classmethod
    def validate_text(cls, v: str) -> str:
        return _require_text(v)


class TitlesRequest(CamelModel):
    topic: str = Field(..., min_length=1, max_length=500)
    count: int = Field(5, ge=1, le=10)
    language: Language = Language.TR

    @field_validator("topic")
    @classmethod
    def validate_topic(cls, v: str) -> str:
        return _require_text(v)


class TopicsRequest(CamelModel):
    category: str = Field(..., min_length=1, max_length=100)
    count: int = Field(5, ge=1, le=10)
    language: Language = Language.TR

    @field_validator("category")
    @classmethod
    def validate_category(cls, v: str) -> str:
        return _require_text(v)


class GeneratedPostResponse(CamelModel):
    """Draft produced by the generator; not persisted."""
    title: str
    content: str
    excerpt: str
    meta_title: str
    meta_description: str
    keywords: List[str] = []
    suggested_tags: List[str] = []
    estimated_reading_time: int


class ImprovedContentResponse(CamelModel):
    improved_content: str
