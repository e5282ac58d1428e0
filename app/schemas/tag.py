"""Pydantic schemas for Tag."""

from .common import CamelModel


class TagResponse(CamelModel):
    id: int
    name: str
    slug: str
