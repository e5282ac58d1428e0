"""Services package for AutoBlog."""

from .content_generator import ContentGenerator, get_content_generator

__all__ = [
    "ContentGenerator",
    "get_content_generator",
]
