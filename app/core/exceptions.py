"""Custom exceptions for AutoBlog."""

from fastapi import HTTPException, status


class NotFoundException(HTTPException):
    """Base exception for missing resources."""

    def __init__(self, detail: str = "Resource not found"):
        super().__init__(
            status_code=status.HTTP_404_NOT_FOUND,
            detail=detail,
        )


class PostNotFoundException(NotFoundException):
    def __init__(self, detail: str = "Post not found"):
        super().__init__(detail=detail)


class CategoryNotFoundException(NotFoundException):
    def __init__(self, detail: str = "Category not found"):
        super().__init__(detail=detail)


class UserNotFoundException(NotFoundException):
    def __init__(self, detail: str = "Author not found"):
        super().__init__(detail=detail)


class SlugAlreadyExistsException(HTTPException):
    """Raised when a derived or supplied slug is already taken.

    Slugs are never silently suffixed; the caller must pick another one.
    """

    def __init__(self, slug: str):
        super().__init__(
            status_code=status.HTTP_400_BAD_REQUEST,
            detail=f"Slug '{slug}' is already in use",
        )


class InvalidSlugException(HTTPException):
    def __init__(self, detail: str = "Could not derive a URL-safe slug from the given text"):
        super().__init__(
            status_code=status.HTTP_400_BAD_REQUEST,
            detail=detail,
        )


class CategoryHasPostsException(HTTPException):
    """Raised when deleting a category that posts still reference."""

    def __init__(self, post_count: int):
        super().__init__(
            status_code=status.HTTP_400_BAD_REQUEST,
            detail=f"Category has {post_count} post(s). Move or delete them first",
        )


class AIServiceException(HTTPException):
    """
    Exception for failed calls to the generative AI service.

    The upstream message is surfaced to the caller as-is.

    Status Code: 500 Internal Server Error
    """

    def __init__(self, detail: str = "AI content generation failed"):
        super().__init__(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            detail=detail,
        )


__all__ = [
    "NotFoundException",
    "PostNotFoundException",
    "CategoryNotFoundException",
    "UserNotFoundException",
    "SlugAlreadyExistsException",
    "InvalidSlugException",
    "CategoryHasPostsException",
    "AIServiceException",
]
