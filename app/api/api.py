"""API router aggregator."""

from fastapi import APIRouter

from app.api.endpoints import ai, auth, blog, categories, dashboard, posts

api_router = APIRouter(prefix="/api")

api_router.include_router(auth.router)
api_router.include_router(posts.router)
api_router.include_router(categories.router)
api_router.include_router(ai.router)
api_router.include_router(blog.router)
api_router.include_router(dashboard.router)

__all__ = ["api_router"]
