"""API router aggregator."""

from fastapi import APIRouter

from app.api.v1.endpoints import auth, categories, comments, likes, posts, users

api_router = APIRouter(prefix="/api")

api_router.include_router(auth.router)
api_router.include_router(users.router)
api_router.include_router(posts.router)
api_router.include_router(comments.router)
api_router.include_router(likes.router)
api_router.include_router(categories.router)

__all__ = ["api_router"]
