"""Version 1 HTTP routes."""

from fastapi import APIRouter

from . import auth, notifications, reviews, users

api_router = APIRouter(prefix="/api/v1")
api_router.include_router(auth.router)
api_router.include_router(users.router)
api_router.include_router(notifications.router)
api_router.include_router(reviews.router)

__all__ = ["api_router"]
