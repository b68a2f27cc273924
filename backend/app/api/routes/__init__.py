"""Route registration helpers."""

from __future__ import annotations

from fastapi import APIRouter

from .admin import router as admin_router
from .auth import router as auth_router
from .books import router as books_router
from .calendar import router as calendar_router
from .comments import router as comments_router
from .dashboard import router as dashboard_router
from .reminders import router as reminders_router

api_router = APIRouter()
api_router.include_router(auth_router, prefix="/auth", tags=["auth"])
api_router.include_router(comments_router, tags=["comments"])
api_router.include_router(books_router, prefix="/books", tags=["books"])
api_router.include_router(dashboard_router, prefix="/dashboard", tags=["dashboard"])
api_router.include_router(calendar_router, prefix="/calendar", tags=["calendar"])
api_router.include_router(admin_router, prefix="/admin", tags=["admin"])
api_router.include_router(reminders_router, prefix="/reminders", tags=["reminders"])

__all__ = ["api_router"]
