"""Role dashboards for product controllers and traders."""

from __future__ import annotations

from fastapi import APIRouter, Depends

from app.api.dependencies import get_current_user, get_tracker, require_controller_user
from app.schemas import (
    BookSchema,
    ControllerDashboardSchema,
    ControllerStatsSchema,
    TraderDashboardSchema,
    TraderStatsSchema,
)
from app.services.tracker import SignOffTracker
from pnl_signoff import policy, views
from pnl_signoff.models import RoleUser

router = APIRouter()


@router.get("/controller", response_model=ControllerDashboardSchema)
async def controller_dashboard(
    current_user: RoleUser = Depends(require_controller_user),
    tracker: SignOffTracker = Depends(get_tracker),
) -> ControllerDashboardSchema:
    days = tracker.working_days()
    books = tracker.repository.list()
    # Admins oversee every book; a controller sees the books they own.
    if not policy.is_admin(current_user):
        books = views.controller_books(books, current_user)
    stats = views.controller_stats(books, days)
    return ControllerDashboardSchema(
        working_days=days,
        stats=ControllerStatsSchema.model_validate(stats),
        books=[BookSchema.model_validate(book) for book in books],
    )


@router.get("/trader", response_model=TraderDashboardSchema)
async def trader_dashboard(
    current_user: RoleUser = Depends(get_current_user),
    tracker: SignOffTracker = Depends(get_tracker),
) -> TraderDashboardSchema:
    days = tracker.working_days()
    books = views.trader_books(tracker.repository.list(), current_user)
    stats = views.trader_stats(books, days)
    return TraderDashboardSchema(
        working_days=days,
        stats=TraderStatsSchema.model_validate(stats),
        books=[BookSchema.model_validate(book) for book in books],
    )


__all__ = ["router"]
