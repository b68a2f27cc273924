"""Reminder preview and dispatch through the reminder service."""

from __future__ import annotations

import logging

from fastapi import APIRouter, Depends, Query

from app.api.dependencies import get_app_settings, get_reminder_client, get_tracker, require_controller_user
from app.api.errors import domain_errors
from app.config import AppSettings
from app.providers.reminder_service import ReminderServiceClient
from app.schemas import (
    NotificationLogSchema,
    PendingBookSchema,
    ReminderPreviewSchema,
    ReminderSendResponse,
)
from app.services.tracker import SignOffTracker
from pnl_signoff.models import RoleUser

logger = logging.getLogger(__name__)

router = APIRouter()


@router.get("/pending", response_model=ReminderPreviewSchema)
async def pending(
    current_user: RoleUser = Depends(require_controller_user),
    tracker: SignOffTracker = Depends(get_tracker),
) -> ReminderPreviewSchema:
    reminders = tracker.pending_reminders()
    return ReminderPreviewSchema(
        pending_books=[PendingBookSchema.model_validate(item) for item in reminders],
        trader_count=len({item.primary_trader for item in reminders}),
    )


@router.post("/send", response_model=ReminderSendResponse)
async def send(
    current_user: RoleUser = Depends(require_controller_user),
    tracker: SignOffTracker = Depends(get_tracker),
    client: ReminderServiceClient = Depends(get_reminder_client),
    settings: AppSettings = Depends(get_app_settings),
) -> ReminderSendResponse:
    reminders = tracker.pending_reminders()
    logger.info("%s requested reminders for %d books", current_user.name, len(reminders))
    with domain_errors():
        payload = await client.send_reminders(reminders, settings.site_url)
    return ReminderSendResponse.model_validate(payload)


@router.get("/history", response_model=list[NotificationLogSchema])
async def history(
    limit: int = Query(default=50, ge=1, le=50),
    current_user: RoleUser = Depends(require_controller_user),
    client: ReminderServiceClient = Depends(get_reminder_client),
) -> list[NotificationLogSchema]:
    with domain_errors():
        logs = await client.notification_logs(limit)
    return [NotificationLogSchema.model_validate(item) for item in logs]


__all__ = ["router"]
