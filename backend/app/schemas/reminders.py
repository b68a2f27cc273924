"""Pydantic schemas for reminder previews, sends and history."""

from __future__ import annotations

from datetime import datetime
from typing import Optional

from pydantic import BaseModel, ConfigDict, Field


class PendingBookSchema(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    book_name: str
    desk: str
    primary_trader: str
    pending_dates: list[str]


class ReminderPreviewSchema(BaseModel):
    pending_books: list[PendingBookSchema]
    trader_count: int


class ReminderResultSchema(BaseModel):
    trader: str
    status: str
    error: Optional[str] = None


class ReminderSendResponse(BaseModel):
    model_config = ConfigDict(populate_by_name=True)

    success: bool
    traders_notified: int = Field(..., validation_alias="tradersNotified")
    traders_failed: int = Field(..., validation_alias="tradersFailed")
    results: list[ReminderResultSchema]
    message: Optional[str] = None


class NotificationLogSchema(BaseModel):
    id: int
    trader_email: str
    trader_name: str
    books_count: int
    book_names: list[str]
    notification_type: str
    status: str
    error_message: Optional[str] = None
    sent_at: datetime


__all__ = [
    "NotificationLogSchema",
    "PendingBookSchema",
    "ReminderPreviewSchema",
    "ReminderResultSchema",
    "ReminderSendResponse",
]
