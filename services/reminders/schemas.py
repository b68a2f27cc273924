"""Request and response models for the reminder service HTTP contract."""

from __future__ import annotations

from datetime import datetime
from typing import Any, Optional

from pydantic import BaseModel, ConfigDict, Field


class PendingBook(BaseModel):
    model_config = ConfigDict(populate_by_name=True)

    book_name: str = Field(..., alias="bookName", min_length=1)
    desk: str
    primary_trader: str = Field(..., alias="primaryTrader", min_length=1)
    primary_trader_email: Optional[str] = Field(default=None, alias="primaryTraderEmail")
    pending_dates: list[str] = Field(default_factory=list, alias="pendingDates")


class ReminderRequest(BaseModel):
    model_config = ConfigDict(populate_by_name=True)

    pending_books: list[PendingBook] = Field(..., alias="pendingBooks")
    site_url: str = Field(..., alias="siteUrl")


class TraderResult(BaseModel):
    trader: str
    status: str
    error: Optional[str] = None


class ReminderResponse(BaseModel):
    model_config = ConfigDict(populate_by_name=True)

    success: bool = True
    traders_notified: int = Field(..., alias="tradersNotified")
    traders_failed: int = Field(..., alias="tradersFailed")
    results: list[TraderResult]


class TriggerResponse(BaseModel):
    success: bool = True
    message: str
    result: Optional[dict[str, Any]] = None


class NotificationLogSchema(BaseModel):
    model_config = ConfigDict(from_attributes=True)

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
    "PendingBook",
    "ReminderRequest",
    "ReminderResponse",
    "TraderResult",
    "TriggerResponse",
]
