"""Pydantic schemas for dashboards, comment feed and calendar endpoints."""

from __future__ import annotations

from pydantic import BaseModel, ConfigDict, Field

from .books import BookCommentSchema, BookSchema


class ControllerStatsSchema(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    total_books: int
    signed_today: int
    pending_today: int
    rejected_today: int
    total_comments: int
    unread_comments: int


class TraderStatsSchema(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    total_books: int
    signed_today: int
    pending_today: int
    overdue: int


class ControllerDashboardSchema(BaseModel):
    working_days: list[str]
    stats: ControllerStatsSchema
    books: list[BookSchema]


class TraderDashboardSchema(BaseModel):
    working_days: list[str]
    stats: TraderStatsSchema
    books: list[BookSchema]


class FeedEntrySchema(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    comment: BookCommentSchema
    book_name: str


class BookCommentSummarySchema(BaseModel):
    book_id: str
    book_name: str
    count: int
    latest_comment: str


class CommentFeedSchema(BaseModel):
    comments: list[FeedEntrySchema]
    books: list[BookCommentSummarySchema]


class WorkingDaySchema(BaseModel):
    date: str
    label: str


class BankHolidayRequest(BaseModel):
    date: str = Field(..., description="ISO date to mark as a bank holiday")


class BankHolidayListSchema(BaseModel):
    holidays: list[str]


__all__ = [
    "BankHolidayListSchema",
    "BankHolidayRequest",
    "BookCommentSummarySchema",
    "CommentFeedSchema",
    "ControllerDashboardSchema",
    "ControllerStatsSchema",
    "FeedEntrySchema",
    "TraderDashboardSchema",
    "TraderStatsSchema",
    "WorkingDaySchema",
]
