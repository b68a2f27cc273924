"""Pydantic schema exports."""

from .admin import AdminBookListSchema, SignOffOverviewSchema, StatusCountsSchema, StatusOverrideRequest
from .books import (
    BookCommentSchema,
    BookCreateRequest,
    BookSchema,
    BookUpdateRequest,
    BooksByDeskSchema,
    CommentCreateRequest,
    CommentDateGroupSchema,
    CommentPostedResponse,
    CommentThreadSchema,
    MarkReadRequest,
    MarkReadResponse,
    ReplyCreateRequest,
    SignAllPendingResponse,
    SignOffRecordSchema,
    SignOffRequest,
)
from .dashboard import (
    BankHolidayListSchema,
    BankHolidayRequest,
    BookCommentSummarySchema,
    CommentFeedSchema,
    ControllerDashboardSchema,
    ControllerStatsSchema,
    FeedEntrySchema,
    TraderDashboardSchema,
    TraderStatsSchema,
    WorkingDaySchema,
)
from .reminders import (
    NotificationLogSchema,
    PendingBookSchema,
    ReminderPreviewSchema,
    ReminderResultSchema,
    ReminderSendResponse,
)
from .users import AdminCreateRequest, LoginRequest, LoginResponse, UserSchema

__all__ = [
    "AdminBookListSchema",
    "AdminCreateRequest",
    "BankHolidayListSchema",
    "BankHolidayRequest",
    "BookCommentSchema",
    "BookCommentSummarySchema",
    "BookCreateRequest",
    "BookSchema",
    "BookUpdateRequest",
    "BooksByDeskSchema",
    "CommentCreateRequest",
    "CommentDateGroupSchema",
    "CommentFeedSchema",
    "CommentPostedResponse",
    "CommentThreadSchema",
    "ControllerDashboardSchema",
    "ControllerStatsSchema",
    "FeedEntrySchema",
    "LoginRequest",
    "LoginResponse",
    "MarkReadRequest",
    "MarkReadResponse",
    "NotificationLogSchema",
    "PendingBookSchema",
    "ReminderPreviewSchema",
    "ReminderResultSchema",
    "ReminderSendResponse",
    "ReplyCreateRequest",
    "SignAllPendingResponse",
    "SignOffOverviewSchema",
    "SignOffRecordSchema",
    "SignOffRequest",
    "StatusCountsSchema",
    "StatusOverrideRequest",
    "TraderDashboardSchema",
    "TraderStatsSchema",
    "UserSchema",
    "WorkingDaySchema",
]
