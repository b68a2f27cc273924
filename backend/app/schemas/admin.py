"""Pydantic schemas for the admin screens."""

from __future__ import annotations

from pydantic import BaseModel, ConfigDict, Field

from pnl_signoff.models import SignOffStatus

from .books import BookSchema


class StatusCountsSchema(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    signed: int
    pending: int
    rejected: int
    total: int


class AdminBookListSchema(BaseModel):
    desks: list[str]
    total: int
    books: list[BookSchema]
    message: str | None = Field(default=None, description="Set when the table was truncated")


class SignOffOverviewSchema(AdminBookListSchema):
    working_days: list[str]
    counts: StatusCountsSchema


class StatusOverrideRequest(BaseModel):
    status: SignOffStatus


__all__ = [
    "AdminBookListSchema",
    "SignOffOverviewSchema",
    "StatusCountsSchema",
    "StatusOverrideRequest",
]
