"""Pydantic schemas for books, sign-offs and comments."""

from __future__ import annotations

from pydantic import BaseModel, ConfigDict, Field

from pnl_signoff.models import SignOffStatus, UserRole


class SignOffRecordSchema(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    date: str
    status: SignOffStatus
    signed_by: str | None = None
    signed_at: str | None = None
    comment: str | None = None


class BookCommentSchema(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    id: str
    book_id: str
    date: str
    author_name: str
    author_role: UserRole
    content: str
    created_at: str
    parent_id: str | None = None
    read_by_pc: bool | None = None
    read_by_trader: bool | None = None


class BookSchema(BaseModel):
    """Full representation of a book with its window and comments."""

    model_config = ConfigDict(from_attributes=True)

    id: str
    name: str
    desk: str
    primary_trader: str
    secondary_trader: str
    desk_head: str
    product_controller: str
    is_retired: bool
    sign_offs: list[SignOffRecordSchema]
    comments: list[BookCommentSchema]


class BooksByDeskSchema(BaseModel):
    desks: dict[str, list[BookSchema]]
    retired: list[BookSchema]


class SignOffRequest(BaseModel):
    """Trader or desk head action on one report."""

    status: SignOffStatus = Field(..., description="signed or rejected")
    date: str | None = Field(default=None, description="Report date; defaults to the latest working day")
    comment: str | None = Field(default=None, max_length=1000)


class SignAllPendingResponse(BaseModel):
    signed_count: int
    books: list[BookSchema]


class BookUpdateRequest(BaseModel):
    """Team changes, ownership transfer and retire/restore."""

    desk: str | None = Field(default=None, min_length=1, max_length=128)
    primary_trader: str | None = None
    secondary_trader: str | None = None
    desk_head: str | None = None
    product_controller: str | None = None
    is_retired: bool | None = None


class BookCreateRequest(BaseModel):
    name: str = Field(..., min_length=1, max_length=128)
    desk: str = Field(..., min_length=1, max_length=128)
    primary_trader: str
    secondary_trader: str
    desk_head: str
    product_controller: str


class CommentCreateRequest(BaseModel):
    date: str = Field(..., description="Report date the comment refers to")
    content: str = Field(..., min_length=1, max_length=2000)


class ReplyCreateRequest(BaseModel):
    content: str = Field(..., min_length=1, max_length=2000)


class MarkReadRequest(BaseModel):
    date: str | None = None


class MarkReadResponse(BaseModel):
    marked: int
    book: BookSchema


class CommentThreadSchema(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    comment: BookCommentSchema
    replies: list[BookCommentSchema]


class CommentDateGroupSchema(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    date: str
    label: str
    threads: list[CommentThreadSchema]


class CommentPostedResponse(BaseModel):
    comment: BookCommentSchema
    book: BookSchema


__all__ = [
    "BookCommentSchema",
    "BookCreateRequest",
    "BookSchema",
    "BookUpdateRequest",
    "BooksByDeskSchema",
    "CommentCreateRequest",
    "CommentDateGroupSchema",
    "CommentPostedResponse",
    "CommentThreadSchema",
    "MarkReadRequest",
    "MarkReadResponse",
    "ReplyCreateRequest",
    "SignAllPendingResponse",
    "SignOffRecordSchema",
    "SignOffRequest",
]
