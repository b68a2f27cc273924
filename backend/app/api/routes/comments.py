"""Comment threads, replies, read receipts and the comment feed."""

from __future__ import annotations

from fastapi import APIRouter, Depends, Query, status

from app.api.dependencies import get_current_user, get_tracker, require_controller_user
from app.api.errors import domain_errors
from app.schemas import (
    BookCommentSchema,
    BookCommentSummarySchema,
    BookSchema,
    CommentCreateRequest,
    CommentDateGroupSchema,
    CommentFeedSchema,
    CommentPostedResponse,
    CommentThreadSchema,
    FeedEntrySchema,
    MarkReadRequest,
    MarkReadResponse,
    ReplyCreateRequest,
)
from app.services.tracker import SignOffTracker
from pnl_signoff import comments as comment_ops
from pnl_signoff import views
from pnl_signoff.calendar import format_working_day
from pnl_signoff.models import RoleUser

router = APIRouter()


@router.get("/books/{book_id}/comments", response_model=list[CommentDateGroupSchema])
async def list_comments(
    book_id: str,
    date: str | None = Query(default=None),
    current_user: RoleUser = Depends(get_current_user),
    tracker: SignOffTracker = Depends(get_tracker),
) -> list[CommentDateGroupSchema]:
    with domain_errors():
        book = tracker.repository.get(book_id)
    return [
        CommentDateGroupSchema(
            date=group.date,
            label=format_working_day(group.date),
            threads=[CommentThreadSchema.model_validate(thread) for thread in group.threads],
        )
        for group in comment_ops.group_by_date(book, date)
    ]


@router.post(
    "/books/{book_id}/comments",
    response_model=CommentPostedResponse,
    status_code=status.HTTP_201_CREATED,
)
async def post_comment(
    book_id: str,
    payload: CommentCreateRequest,
    current_user: RoleUser = Depends(get_current_user),
    tracker: SignOffTracker = Depends(get_tracker),
) -> CommentPostedResponse:
    with domain_errors():
        book, comment = tracker.add_comment(current_user, book_id, payload.date, payload.content)
    return CommentPostedResponse(
        comment=BookCommentSchema.model_validate(comment),
        book=BookSchema.model_validate(book),
    )


@router.post(
    "/books/{book_id}/comments/{comment_id}/replies",
    response_model=CommentPostedResponse,
    status_code=status.HTTP_201_CREATED,
)
async def post_reply(
    book_id: str,
    comment_id: str,
    payload: ReplyCreateRequest,
    current_user: RoleUser = Depends(get_current_user),
    tracker: SignOffTracker = Depends(get_tracker),
) -> CommentPostedResponse:
    with domain_errors():
        book, reply = tracker.add_reply(current_user, book_id, comment_id, payload.content)
    return CommentPostedResponse(
        comment=BookCommentSchema.model_validate(reply),
        book=BookSchema.model_validate(book),
    )


@router.post("/books/{book_id}/comments/read", response_model=MarkReadResponse)
async def mark_comments_read(
    book_id: str,
    payload: MarkReadRequest,
    current_user: RoleUser = Depends(get_current_user),
    tracker: SignOffTracker = Depends(get_tracker),
) -> MarkReadResponse:
    with domain_errors():
        book, marked = tracker.mark_read(current_user, book_id, payload.date)
    return MarkReadResponse(marked=marked, book=BookSchema.model_validate(book))


@router.get("/comments/summary", response_model=CommentFeedSchema)
async def comment_summary(
    current_user: RoleUser = Depends(require_controller_user),
    tracker: SignOffTracker = Depends(get_tracker),
) -> CommentFeedSchema:
    entries, summaries = views.comment_feed(tracker.books())
    return CommentFeedSchema(
        comments=[FeedEntrySchema.model_validate(entry) for entry in entries],
        books=[
            BookCommentSummarySchema(
                book_id=summary.book.id,
                book_name=summary.book.name,
                count=summary.count,
                latest_comment=summary.latest_comment,
            )
            for summary in summaries
        ],
    )


__all__ = ["router"]
