"""Comment threads on books: posting, replies, read receipts and grouping."""

from __future__ import annotations

import enum
import uuid
from collections import defaultdict
from dataclasses import dataclass, replace
from datetime import datetime, timezone
from typing import Iterable

from .errors import CommentNotFoundError, ValidationError
from .models import Book, BookComment, UserRole


class Audience(str, enum.Enum):
    """Who a read receipt belongs to."""

    PC = "pc"
    TRADER = "trader"


def audience_for(role: UserRole) -> Audience:
    if role in (UserRole.TRADER, UserRole.DESK_HEAD):
        return Audience.TRADER
    return Audience.PC


@dataclass(frozen=True)
class CommentThread:
    comment: BookComment
    replies: tuple[BookComment, ...]


@dataclass(frozen=True)
class CommentDateGroup:
    date: str
    threads: tuple[CommentThread, ...]


def _new_comment(
    book: Book,
    date: str,
    author: str,
    role: UserRole,
    text: str,
    now: datetime | None,
    parent_id: str | None = None,
) -> BookComment:
    content = (text or "").strip()
    if not content:
        raise ValidationError("Comment text must not be empty")
    role = UserRole(role)
    # The authoring side has implicitly read its own comment.
    if audience_for(role) == Audience.TRADER:
        read_by_pc, read_by_trader = False, None
    else:
        read_by_pc, read_by_trader = None, False
    return BookComment(
        id=f"comment-{uuid.uuid4().hex[:12]}",
        book_id=book.id,
        date=date,
        author_name=author,
        author_role=role,
        content=content,
        created_at=(now or datetime.now(timezone.utc)).isoformat(),
        parent_id=parent_id,
        read_by_pc=read_by_pc,
        read_by_trader=read_by_trader,
    )


def add_comment(
    book: Book,
    date: str,
    author: str,
    role: UserRole,
    text: str,
    *,
    now: datetime | None = None,
) -> tuple[Book, BookComment]:
    """Append a top-level comment for ``date`` and return the new book."""

    if not date:
        raise ValidationError("A report date is required to comment")
    comment = _new_comment(book, date, author, role, text, now)
    return book.with_comment(comment), comment


def add_reply(
    book: Book,
    parent_id: str,
    author: str,
    role: UserRole,
    text: str,
    *,
    now: datetime | None = None,
) -> tuple[Book, BookComment]:
    """Reply to a top-level comment; the reply takes the parent's date."""

    parent = next((c for c in book.comments if c.id == parent_id), None)
    if parent is None:
        raise CommentNotFoundError(f"Comment {parent_id} not found on {book.name}")
    if parent.is_reply:
        raise ValidationError("Replies can only be posted on top-level comments")
    reply = _new_comment(book, parent.date, author, role, text, now, parent_id=parent.id)
    return book.with_comment(reply), reply


def is_unread(comment: BookComment, audience: Audience) -> bool:
    flag = comment.read_by_pc if audience == Audience.PC else comment.read_by_trader
    return flag is False


def mark_read(book: Book, audience: Audience, date: str | None = None) -> tuple[Book, int]:
    """Set the audience's read flag on unread comments, optionally for one date."""

    changed = 0
    comments: list[BookComment] = []
    for comment in book.comments:
        if is_unread(comment, audience) and (date is None or comment.date == date):
            field = "read_by_pc" if audience == Audience.PC else "read_by_trader"
            comment = replace(comment, **{field: True})
            changed += 1
        comments.append(comment)
    if not changed:
        return book, 0
    return replace(book, comments=tuple(comments)), changed


def unread_count(books: Iterable[Book], audience: Audience) -> int:
    return sum(1 for book in books for comment in book.comments if is_unread(comment, audience))


def group_by_date(book: Book, date: str | None = None) -> list[CommentDateGroup]:
    """Top-level comments grouped by report date, newest date first."""

    replies: dict[str, list[BookComment]] = defaultdict(list)
    grouped: dict[str, list[BookComment]] = defaultdict(list)
    for comment in book.comments:
        if comment.parent_id:
            replies[comment.parent_id].append(comment)
        elif date is None or comment.date == date:
            grouped[comment.date].append(comment)

    return [
        CommentDateGroup(
            date=day,
            threads=tuple(CommentThread(comment=c, replies=tuple(replies.get(c.id, ()))) for c in grouped[day]),
        )
        for day in sorted(grouped, reverse=True)
    ]


def find_orphaned_replies(book: Book) -> list[BookComment]:
    """Return replies whose parent is missing, nested, or on another date."""

    top_level = {c.id: c for c in book.comments if not c.parent_id}
    orphans = []
    for comment in book.comments:
        if not comment.parent_id:
            continue
        parent = top_level.get(comment.parent_id)
        if parent is None or parent.date != comment.date:
            orphans.append(comment)
    return orphans


__all__ = [
    "Audience",
    "CommentDateGroup",
    "CommentThread",
    "add_comment",
    "add_reply",
    "audience_for",
    "find_orphaned_replies",
    "group_by_date",
    "is_unread",
    "mark_read",
    "unread_count",
]
