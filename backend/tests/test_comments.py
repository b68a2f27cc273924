from dataclasses import replace
from datetime import datetime, timezone

import pytest

from pnl_signoff import comments
from pnl_signoff.comments import Audience
from pnl_signoff.errors import CommentNotFoundError, ValidationError
from pnl_signoff.models import Book, SignOffRecord, SignOffStatus, UserRole

NOW = datetime(2025, 1, 3, 9, 30, tzinfo=timezone.utc)


@pytest.fixture
def book() -> Book:
    return Book(
        id="2",
        name="UK Gas Futures",
        desk="Gas Trading",
        primary_trader="David Brown",
        secondary_trader="Lisa Anderson",
        desk_head="Robert Taylor",
        product_controller="Emma Wilson",
        sign_offs=(
            SignOffRecord("2025-01-02", SignOffStatus.PENDING),
            SignOffRecord("2025-01-01", SignOffStatus.SIGNED, "David Brown", "10:15"),
        ),
    )


def test_trader_comment_is_unread_for_controllers(book):
    updated, comment = comments.add_comment(book, "2025-01-02", "David Brown", UserRole.TRADER, "Late trade", now=NOW)

    assert comment.read_by_pc is False
    assert comment.read_by_trader is None
    assert comment.created_at == NOW.isoformat()
    assert comments.unread_count([updated], Audience.PC) == 1
    assert comments.unread_count([updated], Audience.TRADER) == 0


def test_empty_comment_is_rejected(book):
    with pytest.raises(ValidationError):
        comments.add_comment(book, "2025-01-02", "David Brown", UserRole.TRADER, "   ")


def test_reply_inherits_parent_date(book):
    book, parent = comments.add_comment(book, "2025-01-01", "David Brown", UserRole.TRADER, "Restated", now=NOW)
    book, reply = comments.add_reply(book, parent.id, "Emma Wilson", UserRole.PRODUCT_CONTROLLER, "Thanks", now=NOW)

    assert reply.parent_id == parent.id
    assert reply.date == "2025-01-01"
    assert reply.read_by_trader is False
    assert comments.find_orphaned_replies(book) == []


def test_replies_are_one_level_deep(book):
    book, parent = comments.add_comment(book, "2025-01-01", "David Brown", UserRole.TRADER, "Restated")
    book, reply = comments.add_reply(book, parent.id, "Emma Wilson", UserRole.PRODUCT_CONTROLLER, "Thanks")

    with pytest.raises(ValidationError):
        comments.add_reply(book, reply.id, "David Brown", UserRole.TRADER, "Nested")
    with pytest.raises(CommentNotFoundError):
        comments.add_reply(book, "comment-missing", "David Brown", UserRole.TRADER, "Hello")


def test_orphaned_replies_are_flagged(book):
    book, parent = comments.add_comment(book, "2025-01-01", "David Brown", UserRole.TRADER, "Restated")
    book, reply = comments.add_reply(book, parent.id, "Emma Wilson", UserRole.PRODUCT_CONTROLLER, "Thanks")

    dangling = replace(reply, id="comment-dangling", parent_id="comment-gone")
    book = book.with_comment(dangling)

    assert comments.find_orphaned_replies(book) == [dangling]


def test_mark_read_is_explicit_and_scoped(book):
    book, first = comments.add_comment(book, "2025-01-02", "David Brown", UserRole.TRADER, "One")
    book, second = comments.add_comment(book, "2025-01-01", "Lisa Anderson", UserRole.TRADER, "Two")

    grouped = comments.group_by_date(book)
    assert comments.unread_count([book], Audience.PC) == 2
    assert [group.date for group in grouped] == ["2025-01-02", "2025-01-01"]

    book, changed = comments.mark_read(book, Audience.PC, "2025-01-02")
    assert changed == 1
    assert comments.unread_count([book], Audience.PC) == 1

    same, changed = comments.mark_read(book, Audience.TRADER)
    assert changed == 0
    assert same is book


def test_group_by_date_attaches_replies(book):
    book, parent = comments.add_comment(book, "2025-01-01", "David Brown", UserRole.TRADER, "Restated")
    book, reply = comments.add_reply(book, parent.id, "Emma Wilson", UserRole.PRODUCT_CONTROLLER, "Thanks")

    groups = comments.group_by_date(book, "2025-01-01")

    assert len(groups) == 1
    (thread,) = groups[0].threads
    assert thread.comment == parent
    assert thread.replies == (reply,)


def test_audience_for_roles():
    assert comments.audience_for(UserRole.DESK_HEAD) == Audience.TRADER
    assert comments.audience_for(UserRole.ADMIN) == Audience.PC
