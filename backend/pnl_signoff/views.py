"""Derived views over the book list: filters, grouping and dashboard stats.

Everything here recomputes from the full list on each call. The dataset is a
few hundred books, so no indexing or caching is kept between calls.
"""

from __future__ import annotations

from collections import Counter, defaultdict
from dataclasses import dataclass
from typing import Iterable, Sequence, TypeVar

from .comments import Audience, unread_count
from .models import Book, BookComment, RoleUser, SignOffStatus

ADMIN_TABLE_LIMIT = 50
TRUNCATION_MESSAGE = "Showing first 50 results. Use filters to narrow down."

T = TypeVar("T")


def _matches(book: Book, needle: str, fields: Sequence[str]) -> bool:
    return any(needle in getattr(book, name).lower() for name in fields)


def filter_books(
    books: Iterable[Book],
    *,
    search: str | None = None,
    desk: str | None = None,
    retired: bool | None = False,
    fields: Sequence[str] = ("name", "primary_trader", "product_controller"),
) -> list[Book]:
    """Filter by free text, desk and retired flag.

    ``retired=None`` keeps both active and retired books. ``desk`` of ``None``
    or ``"all"`` keeps every desk.
    """

    needle = (search or "").strip().lower()
    return [
        book
        for book in books
        if (not needle or _matches(book, needle, fields))
        and (desk in (None, "", "all") or book.desk == desk)
        and (retired is None or book.is_retired == retired)
    ]


def group_by_desk(books: Iterable[Book]) -> dict[str, list[Book]]:
    groups: dict[str, list[Book]] = defaultdict(list)
    for book in books:
        groups[book.desk].append(book)
    return dict(groups)


@dataclass(frozen=True)
class StatusCounts:
    signed: int = 0
    pending: int = 0
    rejected: int = 0

    @property
    def total(self) -> int:
        return self.signed + self.pending + self.rejected


def status_counts(books: Iterable[Book], dates: Iterable[str]) -> StatusCounts:
    window = set(dates)
    counter: Counter[SignOffStatus] = Counter(
        record.status for book in books for record in book.sign_offs if record.date in window
    )
    return StatusCounts(
        signed=counter[SignOffStatus.SIGNED],
        pending=counter[SignOffStatus.PENDING],
        rejected=counter[SignOffStatus.REJECTED],
    )


def books_with_status(books: Iterable[Book], status: SignOffStatus, dates: Iterable[str]) -> list[Book]:
    window = set(dates)
    return [
        book
        for book in books
        if any(record.date in window and record.status == status for record in book.sign_offs)
    ]


def limit_rows(rows: Sequence[T], limit: int = ADMIN_TABLE_LIMIT) -> tuple[list[T], str | None]:
    """Slice a table for display, returning the narrowing hint when cut."""

    if len(rows) > limit:
        return list(rows[:limit]), TRUNCATION_MESSAGE
    return list(rows), None


@dataclass(frozen=True)
class ControllerStats:
    total_books: int
    signed_today: int
    pending_today: int
    rejected_today: int
    total_comments: int
    unread_comments: int


@dataclass(frozen=True)
class TraderStats:
    total_books: int
    signed_today: int
    pending_today: int
    overdue: int


def controller_books(books: Iterable[Book], user: RoleUser) -> list[Book]:
    return [book for book in books if book.product_controller == user.name]


def trader_books(books: Iterable[Book], user: RoleUser) -> list[Book]:
    return [book for book in books if book.is_assigned(user.name)]


def controller_stats(books: Iterable[Book], working_days: Sequence[str]) -> ControllerStats:
    active = [book for book in books if not book.is_retired]
    latest = working_days[0] if working_days else None
    today = status_counts(active, [latest] if latest else [])
    return ControllerStats(
        total_books=len(active),
        signed_today=today.signed,
        pending_today=today.pending,
        rejected_today=today.rejected,
        total_comments=sum(len(book.comments) for book in active),
        unread_comments=unread_count(active, Audience.PC),
    )


def trader_stats(books: Iterable[Book], working_days: Sequence[str]) -> TraderStats:
    active = [book for book in books if not book.is_retired]
    latest = working_days[0] if working_days else None
    today = status_counts(active, [latest] if latest else [])
    older = set(working_days[1:])
    overdue = sum(
        1
        for book in active
        for record in book.sign_offs
        if record.date in older and record.status == SignOffStatus.PENDING
    )
    return TraderStats(
        total_books=len(active),
        signed_today=today.signed,
        pending_today=today.pending,
        overdue=overdue,
    )


@dataclass(frozen=True)
class FeedEntry:
    comment: BookComment
    book_name: str


@dataclass(frozen=True)
class BookCommentSummary:
    book: Book
    count: int
    latest_comment: str


def comment_feed(books: Iterable[Book]) -> tuple[list[FeedEntry], list[BookCommentSummary]]:
    """All comments newest first, plus the books that have comments."""

    books = list(books)
    entries = [FeedEntry(comment=comment, book_name=book.name) for book in books for comment in book.comments]
    entries.sort(key=lambda entry: entry.comment.created_at, reverse=True)

    summaries: dict[str, BookCommentSummary] = {}
    by_id = {book.id: book for book in books}
    for entry in entries:
        book_id = entry.comment.book_id
        existing = summaries.get(book_id)
        if existing is None:
            summaries[book_id] = BookCommentSummary(
                book=by_id[book_id], count=1, latest_comment=entry.comment.created_at
            )
        else:
            summaries[book_id] = BookCommentSummary(
                book=existing.book, count=existing.count + 1, latest_comment=existing.latest_comment
            )
    return entries, list(summaries.values())


@dataclass(frozen=True)
class PendingReminder:
    book_name: str
    desk: str
    primary_trader: str
    pending_dates: tuple[str, ...]


def pending_reminders(books: Iterable[Book]) -> list[PendingReminder]:
    """Active books with any ``pending`` or ``none`` record, as reminder entries."""

    reminders = []
    for book in books:
        if book.is_retired:
            continue
        dates = tuple(
            record.date
            for record in book.sign_offs
            if record.status in (SignOffStatus.PENDING, SignOffStatus.NONE)
        )
        if dates:
            reminders.append(
                PendingReminder(
                    book_name=book.name,
                    desk=book.desk,
                    primary_trader=book.primary_trader,
                    pending_dates=dates,
                )
            )
    return reminders


__all__ = [
    "ADMIN_TABLE_LIMIT",
    "BookCommentSummary",
    "ControllerStats",
    "FeedEntry",
    "PendingReminder",
    "StatusCounts",
    "TRUNCATION_MESSAGE",
    "TraderStats",
    "books_with_status",
    "comment_feed",
    "controller_books",
    "controller_stats",
    "filter_books",
    "group_by_desk",
    "limit_rows",
    "pending_reminders",
    "status_counts",
    "trader_books",
    "trader_stats",
]
