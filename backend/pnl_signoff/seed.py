"""Mock dataset used to populate the in-memory book store."""

from __future__ import annotations

import random
from typing import NamedTuple, Sequence

from .models import Book, BookComment, SignOffRecord, SignOffStatus, UserRole

# Weights for the days before the latest working day; the latest is always pending.
DEFAULT_STATUS_WEIGHTS: dict[SignOffStatus, int] = {
    SignOffStatus.SIGNED: 65,
    SignOffStatus.PENDING: 25,
    SignOffStatus.REJECTED: 10,
}
REJECTION_NOTE = "Variance above threshold"


class BookFixture(NamedTuple):
    id: str
    name: str
    desk: str
    primary_trader: str
    secondary_trader: str
    desk_head: str
    product_controller: str
    is_retired: bool = False


BOOK_FIXTURES: tuple[BookFixture, ...] = (
    BookFixture("1", "EU Power Options", "Power Trading", "John Smith", "Sarah Johnson", "Michael Chen", "Emma Wilson"),
    BookFixture("2", "UK Gas Futures", "Gas Trading", "David Brown", "Lisa Anderson", "Robert Taylor", "Emma Wilson"),
    BookFixture("3", "Carbon Credits", "Environmental", "James Wilson", "Amy Davis", "Chris Martin", "Tom Harris"),
    BookFixture("4", "LNG Swaps", "Gas Trading", "Peter Jones", "Rachel Green", "Robert Taylor", "Tom Harris"),
    BookFixture("5", "Nordic Power", "Power Trading", "Erik Svensson", "Anna Berg", "Michael Chen", "Emma Wilson"),
    BookFixture("6", "Dutch TTF", "Gas Trading", "Hans Mueller", "Klaus Weber", "Robert Taylor", "Emma Wilson", True),
    BookFixture("7", "Area D", "Gas & Hub", "Robert Allan", "Andrey Selikhov", "Karoly Schmidt", "Veronika Yastrebova"),
    BookFixture("8", "Deal Flow", "Gas & Hub", "Robert Allan", "Deepesh Patel", "Karoly Schmidt", "Veronika Yastrebova"),
    BookFixture("9", "IRE Gas", "Gas & Hub", "Robert Allan", "Paul Smith", "Karoly Schmidt", "Stefanie Shi"),
    BookFixture("10", "Conti Futures", "Gas & Hub", "Alexander Welch", "Andrey Selikhov", "Karoly Schmidt", "Stefanie Shi"),
    BookFixture("11", "Futures", "Gas & Hub", "Alexander Welch", "Deepesh Patel", "Karoly Schmidt", "Stefanie Shi"),
)


def _signed_at(rng: random.Random) -> str:
    return f"{rng.randint(8, 11):02d}:{rng.choice((0, 15, 30, 45)):02d}"


def seed_sign_offs(
    fixture: BookFixture,
    working_days: Sequence[str],
    rng: random.Random,
    weights: dict[SignOffStatus, int] = DEFAULT_STATUS_WEIGHTS,
) -> tuple[SignOffRecord, ...]:
    if fixture.is_retired:
        return tuple(SignOffRecord(date=day) for day in working_days)

    statuses = list(weights)
    records = []
    for index, day in enumerate(working_days):
        if index == 0:
            status = SignOffStatus.PENDING
        else:
            status = rng.choices(statuses, weights=[weights[s] for s in statuses])[0]
        records.append(
            SignOffRecord(
                date=day,
                status=status,
                signed_by=fixture.primary_trader if status == SignOffStatus.SIGNED else None,
                signed_at=_signed_at(rng) if status == SignOffStatus.SIGNED else None,
                comment=REJECTION_NOTE if status == SignOffStatus.REJECTED else None,
            )
        )
    return tuple(records)


def new_book_sign_offs(working_days: Sequence[str]) -> tuple[SignOffRecord, ...]:
    """Window for a freshly created book: the latest day pending, no history."""

    return tuple(
        SignOffRecord(date=day, status=SignOffStatus.PENDING if index == 0 else SignOffStatus.NONE)
        for index, day in enumerate(working_days)
    )


def _seed_comments(book_id: str, working_days: Sequence[str]) -> tuple[BookComment, ...]:
    if len(working_days) < 2:
        return ()
    previous = working_days[1]
    if book_id == "1":
        return (
            BookComment(
                id="comment-seed-1",
                book_id=book_id,
                date=previous,
                author_name="John Smith",
                author_role=UserRole.TRADER,
                content="P&L move driven by the front-month curve shift; flash and official agree.",
                created_at=f"{previous}T17:30:00+00:00",
                read_by_pc=False,
            ),
            BookComment(
                id="comment-seed-2",
                book_id=book_id,
                date=previous,
                author_name="Emma Wilson",
                author_role=UserRole.PRODUCT_CONTROLLER,
                content="Thanks, noted for the daily commentary.",
                created_at=f"{previous}T18:05:00+00:00",
                parent_id="comment-seed-1",
                read_by_trader=False,
            ),
        )
    if book_id == "2":
        return (
            BookComment(
                id="comment-seed-3",
                book_id=book_id,
                date=previous,
                author_name="David Brown",
                author_role=UserRole.TRADER,
                content="Missing trade booked late; expect a restatement tomorrow.",
                created_at=f"{previous}T16:45:00+00:00",
                read_by_pc=False,
            ),
        )
    return ()


def seed_books(
    working_days: Sequence[str],
    rng: random.Random | None = None,
    *,
    fixtures: Sequence[BookFixture] = BOOK_FIXTURES,
    weights: dict[SignOffStatus, int] = DEFAULT_STATUS_WEIGHTS,
) -> list[Book]:
    """Build the demo books with randomised history over ``working_days``."""

    rng = rng or random.Random()
    return [
        Book(
            id=fixture.id,
            name=fixture.name,
            desk=fixture.desk,
            primary_trader=fixture.primary_trader,
            secondary_trader=fixture.secondary_trader,
            desk_head=fixture.desk_head,
            product_controller=fixture.product_controller,
            is_retired=fixture.is_retired,
            sign_offs=seed_sign_offs(fixture, working_days, rng, weights),
            comments=_seed_comments(fixture.id, working_days),
        )
        for fixture in fixtures
    ]


__all__ = [
    "BOOK_FIXTURES",
    "BookFixture",
    "DEFAULT_STATUS_WEIGHTS",
    "REJECTION_NOTE",
    "new_book_sign_offs",
    "seed_books",
    "seed_sign_offs",
]
