"""Sign-off lifecycle: ``none -> pending -> signed | rejected``."""

from __future__ import annotations

from dataclasses import replace
from datetime import datetime
from typing import Iterable

from .errors import InvalidTransitionError, ValidationError
from .models import Book, SignOffRecord, SignOffStatus

ADMIN_OVERRIDE_SIGNER = "Admin Override"
_TERMINAL = (SignOffStatus.SIGNED, SignOffStatus.REJECTED)


def _clock(now: datetime | None) -> str:
    return (now or datetime.now()).strftime("%H:%M")


def _record(book: Book, date: str) -> SignOffRecord:
    record = book.sign_off_for(date)
    if record is None:
        raise ValidationError(f"{book.name} has no sign-off record for {date}")
    return record


def sign_off(
    book: Book,
    date: str,
    status: SignOffStatus,
    signer: str,
    comment: str | None = None,
    *,
    now: datetime | None = None,
) -> Book:
    """Sign or reject the report for ``date`` and return the updated book.

    Only a pending record can move to a terminal status. Re-applying the
    status a record already holds refreshes the signer and time.
    """

    status = SignOffStatus(status)
    if status not in _TERMINAL:
        raise ValidationError("Sign-off action must be 'signed' or 'rejected'")
    if book.is_retired:
        raise InvalidTransitionError(f"{book.name} is retired")

    record = _record(book, date)
    if record.status != SignOffStatus.PENDING and record.status != status:
        raise InvalidTransitionError(
            f"Cannot move {book.name} on {date} from {record.status.value} to {status.value}"
        )

    updated = replace(
        record,
        status=status,
        signed_by=signer,
        signed_at=_clock(now),
        comment=(comment or "").strip() or None,
    )
    return book.with_sign_off(updated)


def open_sign_off(book: Book, date: str) -> Book:
    """Move a ``none`` record to ``pending``; pending records are left alone."""

    record = _record(book, date)
    if record.status == SignOffStatus.PENDING:
        return book
    if record.status != SignOffStatus.NONE:
        raise InvalidTransitionError(f"Cannot reopen a {record.status.value} sign-off")
    return book.with_sign_off(replace(record, status=SignOffStatus.PENDING))


def sign_all_pending(
    books: Iterable[Book],
    date: str,
    signer: str,
    *,
    now: datetime | None = None,
) -> tuple[list[Book], int]:
    """Sign every pending report for ``date`` on books where ``signer`` trades."""

    updated: list[Book] = []
    signed_count = 0
    for book in books:
        if book.is_retired or signer not in (book.primary_trader, book.secondary_trader):
            continue
        record = book.sign_off_for(date)
        if record is None or record.status != SignOffStatus.PENDING:
            continue
        updated.append(sign_off(book, date, SignOffStatus.SIGNED, signer, now=now))
        signed_count += 1
    return updated, signed_count


def override_status(
    book: Book,
    date: str,
    status: SignOffStatus,
    *,
    now: datetime | None = None,
) -> Book:
    """Set any status on a record, bypassing the lifecycle (admin only)."""

    status = SignOffStatus(status)
    record = _record(book, date)
    signed = status == SignOffStatus.SIGNED
    updated = replace(
        record,
        status=status,
        signed_by=ADMIN_OVERRIDE_SIGNER if signed else None,
        signed_at=_clock(now) if signed else None,
    )
    return book.with_sign_off(updated)


__all__ = [
    "ADMIN_OVERRIDE_SIGNER",
    "open_sign_off",
    "override_status",
    "sign_all_pending",
    "sign_off",
]
