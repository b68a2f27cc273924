"""In-memory book store: the single write path for book state."""

from __future__ import annotations

import itertools
import logging
from dataclasses import replace
from typing import Any, Iterable, Sequence

from .errors import BookNotFoundError, ValidationError
from .models import Book, SignOffRecord, SignOffStatus
from .seed import new_book_sign_offs

logger = logging.getLogger(__name__)

EDITABLE_FIELDS = frozenset(
    {"desk", "primary_trader", "secondary_trader", "desk_head", "product_controller", "is_retired"}
)


class BookRepository:
    """Holds books by id and swaps whole objects on every change."""

    def __init__(self, books: Iterable[Book] = ()):
        self._books: dict[str, Book] = {}
        for book in books:
            self._books[book.id] = book
        numeric_ids = [int(book_id) for book_id in self._books if book_id.isdigit()]
        self._ids = itertools.count(max(numeric_ids, default=0) + 1)

    def list(self) -> list[Book]:
        return list(self._books.values())

    def get(self, book_id: str) -> Book:
        try:
            return self._books[book_id]
        except KeyError:
            raise BookNotFoundError(f"Book {book_id} not found") from None

    def replace(self, book: Book) -> Book:
        if book.id not in self._books:
            raise BookNotFoundError(f"Book {book.id} not found")
        self._books[book.id] = book
        return book

    def replace_many(self, books: Iterable[Book]) -> list[Book]:
        return [self.replace(book) for book in books]

    def add(self, book: Book) -> Book:
        if book.id in self._books:
            raise ValidationError(f"Book {book.id} already exists")
        self._books[book.id] = book
        return book

    def create_book(
        self,
        *,
        name: str,
        desk: str,
        primary_trader: str,
        secondary_trader: str,
        desk_head: str,
        product_controller: str,
        working_days: Sequence[str],
    ) -> Book:
        name = (name or "").strip()
        desk = (desk or "").strip()
        if not name or not desk:
            raise ValidationError("Book name and desk are required")
        if any(book.name.lower() == name.lower() for book in self._books.values()):
            raise ValidationError(f"A book named {name} already exists")
        book = Book(
            id=str(next(self._ids)),
            name=name,
            desk=desk,
            primary_trader=primary_trader,
            secondary_trader=secondary_trader,
            desk_head=desk_head,
            product_controller=product_controller,
            sign_offs=new_book_sign_offs(working_days),
        )
        logger.info("Book %s created on desk %s", book.name, book.desk)
        return self.add(book)

    def update(self, book_id: str, **changes: Any) -> Book:
        unknown = set(changes) - EDITABLE_FIELDS
        if unknown:
            raise ValidationError(f"Cannot edit fields: {', '.join(sorted(unknown))}")
        book = replace(self.get(book_id), **changes)
        return self.replace(book)

    def roll_window(self, working_days: Sequence[str]) -> int:
        """Fit every book's records to exactly ``working_days``.

        Records for dates still in the window are kept as they are, dates new to
        the window get a fresh record and dates that left it (older days or new
        bank holidays) are dropped. Returns the number of records added.
        """

        added = dropped = 0
        for book in self.list():
            known = {record.date: record for record in book.sign_offs}
            fresh_status = SignOffStatus.NONE if book.is_retired else SignOffStatus.PENDING
            sign_offs = tuple(
                known.get(day) or SignOffRecord(date=day, status=fresh_status) for day in working_days
            )
            if sign_offs == book.sign_offs:
                continue
            added += sum(1 for day in working_days if day not in known)
            dropped += len(set(known) - set(working_days))
            self._books[book.id] = replace(book, sign_offs=sign_offs)
        if added or dropped:
            logger.info("Rolled sign-off window: %d records added, %d dropped", added, dropped)
        return added

    def desks(self) -> list[str]:
        return sorted({book.desk for book in self._books.values()})


__all__ = ["BookRepository", "EDITABLE_FIELDS"]
