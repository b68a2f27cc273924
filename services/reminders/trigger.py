"""Illustrative dataset used by the scheduled trigger endpoint."""

from __future__ import annotations

from datetime import date
from typing import Callable

from .schemas import PendingBook

TRIGGER_DESK = "Gas & Hub"
TRIGGER_BOOKS: tuple[tuple[str, str], ...] = (
    ("Area D", "Robert Allan"),
    ("Deal Flow", "Robert Allan"),
    ("IRE Gas", "Robert Allan"),
    ("Conti Futures", "Alexander Welch"),
    ("Futures", "Alexander Welch"),
)


def pending_books_for_trigger(today: Callable[[], date] = date.today) -> list[PendingBook]:
    """Each demo book with today as its only pending date."""

    day = today().isoformat()
    return [
        PendingBook(book_name=name, desk=TRIGGER_DESK, primary_trader=trader, pending_dates=[day])
        for name, trader in TRIGGER_BOOKS
    ]


__all__ = ["TRIGGER_BOOKS", "TRIGGER_DESK", "pending_books_for_trigger"]
