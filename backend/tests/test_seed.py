import random

import pytest

from pnl_signoff.errors import BookNotFoundError, ValidationError
from pnl_signoff.models import SignOffStatus
from pnl_signoff.repository import BookRepository
from pnl_signoff.seed import BOOK_FIXTURES, REJECTION_NOTE, seed_books


def test_seed_is_deterministic_for_a_seed(working_days):
    first = seed_books(working_days, random.Random(42))
    second = seed_books(working_days, random.Random(42))

    assert first == second
    assert len(first) == len(BOOK_FIXTURES)


def test_latest_day_pending_and_retired_books_untracked(books, working_days):
    for book in books:
        assert [record.date for record in book.sign_offs] == working_days
        if book.is_retired:
            assert all(record.status == SignOffStatus.NONE for record in book.sign_offs)
        else:
            assert book.sign_offs[0].status == SignOffStatus.PENDING


def test_seeded_records_carry_signer_or_note(working_days):
    for book in seed_books(working_days, random.Random(3)):
        for record in book.sign_offs:
            if record.status == SignOffStatus.SIGNED:
                assert record.signed_by == book.primary_trader
                assert record.signed_at
            elif record.status == SignOffStatus.REJECTED:
                assert record.comment == REJECTION_NOTE


def test_repository_get_and_missing(repository):
    assert repository.get("1").name == "EU Power Options"
    with pytest.raises(BookNotFoundError):
        repository.get("999")


def test_create_book_starts_with_latest_day_pending(repository, working_days):
    book = repository.create_book(
        name="Power Spreads",
        desk="Power Trading",
        primary_trader="John Smith",
        secondary_trader="Sarah Johnson",
        desk_head="Michael Chen",
        product_controller="Emma Wilson",
        working_days=working_days,
    )

    assert book.id == "12"
    assert [record.status for record in book.sign_offs] == [SignOffStatus.PENDING] + [SignOffStatus.NONE] * 4
    with pytest.raises(ValidationError):
        repository.create_book(
            name="power spreads",
            desk="Power Trading",
            primary_trader="John Smith",
            secondary_trader="Sarah Johnson",
            desk_head="Michael Chen",
            product_controller="Emma Wilson",
            working_days=working_days,
        )


def test_update_rejects_unknown_fields(repository):
    retired = repository.update("1", is_retired=True)
    assert retired.is_retired
    with pytest.raises(ValidationError):
        repository.update("1", name="Renamed")


def test_roll_window_fits_records_to_window(repository, working_days):
    before = repository.get("1").sign_offs
    newer = ["2025-01-03"] + working_days[:4]

    added = repository.roll_window(newer)

    book = repository.get("1")
    assert added == len(BOOK_FIXTURES)
    assert [record.date for record in book.sign_offs] == newer
    assert book.sign_offs[0].status == SignOffStatus.PENDING
    assert book.sign_offs[1:] == before[:4]
    assert repository.get("6").sign_offs[0].status == SignOffStatus.NONE
    assert repository.roll_window(newer) == 0


def test_roll_window_drops_dates_that_become_holidays(repository, working_days):
    before = repository.get("1").sign_offs
    without_new_year = [day for day in working_days if day != "2025-01-01"] + ["2024-12-26"]

    added = repository.roll_window(without_new_year)

    book = repository.get("1")
    assert added == len(BOOK_FIXTURES)
    assert book.sign_off_for("2025-01-01") is None
    assert [record.date for record in book.sign_offs] == without_new_year
    assert book.sign_off_for("2024-12-31") == before[2]
