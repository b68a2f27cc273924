from dataclasses import replace
from datetime import datetime

import pytest

from pnl_signoff import signoff
from pnl_signoff.errors import InvalidTransitionError, ValidationError
from pnl_signoff.models import Book, SignOffRecord, SignOffStatus

NOW = datetime(2025, 1, 3, 9, 30)


def _book(*records: SignOffRecord, retired: bool = False) -> Book:
    return Book(
        id="1",
        name="EU Power Options",
        desk="Power Trading",
        primary_trader="John Smith",
        secondary_trader="Sarah Johnson",
        desk_head="Michael Chen",
        product_controller="Emma Wilson",
        is_retired=retired,
        sign_offs=records,
    )


def test_sign_pending_report_with_comment():
    book = _book(SignOffRecord("2025-01-02", SignOffStatus.PENDING))

    updated = signoff.sign_off(book, "2025-01-02", SignOffStatus.SIGNED, "John Smith", " ok ", now=NOW)

    record = updated.sign_off_for("2025-01-02")
    assert record.status == SignOffStatus.SIGNED
    assert record.signed_by == "John Smith"
    assert record.signed_at == "09:30"
    assert record.comment == "ok"
    assert book.sign_off_for("2025-01-02").status == SignOffStatus.PENDING


def test_resigning_refreshes_signer_and_time():
    book = _book(SignOffRecord("2025-01-02", SignOffStatus.SIGNED, "John Smith", "08:15"))

    updated = signoff.sign_off(book, "2025-01-02", SignOffStatus.SIGNED, "Sarah Johnson", now=NOW)

    record = updated.sign_off_for("2025-01-02")
    assert record.status == SignOffStatus.SIGNED
    assert record.signed_by == "Sarah Johnson"
    assert record.signed_at == "09:30"


def test_signed_report_cannot_be_rejected():
    book = _book(SignOffRecord("2025-01-02", SignOffStatus.SIGNED, "John Smith", "08:15"))

    with pytest.raises(InvalidTransitionError):
        signoff.sign_off(book, "2025-01-02", SignOffStatus.REJECTED, "John Smith", now=NOW)


def test_only_terminal_targets_are_accepted():
    book = _book(SignOffRecord("2025-01-02", SignOffStatus.PENDING))

    with pytest.raises(ValidationError):
        signoff.sign_off(book, "2025-01-02", SignOffStatus.PENDING, "John Smith")


def test_retired_book_cannot_be_signed():
    book = _book(SignOffRecord("2025-01-02", SignOffStatus.PENDING), retired=True)

    with pytest.raises(InvalidTransitionError):
        signoff.sign_off(book, "2025-01-02", SignOffStatus.SIGNED, "John Smith")


def test_unknown_date_is_a_validation_error():
    book = _book(SignOffRecord("2025-01-02", SignOffStatus.PENDING))

    with pytest.raises(ValidationError):
        signoff.sign_off(book, "2024-01-02", SignOffStatus.SIGNED, "John Smith")


def test_open_sign_off_moves_none_to_pending():
    book = _book(SignOffRecord("2025-01-02"))

    opened = signoff.open_sign_off(book, "2025-01-02")

    assert opened.sign_off_for("2025-01-02").status == SignOffStatus.PENDING
    assert signoff.open_sign_off(opened, "2025-01-02") is opened


def test_sign_all_pending_only_touches_traders_books():
    mine = _book(SignOffRecord("2025-01-02", SignOffStatus.PENDING))
    signed = replace(mine, id="2", sign_offs=(SignOffRecord("2025-01-02", SignOffStatus.SIGNED, "x", "08:00"),))
    other = replace(mine, id="3", primary_trader="David Brown", secondary_trader="Lisa Anderson")
    retired = replace(mine, id="4", is_retired=True)

    updated, count = signoff.sign_all_pending([mine, signed, other, retired], "2025-01-02", "Sarah Johnson", now=NOW)

    assert count == 1
    assert [book.id for book in updated] == ["1"]
    assert updated[0].sign_off_for("2025-01-02").signed_by == "Sarah Johnson"


def test_admin_override_sets_any_status():
    book = _book(SignOffRecord("2025-01-02", SignOffStatus.REJECTED, comment="Variance above threshold"))

    signed = signoff.override_status(book, "2025-01-02", SignOffStatus.SIGNED, now=NOW)
    assert signed.sign_off_for("2025-01-02").signed_by == signoff.ADMIN_OVERRIDE_SIGNER
    assert signed.sign_off_for("2025-01-02").signed_at == "09:30"

    reopened = signoff.override_status(signed, "2025-01-02", SignOffStatus.PENDING)
    record = reopened.sign_off_for("2025-01-02")
    assert record.status == SignOffStatus.PENDING
    assert record.signed_by is None
