"""Use-case layer: every book mutation passes the policy check here first."""

from __future__ import annotations

import logging
import random
from datetime import date, datetime
from typing import Any, Callable

from pnl_signoff import comments as comment_ops
from pnl_signoff import policy, signoff, views
from pnl_signoff.calendar import HolidayStore, get_last_working_days
from pnl_signoff.directory import UserDirectory
from pnl_signoff.errors import ValidationError
from pnl_signoff.models import Book, BookComment, RoleUser, SignOffStatus, UserRole
from pnl_signoff.repository import BookRepository
from pnl_signoff.seed import seed_books

logger = logging.getLogger(__name__)

_TEAM_ROLES = {
    "primary_trader": UserRole.TRADER,
    "secondary_trader": UserRole.TRADER,
    "desk_head": UserRole.DESK_HEAD,
    "product_controller": UserRole.PRODUCT_CONTROLLER,
}


class SignOffTracker:
    """Owns the book store, user directory and holiday list for one process."""

    def __init__(
        self,
        repository: BookRepository,
        directory: UserDirectory,
        holidays: HolidayStore,
        *,
        window: int = 5,
        today: Callable[[], date] = date.today,
        now: Callable[[], datetime] = datetime.now,
    ):
        self.repository = repository
        self.directory = directory
        self.holidays = holidays
        self.window = window
        self._today = today
        self._now = now

    @classmethod
    def seeded(
        cls,
        holidays: HolidayStore,
        *,
        window: int = 5,
        seed: int | None = None,
        directory: UserDirectory | None = None,
        today: Callable[[], date] = date.today,
        now: Callable[[], datetime] = datetime.now,
    ) -> "SignOffTracker":
        """Build a tracker over the demo dataset for the current window."""

        days = get_last_working_days(window, holidays.load(), today=today())
        books = seed_books(days, random.Random(seed))
        logger.info("Seeded %d books over %s..%s", len(books), days[-1], days[0])
        return cls(
            BookRepository(books),
            directory or UserDirectory(),
            holidays,
            window=window,
            today=today,
            now=now,
        )

    # Calendar

    def working_days(self, count: int | None = None) -> list[str]:
        """Current window of working days; new dates get records as it rolls."""

        days = get_last_working_days(count or self.window, self.holidays.load(), today=self._today())
        if count is None or count == self.window:
            self.repository.roll_window(days)
        return days

    def books(self) -> list[Book]:
        """All books with their records rolled forward to the current window."""

        self.working_days()
        return self.repository.list()

    def add_holiday(self, user: RoleUser, value: str) -> list[str]:
        policy.require_controller(user)
        self.holidays.add(value)
        return self.holidays.newest_first()

    def remove_holiday(self, user: RoleUser, value: str) -> list[str]:
        policy.require_controller(user)
        self.holidays.remove(value)
        return self.holidays.newest_first()

    # Users

    def login(self, email: str) -> RoleUser:
        user = self.directory.find_by_email(email)
        logger.info("%s logged in as %s", user.name, user.role.value)
        return user

    def add_admin(self, user: RoleUser, name: str, email: str) -> RoleUser:
        policy.require_admin(user)
        return self.directory.add_admin(name, email)

    def remove_admin(self, user: RoleUser, admin_id: str) -> RoleUser:
        policy.require_admin(user)
        return self.directory.remove_admin(admin_id)

    # Sign-offs

    def sign_off(
        self,
        user: RoleUser,
        book_id: str,
        status: SignOffStatus,
        *,
        date: str | None = None,
        comment: str | None = None,
    ) -> Book:
        book = self.repository.get(book_id)
        policy.require_sign_off(user, book)
        target = date or self.working_days()[0]
        updated = signoff.sign_off(book, target, status, user.name, comment, now=self._now())
        logger.info("%s set %s on %s to %s", user.name, book.name, target, SignOffStatus(status).value)
        return self.repository.replace(updated)

    def sign_all_pending(self, user: RoleUser) -> tuple[list[Book], int]:
        latest = self.working_days()[0]
        signable = [book for book in self.repository.list() if policy.can_sign_off(user, book)]
        updated, count = signoff.sign_all_pending(signable, latest, user.name, now=self._now())
        self.repository.replace_many(updated)
        logger.info("%s signed %d pending reports for %s", user.name, count, latest)
        return updated, count

    def override_status(self, user: RoleUser, book_id: str, date: str, status: SignOffStatus) -> Book:
        policy.require_admin(user)
        book = self.repository.get(book_id)
        updated = signoff.override_status(book, date, status, now=self._now())
        logger.info("%s overrode %s on %s to %s", user.name, book.name, date, SignOffStatus(status).value)
        return self.repository.replace(updated)

    # Comments

    def add_comment(self, user: RoleUser, book_id: str, date: str, text: str) -> tuple[Book, BookComment]:
        book = self.repository.get(book_id)
        policy.require_comment(user, book)
        if book.sign_off_for(date) is None:
            raise ValidationError(f"{date} is not a tracked report date for {book.name}")
        updated, comment = comment_ops.add_comment(book, date, user.name, user.role, text, now=self._now())
        return self.repository.replace(updated), comment

    def add_reply(self, user: RoleUser, book_id: str, parent_id: str, text: str) -> tuple[Book, BookComment]:
        book = self.repository.get(book_id)
        policy.require_comment(user, book)
        updated, reply = comment_ops.add_reply(book, parent_id, user.name, user.role, text, now=self._now())
        return self.repository.replace(updated), reply

    def mark_read(self, user: RoleUser, book_id: str, date: str | None = None) -> tuple[Book, int]:
        book = self.repository.get(book_id)
        policy.require_comment(user, book)
        updated, changed = comment_ops.mark_read(book, comment_ops.audience_for(user.role), date)
        if changed:
            self.repository.replace(updated)
        return updated, changed

    # Book management

    def _check_team(self, changes: dict[str, Any]) -> None:
        for field_name, role in _TEAM_ROLES.items():
            name = changes.get(field_name)
            if name is not None and self.directory.find_by_name(name, role) is None:
                raise ValidationError(f"{name} is not a known {role.value.replace('_', ' ')}")

    def update_book(self, user: RoleUser, book_id: str, **changes: Any) -> Book:
        book = self.repository.get(book_id)
        policy.require_manage_book(user, book)
        changes = {key: value for key, value in changes.items() if value is not None}
        self._check_team(changes)
        updated = self.repository.update(book_id, **changes)
        logger.info("%s updated %s: %s", user.name, book.name, ", ".join(sorted(changes)) or "no changes")
        return updated

    def create_book(self, user: RoleUser, **fields: Any) -> Book:
        policy.require_admin(user)
        self._check_team(fields)
        return self.repository.create_book(working_days=self.working_days(), **fields)

    # Reminders

    def pending_reminders(self) -> list[views.PendingReminder]:
        return views.pending_reminders(self.books())


__all__ = ["SignOffTracker"]
