"""Domain models for books, sign-off records, comments and users."""
from __future__ import annotations

import enum
from dataclasses import dataclass, field, replace
from typing import Optional


class SignOffStatus(str, enum.Enum):
    SIGNED = "signed"
    PENDING = "pending"
    REJECTED = "rejected"
    NONE = "none"


class UserRole(str, enum.Enum):
    TRADER = "trader"
    PRODUCT_CONTROLLER = "product_controller"
    DESK_HEAD = "desk_head"
    ADMIN = "admin"


ROLE_LABELS = {
    UserRole.ADMIN: "Admin",
    UserRole.PRODUCT_CONTROLLER: "Product Controller",
    UserRole.TRADER: "Trader",
    UserRole.DESK_HEAD: "Desk Head",
}


@dataclass(frozen=True)
class RoleUser:
    """A named person who can log in to the dashboard."""

    id: str
    name: str
    email: str
    role: UserRole

    @property
    def role_label(self) -> str:
        return ROLE_LABELS[self.role]


@dataclass(frozen=True)
class SignOffRecord:
    """One working day's sign-off status for a single book."""

    date: str
    status: SignOffStatus = SignOffStatus.NONE
    signed_by: Optional[str] = None
    signed_at: Optional[str] = None
    comment: Optional[str] = None


@dataclass(frozen=True)
class BookComment:
    """A message on a book for a given reporting date.

    Replies carry ``parent_id`` and share the parent's ``date``. The read flags
    are ``None`` for the audience that authored the comment.
    """

    id: str
    book_id: str
    date: str
    author_name: str
    author_role: UserRole
    content: str
    created_at: str
    parent_id: Optional[str] = None
    read_by_pc: Optional[bool] = None
    read_by_trader: Optional[bool] = None

    @property
    def is_reply(self) -> bool:
        return self.parent_id is not None


@dataclass(frozen=True)
class Book:
    """A trading book with its team, sign-off window and comment thread."""

    id: str
    name: str
    desk: str
    primary_trader: str
    secondary_trader: str
    desk_head: str
    product_controller: str
    is_retired: bool = False
    sign_offs: tuple[SignOffRecord, ...] = field(default_factory=tuple)
    comments: tuple[BookComment, ...] = field(default_factory=tuple)

    def sign_off_for(self, date: str) -> Optional[SignOffRecord]:
        """Return the record for ``date`` if the window holds one."""

        for record in self.sign_offs:
            if record.date == date:
                return record
        return None

    def with_sign_off(self, record: SignOffRecord) -> "Book":
        """Return a copy with the record for ``record.date`` replaced."""

        sign_offs = tuple(record if s.date == record.date else s for s in self.sign_offs)
        return replace(self, sign_offs=sign_offs)

    def with_comment(self, comment: BookComment) -> "Book":
        return replace(self, comments=self.comments + (comment,))

    def is_assigned(self, name: str) -> bool:
        return name in (self.primary_trader, self.secondary_trader, self.desk_head)


__all__ = [
    "Book",
    "BookComment",
    "ROLE_LABELS",
    "RoleUser",
    "SignOffRecord",
    "SignOffStatus",
    "UserRole",
]
