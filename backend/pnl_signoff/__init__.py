"""Core package for the P&L sign-off tracker."""

from .calendar import HolidayStore, format_working_day, get_last_working_days
from .directory import UserDirectory
from .models import Book, BookComment, RoleUser, SignOffRecord, SignOffStatus, UserRole
from .repository import BookRepository
from .seed import seed_books

__all__ = [
    "Book",
    "BookComment",
    "BookRepository",
    "HolidayStore",
    "RoleUser",
    "SignOffRecord",
    "SignOffStatus",
    "UserDirectory",
    "UserRole",
    "format_working_day",
    "get_last_working_days",
    "seed_books",
]
