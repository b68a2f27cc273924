"""Capability checks consulted before any mutation is applied."""

from __future__ import annotations

from .errors import PermissionDeniedError
from .models import Book, RoleUser, UserRole

_CONTROLLER_ROLES = (UserRole.PRODUCT_CONTROLLER, UserRole.ADMIN)


def can_sign_off(user: RoleUser, book: Book) -> bool:
    return user.role in (UserRole.TRADER, UserRole.DESK_HEAD) and book.is_assigned(user.name)


def can_comment(user: RoleUser, book: Book) -> bool:
    if user.role == UserRole.ADMIN:
        return True
    return book.is_assigned(user.name) or book.product_controller == user.name


def can_manage_book(user: RoleUser, book: Book) -> bool:
    if user.role == UserRole.ADMIN:
        return True
    return user.role == UserRole.PRODUCT_CONTROLLER and book.product_controller == user.name


def is_admin(user: RoleUser) -> bool:
    return user.role == UserRole.ADMIN


def is_controller(user: RoleUser) -> bool:
    return user.role in _CONTROLLER_ROLES


def require_sign_off(user: RoleUser, book: Book) -> None:
    if not can_sign_off(user, book):
        raise PermissionDeniedError(f"{user.name} cannot sign off {book.name}")


def require_comment(user: RoleUser, book: Book) -> None:
    if not can_comment(user, book):
        raise PermissionDeniedError(f"{user.name} cannot comment on {book.name}")


def require_manage_book(user: RoleUser, book: Book) -> None:
    if not can_manage_book(user, book):
        raise PermissionDeniedError(f"{user.name} cannot manage {book.name}")


def require_admin(user: RoleUser) -> None:
    if not is_admin(user):
        raise PermissionDeniedError("Admin access required")


def require_controller(user: RoleUser) -> None:
    if not is_controller(user):
        raise PermissionDeniedError("Product controller access required")


__all__ = [
    "can_comment",
    "can_manage_book",
    "can_sign_off",
    "is_admin",
    "is_controller",
    "require_admin",
    "require_comment",
    "require_controller",
    "require_manage_book",
    "require_sign_off",
]
