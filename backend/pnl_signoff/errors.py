"""Exceptions raised by the sign-off domain."""

from __future__ import annotations


class SignOffError(Exception):
    """Base class for domain failures surfaced to API callers."""


class ValidationError(SignOffError, ValueError):
    """Raised when a request is missing a field or carries an unusable value."""


class UserNotFoundError(SignOffError, LookupError):
    """Raised when an email or id does not match a known user."""


class BookNotFoundError(SignOffError, LookupError):
    """Raised when a book id is not present in the store."""


class CommentNotFoundError(SignOffError, LookupError):
    """Raised when a comment id is not present on the book."""


class PermissionDeniedError(SignOffError):
    """Raised when the acting user lacks the capability for a mutation."""


class InvalidTransitionError(SignOffError):
    """Raised when a sign-off status change is not allowed."""


__all__ = [
    "SignOffError",
    "ValidationError",
    "UserNotFoundError",
    "BookNotFoundError",
    "CommentNotFoundError",
    "PermissionDeniedError",
    "InvalidTransitionError",
]
