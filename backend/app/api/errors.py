"""Translate domain errors into HTTP responses."""

from __future__ import annotations

from contextlib import contextmanager
from typing import Iterator

from fastapi import HTTPException, status

from app.providers.reminder_service import ReminderServiceError
from pnl_signoff.errors import (
    BookNotFoundError,
    CommentNotFoundError,
    InvalidTransitionError,
    PermissionDeniedError,
    SignOffError,
    UserNotFoundError,
    ValidationError,
)

_STATUS_BY_ERROR: tuple[tuple[type[Exception], int], ...] = (
    (ValidationError, status.HTTP_422_UNPROCESSABLE_ENTITY),
    (BookNotFoundError, status.HTTP_404_NOT_FOUND),
    (CommentNotFoundError, status.HTTP_404_NOT_FOUND),
    (UserNotFoundError, status.HTTP_404_NOT_FOUND),
    (PermissionDeniedError, status.HTTP_403_FORBIDDEN),
    (InvalidTransitionError, status.HTTP_409_CONFLICT),
)


def http_error(exc: SignOffError) -> HTTPException:
    for error_type, code in _STATUS_BY_ERROR:
        if isinstance(exc, error_type):
            return HTTPException(status_code=code, detail=str(exc))
    return HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail=str(exc))


@contextmanager
def domain_errors() -> Iterator[None]:
    """Re-raise domain and reminder service failures as ``HTTPException``."""

    try:
        yield
    except SignOffError as exc:
        raise http_error(exc) from exc
    except ReminderServiceError as exc:
        raise HTTPException(status_code=status.HTTP_502_BAD_GATEWAY, detail=str(exc)) from exc


__all__ = ["domain_errors", "http_error"]
