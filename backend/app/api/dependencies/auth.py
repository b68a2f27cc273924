"""Identity helpers for API routes.

The dashboard logs in by email only; every subsequent call carries the
address in the ``X-User-Email`` header and is resolved against the directory.
"""

from __future__ import annotations

from fastapi import Depends, Header, HTTPException, status

from app.services.tracker import SignOffTracker
from pnl_signoff import policy
from pnl_signoff.errors import UserNotFoundError
from pnl_signoff.models import RoleUser

from .state import get_tracker


async def get_current_user(
    x_user_email: str | None = Header(default=None),
    tracker: SignOffTracker = Depends(get_tracker),
) -> RoleUser:
    if not x_user_email or not x_user_email.strip():
        raise HTTPException(status_code=status.HTTP_401_UNAUTHORIZED, detail="Missing X-User-Email header")
    try:
        return tracker.directory.find_by_email(x_user_email)
    except UserNotFoundError as exc:
        raise HTTPException(status_code=status.HTTP_401_UNAUTHORIZED, detail=str(exc)) from exc


async def require_controller_user(current_user: RoleUser = Depends(get_current_user)) -> RoleUser:
    if not policy.is_controller(current_user):
        raise HTTPException(status_code=status.HTTP_403_FORBIDDEN, detail="Product controller access required")
    return current_user


async def require_admin_user(current_user: RoleUser = Depends(get_current_user)) -> RoleUser:
    if not policy.is_admin(current_user):
        raise HTTPException(status_code=status.HTTP_403_FORBIDDEN, detail="Admin access required")
    return current_user


__all__ = ["get_current_user", "require_admin_user", "require_controller_user"]
