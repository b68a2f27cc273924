"""Email-only login and identity lookup."""

from __future__ import annotations

from fastapi import APIRouter, Depends

from app.api.dependencies import get_current_user, get_tracker
from app.api.errors import domain_errors
from app.schemas import LoginRequest, LoginResponse, UserSchema
from app.services.tracker import SignOffTracker
from pnl_signoff.models import RoleUser

router = APIRouter()


@router.post("/login", response_model=LoginResponse)
async def login(payload: LoginRequest, tracker: SignOffTracker = Depends(get_tracker)) -> LoginResponse:
    with domain_errors():
        user = tracker.login(payload.email)
    return LoginResponse(
        user=UserSchema.model_validate(user),
        message=f"Welcome, {user.name}! Logged in as {user.role_label}",
    )


@router.get("/me", response_model=UserSchema)
async def me(current_user: RoleUser = Depends(get_current_user)) -> UserSchema:
    return UserSchema.model_validate(current_user)


__all__ = ["router"]
