"""Pydantic schemas for login and user listings."""

from __future__ import annotations

from pydantic import BaseModel, ConfigDict, EmailStr, Field

from pnl_signoff.models import UserRole


class UserSchema(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    id: str
    name: str
    email: str
    role: UserRole
    role_label: str


class LoginRequest(BaseModel):
    email: str = Field(..., min_length=3, max_length=255)


class LoginResponse(BaseModel):
    user: UserSchema
    message: str


class AdminCreateRequest(BaseModel):
    name: str = Field(..., min_length=2, max_length=255)
    email: EmailStr


__all__ = ["AdminCreateRequest", "LoginRequest", "LoginResponse", "UserSchema"]
