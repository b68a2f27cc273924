"""Accessors for the per-application objects stored on ``app.state``."""

from __future__ import annotations

from fastapi import Request

from app.config import AppSettings
from app.providers.reminder_service import ReminderServiceClient
from app.services.tracker import SignOffTracker


def get_tracker(request: Request) -> SignOffTracker:
    return request.app.state.tracker


def get_reminder_client(request: Request) -> ReminderServiceClient:
    return request.app.state.reminder_client


def get_app_settings(request: Request) -> AppSettings:
    return request.app.state.settings


__all__ = ["get_app_settings", "get_reminder_client", "get_tracker"]
