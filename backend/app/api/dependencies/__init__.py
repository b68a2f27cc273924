"""Request dependencies shared by the API routes."""

from .auth import get_current_user, require_admin_user, require_controller_user
from .state import get_app_settings, get_reminder_client, get_tracker

__all__ = [
    "get_app_settings",
    "get_current_user",
    "get_reminder_client",
    "get_tracker",
    "require_admin_user",
    "require_controller_user",
]
