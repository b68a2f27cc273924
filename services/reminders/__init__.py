"""Reminder email service package."""

from .batcher import ReminderDispatcher, group_by_trader
from .config import ReminderSettings, get_settings
from .resend import ResendClient, ResendError

__all__ = [
    "ReminderDispatcher",
    "ReminderSettings",
    "ResendClient",
    "ResendError",
    "get_settings",
    "group_by_trader",
]
