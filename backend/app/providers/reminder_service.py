"""Client helpers for the reminder email service."""

from __future__ import annotations

import logging
from typing import Any, Iterable

import httpx

from pnl_signoff.views import PendingReminder

logger = logging.getLogger(__name__)


class ReminderServiceError(RuntimeError):
    """Raised when the reminder service is unreachable or returns an error."""


def _reminder_payload(reminder: PendingReminder) -> dict[str, Any]:
    return {
        "bookName": reminder.book_name,
        "desk": reminder.desk,
        "primaryTrader": reminder.primary_trader,
        "pendingDates": list(reminder.pending_dates),
    }


class ReminderServiceClient:
    """Thin async client over the reminder service HTTP contract."""

    def __init__(
        self,
        base_url: str,
        *,
        timeout_seconds: float = 60.0,
        transport: httpx.AsyncBaseTransport | None = None,
    ):
        self._base_url = base_url.rstrip("/")
        self._timeout = timeout_seconds
        self._transport = transport

    @property
    def base_url(self) -> str:
        return self._base_url

    async def _request(self, method: str, path: str, **kwargs: Any) -> Any:
        if not self._base_url:
            raise ReminderServiceError("Reminder service URL is not configured")
        url = f"{self._base_url}{path}"
        try:
            async with httpx.AsyncClient(timeout=self._timeout, transport=self._transport) as client:
                response = await client.request(method, url, **kwargs)
        except httpx.HTTPError as exc:
            raise ReminderServiceError(f"Failed to reach reminder service: {exc}") from exc

        if response.status_code >= 400:
            detail: Any
            try:
                payload = response.json()
                detail = payload.get("error") or payload.get("detail") or payload
            except ValueError:
                detail = response.text
            raise ReminderServiceError(f"Reminder service error {response.status_code}: {detail}")

        try:
            return response.json()
        except ValueError as exc:
            raise ReminderServiceError("Reminder service returned invalid JSON payload") from exc

    async def send_reminders(self, reminders: Iterable[PendingReminder], site_url: str) -> dict[str, Any]:
        """Ask the service to email each trader about their pending books."""

        pending_books = [_reminder_payload(item) for item in reminders]
        logger.info("Requesting reminders for %d books", len(pending_books))
        payload = await self._request(
            "POST",
            "/send-reminder-emails",
            json={"pendingBooks": pending_books, "siteUrl": site_url},
        )
        if not isinstance(payload, dict):
            raise ReminderServiceError("Reminder service response is not an object")
        return payload

    async def notification_logs(self, limit: int = 50) -> list[dict[str, Any]]:
        payload = await self._request("GET", "/notification-logs", params={"limit": limit})
        if not isinstance(payload, list):
            raise ReminderServiceError("Reminder service response is not a list of logs")
        return payload


__all__ = ["ReminderServiceClient", "ReminderServiceError"]
