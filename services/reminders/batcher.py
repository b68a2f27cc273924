"""Group pending sign-offs per trader and send one reminder email each.

Sends are sequential with a fixed pause between them to stay under the email
provider's rate limit. Every attempt is written to ``notification_logs``; a
failure is recorded against that trader and the batch carries on.
"""

from __future__ import annotations

import asyncio
import html
import logging
import re
from dataclasses import dataclass, field
from datetime import date
from typing import Any, Awaitable, Callable, Iterable

from .db import Database
from .models import Notification, NotificationLog
from .resend import ResendClient, ResendError
from .schemas import PendingBook, ReminderRequest, ReminderResponse, TraderResult

logger = logging.getLogger(__name__)

NOTIFICATION_TITLE = "P&L Sign-Off Reminder"
TRADER_PATH = "/trader"


@dataclass(frozen=True)
class PendingReport:
    book_name: str
    desk: str
    date: str


@dataclass
class TraderReminder:
    trader_name: str
    trader_email: str
    reports: list[PendingReport] = field(default_factory=list)

    @property
    def book_names(self) -> list[str]:
        return [report.book_name for report in self.reports]


def derive_email(trader_name: str, domain: str) -> str:
    """``"Robert Allan"`` -> ``"robert.allan@<domain>"``."""

    local = re.sub(r"\s+", ".", trader_name.strip().lower())
    return f"{local}@{domain}"


def group_by_trader(pending_books: Iterable[PendingBook], fallback_domain: str) -> list[TraderReminder]:
    """One reminder per primary trader, in first-seen order."""

    reminders: dict[str, TraderReminder] = {}
    for book in pending_books:
        reminder = reminders.get(book.primary_trader)
        if reminder is None:
            email = book.primary_trader_email or derive_email(book.primary_trader, fallback_domain)
            reminder = reminders[book.primary_trader] = TraderReminder(book.primary_trader, email)
        reminder.reports.extend(PendingReport(book.book_name, book.desk, day) for day in book.pending_dates)
    return list(reminders.values())


def format_report_date(value: str) -> str:
    try:
        return date.fromisoformat(value).strftime("%a %d %b")
    except ValueError:
        return value


def render_subject(reminder: TraderReminder) -> str:
    return f"P&L Sign-Off Reminder - {len(reminder.reports)} Report(s) Pending"


def render_text(reminder: TraderReminder, site_url: str) -> str:
    lines = [f"Hi {reminder.trader_name},", ""]
    lines.append(f"You have {len(reminder.reports)} P&L report(s) awaiting your sign-off:")
    lines.extend(
        f"• {report.book_name} ({report.desk}) - {format_report_date(report.date)}"
        for report in reminder.reports
    )
    lines += ["", f"Sign off now: {site_url.rstrip('/')}{TRADER_PATH}"]
    return "\n".join(lines)


def render_html(reminder: TraderReminder, site_url: str) -> str:
    items = "".join(
        f"<li><strong>{html.escape(report.book_name)}</strong> ({html.escape(report.desk)})"
        f" - {format_report_date(report.date)}</li>"
        for report in reminder.reports
    )
    link = html.escape(f"{site_url.rstrip('/')}{TRADER_PATH}", quote=True)
    return f"""<!DOCTYPE html>
<html>
  <body style="font-family: Arial, sans-serif; line-height: 1.6; color: #333;">
    <div style="max-width: 600px; margin: 0 auto; padding: 20px;">
      <div style="background: #1e3a5f; color: white; padding: 20px; border-radius: 8px 8px 0 0;">
        <h1 style="margin: 0;">P&amp;L Sign-Off Reminder</h1>
        <p style="margin: 5px 0 0 0;">SEFE Trading Report Management</p>
      </div>
      <div style="background: #f9fafb; padding: 20px; border: 1px solid #e5e7eb;">
        <p>Hi {html.escape(reminder.trader_name)},</p>
        <p>You have <strong>{len(reminder.reports)}</strong> P&amp;L report(s) awaiting your sign-off:</p>
        <ul>{items}</ul>
        <p>Please sign off these reports at your earliest convenience.</p>
        <a href="{link}" style="background: #2563eb; color: white; padding: 12px 24px; text-decoration: none; border-radius: 6px;">Sign Off Now</a>
      </div>
      <div style="background: #f3f4f6; padding: 15px; font-size: 12px; color: #6b7280;">
        <p>This is an automated reminder from the SEFE P&amp;L Sign-Off system.</p>
        <p>If you have any questions, please contact your Product Controller.</p>
      </div>
    </div>
  </body>
</html>
"""


class ReminderDispatcher:
    """Send one email per trader and append the matching log rows."""

    def __init__(
        self,
        database: Database,
        email_client: ResendClient,
        *,
        sender: str,
        fallback_domain: str,
        delay_seconds: float = 0.6,
        sleep: Callable[[float], Awaitable[Any]] = asyncio.sleep,
    ):
        self._database = database
        self._email_client = email_client
        self._sender = sender
        self._fallback_domain = fallback_domain
        self._delay_seconds = delay_seconds
        self._sleep = sleep

    async def _record(self, reminder: TraderReminder, status: str, error: str | None = None) -> None:
        async with self._database.session() as session:
            session.add(
                NotificationLog(
                    trader_email=reminder.trader_email,
                    trader_name=reminder.trader_name,
                    books_count=len(reminder.reports),
                    book_names=reminder.book_names,
                    notification_type="email",
                    status=status,
                    error_message=error,
                )
            )
            if status == "sent":
                session.add(
                    Notification(
                        user_id=reminder.trader_name,
                        user_email=reminder.trader_email,
                        title=NOTIFICATION_TITLE,
                        message=f"You have {len(reminder.reports)} report(s) pending sign-off",
                        type="reminder",
                        link=TRADER_PATH,
                        metadata_={
                            "reports": [
                                {"bookName": report.book_name, "desk": report.desk, "date": report.date}
                                for report in reminder.reports
                            ]
                        },
                    )
                )
            await session.commit()

    async def _send_one(self, reminder: TraderReminder, site_url: str) -> TraderResult:
        try:
            await self._email_client.send_email(
                sender=self._sender,
                to=[reminder.trader_email],
                subject=render_subject(reminder),
                html=render_html(reminder, site_url),
                text=render_text(reminder, site_url),
            )
            logger.info("Reminder sent to %s (%d reports)", reminder.trader_name, len(reminder.reports))
            await self._record(reminder, "sent")
        except Exception as exc:  # noqa: BLE001
            error = str(exc) if isinstance(exc, ResendError) else f"{type(exc).__name__}: {exc}"
            logger.exception("Failed to send reminder to %s", reminder.trader_name)
            try:
                await self._record(reminder, "failed", error)
            except Exception:  # noqa: BLE001
                logger.exception("Could not record failed reminder for %s", reminder.trader_name)
            return TraderResult(trader=reminder.trader_name, status="failed", error=error)

        return TraderResult(trader=reminder.trader_name, status="sent")

    async def dispatch(self, request: ReminderRequest) -> ReminderResponse:
        reminders = group_by_trader(request.pending_books, self._fallback_domain)
        logger.info(
            "Processing %d books with pending sign-offs for %d traders",
            len(request.pending_books),
            len(reminders),
        )

        results: list[TraderResult] = []
        for index, reminder in enumerate(reminders):
            if index:
                await self._sleep(self._delay_seconds)
            results.append(await self._send_one(reminder, request.site_url))

        notified = sum(1 for result in results if result.status == "sent")
        return ReminderResponse(
            success=True,
            traders_notified=notified,
            traders_failed=len(results) - notified,
            results=results,
        )


__all__ = [
    "PendingReport",
    "ReminderDispatcher",
    "TraderReminder",
    "derive_email",
    "format_report_date",
    "group_by_trader",
    "render_html",
    "render_subject",
    "render_text",
]
