from __future__ import annotations

import asyncio
from contextlib import asynccontextmanager
from datetime import date
from pathlib import Path

from httpx import ASGITransport, AsyncClient

from services.reminders.batcher import ReminderDispatcher
from services.reminders.config import ReminderSettings
from services.reminders.db import Database
from services.reminders.main import create_app
from services.reminders.resend import ResendError
from services.reminders.trigger import pending_books_for_trigger


class RecordingEmailClient:
    def __init__(self, fail_for: set[str] | None = None):
        self.fail_for = fail_for or set()
        self.recipients: list[str] = []

    async def send_email(self, *, sender, to, subject, html, text=None):
        self.recipients.extend(to)
        if to[0] in self.fail_for:
            raise ResendError("Resend error 403: domain not verified")
        return {"id": "email-1"}


async def _no_sleep(seconds: float) -> None:
    return None


def _client(tmp_path: Path, email_client: RecordingEmailClient):
    settings = ReminderSettings(
        database_url=f"sqlite+aiosqlite:///{tmp_path / 'reminders.db'}",
        trigger_site_url="https://pnl.example.com",
    )
    database = Database(settings.database_url)
    dispatcher = ReminderDispatcher(
        database,
        email_client,
        sender=settings.email_from,
        fallback_domain=settings.fallback_email_domain,
        sleep=_no_sleep,
    )
    app = create_app(settings, database=database, dispatcher=dispatcher)

    @asynccontextmanager
    async def _manager():
        async with app.router.lifespan_context(app):
            transport = ASGITransport(app=app)
            async with AsyncClient(transport=transport, base_url="http://test") as client:
                yield client

    return _manager


def test_send_reminder_emails_contract(tmp_path: Path) -> None:
    email_client = RecordingEmailClient(fail_for={"robert.allan@sefe-energy.com"})
    client_manager = _client(tmp_path, email_client)

    async def _scenario():
        async with client_manager() as api_client:
            response = await api_client.post(
                "/send-reminder-emails",
                json={
                    "pendingBooks": [
                        {
                            "bookName": "Area D",
                            "desk": "Gas & Hub",
                            "primaryTrader": "Robert Allan",
                            "pendingDates": ["2025-01-02"],
                        },
                        {
                            "bookName": "Futures",
                            "desk": "Gas & Hub",
                            "primaryTrader": "Alexander Welch",
                            "primaryTraderEmail": "alexander.welch@sefe.eu",
                            "pendingDates": ["2025-01-02"],
                        },
                    ],
                    "siteUrl": "https://pnl.example.com",
                },
            )
            assert response.status_code == 200
            payload = response.json()
            assert payload["success"] is True
            assert payload["tradersNotified"] == 1
            assert payload["tradersFailed"] == 1
            assert payload["results"][0] == {
                "trader": "Robert Allan",
                "status": "failed",
                "error": "Resend error 403: domain not verified",
            }

            logs = (await api_client.get("/notification-logs")).json()
            assert len(logs) == 2
            assert {log["status"] for log in logs} == {"sent", "failed"}

            invalid = await api_client.post("/send-reminder-emails", json={"siteUrl": "x"})
            assert invalid.status_code == 422

    asyncio.run(_scenario())
    assert email_client.recipients == ["robert.allan@sefe-energy.com", "alexander.welch@sefe.eu"]


def test_cors_is_open_to_any_origin(tmp_path: Path) -> None:
    client_manager = _client(tmp_path, RecordingEmailClient())

    async def _scenario():
        async with client_manager() as api_client:
            response = await api_client.options(
                "/send-reminder-emails",
                headers={
                    "Origin": "https://anywhere.example.com",
                    "Access-Control-Request-Method": "POST",
                    "Access-Control-Request-Headers": "content-type",
                },
            )
            assert response.status_code == 200
            assert response.headers["access-control-allow-origin"] == "*"

    asyncio.run(_scenario())


def test_trigger_uses_demo_dataset(tmp_path: Path) -> None:
    email_client = RecordingEmailClient()
    client_manager = _client(tmp_path, email_client)

    async def _scenario():
        async with client_manager() as api_client:
            response = await api_client.post("/trigger-reminders")
            assert response.status_code == 200
            payload = response.json()
            assert payload["message"] == "Reminders triggered successfully"
            assert payload["result"]["tradersNotified"] == 2
            assert payload["result"]["tradersFailed"] == 0

    asyncio.run(_scenario())
    assert email_client.recipients == ["robert.allan@sefe-energy.com", "alexander.welch@sefe-energy.com"]


def test_trigger_dataset_has_today_pending() -> None:
    books = pending_books_for_trigger(lambda: date(2025, 1, 3))

    assert [book.book_name for book in books] == ["Area D", "Deal Flow", "IRE Gas", "Conti Futures", "Futures"]
    assert all(book.pending_dates == ["2025-01-03"] for book in books)
    assert {book.desk for book in books} == {"Gas & Hub"}


def test_notification_logs_are_capped(tmp_path: Path) -> None:
    client_manager = _client(tmp_path, RecordingEmailClient())

    async def _scenario():
        async with client_manager() as api_client:
            for _ in range(26):
                await api_client.post("/trigger-reminders")
            logs = (await api_client.get("/notification-logs", params={"limit": 500})).json()
            assert len(logs) == 50
            assert logs[0]["id"] > logs[-1]["id"]

            health = await api_client.get("/health")
            assert health.json()["status"] == "ok"

    asyncio.run(_scenario())
