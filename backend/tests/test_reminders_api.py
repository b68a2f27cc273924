import asyncio
import json
from contextlib import asynccontextmanager

import httpx
from httpx import ASGITransport, AsyncClient

from app.config import AppSettings
from app.main import create_app
from app.providers.reminder_service import ReminderServiceClient

EMMA = {"X-User-Email": "emma.wilson@sefe.eu"}
JOHN = {"X-User-Email": "john.smith@sefe.eu"}
SITE_URL = "https://pnl.example.com"


def _client(tracker, handler):
    reminder_client = ReminderServiceClient("http://reminders.test", transport=httpx.MockTransport(handler))
    app = create_app(AppSettings(site_url=SITE_URL), tracker=tracker, reminder_client=reminder_client)

    @asynccontextmanager
    async def _manager():
        transport = ASGITransport(app=app)
        async with AsyncClient(transport=transport, base_url="http://test") as client:
            yield client

    return _manager


def _unused(request: httpx.Request) -> httpx.Response:
    raise AssertionError(f"unexpected call to {request.url}")


def test_pending_preview(tracker):
    client_manager = _client(tracker, _unused)

    async def _scenario():
        async with client_manager() as api_client:
            preview = (await api_client.get("/reminders/pending", headers=EMMA)).json()
            assert len(preview["pending_books"]) == 10
            assert preview["trader_count"] == 7
            assert "Dutch TTF" not in {item["book_name"] for item in preview["pending_books"]}

            denied = await api_client.get("/reminders/pending", headers=JOHN)
            assert denied.status_code == 403

    asyncio.run(_scenario())


def test_send_posts_camel_case_batch(tracker):
    captured: dict = {}

    def handler(request: httpx.Request) -> httpx.Response:
        captured["path"] = request.url.path
        captured["body"] = json.loads(request.content)
        traders = {book["primaryTrader"] for book in captured["body"]["pendingBooks"]}
        return httpx.Response(
            200,
            json={
                "success": True,
                "tradersNotified": len(traders),
                "tradersFailed": 0,
                "results": [{"trader": name, "status": "sent"} for name in sorted(traders)],
            },
        )

    client_manager = _client(tracker, handler)

    async def _scenario():
        async with client_manager() as api_client:
            response = await api_client.post("/reminders/send", headers=EMMA)
            assert response.status_code == 200
            payload = response.json()
            assert payload["traders_notified"] == 7
            assert payload["traders_failed"] == 0

    asyncio.run(_scenario())

    assert captured["path"] == "/send-reminder-emails"
    assert captured["body"]["siteUrl"] == SITE_URL
    first = captured["body"]["pendingBooks"][0]
    assert set(first) == {"bookName", "desk", "primaryTrader", "pendingDates"}
    assert first["bookName"] == "EU Power Options"
    assert "2025-01-02" in first["pendingDates"]


def test_service_failures_become_bad_gateway(tracker):
    def failing(request: httpx.Request) -> httpx.Response:
        return httpx.Response(500, json={"error": "RESEND_API_KEY missing"})

    def unreachable(request: httpx.Request) -> httpx.Response:
        raise httpx.ConnectError("connection refused", request=request)

    async def _scenario(handler):
        async with _client(tracker, handler)() as api_client:
            response = await api_client.post("/reminders/send", headers=EMMA)
            assert response.status_code == 502
            return response.json()["detail"]

    assert "RESEND_API_KEY missing" in asyncio.run(_scenario(failing))
    assert "Failed to reach reminder service" in asyncio.run(_scenario(unreachable))


def test_history_passes_through_logs(tracker):
    def handler(request: httpx.Request) -> httpx.Response:
        assert request.url.params["limit"] == "20"
        return httpx.Response(
            200,
            json=[
                {
                    "id": 1,
                    "trader_email": "robert.allan@sefe-energy.com",
                    "trader_name": "Robert Allan",
                    "books_count": 3,
                    "book_names": ["Area D", "Deal Flow", "IRE Gas"],
                    "notification_type": "email",
                    "status": "sent",
                    "error_message": None,
                    "sent_at": "2025-01-03T09:30:00+00:00",
                }
            ],
        )

    client_manager = _client(tracker, handler)

    async def _scenario():
        async with client_manager() as api_client:
            logs = (await api_client.get("/reminders/history", params={"limit": 20}, headers=EMMA)).json()
            assert logs[0]["trader_name"] == "Robert Allan"
            assert logs[0]["book_names"] == ["Area D", "Deal Flow", "IRE Gas"]

    asyncio.run(_scenario())
