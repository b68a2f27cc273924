from __future__ import annotations

import asyncio
import json

import httpx
import pytest

from services.reminders.resend import ResendClient, ResendError


def test_send_email_posts_to_resend() -> None:
    captured: dict = {}

    def handler(request: httpx.Request) -> httpx.Response:
        captured["url"] = str(request.url)
        captured["auth"] = request.headers["Authorization"]
        captured["body"] = json.loads(request.content)
        return httpx.Response(200, json={"id": "email-123"})

    client = ResendClient("re_test", transport=httpx.MockTransport(handler))

    payload = asyncio.run(
        client.send_email(
            sender="SEFE P&L Sign-Off <onboarding@resend.dev>",
            to=["robert.allan@sefe-energy.com"],
            subject="P&L Sign-Off Reminder - 1 Report(s) Pending",
            html="<p>Hi</p>",
            text="Hi",
        )
    )

    assert payload == {"id": "email-123"}
    assert captured["url"] == "https://api.resend.com/emails"
    assert captured["auth"] == "Bearer re_test"
    assert captured["body"]["from"] == "SEFE P&L Sign-Off <onboarding@resend.dev>"
    assert captured["body"]["to"] == ["robert.allan@sefe-energy.com"]
    assert captured["body"]["text"] == "Hi"


def test_error_responses_raise() -> None:
    def handler(request: httpx.Request) -> httpx.Response:
        return httpx.Response(422, json={"message": "Invalid `to` field"})

    client = ResendClient("re_test", transport=httpx.MockTransport(handler))

    with pytest.raises(ResendError, match="Invalid `to` field"):
        asyncio.run(client.send_email(sender="a@b.c", to=["x"], subject="s", html="h"))


def test_missing_api_key_raises_before_calling_out() -> None:
    def handler(request: httpx.Request) -> httpx.Response:
        raise AssertionError("no request expected")

    client = ResendClient(None, transport=httpx.MockTransport(handler))

    with pytest.raises(ResendError, match="RESEND_API_KEY"):
        asyncio.run(client.send_email(sender="a@b.c", to=["x"], subject="s", html="h"))
