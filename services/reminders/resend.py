"""Minimal async client for the Resend email API."""

from __future__ import annotations

import logging
from typing import Any, Sequence

import httpx

logger = logging.getLogger(__name__)


class ResendError(RuntimeError):
    """Raised when Resend rejects a send or cannot be reached."""


class ResendClient:
    """Send transactional emails through ``POST /emails``."""

    def __init__(
        self,
        api_key: str | None,
        *,
        base_url: str = "https://api.resend.com",
        timeout_seconds: float = 30.0,
        transport: httpx.AsyncBaseTransport | None = None,
    ):
        self._api_key = api_key
        self._base_url = base_url.rstrip("/")
        self._timeout = timeout_seconds
        self._transport = transport

    async def send_email(
        self,
        *,
        sender: str,
        to: Sequence[str],
        subject: str,
        html: str,
        text: str | None = None,
    ) -> dict[str, Any]:
        if not self._api_key:
            raise ResendError("RESEND_API_KEY is not configured")

        body: dict[str, Any] = {"from": sender, "to": list(to), "subject": subject, "html": html}
        if text is not None:
            body["text"] = text
        headers = {"Authorization": f"Bearer {self._api_key}"}

        try:
            async with httpx.AsyncClient(timeout=self._timeout, transport=self._transport) as client:
                response = await client.post(f"{self._base_url}/emails", json=body, headers=headers)
        except httpx.HTTPError as exc:
            raise ResendError(f"Failed to reach Resend: {exc}") from exc

        if response.status_code >= 400:
            try:
                payload = response.json()
                detail = payload.get("message") or payload.get("error") or payload
            except ValueError:
                detail = response.text
            raise ResendError(f"Resend error {response.status_code}: {detail}")

        try:
            payload = response.json()
        except ValueError as exc:
            raise ResendError("Resend returned invalid JSON payload") from exc
        logger.debug("Resend accepted email %s", payload.get("id"))
        return payload


__all__ = ["ResendClient", "ResendError"]
