"""FastAPI entrypoint for the reminder email service."""

from __future__ import annotations

import logging
from contextlib import asynccontextmanager
from datetime import datetime
from typing import AsyncIterator

from fastapi import FastAPI, Query
from fastapi.middleware.cors import CORSMiddleware
from sqlalchemy import select

from .batcher import ReminderDispatcher
from .config import ReminderSettings, get_settings
from .db import Database
from .models import NotificationLog
from .resend import ResendClient
from .schemas import NotificationLogSchema, ReminderRequest, ReminderResponse, TriggerResponse
from .telemetry import setup_telemetry
from .trigger import pending_books_for_trigger

logger = logging.getLogger("services.reminders")
if not logging.getLogger().handlers:
    logging.basicConfig(level=logging.INFO)
logging.getLogger("sqlalchemy.engine").setLevel(logging.WARNING)

MAX_LOG_ROWS = 50


def create_app(
    settings: ReminderSettings | None = None,
    *,
    database: Database | None = None,
    dispatcher: ReminderDispatcher | None = None,
) -> FastAPI:
    settings = settings or get_settings()
    database = database or Database(settings.database_url)
    dispatcher = dispatcher or ReminderDispatcher(
        database,
        ResendClient(
            settings.resend_api_key,
            base_url=settings.resend_base_url,
            timeout_seconds=settings.resend_timeout_seconds,
        ),
        sender=settings.email_from,
        fallback_domain=settings.fallback_email_domain,
        delay_seconds=settings.send_delay_seconds,
    )

    @asynccontextmanager
    async def lifespan(_: FastAPI) -> AsyncIterator[None]:
        await database.create_all()
        logger.info("Reminder service ready with %s", settings.dict_for_logging())
        yield
        await database.dispose()

    app = FastAPI(title="P&L Sign-Off Reminder Service", version="0.1.0", lifespan=lifespan)
    setup_telemetry(app, settings, engine=database.engine)
    app.add_middleware(
        CORSMiddleware,
        allow_origins=["*"],
        allow_methods=["*"],
        allow_headers=["authorization", "x-client-info", "apikey", "content-type"],
    )

    @app.get("/health", tags=["system"])
    async def health() -> dict[str, str]:
        """Lightweight health probe."""

        return {"status": "ok", "timestamp": datetime.now().isoformat()}

    @app.post("/send-reminder-emails", response_model=ReminderResponse, tags=["reminders"])
    async def send_reminder_emails(payload: ReminderRequest) -> ReminderResponse:
        logger.info("send-reminder-emails called with %d books", len(payload.pending_books))
        return await dispatcher.dispatch(payload)

    @app.post("/trigger-reminders", response_model=TriggerResponse, tags=["reminders"])
    async def trigger_reminders() -> TriggerResponse:
        pending_books = pending_books_for_trigger()
        if not pending_books:
            logger.info("No pending books found, skipping reminder")
            return TriggerResponse(message="No pending reports")

        logger.info("Found %d books with pending sign-offs", len(pending_books))
        result = await dispatcher.dispatch(
            ReminderRequest(pending_books=pending_books, site_url=settings.trigger_site_url)
        )
        return TriggerResponse(
            message="Reminders triggered successfully",
            result=result.model_dump(by_alias=True),
        )

    @app.get("/notification-logs", response_model=list[NotificationLogSchema], tags=["reminders"])
    async def notification_logs(limit: int = Query(default=MAX_LOG_ROWS, ge=1)) -> list[NotificationLogSchema]:
        stmt = (
            select(NotificationLog)
            .order_by(NotificationLog.sent_at.desc(), NotificationLog.id.desc())
            .limit(min(limit, MAX_LOG_ROWS))
        )
        async with database.session() as session:
            rows = (await session.execute(stmt)).scalars().all()
        return [NotificationLogSchema.model_validate(row) for row in rows]

    app.state.settings = settings
    app.state.database = database
    app.state.dispatcher = dispatcher
    return app


app = create_app()

__all__ = ["app", "create_app"]
