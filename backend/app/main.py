"""FastAPI application entrypoint."""

from __future__ import annotations

import logging
from datetime import datetime

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from app.api.routes import api_router
from app.config import AppSettings, get_settings
from app.core.logging import setup_logging
from app.core.telemetry import setup_telemetry
from app.providers.reminder_service import ReminderServiceClient
from app.services.tracker import SignOffTracker
from pnl_signoff.calendar import HolidayStore

logger = logging.getLogger(__name__)


def create_app(
    settings: AppSettings | None = None,
    *,
    tracker: SignOffTracker | None = None,
    reminder_client: ReminderServiceClient | None = None,
) -> FastAPI:
    """Build the API with its in-memory tracker and reminder client attached."""

    settings = settings or get_settings()
    setup_logging()

    app = FastAPI(title=settings.app_name, version="0.1.0")
    setup_telemetry(app, settings)

    app.add_middleware(
        CORSMiddleware,
        allow_origins=settings.cors_origins,
        allow_origin_regex=r"^https?://(localhost|127\.0\.0\.1)(:\d+)?$",
        allow_credentials=True,
        allow_methods=["*"],
        allow_headers=["*"],
        expose_headers=["traceparent", "tracestate", "x-request-id"],
    )

    app.state.settings = settings
    app.state.tracker = tracker or SignOffTracker.seeded(
        HolidayStore(settings.bank_holiday_path),
        window=settings.working_day_window,
        seed=settings.seed_random_seed,
    )
    app.state.reminder_client = reminder_client or ReminderServiceClient(
        settings.reminder_service_url,
        timeout_seconds=settings.reminder_service_timeout_seconds,
    )
    logger.info("Starting %s with %s", settings.app_name, settings.dict_for_logging())

    @app.get("/health", tags=["health"])
    async def health() -> dict[str, str]:
        """Return service readiness metadata."""

        return {
            "status": "ok",
            "timestamp": datetime.now().isoformat(),
            "timezone": settings.timezone,
        }

    app.include_router(api_router)
    return app


app = create_app()

__all__ = ["app", "create_app"]
