"""Application configuration and environment helpers."""

from __future__ import annotations

from functools import lru_cache
from typing import Any

from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict

DEFAULT_TIMEZONE = "Europe/London"
DEFAULT_WORKING_DAY_WINDOW = 5


class AppSettings(BaseSettings):
    """Configuration options for the sign-off dashboard service."""

    app_name: str = Field(default="P&L Sign-Off Tracker")
    timezone: str = Field(default=DEFAULT_TIMEZONE)

    working_day_window: int = Field(
        default=DEFAULT_WORKING_DAY_WINDOW,
        ge=1,
        le=60,
        description="Number of recent working days tracked per book.",
    )
    bank_holiday_path: str = Field(
        default="var/bank_holidays.json",
        description="JSON file holding the bank holiday list.",
    )
    seed_random_seed: int | None = Field(
        default=None,
        description="Seed for the demo sign-off history; random when unset.",
    )

    reminder_service_url: str = Field(
        default="http://localhost:8300",
        description="Base URL for the reminder email service",
    )
    reminder_service_timeout_seconds: float = Field(default=60.0)
    site_url: str = Field(
        default="http://localhost:5173",
        description="Public dashboard URL linked from reminder emails",
    )

    cors_origins: list[str] = Field(default_factory=lambda: ["http://localhost:5173"])

    telemetry_enabled: bool = Field(default=False)
    telemetry_service_name: str = Field(default="pnl-signoff")
    telemetry_otlp_endpoint: str | None = Field(default=None)
    telemetry_otlp_insecure: bool = Field(default=True)
    telemetry_sample_ratio: float = Field(default=1.0, ge=0.0, le=1.0)

    model_config = SettingsConfigDict(env_file=".env", env_file_encoding="utf-8", extra="ignore")

    def dict_for_logging(self) -> dict[str, Any]:
        """Return a sanitized dict for logging purposes."""

        hidden = {"telemetry_otlp_endpoint"}
        return {k: ("***" if k in hidden and v else v) for k, v in self.model_dump().items()}


@lru_cache(maxsize=1)
def get_settings(**overrides: Any) -> AppSettings:
    """Return cached application settings with optional overrides."""

    if overrides:
        return AppSettings(**overrides)
    return AppSettings()


__all__ = [
    "AppSettings",
    "DEFAULT_TIMEZONE",
    "DEFAULT_WORKING_DAY_WINDOW",
    "get_settings",
]
