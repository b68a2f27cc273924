"""Configuration helpers for the reminder service."""

from __future__ import annotations

from functools import lru_cache
from typing import Any

from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict

DEFAULT_DATABASE_URL = "postgresql+asyncpg://pnl_signoff:pnl_signoff@db:5432/pnl_signoff"


class ReminderSettings(BaseSettings):
    """Settings for the standalone reminder email service."""

    database_url: str = Field(DEFAULT_DATABASE_URL, description="SQLAlchemy database URL for the log tables")
    resend_api_key: str | None = Field(None, description="Resend API key")
    resend_base_url: str = Field("https://api.resend.com", description="Resend API base URL")
    resend_timeout_seconds: float = Field(30.0, description="HTTP timeout when calling Resend")
    email_from: str = Field("SEFE P&L Sign-Off <onboarding@resend.dev>", description="Sender address")
    fallback_email_domain: str = Field("sefe-energy.com", description="Domain for derived trader addresses")
    send_delay_seconds: float = Field(0.6, ge=0.0, description="Pause between sends for the provider rate limit")
    trigger_site_url: str = Field("http://localhost:5173", description="Dashboard URL used by the trigger endpoint")

    telemetry_enabled: bool = Field(False)
    telemetry_service_name: str = Field("pnl-signoff-reminders")
    telemetry_otlp_endpoint: str | None = Field(None)
    telemetry_otlp_insecure: bool = Field(True)

    model_config = SettingsConfigDict(env_file=".env", env_file_encoding="utf-8", extra="ignore")

    def dict_for_logging(self) -> dict[str, Any]:
        """Return a sanitized dict for logging purposes."""

        hidden = {"resend_api_key", "database_url"}
        return {k: ("***" if k in hidden and v else v) for k, v in self.model_dump().items()}


@lru_cache(maxsize=1)
def get_settings(**overrides: Any) -> ReminderSettings:
    """Return cached reminder settings with optional overrides."""

    if overrides:
        return ReminderSettings(**overrides)
    return ReminderSettings()


__all__ = ["DEFAULT_DATABASE_URL", "ReminderSettings", "get_settings"]
