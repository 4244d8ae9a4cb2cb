"""Application configuration and environment helpers."""

from __future__ import annotations

from datetime import date, datetime
from functools import lru_cache
from typing import Any
from zoneinfo import ZoneInfo

from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict

DEFAULT_TIMEZONE = "Asia/Kolkata"
DEFAULT_CURRENCY_SYMBOL = "₹"


class AppSettings(BaseSettings):
    """Configuration options for the basket tracker service."""

    model_config = SettingsConfigDict(env_file=".env", env_file_encoding="utf-8")

    app_name: str = Field(default="Basketwise")
    timezone: str = Field(default=DEFAULT_TIMEZONE)
    currency_symbol: str = Field(default=DEFAULT_CURRENCY_SYMBOL)
    cors_origins: list[str] = Field(default_factory=lambda: ["http://localhost:5173"])

    ltp_service_url: str = Field(
        default="http://localhost:54321/functions/v1/ltp-api",
        description="Endpoint returning the last traded price for ?symbol=",
    )
    ltp_service_token: str | None = Field(
        default=None,
        description="Bearer token sent to the LTP service",
    )
    ltp_timeout_seconds: float = Field(default=10.0, gt=0)
    ltp_cache_ttl_seconds: float = Field(
        default=30.0,
        ge=0,
        description="How long a fetched LTP is reused; 0 disables caching.",
    )

    telemetry_enabled: bool = Field(default=False)
    telemetry_service_name: str = Field(default="basketwise")
    telemetry_otlp_endpoint: str | None = Field(default=None)
    telemetry_otlp_insecure: bool = Field(default=True)
    telemetry_sample_ratio: float = Field(default=1.0, ge=0.0, le=1.0)

    def dict_for_logging(self) -> dict[str, Any]:
        """Return a sanitized dict for logging purposes."""

        hidden = {"ltp_service_token"}
        return {k: ("***" if k in hidden and v else v) for k, v in self.model_dump().items()}

    def today(self) -> date:
        """Return the current calendar date in the configured timezone."""

        return datetime.now(ZoneInfo(self.timezone)).date()


@lru_cache(maxsize=1)
def get_settings(**overrides: Any) -> AppSettings:
    """Return cached application settings with optional overrides."""

    if overrides:
        return AppSettings(**overrides)
    return AppSettings()


__all__ = [
    "AppSettings",
    "DEFAULT_TIMEZONE",
    "DEFAULT_CURRENCY_SYMBOL",
    "get_settings",
]
