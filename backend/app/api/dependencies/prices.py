"""Shared dependencies for API routes."""

from __future__ import annotations

from functools import lru_cache

from app.config import AppSettings, get_settings
from app.providers.ltp import get_ltp_client
from app.services.prices import CachingPriceSource, PriceSource


@lru_cache(maxsize=1)
def _shared_price_source() -> CachingPriceSource:
    settings = get_settings()
    return CachingPriceSource(get_ltp_client(), settings.ltp_cache_ttl_seconds)


def get_price_source() -> PriceSource:
    return _shared_price_source()


def get_app_settings() -> AppSettings:
    return get_settings()


async def close_price_source() -> None:
    """Release the pooled HTTP client if a price source was ever created."""

    if _shared_price_source.cache_info().currsize:
        await _shared_price_source().aclose()
        _shared_price_source.cache_clear()


__all__ = ["close_price_source", "get_app_settings", "get_price_source"]
