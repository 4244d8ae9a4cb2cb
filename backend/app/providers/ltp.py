"""HTTP client for the last-traded-price (LTP) lookup service."""

from __future__ import annotations

import logging
from typing import Any

import httpx

from app.config import get_settings
from basketwise.pricing import coerce_number

logger = logging.getLogger(__name__)


class LtpServiceError(RuntimeError):
    """Raised when the LTP service fails or returns no usable price."""


class LtpClient:
    """Fetch the latest traded price for one symbol at a time."""

    def __init__(
        self,
        base_url: str | None = None,
        token: str | None = None,
        *,
        timeout: float | None = None,
        client: Any | None = None,
    ) -> None:
        settings = get_settings()
        self.base_url = base_url or settings.ltp_service_url
        self.token = token if token is not None else settings.ltp_service_token
        self.timeout = timeout or settings.ltp_timeout_seconds
        self._client = client or httpx.AsyncClient()
        self._owns_client = client is None

    def _headers(self) -> dict[str, str]:
        if not self.token:
            return {}
        return {"Authorization": f"Bearer {self.token}"}

    async def latest_price(self, symbol: str) -> float:
        try:
            response = await self._client.get(
                self.base_url,
                params={"symbol": symbol},
                headers=self._headers(),
                timeout=self.timeout,
            )
        except httpx.HTTPError as exc:
            raise LtpServiceError(f"LTP request for {symbol} failed: {exc}") from exc
        if response.status_code >= 400:
            logger.warning("LTP service error %s for %s", response.status_code, symbol)
            raise LtpServiceError(f"LTP service returned {response.status_code} for {symbol}")
        try:
            payload = response.json()
        except ValueError as exc:
            raise LtpServiceError(f"LTP service returned invalid JSON for {symbol}") from exc
        price = coerce_number(payload.get("ltp")) if isinstance(payload, dict) else None
        if price is None or price <= 0:
            raise LtpServiceError(f"No usable LTP for {symbol}: {payload!r}")
        return price

    async def aclose(self) -> None:
        if self._owns_client:
            await self._client.aclose()


def get_ltp_client() -> LtpClient:
    return LtpClient()


__all__ = ["LtpClient", "LtpServiceError", "get_ltp_client"]
