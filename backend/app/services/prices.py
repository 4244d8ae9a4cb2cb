"""Live price sources feeding basket snapshots.

The core engine never fetches prices itself. This module owns the lookup
side: a pluggable :class:`PriceSource`, an in-memory source for tests and
examples, a TTL cache in front of the remote LTP service, and helpers that
refresh a basket snapshot with whatever prices could be fetched.
"""

from __future__ import annotations

import asyncio
import logging
import time
from typing import Callable, Iterable, Mapping, MutableMapping, Protocol

from app.providers.ltp import LtpServiceError
from basketwise.models import Basket
from basketwise.pricing import coerce_number, is_exited

logger = logging.getLogger(__name__)


class PriceSource(Protocol):
    """Pluggable last-traded-price provider."""

    async def latest_price(self, symbol: str) -> float:
        ...


class InMemoryPriceSource:
    """Simple price source for tests and examples."""

    def __init__(self, prices: Mapping[str, float | str]):
        self._prices: dict[str, float] = {}
        for symbol, raw in prices.items():
            price = coerce_number(raw)
            if price is not None:
                self._prices[symbol] = price
        self.calls: list[str] = []

    async def latest_price(self, symbol: str) -> float:
        self.calls.append(symbol)
        if symbol not in self._prices:
            raise LtpServiceError(f"No price for {symbol}")
        return self._prices[symbol]


class CachingPriceSource:
    """Cache wrapper that reuses a fetched price for ``ttl_seconds``."""

    def __init__(
        self,
        delegate: PriceSource,
        ttl_seconds: float,
        *,
        clock: Callable[[], float] = time.monotonic,
    ):
        self.delegate = delegate
        self.ttl_seconds = ttl_seconds
        self._clock = clock
        self._cache: MutableMapping[str, tuple[float, float]] = {}

    async def latest_price(self, symbol: str) -> float:
        now = self._clock()
        cached = self._cache.get(symbol)
        if cached is not None and now - cached[0] < self.ttl_seconds:
            return cached[1]
        price = await self.delegate.latest_price(symbol)
        self._cache[symbol] = (now, price)
        return price

    def clear(self) -> None:
        self._cache.clear()

    async def aclose(self) -> None:
        close = getattr(self.delegate, "aclose", None)
        if close is not None:
            await close()


async def _lookup(source: PriceSource, symbol: str) -> float | None:
    try:
        return await source.latest_price(symbol)
    except LtpServiceError as exc:
        logger.warning("Price lookup failed for %s: %s", symbol, exc)
        return None


async def fetch_live_prices(symbols: Iterable[str], source: PriceSource) -> dict[str, float]:
    """Fetch prices concurrently; symbols whose lookup fails are omitted."""

    unique = list(dict.fromkeys(s for s in symbols if s))
    results = await asyncio.gather(*(_lookup(source, symbol) for symbol in unique))
    return {symbol: price for symbol, price in zip(unique, results) if price is not None}


async def refresh_basket_prices(basket: Basket, source: PriceSource) -> tuple[Basket, dict[str, float]]:
    """Return the basket with fresh LTPs for its open positions, plus the prices used."""

    open_symbols = [stock.symbol for stock in basket.stocks if not is_exited(stock)]
    prices = await fetch_live_prices(open_symbols, source)
    return basket.with_prices(prices), prices


__all__ = [
    "PriceSource",
    "InMemoryPriceSource",
    "CachingPriceSource",
    "fetch_live_prices",
    "refresh_basket_prices",
]
