"""Domain models used by the basket valuation and allocation engine."""
from __future__ import annotations

from dataclasses import dataclass, field, replace
from datetime import date, datetime
from typing import Any, Mapping, Optional, Sequence, Tuple, Union

from .pricing import Sign, coerce_number

DateLike = Union[date, datetime, str, None]


@dataclass(frozen=True)
class StockPosition:
    """One holding inside a basket."""

    symbol: str
    display_name: str = ""
    quantity: float = 0.0
    buy_price: float = 0.0
    last_traded_price: Optional[float] = None
    sell_price: Optional[float] = None
    sell_date: DateLike = None

    @property
    def label(self) -> str:
        """Return ``"Name (SYM)"`` when a distinct name is known, else the symbol."""

        if self.display_name and self.display_name != self.symbol:
            return f"{self.display_name} ({self.symbol})"
        return self.symbol

    @classmethod
    def from_mapping(cls, raw: Mapping[str, Any]) -> "StockPosition":
        """Build a position from a store payload, tolerating missing fields."""

        symbol = str(raw.get("symbol") or "")
        name = raw.get("display_name") or raw.get("name") or ""
        ltp = raw.get("last_traded_price", raw.get("ltp"))
        sell_date = raw.get("sell_time")
        if sell_date is None:
            sell_date = raw.get("sell_date")
        return cls(
            symbol=symbol,
            display_name=str(name) or symbol,
            quantity=coerce_number(raw.get("quantity")) or 0.0,
            buy_price=coerce_number(raw.get("buy_price")) or 0.0,
            last_traded_price=coerce_number(ltp),
            sell_price=coerce_number(raw.get("sell_price")),
            sell_date=sell_date,
        )


@dataclass(frozen=True)
class Basket:
    """A named, dated collection of positions bought together."""

    id: str
    name: str
    created_at: DateLike
    stocks: Tuple[StockPosition, ...] = ()

    @classmethod
    def from_mapping(cls, raw: Mapping[str, Any]) -> "Basket":
        stocks = raw.get("stocks") or ()
        return cls(
            id=str(raw.get("id") or ""),
            name=str(raw.get("name") or ""),
            created_at=raw.get("created_at"),
            stocks=tuple(
                item if isinstance(item, StockPosition) else StockPosition.from_mapping(item)
                for item in stocks
            ),
        )

    def with_prices(self, prices: Mapping[str, float]) -> "Basket":
        """Return a copy whose positions carry the supplied last traded prices."""

        refreshed = []
        for stock in self.stocks:
            price = coerce_number(prices.get(stock.symbol))
            if price is None:
                refreshed.append(stock)
            else:
                refreshed.append(replace(stock, last_traded_price=price))
        return replace(self, stocks=tuple(refreshed))


@dataclass(frozen=True)
class CashflowEvent:
    """A dated signed cash movement; negative means capital deployed."""

    amount: float
    date: date


@dataclass(frozen=True)
class AllocationCandidate:
    symbol: str
    price: float
    display_name: str = ""


@dataclass(frozen=True)
class AllocationLine:
    symbol: str
    display_name: str
    price: float
    quantity: int
    cost: float


@dataclass(frozen=True)
class AllocationSummary:
    amount: float
    total_cost: float
    leftover: float
    lines: Tuple[AllocationLine, ...] = ()


@dataclass(frozen=True)
class PositionValuation:
    """Derived valuation of a single position."""

    symbol: str
    label: str
    quantity: float
    effective_price: float
    invested: float
    current_value: float
    return_abs: float
    return_pct: float
    exited: bool
    sign: Sign


@dataclass(frozen=True)
class BasketValuation:
    """Aggregate valuation of a basket plus its per-position breakdown."""

    basket_id: str
    name: str
    invested: float
    current_value: float
    return_abs: float
    return_pct: float
    fully_exited: bool
    sign: Sign
    positions: Tuple[PositionValuation, ...] = field(default_factory=tuple)


@dataclass(frozen=True)
class PortfolioSummary:
    """Dashboard totals across baskets."""

    total_invested: float
    total_current_value: float
    total_return: float
    total_return_pct: float
    xirr: float
    cashflows: Sequence[CashflowEvent] = field(default_factory=tuple)


@dataclass(frozen=True)
class ExitLeg:
    symbol: str
    sell_price: float


@dataclass(frozen=True)
class ExitPlan:
    """Payload handed to the store to exit the open positions of a basket."""

    basket_id: str
    sell_date: date
    stocks: Tuple[ExitLeg, ...]
