"""Shared pricing primitives.

Every place that needs a "current" price for a position goes through
:func:`effective_price`, and every exit check goes through :func:`is_exited`.
Inputs arrive from an external store and may be missing or malformed, so the
helpers here coalesce instead of raising.
"""
from __future__ import annotations

import math
from datetime import date, datetime
from decimal import Decimal
from enum import Enum
from typing import TYPE_CHECKING, Any, Optional

if TYPE_CHECKING:  # pragma: no cover
    from .models import StockPosition


class Sign(str, Enum):
    POSITIVE = "positive"
    NEGATIVE = "negative"
    ZERO = "zero"


def coerce_number(value: Any) -> Optional[float]:
    """Return ``value`` as a finite float, or ``None`` when it is not one."""

    if value is None or isinstance(value, bool):
        return None
    if isinstance(value, Decimal):
        if not value.is_finite():
            return None
        number = float(value)
    elif isinstance(value, (int, float)):
        number = float(value)
    elif isinstance(value, str):
        text = value.strip()
        if not text:
            return None
        try:
            number = float(text)
        except ValueError:
            return None
    else:
        return None
    if not math.isfinite(number):
        return None
    return number


def parse_date(value: Any) -> Optional[date]:
    """Parse an ISO calendar date or datetime; ``None`` when unparseable."""

    if isinstance(value, datetime):
        return value.date()
    if isinstance(value, date):
        return value
    if not isinstance(value, str):
        return None
    text = value.strip()
    if not text:
        return None
    try:
        return date.fromisoformat(text)
    except ValueError:
        pass
    try:
        # Python < 3.11 rejects the "Z" suffix
        return datetime.fromisoformat(text.replace("Z", "+00:00")).date()
    except ValueError:
        return None


def is_exited(stock: "StockPosition") -> bool:
    """A position is exited only with both a finite sell price and a valid sell date."""

    return coerce_number(stock.sell_price) is not None and parse_date(stock.sell_date) is not None


def effective_price(stock: "StockPosition") -> float:
    """Sell price if exited, else last traded price, else buy price."""

    if is_exited(stock):
        return coerce_number(stock.sell_price) or 0.0
    ltp = coerce_number(stock.last_traded_price)
    if ltp is not None:
        return ltp
    return coerce_number(stock.buy_price) or 0.0


def classify_sign(value: float) -> Sign:
    if value > 0:
        return Sign.POSITIVE
    if value < 0:
        return Sign.NEGATIVE
    return Sign.ZERO


def _sign_prefix(value: float) -> str:
    sign = classify_sign(value)
    if sign is Sign.POSITIVE:
        return "+"
    if sign is Sign.NEGATIVE:
        return "-"
    return ""


def format_signed_amount(value: float, currency_symbol: str = "₹") -> str:
    """Render ``+₹1,234.50`` / ``-₹10.00`` / ``₹0.00``; zero carries no sign."""

    return f"{_sign_prefix(value)}{currency_symbol}{abs(value):,.2f}"


def format_signed_percent(value: float) -> str:
    return f"{_sign_prefix(value)}{abs(value):.2f}%"


__all__ = [
    "Sign",
    "coerce_number",
    "parse_date",
    "is_exited",
    "effective_price",
    "classify_sign",
    "format_signed_amount",
    "format_signed_percent",
]
