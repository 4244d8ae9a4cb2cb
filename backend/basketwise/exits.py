"""Build the payload that exits the open positions of a basket."""
from __future__ import annotations

from datetime import date
from typing import Mapping

from .models import Basket, ExitLeg, ExitPlan
from .pricing import coerce_number, is_exited
from .valuation import is_fully_exited


class ExitNotAllowed(ValueError):
    """Raised when a basket has nothing left to exit."""


def plan_basket_exit(basket: Basket, live_prices: Mapping[str, float], on: date) -> ExitPlan:
    """Price every open position for sale on ``on``.

    Each leg sells at the freshly fetched price when one is available, falling
    back to the stored last traded price and then the buy price. Positions
    that were already exited are left untouched.
    """

    if not basket.stocks:
        raise ExitNotAllowed(f"Basket {basket.id} has no stocks to exit")
    if is_fully_exited(basket):
        raise ExitNotAllowed(f"Basket {basket.id} is already exited")

    legs = []
    for stock in basket.stocks:
        if is_exited(stock):
            continue
        price = coerce_number(live_prices.get(stock.symbol))
        if price is None:
            price = coerce_number(stock.last_traded_price)
        if price is None:
            price = coerce_number(stock.buy_price) or 0.0
        legs.append(ExitLeg(symbol=stock.symbol, sell_price=price))
    return ExitPlan(basket_id=basket.id, sell_date=on, stocks=tuple(legs))


__all__ = ["ExitNotAllowed", "plan_basket_exit"]
