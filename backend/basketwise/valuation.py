"""Position, basket and portfolio valuation."""
from __future__ import annotations

import logging
from datetime import date
from typing import Iterable, List, Sequence

from .models import (
    Basket,
    BasketValuation,
    CashflowEvent,
    PortfolioSummary,
    PositionValuation,
    StockPosition,
)
from .pricing import classify_sign, coerce_number, effective_price, is_exited, parse_date
from .xirr import compute_xirr

logger = logging.getLogger(__name__)


def _return_pct(return_abs: float, invested: float) -> float:
    if invested == 0:
        return 0.0
    return return_abs / invested * 100


def _invested(stock: StockPosition) -> float:
    quantity = coerce_number(stock.quantity) or 0.0
    return quantity * (coerce_number(stock.buy_price) or 0.0)


def value_position(stock: StockPosition) -> PositionValuation:
    """Value a single position at its effective price."""

    quantity = coerce_number(stock.quantity) or 0.0
    price = effective_price(stock)
    invested = _invested(stock)
    current_value = quantity * price
    return_abs = current_value - invested
    return PositionValuation(
        symbol=stock.symbol,
        label=stock.label,
        quantity=quantity,
        effective_price=price,
        invested=invested,
        current_value=current_value,
        return_abs=return_abs,
        return_pct=_return_pct(return_abs, invested),
        exited=is_exited(stock),
        sign=classify_sign(return_abs),
    )


def is_fully_exited(basket: Basket) -> bool:
    return bool(basket.stocks) and all(is_exited(stock) for stock in basket.stocks)


def value_basket(basket: Basket) -> BasketValuation:
    """Aggregate a basket from its positions.

    The basket return is derived from the summed invested and current values,
    never by adding per-position percentages.
    """

    positions = tuple(value_position(stock) for stock in basket.stocks)
    invested = sum(p.invested for p in positions)
    current_value = sum(p.current_value for p in positions)
    return_abs = current_value - invested
    return BasketValuation(
        basket_id=basket.id,
        name=basket.name,
        invested=invested,
        current_value=current_value,
        return_abs=return_abs,
        return_pct=_return_pct(return_abs, invested),
        fully_exited=is_fully_exited(basket),
        sign=classify_sign(return_abs),
        positions=positions,
    )


def build_portfolio_cashflows(baskets: Iterable[Basket], today: date) -> List[CashflowEvent]:
    """Flatten baskets into the dated cashflow stream used for XIRR.

    Each position is bought on its basket's creation date. Exited positions
    return their sale proceeds on the sell date; open positions are marked to
    market as a notional sale on ``today``.
    """

    cashflows: List[CashflowEvent] = []
    for basket in baskets:
        bought_on = parse_date(basket.created_at)
        if bought_on is None:
            logger.warning("Skipping cashflows for basket %s: unparseable created_at %r", basket.id, basket.created_at)
            continue
        for stock in basket.stocks:
            quantity = coerce_number(stock.quantity) or 0.0
            invested = _invested(stock)
            if invested:
                cashflows.append(CashflowEvent(amount=-invested, date=bought_on))
            if is_exited(stock):
                sold_on = parse_date(stock.sell_date)
                proceeds = quantity * effective_price(stock)
                if proceeds and sold_on is not None:
                    cashflows.append(CashflowEvent(amount=proceeds, date=sold_on))
            else:
                value = quantity * effective_price(stock)
                if value:
                    cashflows.append(CashflowEvent(amount=value, date=today))
    return cashflows


def aggregate_portfolio(baskets: Sequence[Basket], today: date) -> PortfolioSummary:
    """Dashboard totals across baskets.

    Exited positions have left the portfolio, so they are excluded from the
    invested and current totals, but their realised proceeds still feed the
    XIRR cashflow stream. Open positions are treated as sold on ``today``.
    """

    total_invested = 0.0
    total_current = 0.0
    for basket in baskets:
        for stock in basket.stocks:
            if is_exited(stock):
                continue
            valuation = value_position(stock)
            total_invested += valuation.invested
            total_current += valuation.current_value
    cashflows = build_portfolio_cashflows(baskets, today)
    total_return = total_current - total_invested
    return PortfolioSummary(
        total_invested=total_invested,
        total_current_value=total_current,
        total_return=total_return,
        total_return_pct=_return_pct(total_return, total_invested),
        xirr=compute_xirr(cashflows),
        cashflows=tuple(cashflows),
    )


__all__ = [
    "value_position",
    "value_basket",
    "is_fully_exited",
    "build_portfolio_cashflows",
    "aggregate_portfolio",
]
