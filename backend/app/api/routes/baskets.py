"""Basket valuation and exit planning endpoints."""

from __future__ import annotations

import logging

from fastapi import APIRouter, Depends, HTTPException, status

from app.api.dependencies.prices import get_app_settings, get_price_source
from app.config import AppSettings
from app.schemas import (
    BasketSchema,
    BasketValuationSchema,
    ExitLegSchema,
    ExitPlanSchema,
    PositionValuationSchema,
)
from app.services.prices import PriceSource, refresh_basket_prices
from basketwise import ExitNotAllowed, plan_basket_exit, value_basket
from basketwise.models import BasketValuation, PositionValuation
from basketwise.pricing import format_signed_amount, format_signed_percent

router = APIRouter()
logger = logging.getLogger(__name__)


def _position_schema(position: PositionValuation, currency_symbol: str) -> PositionValuationSchema:
    return PositionValuationSchema(
        symbol=position.symbol,
        label=position.label,
        quantity=position.quantity,
        effective_price=position.effective_price,
        invested=position.invested,
        current_value=position.current_value,
        return_abs=position.return_abs,
        return_pct=position.return_pct,
        exited=position.exited,
        sign=position.sign.value,
        return_display=format_signed_amount(position.return_abs, currency_symbol),
        return_pct_display=format_signed_percent(position.return_pct),
    )


def _basket_schema(valuation: BasketValuation, currency_symbol: str) -> BasketValuationSchema:
    return BasketValuationSchema(
        basket_id=valuation.basket_id,
        name=valuation.name,
        invested=valuation.invested,
        current_value=valuation.current_value,
        return_abs=valuation.return_abs,
        return_pct=valuation.return_pct,
        fully_exited=valuation.fully_exited,
        sign=valuation.sign.value,
        return_display=format_signed_amount(valuation.return_abs, currency_symbol),
        return_pct_display=format_signed_percent(valuation.return_pct),
        positions=[_position_schema(p, currency_symbol) for p in valuation.positions],
    )


@router.post("/valuation", response_model=BasketValuationSchema)
async def post_basket_valuation(
    payload: BasketSchema,
    settings: AppSettings = Depends(get_app_settings),
) -> BasketValuationSchema:
    """Value a basket snapshot as supplied, without fetching prices."""

    return _basket_schema(value_basket(payload.to_domain()), settings.currency_symbol)


@router.post("/exit-plan", response_model=ExitPlanSchema)
async def post_exit_plan(
    payload: BasketSchema,
    settings: AppSettings = Depends(get_app_settings),
    price_source: PriceSource = Depends(get_price_source),
) -> ExitPlanSchema:
    """Fetch live prices and build the store payload that exits the basket."""

    basket = payload.to_domain()
    refreshed, live_prices = await refresh_basket_prices(basket, price_source)
    try:
        plan = plan_basket_exit(refreshed, live_prices, settings.today())
    except ExitNotAllowed as exc:
        raise HTTPException(status_code=status.HTTP_409_CONFLICT, detail=str(exc)) from exc
    logger.info("Planned exit of %s positions for basket %s", len(plan.stocks), plan.basket_id)
    return ExitPlanSchema(
        basket_id=plan.basket_id,
        sell_date=plan.sell_date,
        stocks=[ExitLegSchema(symbol=leg.symbol, sell_price=leg.sell_price) for leg in plan.stocks],
        live_prices=live_prices,
    )


__all__ = ["post_basket_valuation", "post_exit_plan"]
