"""Dashboard totals across baskets."""

from __future__ import annotations

from fastapi import APIRouter, Depends

from app.api.dependencies.prices import get_app_settings
from app.config import AppSettings
from app.schemas import CashflowSchema, PortfolioSummaryRequest, PortfolioSummarySchema
from basketwise import aggregate_portfolio
from basketwise.pricing import classify_sign

router = APIRouter()


@router.post("/summary", response_model=PortfolioSummarySchema)
async def post_portfolio_summary(
    payload: PortfolioSummaryRequest,
    settings: AppSettings = Depends(get_app_settings),
) -> PortfolioSummarySchema:
    baskets = [basket.to_domain() for basket in payload.baskets]
    summary = aggregate_portfolio(baskets, payload.as_of or settings.today())
    return PortfolioSummarySchema(
        total_invested=summary.total_invested,
        total_current_value=summary.total_current_value,
        total_return=summary.total_return,
        total_return_pct=summary.total_return_pct,
        xirr=summary.xirr,
        sign=classify_sign(summary.total_return).value,
        cashflows=[CashflowSchema(amount=cf.amount, date=cf.date) for cf in summary.cashflows],
    )


__all__ = ["post_portfolio_summary"]
