"""Pydantic schemas for basket snapshots, valuations and exits."""

from __future__ import annotations

from datetime import date
from typing import Union

from pydantic import BaseModel, Field

from basketwise.models import Basket

# Store payloads are loosely typed; malformed numbers are coalesced by the engine.
NumberLike = Union[float, str, None]


class StockPositionSchema(BaseModel):
    symbol: str = Field(..., examples=["TCS"])
    name: str | None = Field(default=None, description="Display name; defaults to the symbol")
    quantity: NumberLike = None
    buy_price: NumberLike = None
    ltp: NumberLike = Field(default=None, description="Last traded price")
    sell_price: NumberLike = None
    sell_date: str | None = Field(default=None, examples=["2024-06-30"])
    sell_time: str | None = Field(default=None, description="Store alias of sell_date")


class BasketSchema(BaseModel):
    id: str
    name: str = ""
    created_at: str | None = Field(default=None, examples=["2024-01-15T09:30:00+05:30"])
    stocks: list[StockPositionSchema] = Field(default_factory=list)

    def to_domain(self) -> Basket:
        return Basket.from_mapping(self.model_dump())

    class Config:
        json_schema_extra = {
            "example": {
                "id": "b-1",
                "name": "IT leaders",
                "created_at": "2024-01-15T09:30:00+05:30",
                "stocks": [
                    {"symbol": "TCS", "name": "Tata Consultancy", "quantity": 2, "buy_price": 3500, "ltp": 3900},
                    {"symbol": "INFY", "quantity": 5, "buy_price": 1500, "sell_price": 1650, "sell_date": "2024-06-30"},
                ],
            }
        }


class PositionValuationSchema(BaseModel):
    symbol: str
    label: str
    quantity: float
    effective_price: float
    invested: float
    current_value: float
    return_abs: float
    return_pct: float
    exited: bool
    sign: str
    return_display: str
    return_pct_display: str


class BasketValuationSchema(BaseModel):
    basket_id: str
    name: str
    invested: float
    current_value: float
    return_abs: float
    return_pct: float
    fully_exited: bool
    sign: str
    return_display: str
    return_pct_display: str
    positions: list[PositionValuationSchema]


class CashflowSchema(BaseModel):
    amount: float
    date: date


class PortfolioSummaryRequest(BaseModel):
    baskets: list[BasketSchema] = Field(default_factory=list)
    as_of: date | None = Field(default=None, description="Valuation date; defaults to today in the service timezone")


class PortfolioSummarySchema(BaseModel):
    total_invested: float
    total_current_value: float
    total_return: float
    total_return_pct: float
    xirr: float
    sign: str
    cashflows: list[CashflowSchema]


class ExitLegSchema(BaseModel):
    symbol: str
    sell_price: float


class ExitPlanSchema(BaseModel):
    basket_id: str
    sell_date: date
    stocks: list[ExitLegSchema]
    live_prices: dict[str, float] = Field(
        default_factory=dict,
        description="Prices fetched from the LTP service while planning",
    )


__all__ = [
    "BasketSchema",
    "BasketValuationSchema",
    "CashflowSchema",
    "ExitLegSchema",
    "ExitPlanSchema",
    "PortfolioSummaryRequest",
    "PortfolioSummarySchema",
    "PositionValuationSchema",
    "StockPositionSchema",
]
