"""Pydantic schema exports."""

from .allocation import (
    AllocationCandidateSchema,
    AllocationLineSchema,
    AllocationRequest,
    AllocationResponse,
)
from .basket import (
    BasketSchema,
    BasketValuationSchema,
    CashflowSchema,
    ExitLegSchema,
    ExitPlanSchema,
    PortfolioSummaryRequest,
    PortfolioSummarySchema,
    PositionValuationSchema,
    StockPositionSchema,
)
from .xirr import XirrRequest, XirrResponse

__all__ = [
    "AllocationCandidateSchema",
    "AllocationLineSchema",
    "AllocationRequest",
    "AllocationResponse",
    "BasketSchema",
    "BasketValuationSchema",
    "CashflowSchema",
    "ExitLegSchema",
    "ExitPlanSchema",
    "PortfolioSummaryRequest",
    "PortfolioSummarySchema",
    "PositionValuationSchema",
    "StockPositionSchema",
    "XirrRequest",
    "XirrResponse",
]
