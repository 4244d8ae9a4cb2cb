"""Core package for the basket valuation and allocation engine."""

from .allocator import allocate, summarize_allocation
from .exits import ExitNotAllowed, plan_basket_exit
from .models import (
    AllocationCandidate,
    AllocationLine,
    Basket,
    CashflowEvent,
    StockPosition,
)
from .pricing import Sign, effective_price, is_exited
from .valuation import aggregate_portfolio, value_basket, value_position
from .xirr import compute_xirr

__all__ = [
    "AllocationCandidate",
    "AllocationLine",
    "Basket",
    "CashflowEvent",
    "ExitNotAllowed",
    "Sign",
    "StockPosition",
    "aggregate_portfolio",
    "allocate",
    "compute_xirr",
    "effective_price",
    "is_exited",
    "plan_basket_exit",
    "summarize_allocation",
    "value_basket",
    "value_position",
]
