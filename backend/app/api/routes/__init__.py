"""Route registration helpers."""

from __future__ import annotations

from fastapi import APIRouter

from .allocations import router as allocations_router
from .baskets import router as baskets_router
from .portfolio import router as portfolio_router
from .xirr import router as xirr_router

api_router = APIRouter()
api_router.include_router(baskets_router, prefix="/baskets", tags=["baskets"])
api_router.include_router(portfolio_router, prefix="/portfolio", tags=["portfolio"])
api_router.include_router(allocations_router, prefix="/allocations", tags=["allocations"])
api_router.include_router(xirr_router, prefix="/xirr", tags=["xirr"])

__all__ = ["api_router"]
