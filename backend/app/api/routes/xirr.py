"""XIRR calculation endpoint."""

from __future__ import annotations

from fastapi import APIRouter

from app.schemas import XirrRequest, XirrResponse
from basketwise import CashflowEvent, compute_xirr

router = APIRouter()


@router.post("", response_model=XirrResponse)
async def post_xirr(request: XirrRequest) -> XirrResponse:
    """Return the annualised return of the supplied cashflows, in percent."""

    cashflows = [CashflowEvent(amount=cf.amount, date=cf.date) for cf in request.cashflows]
    return XirrResponse(xirr=compute_xirr(cashflows))


__all__ = ["post_xirr"]
