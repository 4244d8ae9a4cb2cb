"""Investment allocation endpoint."""

from __future__ import annotations

import logging

from fastapi import APIRouter

from app.schemas import AllocationLineSchema, AllocationRequest, AllocationResponse
from basketwise import AllocationCandidate, allocate, summarize_allocation

router = APIRouter()
logger = logging.getLogger(__name__)


@router.post("", response_model=AllocationResponse)
def post_allocation(request: AllocationRequest) -> AllocationResponse:
    """Split ``amount`` into whole shares across the candidates."""

    candidates = [
        AllocationCandidate(symbol=c.symbol, price=c.price, display_name=c.name or c.symbol)
        for c in request.candidates
    ]
    summary = summarize_allocation(request.amount, allocate(request.amount, candidates))
    logger.debug(
        "Allocated %s of %s across %s candidates", summary.total_cost, summary.amount, len(candidates)
    )
    return AllocationResponse(
        amount=summary.amount,
        total_cost=summary.total_cost,
        leftover=summary.leftover,
        lines=[
            AllocationLineSchema(
                symbol=line.symbol,
                name=line.display_name,
                price=line.price,
                quantity=line.quantity,
                cost=line.cost,
            )
            for line in summary.lines
        ],
    )


__all__ = ["post_allocation"]
