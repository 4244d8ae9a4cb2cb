"""Schemas for splitting an investment amount across basket candidates."""

from __future__ import annotations

from pydantic import BaseModel, Field


class AllocationCandidateSchema(BaseModel):
    symbol: str = Field(..., examples=["TCS"])
    name: str | None = None
    price: float = Field(..., description="Live price per share")


MAX_ALLOCATION_AMOUNT = 1_000_000_000_000
MAX_ALLOCATION_CANDIDATES = 200


class AllocationRequest(BaseModel):
    amount: float = Field(..., le=MAX_ALLOCATION_AMOUNT, description="Cash to invest", examples=[10000])
    candidates: list[AllocationCandidateSchema] = Field(default_factory=list, max_length=MAX_ALLOCATION_CANDIDATES)


class AllocationLineSchema(BaseModel):
    symbol: str
    name: str
    price: float
    quantity: int
    cost: float


class AllocationResponse(BaseModel):
    amount: float
    total_cost: float
    leftover: float
    lines: list[AllocationLineSchema]


__all__ = [
    "AllocationCandidateSchema",
    "AllocationLineSchema",
    "AllocationRequest",
    "AllocationResponse",
]
