"""Schemas for the XIRR endpoint."""

from __future__ import annotations

from pydantic import BaseModel, Field

from .basket import CashflowSchema


class XirrRequest(BaseModel):
    cashflows: list[CashflowSchema] = Field(
        default_factory=list,
        description="Negative amounts are money invested, positive amounts money returned",
    )


class XirrResponse(BaseModel):
    xirr: float = Field(..., description="Annualised return in percent")


__all__ = ["XirrRequest", "XirrResponse"]
