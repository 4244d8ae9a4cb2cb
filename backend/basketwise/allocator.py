"""Split a cash amount into whole-share quantities across candidate stocks."""
from __future__ import annotations

import math
from dataclasses import dataclass
from typing import List, Sequence

from .models import AllocationCandidate, AllocationLine, AllocationSummary
from .pricing import coerce_number

LEFTOVER_TOLERANCE = 0.01
PRICE_DECIMALS = 2

_CENTS = 10**PRICE_DECIMALS
_TOLERANCE_CENTS = LEFTOVER_TOLERANCE * _CENTS


@dataclass
class _Slot:
    """Mutable working state for one candidate during allocation.

    Money is tracked in whole cents so cost comparisons between slots are exact.
    """

    candidate: AllocationCandidate
    price: float
    price_cents: int
    quantity: int = 0

    @property
    def cost_cents(self) -> int:
        return self.quantity * self.price_cents

    def units_below(self, level: int) -> int:
        """Shares this slot receives before its cost reaches ``level`` cents."""

        gap = level - self.cost_cents
        if gap <= 0:
            return 0
        return -(-gap // self.price_cents)


def _make_slot(candidate: AllocationCandidate, base_share: float) -> _Slot:
    price = round(coerce_number(candidate.price) or 0.0, PRICE_DECIMALS)
    slot = _Slot(candidate=candidate, price=price, price_cents=max(int(round(price * _CENTS)), 0))
    if slot.price_cents > 0:
        slot.quantity = math.floor(base_share / price)
    return slot


def _fill_to_level(slots: Sequence[_Slot], limit: float) -> int:
    """Grant, in one step, every share the greedy pass hands out before spending more than ``limit`` cents.

    The greedy pass always tops up the slot with the lowest cost, so the shares
    it grants are exactly those whose pre-purchase cost lies below some level.
    A binary search finds the highest level whose shares fit in ``limit``.
    Returns the cents spent.
    """

    def spent(level: int) -> int:
        return sum(slot.units_below(level) * slot.price_cents for slot in slots)

    low = min(slot.cost_cents for slot in slots)
    high = max(slot.cost_cents for slot in slots) + int(limit) + 1
    while high - low > 1:
        middle = (low + high) // 2
        if spent(middle) <= limit:
            low = middle
        else:
            high = middle

    granted = 0
    for slot in slots:
        units = slot.units_below(low)
        slot.quantity += units
        granted += units * slot.price_cents
    return granted


def allocate(amount: float, candidates: Sequence[AllocationCandidate]) -> List[AllocationLine]:
    """Allocate ``amount`` across ``candidates`` without exceeding it.

    Every candidate first gets ``floor((amount / N) / price)`` shares. The
    leftover is then handed out one share at a time, always to the cheapest
    holding (by current cost) whose price still fits, until no share fits or
    less than a cent remains. Candidates with a non-positive price receive
    nothing. The output keeps the input order.

    While every affordable candidate stays affordable the one-at-a-time
    sequence is fast-forwarded with :func:`_fill_to_level`, so the number of
    rounds is bounded by the number of candidates rather than the amount.
    """

    budget = coerce_number(amount) or 0.0
    if not candidates or budget <= 0:
        return []

    base_share = budget / len(candidates)
    slots = [_make_slot(candidate, base_share) for candidate in candidates]
    remaining = round(budget * _CENTS, 6) - sum(slot.cost_cents for slot in slots)

    while remaining > _TOLERANCE_CENTS:
        affordable = [slot for slot in slots if 0 < slot.price_cents <= remaining]
        if not affordable:
            break
        dearest = max(slot.price_cents for slot in affordable)
        remaining -= _fill_to_level(affordable, remaining - dearest)
        if remaining <= _TOLERANCE_CENTS:
            break
        # sorted() is stable, so equal costs keep input order
        for slot in sorted(slots, key=lambda s: s.cost_cents):
            if 0 < slot.price_cents <= remaining:
                slot.quantity += 1
                remaining -= slot.price_cents
                break

    return [
        AllocationLine(
            symbol=slot.candidate.symbol,
            display_name=slot.candidate.display_name or slot.candidate.symbol,
            price=slot.price,
            quantity=slot.quantity,
            cost=slot.quantity * slot.price,
        )
        for slot in slots
    ]


def summarize_allocation(amount: float, lines: Sequence[AllocationLine]) -> AllocationSummary:
    budget = coerce_number(amount) or 0.0
    total_cost = sum(line.cost for line in lines)
    return AllocationSummary(
        amount=budget,
        total_cost=total_cost,
        leftover=max(budget - total_cost, 0.0),
        lines=tuple(lines),
    )


__all__ = ["allocate", "summarize_allocation", "LEFTOVER_TOLERANCE"]
