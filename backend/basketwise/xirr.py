"""Money-weighted annualised return (XIRR) via Newton-Raphson."""
from __future__ import annotations

import logging
import math
from typing import List, Sequence, Tuple

from .models import CashflowEvent
from .pricing import coerce_number

logger = logging.getLogger(__name__)

INITIAL_GUESS = 0.10
NPV_TOLERANCE = 1e-6
MAX_ITERATIONS = 100
DAYS_PER_YEAR = 365.0
DISPLAY_FLOOR = 0.005


class _Blowup(ArithmeticError):
    """Raised internally when the rate leaves the region where NPV is real and finite."""


def _year_fractions(cashflows: Sequence[CashflowEvent]) -> List[Tuple[float, float]]:
    ordered = sorted(cashflows, key=lambda cf: cf.date)
    start = ordered[0].date
    return [
        (coerce_number(cf.amount) or 0.0, (cf.date - start).days / DAYS_PER_YEAR)
        for cf in ordered
    ]


def _npv(rate: float, flows: Sequence[Tuple[float, float]]) -> float:
    base = 1.0 + rate
    if base <= 0:
        raise _Blowup(f"rate {rate!r} at or below -100%")
    try:
        return sum(amount / base**t for amount, t in flows)
    except (OverflowError, ZeroDivisionError) as exc:
        raise _Blowup(str(exc)) from exc


def _dnpv(rate: float, flows: Sequence[Tuple[float, float]]) -> float:
    base = 1.0 + rate
    if base <= 0:
        raise _Blowup(f"rate {rate!r} at or below -100%")
    try:
        return sum(-t * amount / base ** (t + 1) for amount, t in flows)
    except (OverflowError, ZeroDivisionError) as exc:
        raise _Blowup(str(exc)) from exc


def _finalize(percent: float) -> float:
    if not math.isfinite(percent):
        return 0.0
    if abs(percent) < DISPLAY_FLOOR:
        return 0.0
    return percent


def compute_xirr(cashflows: Sequence[CashflowEvent]) -> float:
    """Return the annualised internal rate of return as a percentage.

    Negative amounts are money deployed, positive amounts money returned (or
    current value treated as a notional sale). Degenerate inputs (fewer than
    two events, no inflow/outflow pair, no elapsed time) and numerical
    blow-ups return ``0.0``. A run that exhausts the iteration cap returns the
    last rate computed, which callers must treat as approximate.
    """

    if len(cashflows) < 2:
        return 0.0
    flows = _year_fractions(cashflows)
    if not (any(amount > 0 for amount, _ in flows) and any(amount < 0 for amount, _ in flows)):
        return 0.0
    if flows[-1][1] == 0:
        # every event on one date: reported as 0 even when NPV at the seed is non-zero
        return 0.0

    rate = INITIAL_GUESS
    try:
        for _ in range(MAX_ITERATIONS):
            value = _npv(rate, flows)
            if abs(value) < NPV_TOLERANCE:
                return _finalize(rate * 100)
            derivative = _dnpv(rate, flows)
            if derivative == 0:
                logger.debug("XIRR derivative vanished at rate %s", rate)
                break
            rate = rate - value / derivative
        else:
            logger.debug("XIRR did not converge after %s iterations; last rate %s", MAX_ITERATIONS, rate)
    except _Blowup as exc:
        logger.debug("XIRR iteration diverged: %s", exc)
        return 0.0
    return _finalize(rate * 100)


__all__ = ["compute_xirr", "INITIAL_GUESS", "NPV_TOLERANCE", "MAX_ITERATIONS"]
