from __future__ import annotations
import math
from dataclasses import dataclass
from typing import Any, Mapping, Tuple, Union

from premium_range.scenario.inputs import CalcInput, InputValidationError, ValidationError, validate_input
from premium_range.scenario.notes import Note, select_note


@dataclass(frozen=True)
class CalcResult:
    # normalized input echo
    amount: float
    premium_pct: float
    settle_days: int
    current_day: int
    sell_delay_days: int
    limit_pct: float

    remaining_days: int   # baseline days until sellable
    effective_days: int   # remaining + sell delay; compounding window

    min_price: float
    max_price: float
    min_roi: float
    max_roi: float
    min_profit: float
    max_profit: float
    min_value: float
    max_value: float

    @property
    def note(self) -> Note:
        return select_note(self.premium_pct / 100.0, self.sell_delay_days)


def exposure_days(settle_days: int, current_day: int, sell_delay_days: int) -> Tuple[int, int]:
    """Return (remaining_days, effective_days) for a T+N cycle."""
    remaining = max(settle_days - (current_day - 1), 0)
    return remaining, remaining + sell_delay_days


def _compound(base: float, days: int) -> float:
    try:
        return base ** days
    except OverflowError:
        # day counts beyond float range: the power tends to 0 or diverges
        return 0.0 if abs(base) < 1.0 else math.inf


def price_bounds(premium_pct: float, limit_pct: float, days: int) -> Tuple[float, float]:
    """Terminal normalized price (NAV = 1) after `days` consecutive
    limit-down and limit-up sessions, starting from today's market price.
    """
    m0 = 1.0 * (1.0 + premium_pct / 100.0)
    limit = limit_pct / 100.0
    return m0 * _compound(1.0 - limit, days), m0 * _compound(1.0 + limit, days)


def compute(i: CalcInput) -> CalcResult:
    remaining, effective = exposure_days(i.settle_days, i.current_day, i.sell_delay_days)
    min_price, max_price = price_bounds(i.premium_pct, i.limit_pct, effective)

    # ROI relative to subscription cost (NAV = 1)
    min_roi = min_price - 1.0
    max_roi = max_price - 1.0
    min_profit = i.amount * min_roi
    max_profit = i.amount * max_roi

    return CalcResult(
        amount=i.amount,
        premium_pct=i.premium_pct,
        settle_days=i.settle_days,
        current_day=i.current_day,
        sell_delay_days=i.sell_delay_days,
        limit_pct=i.limit_pct,
        remaining_days=remaining,
        effective_days=effective,
        min_price=min_price,
        max_price=max_price,
        min_roi=min_roi,
        max_roi=max_roi,
        min_profit=min_profit,
        max_profit=max_profit,
        min_value=i.amount + min_profit,
        max_value=i.amount + max_profit,
    )


def calculate(raw: Mapping[str, Any]) -> Union[CalcResult, ValidationError]:
    """Validate raw field values and compute the worst/best case range.

    `raw` maps field names (amount, premium_pct, settle_days, current_day,
    sell_delay_days, limit_pct) to text or numbers; missing keys count as
    absent. Never raises for bad input: the first failing field comes back
    as a ValidationError instead of a CalcResult.
    """
    try:
        i = validate_input(raw)
    except InputValidationError as e:
        return e.to_error()
    return compute(i)
