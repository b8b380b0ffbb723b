from __future__ import annotations
import math
from dataclasses import dataclass
from enum import Enum
from typing import Any, Dict, Mapping, Optional, Tuple, Union

from premium_range.scenario.parsing import parse_number


class ErrorKind(str, Enum):
    INVALID_AMOUNT = "InvalidAmount"
    INVALID_PREMIUM = "InvalidPremium"
    INVALID_SETTLE_DAYS = "InvalidSettleDays"
    INVALID_CURRENT_DAY = "InvalidCurrentDay"
    INVALID_SELL_DELAY = "InvalidSellDelay"
    INVALID_LIMIT = "InvalidLimit"


@dataclass(frozen=True)
class FieldPolicy:
    kind: ErrorKind
    message: str
    default: Optional[int] = None  # applied only when the parsed value is non-finite
    floor: bool = False            # integer field, floored after defaulting
    lower: Optional[float] = None
    lower_inclusive: bool = True
    upper: Optional[float] = None  # always exclusive


# Validation order matters: the first failing field is the one reported.
FIELD_POLICIES: Dict[str, FieldPolicy] = {
    "amount": FieldPolicy(
        kind=ErrorKind.INVALID_AMOUNT,
        message="请输入有效的“申购金额”（大于 0 的数字）。",
        lower=0.0, lower_inclusive=False,
    ),
    "premium_pct": FieldPolicy(
        kind=ErrorKind.INVALID_PREMIUM,
        message="请输入有效的“溢价百分比”（例如 5 表示 5%）。可为负数。",
    ),
    "settle_days": FieldPolicy(
        kind=ErrorKind.INVALID_SETTLE_DAYS,
        message="请输入有效的 “T+N” 的 N（非负整数）。",
        default=3, floor=True, lower=0,
    ),
    "current_day": FieldPolicy(
        kind=ErrorKind.INVALID_CURRENT_DAY,
        message="请输入有效的“当前是申购第几天”（从 1 开始的正整数）。",
        default=1, floor=True, lower=1,
    ),
    "sell_delay_days": FieldPolicy(
        kind=ErrorKind.INVALID_SELL_DELAY,
        message="请输入有效的“卖出延迟天数”（非负整数）。",
        default=0, floor=True, lower=0,
    ),
    "limit_pct": FieldPolicy(
        kind=ErrorKind.INVALID_LIMIT,
        message="请输入有效的“每日涨跌停幅度”，范围建议在 (0, 100) 之间。",
        lower=0.0, lower_inclusive=False, upper=100.0,
    ),
}


@dataclass(frozen=True)
class CalcInput:
    amount: float
    premium_pct: float
    settle_days: int      # N in T+N
    current_day: int      # 1 = today
    sell_delay_days: int
    limit_pct: float


@dataclass(frozen=True)
class ValidationError:
    kind: ErrorKind
    message: str
    field: str


class InputValidationError(ValueError):
    def __init__(self, field: str, policy: FieldPolicy):
        super().__init__(policy.message)
        self.field = field
        self.kind = policy.kind

    def to_error(self) -> ValidationError:
        return ValidationError(kind=self.kind, message=str(self), field=self.field)


def normalize_field(name: str, raw: Any) -> Union[int, float]:
    """Parse, default, floor and range-check one field per FIELD_POLICIES."""
    policy = FIELD_POLICIES[name]
    value: Union[int, float] = parse_number(raw)
    if not math.isfinite(value) and policy.default is not None:
        value = policy.default
    if policy.floor and math.isfinite(value):
        value = math.floor(value)
    if not math.isfinite(value):
        raise InputValidationError(name, policy)
    if policy.lower is not None:
        below = value < policy.lower if policy.lower_inclusive else value <= policy.lower
        if below:
            raise InputValidationError(name, policy)
    if policy.upper is not None and value >= policy.upper:
        raise InputValidationError(name, policy)
    return value


def validate_input(raw: Mapping[str, Any]) -> CalcInput:
    """Build a CalcInput from raw field values.

    Raises InputValidationError for the first field that fails its policy.
    """
    values = {name: normalize_field(name, raw.get(name)) for name in FIELD_POLICIES}
    return CalcInput(
        amount=float(values["amount"]),
        premium_pct=float(values["premium_pct"]),
        settle_days=int(values["settle_days"]),
        current_day=int(values["current_day"]),
        sell_delay_days=int(values["sell_delay_days"]),
        limit_pct=float(values["limit_pct"]),
    )


def field_names() -> Tuple[str, ...]:
    return tuple(FIELD_POLICIES)
