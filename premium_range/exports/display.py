from __future__ import annotations
from dataclasses import dataclass, asdict
from typing import Any, Dict

from premium_range.exports.formatting import fmt_cny, fmt_pct, sign_of
from premium_range.scenario.engine import CalcResult


@dataclass(frozen=True)
class ScenarioView:
    value: str
    profit: str
    roi: str
    profit_sign: str
    roi_sign: str


@dataclass(frozen=True)
class ResultView:
    badge: str
    range_text: str
    worst: ScenarioView
    best: ScenarioView
    note: str

    def to_dict(self) -> Dict[str, Any]:
        return asdict(self)


def meta_badge(r: CalcResult) -> str:
    return (
        f"T+{r.settle_days} · 第{r.current_day}天 · 剩余{r.remaining_days}天"
        f" · 延迟+{r.sell_delay_days} · 有效{r.effective_days}天"
    )


def range_text(r: CalcResult) -> str:
    return (
        f"有效天数：{r.effective_days}（剩余 {r.remaining_days} + 延迟 {r.sell_delay_days}） · "
        f"区间：{fmt_cny(r.min_profit)}（{fmt_pct(r.min_roi)}） ～ "
        f"{fmt_cny(r.max_profit)}（{fmt_pct(r.max_roi)}）"
    )


def render(r: CalcResult) -> ResultView:
    """Project a CalcResult into display strings and sign classes."""
    worst = ScenarioView(
        value=fmt_cny(r.min_value),
        profit=fmt_cny(r.min_profit),
        roi=fmt_pct(r.min_roi),
        profit_sign=sign_of(r.min_profit),
        roi_sign=sign_of(r.min_roi),
    )
    best = ScenarioView(
        value=fmt_cny(r.max_value),
        profit=fmt_cny(r.max_profit),
        roi=fmt_pct(r.max_roi),
        profit_sign=sign_of(r.max_profit),
        roi_sign=sign_of(r.max_roi),
    )
    return ResultView(
        badge=meta_badge(r),
        range_text=range_text(r),
        worst=worst,
        best=best,
        note=r.note.text,
    )
