from __future__ import annotations
from typing import List

from premium_range.exports.formatting import fmt_cny, fmt_pct, fmt_plain_number
from premium_range.scenario.engine import CalcResult

EXPORT_TITLE = "基金溢价预期收益区间（估算）"
DISCLAIMER = "备注：默认按NAV不变简化，仅用于区间理解，不构成预测。"

ASSUMPTIONS = [
    "以“申购成本 = 当日 NAV”为基准，记 NAV = 1（归一化）。",
    "当前市场价 = NAV × (1 + 溢价)。例如溢价 5%，则市场价 = 1.05。",
    "距离可卖出剩余天数：`remaining = max(N-(day-1),0)`",
    "卖出延迟（封板卖不出）按额外持有天数折算：`effective = remaining + delay`",
    "未来有效天数内市场价按涨跌停幅度复利变化："
    "最差：市场价 × (1 - limit)^effective（连续跌停）；"
    "最好：市场价 × (1 + limit)^effective（连续涨停）",
    "为了给出清晰区间，本工具默认 NAV 不变（实际 NAV 会随标的波动）。因此结果是“区间估算”，不是预测。",
]


def export_lines(r: CalcResult) -> List[str]:
    """Ordered, copy-paste friendly summary of a result.

    Line order and labels are a stable contract for downstream consumers
    (e.g. pasting into spreadsheets); append, never reorder.
    """
    return [
        EXPORT_TITLE,
        f"申购金额：{fmt_cny(r.amount)}",
        f"当前溢价：{fmt_plain_number(r.premium_pct)}%",
        f"确认周期：T+{r.settle_days}",
        f"当前第几天：第{r.current_day}天（1=今天）",
        f"距离可卖出剩余：{r.remaining_days} 天（基线）",
        f"卖出延迟：{r.sell_delay_days} 天",
        f"用于计算的有效天数：{r.effective_days} 天",
        f"每日涨跌停：{fmt_plain_number(r.limit_pct)}%",
        f"最差（连续跌停）收益：{fmt_cny(r.min_profit)}（{fmt_pct(r.min_roi)}），卖出价值：{fmt_cny(r.min_value)}",
        f"最好（连续涨停）收益：{fmt_cny(r.max_profit)}（{fmt_pct(r.max_roi)}），卖出价值：{fmt_cny(r.max_value)}",
        DISCLAIMER,
    ]


def export_text(r: CalcResult) -> str:
    return "\n".join(export_lines(r))


def assumptions_md() -> str:
    lines = ["# 计算假设", ""]
    for n, text in enumerate(ASSUMPTIONS, start=1):
        lines.append(f"{n}. {text}")
    return "\n".join(lines) + "\n"
