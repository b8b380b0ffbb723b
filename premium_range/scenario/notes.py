from __future__ import annotations
from dataclasses import dataclass
from enum import Enum

# Presentation heuristics carried over as-is; not derived from the model.
DEEP_DISCOUNT_RATIO = -0.5
HIGH_PREMIUM_RATIO = 0.3


class NoteKind(str, Enum):
    DEEP_DISCOUNT = "deep-discount"
    HIGH_PREMIUM_RISK = "high-premium-risk"
    DELAY_EFFECT = "delay-effect"
    GENERIC = "generic"


NOTE_TEXT = {
    NoteKind.DEEP_DISCOUNT: "提示：你输入的是明显折价（溢价为负且幅度较大）。结果依然按同一逻辑估算。",
    NoteKind.HIGH_PREMIUM_RISK: "提示：溢价偏高时，连续跌停情景下回撤会更剧烈；请谨慎评估流动性与溢价回归风险。",
    NoteKind.DELAY_EFFECT: "提示：你启用了“卖出延迟”。这会把可卖日当天封板/卖不出等情况折算成额外持有天数。",
    NoteKind.GENERIC: "这是一个“区间估算器”：只把溢价与涨跌停复利叠加，帮助你快速理解风险/弹性。",
}


@dataclass(frozen=True)
class Note:
    kind: NoteKind
    text: str


def select_note(premium_ratio: float, sell_delay_days: int) -> Note:
    """Pick exactly one advisory note; first matching rule wins."""
    if premium_ratio <= DEEP_DISCOUNT_RATIO:
        kind = NoteKind.DEEP_DISCOUNT
    elif premium_ratio >= HIGH_PREMIUM_RATIO:
        kind = NoteKind.HIGH_PREMIUM_RISK
    elif sell_delay_days > 0:
        kind = NoteKind.DELAY_EFFECT
    else:
        kind = NoteKind.GENERIC
    return Note(kind=kind, text=NOTE_TEXT[kind])
