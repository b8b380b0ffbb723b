from __future__ import annotations
import math
from decimal import Context, Decimal, ROUND_HALF_UP

CURRENCY_SYMBOL = "¥"
_CENTS = Decimal("0.01")
_WIDE = Context(prec=400)  # wide enough for any finite float


def _fixed2(x: float) -> str:
    """abs(x) rounded half-up to two decimals on its exact binary value."""
    return str(Decimal(abs(x)).quantize(_CENTS, rounding=ROUND_HALF_UP, context=_WIDE))


def _group_thousands(digits: str) -> str:
    whole, _, frac = digits.partition(".")
    return f"{int(whole):,}" + (f".{frac}" if frac else "")


def fmt_cny(x: float) -> str:
    """Format an amount as CNY, e.g. 10000 -> '¥10,000.00', -2345.5 -> '-¥2,345.50'."""
    if math.isnan(x):
        return "NaN"
    if math.isinf(x):
        return ("-" if x < 0 else "") + CURRENCY_SYMBOL + "∞"
    sign = "-" if x < 0 else ""
    return f"{sign}{CURRENCY_SYMBOL}{_group_thousands(_fixed2(x))}"


def fmt_pct(ratio: float) -> str:
    """Format a ratio as a percentage with two decimals: 0.05 -> '5.00%'."""
    x = ratio * 100.0
    if math.isnan(x):
        return "NaN%"
    if math.isinf(x):
        return ("-" if x < 0 else "") + "Infinity%"
    sign = "-" if x < 0 else ""
    return f"{sign}{_fixed2(x)}%"


def fmt_plain_number(x: float) -> str:
    """Shortest round-trip rendering of a number as typed: 5.0 -> '5', 5.5 -> '5.5',
    1e-7 -> '1e-7'.
    """
    if math.isnan(x):
        return "NaN"
    if math.isinf(x):
        return "Infinity" if x > 0 else "-Infinity"
    if x == 0:
        return "0"
    d = Decimal(repr(float(x))).normalize()
    if -7 < d.adjusted() < 21:
        return format(d, "f")
    return format(d, "e")


def sign_of(x: float) -> str:
    if x > 0:
        return "positive"
    if x < 0:
        return "negative"
    return "neutral"
