from __future__ import annotations
import math
from typing import Any


def parse_number(raw: Any) -> float:
    """Parse a user-supplied value into a float.

    Strips whitespace and thousands-separator commas. Absent, empty or
    unparseable values give NaN (never 0) so validation can reject them.
    """
    if raw is None or isinstance(raw, bool):
        return math.nan
    if isinstance(raw, int):
        # ints beyond float range
        try:
            return float(raw)
        except OverflowError:
            return math.inf if raw > 0 else -math.inf
    if isinstance(raw, float):
        return raw
    s = str(raw).strip().replace(",", "")
    # float() accepts digit-group underscores, plain decimal input does not
    if s == "" or "_" in s:
        return math.nan
    try:
        return float(s)
    except ValueError:
        return math.nan
