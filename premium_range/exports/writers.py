from __future__ import annotations
from dataclasses import asdict
from typing import Dict, Any, Iterable
import csv
import io
import math

from premium_range.scenario.engine import CalcResult

# Column order mirrors the text export: input echo, exposure, then bounds
SCHEMAS = {
    "result": [
        "amount","premium_pct","settle_days","current_day","remaining_days","sell_delay_days","effective_days","limit_pct",
        "min_price","min_profit","min_roi","min_value","max_price","max_profit","max_roi","max_value","note_kind"
    ],
}


def result_dict(r: CalcResult) -> Dict[str, Any]:
    """Plain dict of a result safe for strict JSON: non-finite floats become None."""
    out = asdict(r)
    for k, v in out.items():
        if isinstance(v, float) and not math.isfinite(v):
            out[k] = None
    return out


def write_results(results: Iterable[CalcResult]) -> str:
    columns = SCHEMAS["result"]
    buf = io.StringIO()
    w = csv.DictWriter(buf, fieldnames=columns, extrasaction="ignore")
    w.writeheader()
    for r in results:
        row = asdict(r)
        row["note_kind"] = r.note.kind.value
        w.writerow(row)
    return buf.getvalue()
