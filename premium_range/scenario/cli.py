import argparse
import json
import logging
import sys

from premium_range.config.env import LOG_FORMAT, get_server_config
from premium_range.exports.reports import export_text
from premium_range.exports.writers import result_dict, write_results
from .engine import calculate
from .inputs import ValidationError

logger = logging.getLogger(__name__)


def build_parser() -> argparse.ArgumentParser:
    p = argparse.ArgumentParser(
        prog="premium-range",
        description="Worst/best case range for a fund subscribed at NAV and sold at a premium.",
    )
    # Values stay text so parsing/defaulting matches the API exactly
    p.add_argument("--amount", required=True, help="subscription amount, e.g. 10,000")
    p.add_argument("--premium", required=True, help="premium over NAV in percent (may be negative)")
    p.add_argument("--settle-days", default="3", help="N in T+N (default 3)")
    p.add_argument("--current-day", default="1", help="day of the cycle, 1 = today (default 1)")
    p.add_argument("--sell-delay", default="0", help="extra days the sale is locked (default 0)")
    p.add_argument("--limit", default="10", help="daily price limit in percent (default 10)")
    p.add_argument("--format", choices=("json", "text", "csv"), default="text")
    return p


def main(argv=None) -> int:
    level = get_server_config().log_level
    logging.basicConfig(level=getattr(logging, level, logging.INFO), format=LOG_FORMAT)
    args = build_parser().parse_args(argv)
    outcome = calculate({
        "amount": args.amount,
        "premium_pct": args.premium,
        "settle_days": args.settle_days,
        "current_day": args.current_day,
        "sell_delay_days": args.sell_delay,
        "limit_pct": args.limit,
    })
    if isinstance(outcome, ValidationError):
        logger.info("validation failed: %s", outcome.kind.value)
        print(f"{outcome.kind.value}: {outcome.message}", file=sys.stderr)
        return 2
    if args.format == "json":
        body = result_dict(outcome)
        body["note"] = outcome.note.kind.value
        print(json.dumps(body, indent=2, ensure_ascii=False, allow_nan=False))
    elif args.format == "csv":
        sys.stdout.write(write_results([outcome]))
    else:
        print(export_text(outcome))
    return 0


if __name__ == "__main__":
    sys.exit(main())
