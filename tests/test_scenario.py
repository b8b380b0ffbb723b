import math
import unittest

from premium_range.scenario.engine import CalcResult, calculate, exposure_days, price_bounds
from premium_range.scenario.inputs import ErrorKind, ValidationError, validate_input, InputValidationError
from premium_range.scenario.parsing import parse_number


def _raw(**overrides):
    raw = {
        "amount": "10000",
        "premium_pct": "5",
        "settle_days": "3",
        "current_day": "1",
        "sell_delay_days": "0",
        "limit_pct": "10",
    }
    raw.update(overrides)
    return raw


class TestParseNumber(unittest.TestCase):
    def test_commas_and_whitespace(self):
        self.assertEqual(parse_number("  10,000.5 "), 10000.5)
        self.assertEqual(parse_number("-60"), -60.0)
        self.assertEqual(parse_number(7), 7.0)

    def test_empty_is_nan_not_zero(self):
        self.assertTrue(math.isnan(parse_number("")))
        self.assertTrue(math.isnan(parse_number("   ")))
        self.assertTrue(math.isnan(parse_number(None)))

    def test_garbage_is_nan(self):
        self.assertTrue(math.isnan(parse_number("abc")))
        self.assertTrue(math.isnan(parse_number("1_000")))
        self.assertTrue(math.isnan(parse_number(True)))


class TestValidation(unittest.TestCase):
    def _kind(self, **overrides):
        out = calculate(_raw(**overrides))
        self.assertIsInstance(out, ValidationError)
        return out.kind

    def test_boundaries(self):
        self.assertEqual(self._kind(amount="0"), ErrorKind.INVALID_AMOUNT)
        self.assertEqual(self._kind(amount=""), ErrorKind.INVALID_AMOUNT)
        self.assertEqual(self._kind(premium_pct=""), ErrorKind.INVALID_PREMIUM)
        self.assertEqual(self._kind(settle_days="-1"), ErrorKind.INVALID_SETTLE_DAYS)
        self.assertEqual(self._kind(current_day="0"), ErrorKind.INVALID_CURRENT_DAY)
        self.assertEqual(self._kind(sell_delay_days="-2"), ErrorKind.INVALID_SELL_DELAY)
        self.assertEqual(self._kind(limit_pct="0"), ErrorKind.INVALID_LIMIT)
        self.assertEqual(self._kind(limit_pct="100"), ErrorKind.INVALID_LIMIT)
        self.assertEqual(self._kind(limit_pct=""), ErrorKind.INVALID_LIMIT)

    def test_first_failure_wins(self):
        out = calculate({"limit_pct": "0", "current_day": "0"})
        self.assertEqual(out.kind, ErrorKind.INVALID_AMOUNT)
        out = calculate(_raw(current_day="0", limit_pct="0"))
        self.assertEqual(out.kind, ErrorKind.INVALID_CURRENT_DAY)
        self.assertEqual(out.field, "current_day")
        self.assertTrue(out.message)

    def test_defaults_and_floor(self):
        i = validate_input({"amount": "1", "premium_pct": "0", "limit_pct": "10"})
        self.assertEqual((i.settle_days, i.current_day, i.sell_delay_days), (3, 1, 0))
        i = validate_input(_raw(settle_days="3.7", current_day="abc", sell_delay_days="1.9"))
        self.assertEqual((i.settle_days, i.current_day, i.sell_delay_days), (3, 1, 1))
        self.assertIsInstance(i.settle_days, int)

    def test_validate_raises_value_error(self):
        with self.assertRaises(ValueError):
            validate_input(_raw(amount="-5"))
        with self.assertRaises(InputValidationError) as ctx:
            validate_input(_raw(limit_pct="150"))
        self.assertEqual(ctx.exception.kind, ErrorKind.INVALID_LIMIT)


class TestCalculate(unittest.TestCase):
    def test_scenario_basic(self):
        r = calculate(_raw())
        self.assertIsInstance(r, CalcResult)
        self.assertEqual(r.remaining_days, 3)
        self.assertEqual(r.effective_days, 3)
        self.assertAlmostEqual(r.min_price, 1.05 * 0.9 ** 3)
        self.assertAlmostEqual(r.min_price, 0.76545)
        self.assertAlmostEqual(r.max_price, 1.39755, places=5)
        self.assertAlmostEqual(r.min_profit, -2345.5, places=6)
        self.assertAlmostEqual(r.max_profit, 3975.5, places=6)
        self.assertAlmostEqual(r.min_value, 10000 + r.min_profit)
        self.assertAlmostEqual(r.max_roi, r.max_price - 1)

    def test_zero_exposure_collapses_range(self):
        for day in ("4", "5", "30"):
            r = calculate(_raw(current_day=day))
            self.assertEqual(r.remaining_days, 0)
            self.assertEqual(r.effective_days, 0)
            self.assertEqual(r.min_price, r.max_price)
            self.assertAlmostEqual(r.min_price, 1.05)
            self.assertAlmostEqual(r.min_profit, 10000 * 0.05)
            self.assertEqual(r.min_value, r.max_value)

    def test_sell_delay_extends_window(self):
        r = calculate(_raw(current_day="3", sell_delay_days="2"))
        self.assertEqual(r.remaining_days, 1)
        self.assertEqual(r.effective_days, 3)

    def test_invalid_limit_has_no_result(self):
        out = calculate(_raw(limit_pct="0"))
        self.assertIsInstance(out, ValidationError)
        self.assertNotIsInstance(out, CalcResult)

    def test_range_ordering(self):
        for premium in ("-60", "-10", "0", "5", "40"):
            for day in ("1", "2", "4"):
                for delay in ("0", "1", "3"):
                    r = calculate(_raw(premium_pct=premium, current_day=day, sell_delay_days=delay))
                    m0 = 1 + float(premium) / 100
                    self.assertLessEqual(r.min_price, m0 + 1e-12)
                    self.assertGreaterEqual(r.max_price, m0 - 1e-12)
                    if r.effective_days == 0:
                        self.assertEqual(r.min_value, r.max_value)
                    else:
                        self.assertLess(r.min_value, r.max_value)

    def test_monotonic_in_effective_days(self):
        prev_min, prev_max = price_bounds(5, 10, 0)
        for d in range(1, 15):
            lo, hi = price_bounds(5, 10, d)
            self.assertLess(lo, prev_min)
            self.assertGreater(hi, prev_max)
            prev_min, prev_max = lo, hi

    def test_exposure_days(self):
        self.assertEqual(exposure_days(3, 1, 0), (3, 3))
        self.assertEqual(exposure_days(3, 10, 2), (0, 2))
        self.assertEqual(exposure_days(0, 1, 0), (0, 0))

    def test_idempotent(self):
        self.assertEqual(calculate(_raw()), calculate(_raw()))

    def test_huge_day_counts_stay_defined(self):
        r = calculate(_raw(sell_delay_days="1e9"))
        self.assertEqual(r.min_price, 0.0)
        self.assertTrue(math.isinf(r.max_price))

    def test_day_counts_beyond_float_range_keep_order(self):
        r = calculate(_raw(settle_days="1e308", sell_delay_days="1e308"))
        self.assertGreater(r.effective_days, 10 ** 308)
        self.assertEqual(r.min_price, 0.0)
        self.assertTrue(math.isinf(r.max_price))
        self.assertLessEqual(r.min_price, 1.05)
        self.assertLessEqual(r.min_value, r.max_value)


if __name__ == "__main__":
    unittest.main()
