"""
Unit tests for the pure lifecycle rules: claim transitions, amount formatting, date handling.
Run from project root: python -m pytest tests/test_claim_rules.py -v
"""
import unittest
from datetime import date
from decimal import Decimal

from services.claims import VALID_TRANSITIONS, can_transition, format_amount
from services.policies import _add_months, _check_period, parse_date
from utils.exceptions import InvalidInputError


class TestClaimTransitions(unittest.TestCase):
    def test_pending_can_be_approved_or_denied(self):
        self.assertTrue(can_transition("pending", "approved"))
        self.assertTrue(can_transition("pending", "denied"))

    def test_pending_cannot_jump_to_paid(self):
        self.assertFalse(can_transition("pending", "paid"))

    def test_approved_only_moves_to_paid(self):
        self.assertTrue(can_transition("approved", "paid"))
        self.assertFalse(can_transition("approved", "denied"))
        self.assertFalse(can_transition("approved", "pending"))

    def test_denied_and_paid_are_terminal(self):
        for terminal in ("denied", "paid"):
            self.assertEqual(VALID_TRANSITIONS[terminal], ())
            for target in VALID_TRANSITIONS:
                self.assertFalse(can_transition(terminal, target))

    def test_unknown_status_has_no_transitions(self):
        self.assertFalse(can_transition("archived", "pending"))


class TestFormatAmount(unittest.TestCase):
    def test_strips_trailing_zeros(self):
        self.assertEqual(format_amount(Decimal("5000.00")), "5000")
        self.assertEqual(format_amount(Decimal("6000")), "6000")

    def test_keeps_significant_decimals(self):
        self.assertEqual(format_amount(Decimal("1250.50")), "1250.5")


class TestDates(unittest.TestCase):
    def test_parse_iso_date_and_datetime(self):
        self.assertEqual(parse_date("2024-01-01", "start"), date(2024, 1, 1))
        self.assertEqual(parse_date("2024-03-05T10:00:00Z", "start"), date(2024, 3, 5))

    def test_blank_is_none(self):
        self.assertIsNone(parse_date(None, "end"))
        self.assertIsNone(parse_date("  ", "end"))

    def test_garbage_raises_invalid_input_naming_field(self):
        with self.assertRaises(InvalidInputError) as ctx:
            parse_date("not-a-date", "end")
        self.assertIn("end", ctx.exception.message)

    def test_add_months_clamps_to_month_end(self):
        self.assertEqual(_add_months(date(2024, 1, 31), 1), date(2024, 2, 29))
        self.assertEqual(_add_months(date(2024, 11, 15), 14), date(2026, 1, 15))

    def test_end_before_start_rejected(self):
        with self.assertRaises(InvalidInputError):
            _check_period(date(2024, 5, 1), date(2024, 4, 30))
        _check_period(date(2024, 5, 1), None)
        _check_period(date(2024, 5, 1), date(2024, 5, 1))


if __name__ == "__main__":
    unittest.main()
