"""
Response shaping: camelCase keys and JSON-ready values.
"""
import unittest
from datetime import date, datetime, timezone
from decimal import Decimal

from utils.case import serialize_record


class TestSerializeRecord(unittest.TestCase):
    def test_keys_become_camel_case(self):
        out = serialize_record({"policy_id": 1, "rejection_reason": None, "status": "pending"})
        self.assertEqual(out, {"policyId": 1, "rejectionReason": None, "status": "pending"})

    def test_values_are_json_ready(self):
        out = serialize_record({
            "amount": Decimal("5000.00"),
            "start_date": date(2024, 1, 1),
            "created_at": datetime(2024, 1, 1, 12, 0, tzinfo=timezone.utc),
        })
        self.assertEqual(out["amount"], 5000.0)
        self.assertEqual(out["startDate"], "2024-01-01")
        self.assertEqual(out["createdAt"], "2024-01-01T12:00:00+00:00")


if __name__ == "__main__":
    unittest.main()
