"""
Notification delivery is best effort: failures and timeouts are logged, never raised.
"""
import asyncio
import unittest
from unittest.mock import AsyncMock, patch

from config import Settings
from services.notifications import Notifier, render_template


class TestRenderTemplate(unittest.TestCase):
    def test_substitutes_values(self):
        body = render_template("claim_rejected", {"claim_id": 7, "rejection_reason": "Not covered"})
        self.assertIn("#7", body)
        self.assertIn("Not covered", body)

    def test_missing_values_render_as_na(self):
        body = render_template("claim_rejected", {"claim_id": 7})
        self.assertIn("N/A", body)

    def test_unknown_template_raises(self):
        with self.assertRaises(ValueError):
            render_template("no_such_template", {})


class TestNotifier(unittest.TestCase):
    def setUp(self):
        self.notifier = Notifier(Settings(notification_backend="log", notification_timeout_seconds=0.05))

    def test_delivery_failure_is_swallowed(self):
        with patch.object(self.notifier, "_deliver", AsyncMock(side_effect=ConnectionError("smtp down"))):
            with self.assertLogs("services.notifications", level="ERROR"):
                asyncio.run(self.notifier.notify("a@example.com", "Subject", "claim_approved", {"claim_id": 1}))

    def test_timeout_is_swallowed(self):
        async def slow(*args):
            await asyncio.sleep(1)

        with patch.object(self.notifier, "_deliver", slow):
            with self.assertLogs("services.notifications", level="ERROR"):
                asyncio.run(self.notifier.notify("a@example.com", "Subject", "claim_approved", {"claim_id": 1}))

    def test_missing_address_skips_delivery(self):
        deliver = AsyncMock()
        with patch.object(self.notifier, "_deliver", deliver):
            asyncio.run(self.notifier.notify(None, "Subject", "policy_approved", {"policy_id": 1}))
        deliver.assert_not_called()

    def test_log_backend_delivers(self):
        with self.assertLogs("services.notifications", level="INFO") as logs:
            asyncio.run(self.notifier.notify("a@example.com", "Policy Approved", "policy_approved", {"policy_id": 3}))
        self.assertTrue(any("policy_approved" in line for line in logs.output))


if __name__ == "__main__":
    unittest.main()
