"""
Best-effort outbound notifications.

Routes schedule `Notifier.notify` through FastAPI BackgroundTasks once the state change
has been committed. Delivery failures and timeouts are logged and never reach the caller.
"""
from __future__ import annotations

import asyncio
import smtplib
from email.message import EmailMessage
from typing import Any, Optional

from config import Settings, settings
from utils.logging import get_logger

LOGGER = get_logger(__name__)

TEMPLATES: dict[str, str] = {
    "policy_approved": (
        "Good news! Your policy #{policy_id} has been {status} on {decision_date}.\n"
        "You can now file claims against it."
    ),
    "policy_rejected": (
        "We are sorry. Your policy #{policy_id} has been {status} on {decision_date}."
    ),
    "claim_approved": (
        "Your claim #{claim_id} has been approved and will be processed for payout."
    ),
    "claim_rejected": (
        "Your claim #{claim_id} has been rejected.\nReason: {rejection_reason}"
    ),
    "product_approved": "Your product \"{title}\" has been approved and is now listed.",
    "product_rejected": "Your product \"{title}\" has been rejected.\nReason: {reason}",
}


class _Missing(dict):
    def __missing__(self, key: str) -> str:
        return "N/A"


def render_template(template_key: str, substitutions: dict[str, Any]) -> str:
    """Fill a named template; unknown placeholders render as N/A."""
    try:
        template = TEMPLATES[template_key]
    except KeyError as e:
        raise ValueError(f"Unknown notification template: {template_key}") from e
    return template.format_map(_Missing({k: str(v) for k, v in substitutions.items()}))


class Notifier:
    """Delivers rendered templates via the configured backend ('log' or 'smtp')."""

    def __init__(self, config: Optional[Settings] = None):
        self.config = config or settings

    async def notify(
        self,
        address: Optional[str],
        subject: str,
        template_key: str,
        substitutions: dict[str, Any],
    ) -> None:
        if not address:
            LOGGER.warning("Skipping notification %r: recipient has no email address", template_key)
            return
        try:
            body = render_template(template_key, substitutions)
            await asyncio.wait_for(
                self._deliver(address, subject, body),
                timeout=self.config.notification_timeout_seconds,
            )
        except asyncio.TimeoutError:
            LOGGER.error("Notification %r to %s timed out", template_key, address)
        except Exception:
            LOGGER.exception("Notification %r to %s failed", template_key, address)
        else:
            LOGGER.info("Notification %r sent to %s", template_key, address)

    async def _deliver(self, address: str, subject: str, body: str) -> None:
        if self.config.notification_backend == "smtp":
            await asyncio.to_thread(self._send_smtp, address, subject, body)
        else:
            LOGGER.info("Email to=%s subject=%r\n%s", address, subject, body)

    def _send_smtp(self, address: str, subject: str, body: str) -> None:
        message = EmailMessage()
        message["From"] = self.config.mail_from
        message["To"] = address
        message["Subject"] = subject
        message.set_content(body)
        with smtplib.SMTP(
            self.config.smtp_host,
            self.config.smtp_port,
            timeout=self.config.notification_timeout_seconds,
        ) as smtp:
            if self.config.smtp_use_tls:
                smtp.starttls()
            if self.config.smtp_username:
                smtp.login(self.config.smtp_username, self.config.smtp_password or "")
            smtp.send_message(message)


_notifier: Optional[Notifier] = None


def get_notifier() -> Notifier:
    """FastAPI dependency returning the process notifier; overridable in tests."""
    global _notifier
    if _notifier is None:
        _notifier = Notifier()
    return _notifier
