"""WhatsApp budget alerts via the Twilio Content API."""

from __future__ import annotations

import json
from typing import Any, Optional

from twilio.rest import Client

from .config import Config, logger
from .errors import NotificationError
from .formatting import build_alert_variables, fmt_millions
from .models import CheckResult


def should_alert(budget: int, threshold: int) -> bool:
    return budget < threshold


def make_client() -> Client:
    if not Config.twilio_configured():
        raise NotificationError("Twilio credentials not configured")
    return Client(Config.TWILIO_ACCOUNT_SID, Config.TWILIO_AUTH_TOKEN)


def _deliver(client: Any, budget: int) -> str:
    variables = build_alert_variables(budget, Config.ALERT_DEADLINE)
    try:
        message = client.messages.create(
            from_=Config.TWILIO_WHATSAPP_NUMBER,
            content_sid=Config.CONTENT_SID,
            content_variables=json.dumps(variables),
            to=Config.YOUR_PHONE_NUMBER,
        )
    except Exception as e:
        raise NotificationError(f"Twilio send failed: {e}") from e
    return message.sid


def send_alert(budget: int, client: Optional[Any] = None) -> Optional[str]:
    """Send the budget alert; failures are logged and never raised.

    Returns the Twilio message SID on acceptance, None otherwise.
    """
    logger.info(f"Budget is below threshold! Sending alert for: {fmt_millions(budget)}")
    try:
        sid = _deliver(client or make_client(), budget)
    except NotificationError as e:
        logger.error(f"❌ Error sending message: {e}")
        return None
    logger.info(f"✅ Message sent successfully. SID: {sid}")
    return sid


def check_and_alert(budget: int, threshold: Optional[int] = None, client: Optional[Any] = None) -> CheckResult:
    if threshold is None:
        threshold = Config.BUDGET_THRESHOLD

    if not should_alert(budget, threshold):
        logger.info(f"Budget is fine ({budget}). No alert necessary.")
        return CheckResult(budget=budget, threshold=threshold, alerted=False)

    logger.warning(f"ALERT: Budget {budget} is below threshold {threshold}. Sending notification!")
    sid = send_alert(budget, client)
    return CheckResult(budget=budget, threshold=threshold, alerted=True, message_sid=sid)
