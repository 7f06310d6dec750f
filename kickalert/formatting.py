from __future__ import annotations

from datetime import datetime
from typing import Dict
from zoneinfo import ZoneInfo, ZoneInfoNotFoundError

from .config import logger


def fmt_millions(value: int) -> str:
    """Render a raw budget as millions, e.g. -2500000 -> '-2.50M'."""
    return f"{value / 1_000_000:.2f}M"


def build_alert_variables(budget: int, deadline: str) -> Dict[str, str]:
    # Keys map to {{1}} and {{2}} in the Twilio Content Template
    return {
        "1": fmt_millions(budget),
        "2": deadline,
    }


def get_zone(tz_name: str) -> ZoneInfo:
    """Return the named zone, falling back to UTC when it is unknown."""
    try:
        return ZoneInfo(tz_name)
    except (ZoneInfoNotFoundError, ValueError) as e:
        logger.warning(f"Unknown timezone {tz_name!r} ({e}), falling back to UTC")
        return ZoneInfo("UTC")


def fmt_local_time(tz_name: str, now: datetime | None = None) -> str:
    tz = get_zone(tz_name)
    current = now.astimezone(tz) if now else datetime.now(tz)
    return current.strftime("%A, %d.%m.%Y, %H:%M:%S")
