import os
import logging

from dotenv import load_dotenv


# Load env early
load_dotenv()

# Logging configuration
log_level = os.getenv("LOG_LEVEL", "INFO").upper()
logging.basicConfig(
    format="%(asctime)s - %(name)s - %(levelname)s - %(message)s",
    level=getattr(logging, log_level, logging.INFO),
)
logger = logging.getLogger(__name__)

# Reduce noisy libraries
logging.getLogger("aiohttp").setLevel(logging.WARNING)
logging.getLogger("aiohttp.client").setLevel(logging.WARNING)
logging.getLogger("twilio").setLevel(logging.WARNING)
logging.getLogger("twilio.http_client").setLevel(logging.WARNING)
logging.getLogger("asyncio").setLevel(logging.WARNING)


def _split_endpoints(raw: str) -> list[str]:
    return [p.strip() for p in raw.split(",") if p.strip()]


class Config:
    """Application configuration sourced from the environment."""

    # Kickbase account
    KICKBASE_EMAIL: str = os.getenv("KICKBASE_EMAIL", "").strip()
    KICKBASE_PASSWORD: str = os.getenv("KICKBASE_PASSWORD", "")
    KICKBASE_API_BASE: str = os.getenv("KICKBASE_API_BASE", "https://api.kickbase.com").strip().rstrip("/")

    # Zero means "budget must not be negative"
    BUDGET_THRESHOLD: int = int(os.getenv("KICKBASE_BUDGET_THRESHOLD", "0"))

    # Ordered league-listing endpoints, probed until one returns leagues
    LEAGUE_ENDPOINTS: list[str] = _split_endpoints(os.getenv("KICKBASE_LEAGUE_ENDPOINTS", "/v4/leagues"))

    # Twilio WhatsApp channel
    TWILIO_ACCOUNT_SID: str | None = os.getenv("TWILIO_ACCOUNT_SID")
    TWILIO_AUTH_TOKEN: str | None = os.getenv("TWILIO_AUTH_TOKEN")
    TWILIO_WHATSAPP_NUMBER: str | None = os.getenv("TWILIO_WHATSAPP_NUMBER")
    YOUR_PHONE_NUMBER: str | None = os.getenv("YOUR_PHONE_NUMBER")
    CONTENT_SID: str | None = os.getenv("CONTENT_SID")
    ALERT_DEADLINE: str = os.getenv("ALERT_DEADLINE", "20:30")

    HTTP_TIMEOUT_SECS: int = int(os.getenv("HTTP_TIMEOUT_SECS", "25"))
    TIMEZONE: str = os.getenv("TIMEZONE", "Europe/Berlin")

    @classmethod
    def validate_config(cls) -> None:
        if not cls.KICKBASE_EMAIL:
            raise ValueError("KICKBASE_EMAIL environment variable is required")
        if not cls.KICKBASE_PASSWORD:
            raise ValueError("KICKBASE_PASSWORD environment variable is required")
        if not cls.LEAGUE_ENDPOINTS:
            raise ValueError("KICKBASE_LEAGUE_ENDPOINTS must list at least one endpoint")
        if not cls.twilio_configured():
            logger.warning("Twilio not fully configured - alerts will be skipped")

    @classmethod
    def twilio_configured(cls) -> bool:
        return all([
            cls.TWILIO_ACCOUNT_SID,
            cls.TWILIO_AUTH_TOKEN,
            cls.TWILIO_WHATSAPP_NUMBER,
            cls.YOUR_PHONE_NUMBER,
            cls.CONTENT_SID,
        ])

    @classmethod
    def get_api_base_url(cls) -> str:
        logger.debug(f"Using API endpoint: {cls.KICKBASE_API_BASE}")
        return cls.KICKBASE_API_BASE
