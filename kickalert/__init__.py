"""Kickbase budget alert package.

Modules:
- config: environment, logging and the Config class
- http: session and request helpers
- auth: login and token lifecycle
- api: league discovery and budget lookup
- alerts: threshold check and WhatsApp delivery
- formatting: presentation helpers
- state: in-memory session state and run phases
- app: run driver and console entry point

Public facade (re-export) for callers and tests.
"""

from .config import Config
from .errors import (
    KickbaseError,
    ApiError,
    AuthenticationError,
    ResolutionError,
    NotificationError,
)
from .models import LeagueSummary, LoginResult, BudgetSnapshot, CheckResult
from .state import SessionState, RunPhase, SESSION
from .http import make_session, fetch_json, post_json, build_headers
from .auth import is_token_valid, login, ensure_authenticated
from .api import get_leagues, get_budget, get_budget_snapshot
from .formatting import fmt_millions, build_alert_variables
from .alerts import should_alert, send_alert, check_and_alert
from .app import main, run_check

__all__ = [
    # Config / errors
    "Config", "KickbaseError", "ApiError", "AuthenticationError", "ResolutionError", "NotificationError",
    # Models / state
    "LeagueSummary", "LoginResult", "BudgetSnapshot", "CheckResult", "SessionState", "RunPhase", "SESSION",
    # HTTP / session
    "make_session", "fetch_json", "post_json", "build_headers",
    "is_token_valid", "login", "ensure_authenticated",
    # Budget
    "get_leagues", "get_budget", "get_budget_snapshot",
    # Alerts
    "fmt_millions", "build_alert_variables", "should_alert", "send_alert", "check_and_alert",
    "main", "run_check",
]
