from __future__ import annotations

import asyncio
from typing import Any, Optional

import aiohttp

from .alerts import check_and_alert, should_alert
from .api import get_budget
from .auth import ensure_authenticated
from .config import Config, logger
from .formatting import fmt_local_time
from .http import make_session
from .models import CheckResult
from .state import SESSION, RunPhase, SessionState


async def _run_phases(http: aiohttp.ClientSession, state: SessionState, threshold: int, client: Optional[Any]) -> CheckResult:
    state.phase = RunPhase.AUTHENTICATING
    await ensure_authenticated(http, state)

    state.phase = RunPhase.RESOLVING_BUDGET
    budget = await get_budget(http, state)

    if should_alert(budget, threshold):
        state.phase = RunPhase.ALERTING
    result = check_and_alert(budget, threshold, client)
    state.phase = RunPhase.DONE
    return result


async def run_check(
    state: Optional[SessionState] = None,
    http: Optional[aiohttp.ClientSession] = None,
    threshold: Optional[int] = None,
    client: Optional[Any] = None,
) -> CheckResult:
    """Run one budget check: authenticate, resolve the budget, alert if needed.

    Authentication and resolution errors propagate; alert delivery errors do not.
    """
    state = state or SESSION
    if threshold is None:
        threshold = Config.BUDGET_THRESHOLD

    logger.info(
        f"Checking Kickbase budget against threshold of {threshold} "
        f"at {fmt_local_time(Config.TIMEZONE)} ({Config.TIMEZONE})"
    )

    async with state.lock:
        state.phase = RunPhase.START
        try:
            if http is not None:
                return await _run_phases(http, state, threshold, client)
            async with make_session() as session:
                return await _run_phases(session, state, threshold, client)
        except Exception:
            state.phase = RunPhase.FAILED
            raise


def main():
    try:
        Config.validate_config()
    except ValueError as e:
        logger.error(f"❌ Invalid configuration: {e}")
        raise SystemExit(2) from e

    try:
        result = asyncio.run(run_check())
    except Exception as e:
        logger.exception(f"Fatal error during budget check: {e}")
        raise SystemExit(1) from e

    logger.info(f"Budget check finished (budget={result.budget}, alerted={result.alerted})")
