from __future__ import annotations

import asyncio
from typing import Any, List, Optional, Sequence

import aiohttp

from .auth import ensure_authenticated
from .config import Config, logger
from .errors import ApiError, ResolutionError
from .http import fetch_json
from .models import BudgetSnapshot, LeagueSummary, parse_leagues
from .state import SessionState


def extract_leagues(data: Any) -> List[LeagueSummary]:
    """Accept either `{"leagues": [...]}` or a bare list."""
    if isinstance(data, dict):
        items = data.get("leagues") or []
    elif isinstance(data, list):
        items = data
    else:
        items = []
    return parse_leagues(items) if isinstance(items, list) else []


async def probe_league_endpoint(http: aiohttp.ClientSession, state: SessionState, endpoint: str) -> Optional[List[LeagueSummary]]:
    url = f"{Config.get_api_base_url()}{endpoint}"
    logger.info(f"Trying endpoint: {url}")
    try:
        data = await fetch_json(http, url, token=state.token)
    except ApiError as e:
        logger.info(f"Endpoint {endpoint} failed: {e.status} - {e.body[:180]}")
        return None
    except (aiohttp.ClientError, asyncio.TimeoutError, ValueError) as e:
        logger.info(f"Error trying endpoint {endpoint}: {e}")
        return None

    try:
        leagues = extract_leagues(data)
    except (TypeError, ValueError) as e:
        logger.info(f"Malformed league list from {endpoint}: {e}")
        return None
    logger.info(f"Found {len(leagues)} leagues from {endpoint}")
    return leagues or None


async def get_leagues(http: aiohttp.ClientSession, state: SessionState, endpoints: Sequence[str] | None = None) -> List[LeagueSummary]:
    await ensure_authenticated(http, state)

    if state.leagues:
        logger.info(f"Using {len(state.leagues)} cached leagues")
        return state.leagues

    for endpoint in endpoints if endpoints is not None else Config.LEAGUE_ENDPOINTS:
        leagues = await probe_league_endpoint(http, state, endpoint)
        if leagues:
            state.leagues = leagues
            return leagues

    raise ResolutionError("No leagues found via any known endpoint")


async def get_budget_snapshot(http: aiohttp.ClientSession, state: SessionState) -> BudgetSnapshot:
    logger.info("Fetching Kickbase budget...")
    await ensure_authenticated(http, state)

    leagues = await get_leagues(http, state)
    if len(leagues) == 0:
        raise ResolutionError("No leagues found for account")

    # Only the first league is monitored
    primary = leagues[0]
    if not primary:
        raise ResolutionError("No primary league found")

    logger.info(f"Using league: {primary.name} (ID: {primary.id})")

    url = f"{Config.get_api_base_url()}/v4/leagues/{primary.id}/me/budget"
    try:
        data = await fetch_json(http, url, token=state.token)
    except ApiError as e:
        raise ResolutionError(f"Failed to get budget data: HTTP {e.status}") from e
    except (aiohttp.ClientError, asyncio.TimeoutError) as e:
        raise ResolutionError(f"Budget request failed: {e}") from e
    except ValueError as e:
        raise ResolutionError(f"Budget response is not valid JSON: {e}") from e

    if not isinstance(data, dict):
        raise ResolutionError(f"Unexpected budget response: {str(data)[:180]}")

    try:
        snapshot = BudgetSnapshot.from_api(primary.id, data)
    except (TypeError, ValueError) as e:
        raise ResolutionError(f"Malformed budget response: {e}") from e

    logger.info(f"Current budget: {snapshot.current / 1_000_000:.2f}M")
    return snapshot


async def get_budget(http: aiohttp.ClientSession, state: SessionState) -> int:
    snapshot = await get_budget_snapshot(http, state)
    return snapshot.current
