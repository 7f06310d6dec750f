"""Kickbase login and token lifecycle."""

from __future__ import annotations

import asyncio
from datetime import datetime, timedelta, timezone
from typing import Any, Dict, Optional

import aiohttp

from .config import Config, logger
from .errors import ApiError, AuthenticationError
from .http import post_json
from .models import LoginResult, parse_leagues
from .state import SessionState

# Refuse tokens that would expire mid-request
TOKEN_SAFETY_MARGIN = timedelta(minutes=5)

LOGIN_PATH = "/v4/user/login"


def is_token_valid(token: Optional[str], expiry: Optional[datetime], now: Optional[datetime] = None) -> bool:
    if not token or expiry is None:
        return False
    now = now or datetime.now(timezone.utc)
    return expiry > now + TOKEN_SAFETY_MARGIN


def parse_expiry(raw: str) -> datetime:
    """Parse the ISO-8601 `tknex` value into an aware UTC datetime."""
    expiry = datetime.fromisoformat(raw.replace("Z", "+00:00"))
    if expiry.tzinfo is None:
        expiry = expiry.replace(tzinfo=timezone.utc)
    return expiry


def build_login_payload(email: str, password: str) -> Dict[str, Any]:
    return {
        "em": email,
        "pass": password,
        "ext": True,
        "loy": False,
        "rep": {},
    }


async def login(http: aiohttp.ClientSession, state: SessionState) -> LoginResult:
    """Exchange account credentials for a bearer token.

    On success the token, expiry and (when the response lists them) the
    leagues are stored on `state`. On failure `state` is left untouched.
    """
    logger.info("Logging into Kickbase...")
    url = f"{Config.get_api_base_url()}{LOGIN_PATH}"
    payload = build_login_payload(Config.KICKBASE_EMAIL, Config.KICKBASE_PASSWORD)

    try:
        data = await post_json(http, url, payload)
    except ApiError as e:
        logger.error(f"Login failed: {e.status} {e.body[:180]}")
        raise AuthenticationError(f"Login failed: HTTP {e.status}", status=e.status, body=e.body) from e
    except (aiohttp.ClientError, asyncio.TimeoutError) as e:
        logger.error(f"Login request failed: {e}")
        raise AuthenticationError(f"Login request failed: {e}") from e
    except ValueError as e:
        raise AuthenticationError(f"Login response is not valid JSON: {e}") from e

    if not isinstance(data, dict) or not data.get("tkn") or not data.get("tknex"):
        raise AuthenticationError("Login response missing token or expiry", status=200, body=str(data)[:300])

    try:
        expiry = parse_expiry(str(data["tknex"]))
    except ValueError as e:
        raise AuthenticationError(f"Unparseable token expiry: {data['tknex']!r}", status=200) from e

    leagues = None
    if isinstance(data.get("srvl"), list):
        try:
            leagues = parse_leagues(data["srvl"])
        except (TypeError, ValueError) as e:
            raise AuthenticationError(f"Malformed league list in login response: {e}", status=200) from e

    result = LoginResult(token=data["tkn"], expiry=expiry, leagues=leagues, user=data.get("u") or {})

    state.token = result.token
    state.expiry = result.expiry
    if leagues is not None:
        state.leagues = leagues
        logger.info(f"Cached {len(leagues)} leagues from login response")

    logger.info(f"✅ Login successful! Token expires: {expiry.isoformat()}")
    return result


async def ensure_authenticated(http: aiohttp.ClientSession, state: SessionState) -> None:
    if is_token_valid(state.token, state.expiry):
        logger.debug("Using existing valid token")
        return
    logger.info("Token invalid or expired, logging in...")
    await login(http, state)
