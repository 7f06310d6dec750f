from __future__ import annotations

from typing import Any, Dict

import aiohttp

from .config import Config, logger
from .errors import ApiError

# Kickbase rejects requests without a browser-like UA
USER_AGENT = (
    "Mozilla/5.0 (Windows NT 10.0; Win64; x64) AppleWebKit/537.36 "
    "(KHTML, like Gecko) Chrome/128.0.0.0 Safari/537.36"
)


def build_headers(token: str | None = None) -> Dict[str, str]:
    h = {
        "accept": "application/json",
        "user-agent": USER_AGENT,
    }
    if token:
        h["authorization"] = f"Bearer {token}"
    return h


def make_session() -> aiohttp.ClientSession:
    timeout = aiohttp.ClientTimeout(total=Config.HTTP_TIMEOUT_SECS)
    return aiohttp.ClientSession(
        timeout=timeout,
        headers=build_headers(),
        trust_env=True,
    )


async def _read_json(r: Any, url: str) -> Any:
    if r.status in (401, 403):
        txt = await r.text()
        logger.warning(f"API auth failure for {url}: {r.status}")
        raise ApiError(r.status, txt, url)
    if r.status != 200:
        txt = await r.text()
        logger.error(f"API error for {url}: {r.status}")
        raise ApiError(r.status, txt, url)
    logger.debug(f"API success: {url}")
    return await r.json(content_type=None)


async def fetch_json(session: aiohttp.ClientSession, url: str, token: str | None = None) -> Any:
    logger.debug(f"API request: GET {url}")
    async with session.get(url, headers=build_headers(token)) as r:
        return await _read_json(r, url)


async def post_json(session: aiohttp.ClientSession, url: str, payload: Dict[str, Any]) -> Any:
    logger.debug(f"API request: POST {url}")
    headers = build_headers()
    headers["content-type"] = "application/json"
    async with session.post(url, json=payload, headers=headers) as r:
        return await _read_json(r, url)
