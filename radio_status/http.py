"""HTTP transport for upstream status endpoints."""
from __future__ import annotations

import asyncio

import httpx

from radio_status.errors import TransportError

NO_CACHE_HEADERS = {"Cache-Control": "no-cache", "Pragma": "no-cache"}


async def fetch_with_timeout(
    client: httpx.AsyncClient,
    url: str,
    timeout_seconds: float,
    user_agent: str,
    headers: dict[str, str] | None = None,
) -> httpx.Response:
    """GET url, bounded by timeout_seconds. Raises TransportError on timeout, connection error or non-2xx."""
    h = {"User-Agent": user_agent, **NO_CACHE_HEADERS}
    if headers:
        h.update(headers)
    try:
        r = await asyncio.wait_for(
            client.get(url, headers=h, timeout=timeout_seconds),
            timeout=timeout_seconds,
        )
    except (asyncio.TimeoutError, httpx.TimeoutException) as e:
        raise TransportError(url, f"timed out after {timeout_seconds:g}s") from e
    except httpx.HTTPError as e:
        raise TransportError(url, f"{type(e).__name__}: {e}") from e
    if not r.is_success:
        raise TransportError(url, f"HTTP {r.status_code}")
    return r
