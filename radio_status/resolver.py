"""Resolve the live radio status by probing the upstream endpoints in priority order."""
from __future__ import annotations

import logging
from datetime import datetime, timezone
from typing import Sequence

import httpx

from radio_status.applog import append_app_log
from radio_status.errors import ParseError, ResolutionError, TransportError
from radio_status.http import fetch_with_timeout
from radio_status.models import (
    EndpointDescriptor,
    NormalizedStatus,
    ParsedStatus,
    ParserKind,
    UpstreamConfig,
)
from radio_status.parsers import parse

log = logging.getLogger("radio_status.resolver")

# Shoutcast v2 JSON first, then legacy 7.html, then Icecast-compatible JSON.
DEFAULT_ENDPOINTS: tuple[EndpointDescriptor, ...] = (
    EndpointDescriptor(path="/statistics?json=1", kind=ParserKind.STATISTICS),
    EndpointDescriptor(path="/stats?sid=1&json=1", kind=ParserKind.STATS),
    EndpointDescriptor(path="/stats?json=1", kind=ParserKind.STATS),
    EndpointDescriptor(path="/7.html", kind=ParserKind.SEVEN_HTML),
    EndpointDescriptor(path="/status-json.xsl", kind=ParserKind.ICECAST),
)


def normalize(parsed: ParsedStatus, now: datetime | None = None) -> NormalizedStatus:
    """Fill placeholders, clamp the listener count and stamp the resolution time."""
    return NormalizedStatus(
        announcer=parsed.announcer,
        program=parsed.program,
        unique_listeners=max(0, parsed.listeners or 0),
        status="online" if parsed.online else "offline",
        timestamp=now or datetime.now(timezone.utc),
    )


class StatusResolver:
    """Tries each endpoint in order; the first one that yields usable fields wins.

    Per-endpoint failures are logged and skipped. Only when every endpoint fails
    does resolve() raise ResolutionError, carrying the last failure.
    """

    def __init__(
        self,
        config: UpstreamConfig,
        endpoints: Sequence[EndpointDescriptor] = DEFAULT_ENDPOINTS,
        client: httpx.AsyncClient | None = None,
    ) -> None:
        self.config = config
        self.endpoints = tuple(endpoints)
        self._client = client

    async def _attempt(self, client: httpx.AsyncClient, endpoint: EndpointDescriptor) -> ParsedStatus:
        url = endpoint.url(self.config.base_url)
        r = await fetch_with_timeout(
            client, url, self.config.timeout_seconds, self.config.user_agent
        )
        return parse(endpoint.kind, r.text)

    async def _resolve_with(self, client: httpx.AsyncClient) -> NormalizedStatus:
        last_error: Exception | None = None
        for endpoint in self.endpoints:
            try:
                parsed = await self._attempt(client, endpoint)
            except (TransportError, ParseError) as e:
                last_error = e
                log.warning("Status endpoint %s failed: %s", endpoint.path, e)
                append_app_log(f"status endpoint {endpoint.path} failed: {e}")
                continue
            if not parsed.has_data:
                log.info("Status endpoint %s returned no usable fields", endpoint.path)
                continue
            log.debug("Resolved status from %s (%s)", endpoint.path, endpoint.kind.value)
            return normalize(parsed)
        err = ResolutionError(last_error)
        append_app_log(str(err))
        raise err

    async def resolve(self) -> NormalizedStatus:
        """Resolve the current status. Raises ResolutionError when no endpoint is usable."""
        if self._client is not None:
            return await self._resolve_with(self._client)
        async with httpx.AsyncClient(follow_redirects=True) as client:
            return await self._resolve_with(client)
