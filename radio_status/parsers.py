"""Parsers for the status formats exposed by Shoutcast/Icecast servers.

Each parser is a pure function from the raw response body to a ParsedStatus and
raises ParseError when the body does not have the expected shape.
"""
from __future__ import annotations

import json
import math
import re
from typing import Any, Callable

from radio_status.errors import ParseError
from radio_status.models import IcecastSource, ParsedStatus, ParserKind, ShoutcastStats

SEVEN_HTML_MIN_FIELDS = 7
# larger counts are treated as a malformed payload
MAX_LISTENER_COUNT = 2**31 - 1
_TAG_RE = re.compile(r"<[^>]+>")


def _text(v: Any) -> str | None:
    """Non-empty stripped text, or None."""
    if v is None or isinstance(v, (dict, list)):
        return None
    s = str(v).strip()
    return s or None


def _first_text(*values: Any) -> str | None:
    for v in values:
        s = _text(v)
        if s is not None:
            return s
    return None


def _first_present(*values: Any) -> Any:
    for v in values:
        if v is not None:
            return v
    return None


def _to_number(v: Any) -> int | float | None:
    """Ints stay ints so arbitrarily large counts never go through float."""
    if isinstance(v, bool):
        return int(v)
    if isinstance(v, (int, float)):
        return v
    if isinstance(v, str):
        s = v.strip()
        try:
            return int(s)
        except ValueError:
            pass
        try:
            return float(s)
        except (OverflowError, ValueError):
            return None
    return None


def to_listener_count(v: Any) -> int:
    """Coerce a reported listener count to a non-negative int (anything unusable is 0).

    Raises ValueError for counts above MAX_LISTENER_COUNT.
    """
    n = _to_number(v)
    if n is None:
        return 0
    if isinstance(n, float):
        if not math.isfinite(n):
            return 0
        n = int(n)
    if n > MAX_LISTENER_COUNT:
        raise ValueError(f"listener count out of range: {str(n)[:20]}...")
    return max(0, n)


def is_online(stream_status: Any, listeners: int) -> bool:
    """An explicit stream-status flag wins (online iff it equals 1); otherwise online iff listeners > 0."""
    if stream_status is not None:
        return _to_number(stream_status) == 1
    return listeners > 0


def _load_object(kind: ParserKind, body: str) -> dict[str, Any]:
    try:
        data = json.loads(body)
    except ValueError as e:
        raise ParseError(kind.value, f"invalid JSON ({e})") from e
    if not isinstance(data, dict):
        raise ParseError(kind.value, f"expected a JSON object, got {type(data).__name__}")
    return data


def _shoutcast(data: Any) -> ShoutcastStats:
    return ShoutcastStats.model_validate(data) if isinstance(data, dict) else ShoutcastStats()


def parse_statistics(body: str) -> ParsedStatus:
    """Shoutcast v2 /statistics?json=1: server-wide object with an optional `streams` list."""
    data = _load_object(ParserKind.STATISTICS, body)
    top = _shoutcast(data)
    streams = data.get("streams")
    if isinstance(streams, list) and streams:
        stream = _shoutcast(streams[0])
    else:
        stream = top
    listeners = to_listener_count(
        _first_present(
            stream.uniquelisteners,
            top.uniquelisteners,
            stream.currentlisteners,
            top.currentlisteners,
            0,
        )
    )
    return ParsedStatus(
        announcer=_first_text(stream.dj, top.dj),
        program=_first_text(stream.songtitle, stream.servertitle, top.songtitle, top.servertitle),
        listeners=listeners,
        online=is_online(_first_present(stream.streamstatus, top.streamstatus), listeners),
    )


def parse_stats(body: str) -> ParsedStatus:
    """Shoutcast v2 /stats?json=1: one flat object."""
    st = _shoutcast(_load_object(ParserKind.STATS, body))
    listeners = to_listener_count(_first_present(st.uniquelisteners, st.currentlisteners, 0))
    return ParsedStatus(
        announcer=_text(st.dj),
        program=_first_text(st.songtitle, st.servertitle),
        listeners=listeners,
        online=is_online(st.streamstatus, listeners),
    )


def parse_seven_html(body: str) -> ParsedStatus:
    """Legacy /7.html: `current,peak,max,unique,bitrate,?,title` wrapped in HTML."""
    parts = _TAG_RE.sub("", body or "").strip().split(",")
    if len(parts) < SEVEN_HTML_MIN_FIELDS:
        raise ParseError(
            ParserKind.SEVEN_HTML.value,
            f"expected at least {SEVEN_HTML_MIN_FIELDS} fields, got {len(parts)}",
        )
    listeners = to_listener_count(parts[0])
    title = ",".join(parts[6:]).strip('"')
    return ParsedStatus(
        announcer=None,
        program=title or None,
        listeners=listeners,
        online=listeners > 0,
    )


def parse_icecast(body: str) -> ParsedStatus:
    """Icecast status-json.xsl: `icestats.source` (object or list), else top-level `source`."""
    data = _load_object(ParserKind.ICECAST, body)
    icestats = data.get("icestats")
    source = icestats.get("source") if isinstance(icestats, dict) else None
    if isinstance(source, list):
        source = source[0] if source else None
    elif not source:
        source = data.get("source")
    src = IcecastSource.model_validate(source) if isinstance(source, dict) else IcecastSource()
    listeners = to_listener_count(_first_present(src.listeners, 0))
    return ParsedStatus(
        announcer=None,
        program=_first_text(src.title, src.server_name),
        listeners=listeners,
        online=listeners > 0,
    )


PARSERS: dict[ParserKind, Callable[[str], ParsedStatus]] = {
    ParserKind.STATISTICS: parse_statistics,
    ParserKind.STATS: parse_stats,
    ParserKind.SEVEN_HTML: parse_seven_html,
    ParserKind.ICECAST: parse_icecast,
}


def parse(kind: ParserKind, body: str) -> ParsedStatus:
    """Parse body as `kind`. Any failure on an unexpected payload surfaces as ParseError."""
    try:
        return PARSERS[kind](body)
    except ParseError:
        raise
    except (TypeError, ValueError, OverflowError) as e:
        raise ParseError(kind.value, f"{type(e).__name__}: {e}") from e
