"""Pydantic models for upstream config, payload shapes and the API."""
from __future__ import annotations

from datetime import datetime
from enum import Enum
from typing import Any, Literal

from pydantic import BaseModel, ConfigDict, Field, field_validator

PLACEHOLDER = "—"


class ParserKind(str, Enum):
    """Which response shape an endpoint is parsed as."""
    STATISTICS = "statistics"  # Shoutcast v2 /statistics, stream list
    STATS = "stats"  # Shoutcast v2 /stats, flat
    SEVEN_HTML = "seven_html"  # legacy /7.html, comma-separated
    ICECAST = "icecast"  # status-json.xsl


class EndpointDescriptor(BaseModel):
    """One candidate status endpoint: path appended to the base URL, and its shape."""
    model_config = ConfigDict(frozen=True)

    path: str
    kind: ParserKind

    def url(self, base_url: str) -> str:
        return f"{base_url.rstrip('/')}{self.path}"


class UpstreamConfig(BaseModel):
    """Streaming server host and request options handed to the resolver."""
    model_config = ConfigDict(frozen=True)

    base_url: str
    timeout_seconds: float = 5.0
    user_agent: str = "RadioHabblive-Player/1.0"


class ShoutcastStats(BaseModel):
    """Fields read from a Shoutcast JSON object (server-wide or one stream). All optional."""
    model_config = ConfigDict(extra="ignore")

    dj: Any = None
    songtitle: Any = None
    servertitle: Any = None
    uniquelisteners: Any = None
    currentlisteners: Any = None
    streamstatus: Any = None


class IcecastSource(BaseModel):
    """Fields read from one Icecast `source` entry."""
    model_config = ConfigDict(extra="ignore")

    listeners: Any = None
    title: Any = None
    server_name: Any = None


class ParsedStatus(BaseModel):
    """What one parser extracted from one endpoint's payload."""
    announcer: str | None = None
    program: str | None = None
    listeners: int | None = None
    online: bool = False

    @property
    def has_data(self) -> bool:
        return self.announcer is not None or self.program is not None or self.listeners is not None


class NormalizedStatus(BaseModel):
    """Resolved status for one request. Never mutated after construction."""
    model_config = ConfigDict(frozen=True)

    announcer: str = PLACEHOLDER
    program: str = PLACEHOLDER
    unique_listeners: int = Field(default=0, ge=0)
    status: Literal["online", "offline"] = "offline"
    timestamp: datetime

    @field_validator("announcer", "program", mode="before")
    @classmethod
    def placeholder_when_empty(cls, v: Any) -> Any:
        if v is None or (isinstance(v, str) and not v.strip()):
            return PLACEHOLDER
        return v

    @field_validator("unique_listeners", mode="before")
    @classmethod
    def clamp_listeners(cls, v: Any) -> Any:
        if v is None:
            return 0
        if isinstance(v, int) and v < 0:
            return 0
        return v


class StatusData(BaseModel):
    locutor: str
    programa: str
    unicos: int
    status: Literal["online", "offline"]


class StatusEnvelope(BaseModel):
    """Success body of GET /api/status."""
    success: Literal[True] = True
    timestamp: str
    data: StatusData

    @classmethod
    def from_status(cls, st: NormalizedStatus) -> StatusEnvelope:
        return cls(
            timestamp=st.timestamp.isoformat().replace("+00:00", "Z"),
            data=StatusData(
                locutor=st.announcer,
                programa=st.program,
                unicos=st.unique_listeners,
                status=st.status,
            ),
        )


class ErrorEnvelope(BaseModel):
    """Failure body of GET /api/status."""
    success: Literal[False] = False
    error: str
