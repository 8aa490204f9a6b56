"""Error types raised while resolving the upstream status."""
from __future__ import annotations


class RadioStatusError(Exception):
    """Base class for status resolution errors."""


class TransportError(RadioStatusError):
    """One endpoint could not be fetched (timeout, connection error, non-2xx status)."""

    def __init__(self, url: str, reason: str) -> None:
        self.url = url
        self.reason = reason
        super().__init__(f"{url}: {reason}")


class ParseError(RadioStatusError):
    """An endpoint answered but its payload did not have the expected shape."""

    def __init__(self, kind: str, reason: str) -> None:
        self.kind = kind
        self.reason = reason
        super().__init__(f"{kind} payload: {reason}")


class ResolutionError(RadioStatusError):
    """Every endpoint failed or returned nothing usable."""

    def __init__(self, last_error: BaseException | None) -> None:
        self.last_error = last_error
        super().__init__(f"No streaming endpoint responded. Last error: {last_error}")
