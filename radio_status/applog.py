"""Application log for troubleshooting upstream resolution."""
from __future__ import annotations

from datetime import datetime, timezone
from pathlib import Path

from radio_status.config import settings

APP_LOG_FILENAME = "app.log"


def get_app_log_path() -> Path:
    """Path to the application log (endpoint failures, exhaustion, unexpected errors)."""
    assert settings.logs_dir
    return settings.logs_dir / APP_LOG_FILENAME


def append_app_log(message: str) -> None:
    """Append a timestamped line to the application log."""
    if not settings.logs_dir:
        return
    path = get_app_log_path()
    try:
        path.parent.mkdir(parents=True, exist_ok=True)
        ts = datetime.now(timezone.utc).strftime("%Y-%m-%dT%H:%M:%SZ")
        with path.open("a", encoding="utf-8") as f:
            f.write(f"[{ts}] {message.strip()}\n")
    except OSError:
        pass


def tail_app_log(tail: int = 500) -> str:
    """Return the last `tail` lines of the application log (all lines when tail is 0)."""
    path = get_app_log_path()
    if not path.exists():
        return ""
    lines = path.read_text(encoding="utf-8", errors="replace").strip().splitlines()
    return "\n".join(lines[-tail:]) if tail else "\n".join(lines)


def clear_app_log() -> None:
    """Truncate the application log. Raises OSError if it cannot be written."""
    path = get_app_log_path()
    if path.exists():
        path.write_text("", encoding="utf-8")
