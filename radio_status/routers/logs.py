"""Live logs API: tail or clear the application log."""
from __future__ import annotations

from fastapi import APIRouter, HTTPException
from fastapi.responses import PlainTextResponse

from radio_status.applog import clear_app_log, tail_app_log

router = APIRouter(prefix="/api/logs", tags=["logs"])


@router.get("/app", response_class=PlainTextResponse)
async def get_app_log(tail: int = 500) -> str:
    """Return the last N lines of the application log."""
    return tail_app_log(tail)


@router.delete("/app")
async def delete_app_log() -> dict:
    """Truncate the application log (for starting a clean test)."""
    try:
        clear_app_log()
    except OSError as e:
        raise HTTPException(500, f"Could not clear log: {e}") from e
    return {"ok": True}
