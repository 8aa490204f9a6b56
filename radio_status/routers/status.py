"""Status API: normalized now-playing status of the radio stream."""
from __future__ import annotations

import logging

from fastapi import APIRouter, Depends
from fastapi.responses import JSONResponse, Response

from radio_status.applog import append_app_log
from radio_status.config import settings
from radio_status.errors import ResolutionError
from radio_status.models import ErrorEnvelope, StatusEnvelope
from radio_status.resolver import StatusResolver

router = APIRouter(prefix="/api/status", tags=["status"])

log = logging.getLogger("radio_status.routers.status")

JSON_HEADERS = {
    "Content-Type": "application/json; charset=utf-8",
    "Access-Control-Allow-Origin": "*",
}
PREFLIGHT_HEADERS = {
    "Access-Control-Allow-Origin": "*",
    "Access-Control-Allow-Methods": "GET, OPTIONS",
    "Access-Control-Allow-Headers": "Content-Type",
}


def get_resolver() -> StatusResolver:
    return StatusResolver(settings.upstream())


def _ok_json(body: StatusEnvelope) -> JSONResponse:
    return JSONResponse(body.model_dump(), status_code=200, headers=JSON_HEADERS)


def _error_json(message: str, status_code: int = 500) -> JSONResponse:
    return JSONResponse(
        ErrorEnvelope(error=message).model_dump(), status_code=status_code, headers=JSON_HEADERS
    )


@router.get("")
async def get_status(resolver: StatusResolver = Depends(get_resolver)) -> JSONResponse:
    """Resolve announcer, program, unique listeners and online/offline from the streaming server."""
    try:
        st = await resolver.resolve()
    except ResolutionError as e:
        return _error_json(str(e))
    except Exception as e:
        log.exception("Unexpected error resolving radio status")
        append_app_log(f"unexpected error resolving status: {e}")
        return _error_json(str(e) or "Failed to get radio status")
    return _ok_json(StatusEnvelope.from_status(st))


@router.options("")
async def status_preflight() -> Response:
    """Cross-origin pre-flight. Never contacts the streaming server."""
    return Response(status_code=200, headers=PREFLIGHT_HEADERS)
