"""radio status - FastAPI application."""
import logging
import sys
from contextlib import asynccontextmanager

from fastapi import FastAPI
from fastapi.responses import RedirectResponse

from radio_status.config import settings
from radio_status.routers import logs, status

logging.basicConfig(
    level=logging.DEBUG if settings.debug else logging.INFO,
    format="%(asctime)s - %(name)s - %(levelname)s - %(message)s",
    handlers=[logging.StreamHandler(sys.stdout)],
)


@asynccontextmanager
async def lifespan(app: FastAPI):
    settings.data_dir.mkdir(parents=True, exist_ok=True)
    if settings.logs_dir:
        settings.logs_dir.mkdir(parents=True, exist_ok=True)
    yield


app = FastAPI(
    title="radio status",
    description="Normalized live status (announcer, program, listeners) of a Shoutcast/Icecast stream",
    version="0.1.0",
    debug=settings.debug,
    lifespan=lifespan,
)
app.include_router(status.router)
app.include_router(logs.router)


@app.get("/", include_in_schema=False)
async def root():
    return RedirectResponse(url="/docs")
