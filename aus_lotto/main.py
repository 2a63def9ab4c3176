"""FastAPI application entry point."""

import sys
from contextlib import asynccontextmanager
from pathlib import Path

from fastapi import FastAPI, Request
from fastapi.responses import JSONResponse
from loguru import logger

from aus_lotto.config import settings
from aus_lotto.exceptions import InvalidDrawError, UnknownGameError

# Configure loguru
logger.remove()
logger.add(sys.stderr, level="DEBUG" if settings.DEBUG else "INFO")


@asynccontextmanager
async def lifespan(app: FastAPI):
    """Application lifespan: startup and shutdown."""
    log_file = Path(settings.LOG_FILE)
    log_file.parent.mkdir(parents=True, exist_ok=True)
    sink_id = logger.add(log_file, rotation="10 MB", retention="7 days", level="INFO")
    logger.info("Starting {} ...", settings.APP_NAME)

    yield

    logger.info("Application shutdown complete")
    logger.remove(sink_id)


app = FastAPI(
    title=settings.APP_NAME,
    version="1.0.0",
    description="Australian lotto results, statistics and number recommendations",
    lifespan=lifespan,
)


@app.exception_handler(UnknownGameError)
async def unknown_game_handler(request: Request, exc: UnknownGameError):
    return JSONResponse(status_code=404, content={"success": False, "error": str(exc)})


@app.exception_handler(InvalidDrawError)
async def invalid_draw_handler(request: Request, exc: InvalidDrawError):
    logger.error("Invalid draw data for {}: {}", request.url.path, exc)
    return JSONResponse(status_code=500, content={"success": False, "error": str(exc)})


# Include API routers
from aus_lotto.api.v1.router import api_router  # noqa: E402
app.include_router(api_router, prefix="/api/v1")
