"""Main FastAPI application module.

This module initializes the FastAPI application, registers route handlers
and error handlers, and owns startup: configuration checks, table creation
and the daily Trello refresh task.
"""

import asyncio
import logging

from fastapi import FastAPI, Request, status
from fastapi.exceptions import RequestValidationError
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse
from fastapi.staticfiles import StaticFiles

from api.routes import admin, auth, collaborators, moderator, reports
from config import (
    API_HOST,
    API_PORT,
    CORS_ALLOWED_ORIGINS,
    STATIC_DIR,
    TRELLO_REFRESH_ENABLED,
    TRELLO_REFRESH_HOUR,
    require_jwt_secret,
    require_refresh_hour,
)
from core.database import SessionLocal, init_db
from core.exceptions import BugTrackerError, UnauthenticatedError
from core.logging_config import setup_logging
from utils.trello_scraper import run_daily_refresh

# Setup logging
setup_logging()
logger = logging.getLogger(__name__)

# Initialize FastAPI application
app = FastAPI(
    title="Report Tracker API",
    description="Bug and feature report tracking with role-based moderation.",
    version="1.0.0",
)

# Configure CORS middleware
app.add_middleware(
    CORSMiddleware,
    allow_origins=CORS_ALLOWED_ORIGINS,
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["Content-Type", "Authorization"],
    expose_headers=["Authorization"],
)

# Register route handlers
app.include_router(auth.router)
app.include_router(reports.router)
app.include_router(moderator.router)
app.include_router(admin.router)
app.include_router(collaborators.router)

_background_tasks = set()


@app.exception_handler(BugTrackerError)
async def bug_tracker_error_handler(request: Request, exc: BugTrackerError) -> JSONResponse:
    if exc.status_code >= 500:
        logger.error("%s %s failed: %s", request.method, request.url.path, exc.message)
    headers = None
    if isinstance(exc, UnauthenticatedError):
        headers = {"WWW-Authenticate": "Bearer"}
    return JSONResponse(
        status_code=exc.status_code,
        content={"detail": exc.message},
        headers=headers,
    )


@app.exception_handler(RequestValidationError)
async def validation_error_handler(request: Request, exc: RequestValidationError) -> JSONResponse:
    problems = [
        f"{'.'.join(str(part) for part in error.get('loc', ()))}: {error.get('msg', '')}"
        for error in exc.errors()
    ]
    return JSONResponse(
        status_code=status.HTTP_400_BAD_REQUEST,
        content={"detail": "Invalid input", "errors": problems},
    )


@app.exception_handler(Exception)
async def unhandled_error_handler(request: Request, exc: Exception) -> JSONResponse:
    logger.error(
        "Unhandled error on %s %s", request.method, request.url.path, exc_info=exc
    )
    return JSONResponse(
        status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
        content={"detail": "Internal server error"},
    )


@app.on_event("startup")
async def startup_tasks() -> None:
    """Refuse to start without a signing secret, then prepare storage."""
    require_jwt_secret()
    init_db()
    if TRELLO_REFRESH_ENABLED:
        require_refresh_hour(TRELLO_REFRESH_HOUR)
        task = asyncio.create_task(run_daily_refresh(SessionLocal, TRELLO_REFRESH_HOUR))
        _background_tasks.add(task)
        task.add_done_callback(_background_tasks.discard)
        logger.info("Daily Trello refresh scheduled at %02d:00 UTC", TRELLO_REFRESH_HOUR)


@app.on_event("shutdown")
async def shutdown_tasks() -> None:
    for task in list(_background_tasks):
        task.cancel()


@app.get("/api/health", summary="Health check", tags=["Health"])
def health() -> dict:
    """Health check endpoint.

    Returns:
        Dictionary with status "ok".
    """
    return {"status": "ok"}


# Front-end bundle; registered last so API routes take precedence
if STATIC_DIR.is_dir():
    app.mount("/", StaticFiles(directory=STATIC_DIR, html=True), name="static")


# --- Startup code for direct execution ---
if __name__ == "__main__":
    import uvicorn

    logger.info("Report Tracker API listening on http://%s:%s", API_HOST, API_PORT)
    uvicorn.run("app:app", host=API_HOST, port=API_PORT)
