"""FastAPI application serving the note tree API."""

from __future__ import annotations

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware
from fastapi.staticfiles import StaticFiles

from server.error_handlers import register_error_handlers
from server.routers import notes
from server.server_config import API_PREFIX, CORS_ORIGINS, SERVICE_NAME, SERVICE_VERSION, STATIC_DIR
from trilium_explorer.utils.logging_config import get_logger

logger = get_logger(__name__)


def create_app() -> FastAPI:
    """Build the application: CORS, error envelope, API router and optional front end."""
    application = FastAPI(
        title=SERVICE_NAME,
        description="Read-only API over a Trilium note tree",
        version=SERVICE_VERSION,
    )
    application.add_middleware(
        CORSMiddleware,
        allow_origins=CORS_ORIGINS,
        allow_methods=["GET", "POST"],
        allow_headers=["*"],
    )
    register_error_handlers(application)
    application.include_router(notes.router, prefix=API_PREFIX)

    if STATIC_DIR is not None:
        if STATIC_DIR.is_dir():
            application.mount("/", StaticFiles(directory=STATIC_DIR, html=True), name="static")
        else:
            logger.warning("Static directory not found", extra={"static_dir": str(STATIC_DIR)})

    return application


app = create_app()
