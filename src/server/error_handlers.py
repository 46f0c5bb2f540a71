"""FastAPI exception handlers producing the ``{success, error, details}`` envelope."""

from __future__ import annotations

from typing import Any

from fastapi import FastAPI, Request, status
from fastapi.encoders import jsonable_encoder
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse
from starlette.exceptions import HTTPException as StarletteHTTPException

from trilium_explorer.exceptions import (
    NotFoundError,
    StoreError,
    TriliumExplorerError,
    ValidationError,
)
from trilium_explorer.utils.logging_config import get_logger

logger = get_logger(__name__)

DEFAULT_ERRORS: dict[int, tuple[str, str]] = {
    status.HTTP_400_BAD_REQUEST: ("validation_error", "Invalid request input"),
    status.HTTP_404_NOT_FOUND: ("not_found", "Resource not found"),
    status.HTTP_405_METHOD_NOT_ALLOWED: ("method_not_allowed", "Method not allowed"),
    status.HTTP_500_INTERNAL_SERVER_ERROR: ("internal_error", "Internal server error"),
}


def error_response(status_code: int, details: Any = None, *, error: str | None = None) -> JSONResponse:
    default_error, default_message = DEFAULT_ERRORS.get(
        status_code, DEFAULT_ERRORS[status.HTTP_500_INTERNAL_SERVER_ERROR]
    )
    return JSONResponse(
        status_code=status_code,
        content={
            "success": False,
            "error": error or default_error,
            "details": jsonable_encoder(details) if details else default_message,
        },
    )


async def validation_exception_handler(request: Request, exc: RequestValidationError) -> JSONResponse:
    errors = exc.errors()
    logger.warning("Request validation failed", extra={"path": request.url.path, "errors": len(errors)})
    messages = "; ".join(str(item.get("msg", "")) for item in errors) or None
    return error_response(status.HTTP_400_BAD_REQUEST, messages)


async def input_error_handler(request: Request, exc: ValidationError) -> JSONResponse:
    logger.warning("Invalid input", extra={"path": request.url.path, "error": str(exc)})
    return error_response(status.HTTP_400_BAD_REQUEST, str(exc))


async def not_found_handler(request: Request, exc: NotFoundError) -> JSONResponse:
    logger.info("Not found", extra={"path": request.url.path, "error": str(exc)})
    return error_response(status.HTTP_404_NOT_FOUND, str(exc))


async def store_error_handler(request: Request, exc: StoreError) -> JSONResponse:
    logger.error(
        "Note store failure", extra={"path": request.url.path, "query": exc.query, "error": str(exc)}
    )
    return error_response(status.HTTP_500_INTERNAL_SERVER_ERROR, str(exc), error="store_error")


async def domain_error_handler(request: Request, exc: TriliumExplorerError) -> JSONResponse:
    logger.error("Request failed", extra={"path": request.url.path, "error": str(exc)})
    return error_response(status.HTTP_500_INTERNAL_SERVER_ERROR, str(exc))


async def http_exception_handler(request: Request, exc: StarletteHTTPException) -> JSONResponse:
    return error_response(exc.status_code, exc.detail)


async def internal_exception_handler(request: Request, exc: Exception) -> JSONResponse:
    logger.exception("Unhandled exception: %s", exc)
    return error_response(status.HTTP_500_INTERNAL_SERVER_ERROR, str(exc) or None)


def register_error_handlers(app: FastAPI) -> None:
    """Attach the exception handlers to the FastAPI application."""
    app.add_exception_handler(RequestValidationError, validation_exception_handler)
    app.add_exception_handler(ValidationError, input_error_handler)
    app.add_exception_handler(NotFoundError, not_found_handler)
    app.add_exception_handler(StoreError, store_error_handler)
    app.add_exception_handler(TriliumExplorerError, domain_error_handler)
    app.add_exception_handler(StarletteHTTPException, http_exception_handler)
    app.add_exception_handler(Exception, internal_exception_handler)


__all__ = ["error_response", "register_error_handlers"]
