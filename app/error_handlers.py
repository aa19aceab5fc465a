"""
Exception handlers that turn failures into the API's JSON error bodies.

Two body shapes are in use:

- ``/api/auth/*`` answers ``{"success": false, "message": ..., "details"?: ...}``
  to match the ``{success, message, data}`` envelope of its success responses.
- Every other route answers ``{"error": ..., "details"?: ...}``.

Unexpected exceptions are logged with their traceback and answered with a
generic 500 message; no internal detail reaches the response body.
"""

from __future__ import annotations

import logging

from fastapi import FastAPI, Request, status
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse

from app.utils.exceptions import AppError

logger = logging.getLogger(__name__)

AUTH_API_PREFIX = "/api/auth"


def error_body(request: Request, message: str, details: str | None = None) -> dict:
    if request.url.path.startswith(AUTH_API_PREFIX):
        body: dict = {"success": False, "message": message}
    else:
        body = {"error": message}
    if details:
        body["details"] = details
    return body


async def app_error_handler(request: Request, exc: AppError) -> JSONResponse:
    if exc.status_code >= status.HTTP_500_INTERNAL_SERVER_ERROR:
        logger.error("%s %s failed: %s", request.method, request.url.path, exc.message)
    else:
        logger.info(
            "%s %s -> %d %s", request.method, request.url.path, exc.status_code, exc.message
        )
    return JSONResponse(
        status_code=exc.status_code,
        content=error_body(request, exc.message, exc.details),
    )


async def request_validation_handler(
    request: Request, exc: RequestValidationError
) -> JSONResponse:
    """Malformed bodies and path parameters are client errors (400), not 422."""
    errors = exc.errors()
    details = None
    if errors:
        first = errors[0]
        location = ".".join(str(part) for part in first.get("loc", ()) if part != "body")
        details = f"{location}: {first.get('msg')}" if location else first.get("msg")
    return JSONResponse(
        status_code=status.HTTP_400_BAD_REQUEST,
        content=error_body(request, "Invalid request", details),
    )


def unhandled_error_response(request: Request, exc: Exception) -> JSONResponse:
    logger.error(
        "Unhandled error on %s %s", request.method, request.url.path, exc_info=exc
    )
    return JSONResponse(
        status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
        content=error_body(request, "Internal server error"),
    )


async def unhandled_error_handler(request: Request, exc: Exception) -> JSONResponse:
    """Last resort for errors raised outside ``ErrorGuardMiddleware``."""
    return unhandled_error_response(request, exc)


def register_exception_handlers(app: FastAPI) -> None:
    app.add_exception_handler(AppError, app_error_handler)
    app.add_exception_handler(RequestValidationError, request_validation_handler)
    app.add_exception_handler(Exception, unhandled_error_handler)
