"""Error responses and exception handlers for the HTTP layer.

The core never raises for expected conditions: unknown ids come back as
None/False and the routers turn them into 404s. This module maps the
remaining failures (request validation, HTTP errors, unexpected
exceptions) onto one JSON envelope:

    {"success": false, "error": "...", "details": [{"field": ..., "message": ...}]}
"""

import logging
from collections.abc import Sequence
from typing import Any

from fastapi import FastAPI, Request, status
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse
from pydantic import BaseModel
from starlette.exceptions import HTTPException as StarletteHTTPException


logger = logging.getLogger(__name__)


class ErrorCode:
    """Error messages for specific error conditions."""

    ERR_VALIDATION_FAILED = "Validation failed"
    ERR_TASK_NOT_FOUND = "Task not found"
    ERR_UNEXPECTED = "An unexpected error occurred"


class ValidationErrorDetail(BaseModel):
    """One failed field in a request."""

    field: str
    message: str


class ErrorResponse(BaseModel):
    """Structured error response body."""

    success: bool = False
    error: str
    details: list[ValidationErrorDetail] | None = None


def _field_name(loc: Sequence[Any]) -> str:
    """Turn a pydantic error location into the client-facing field name.

    The leading "body"/"query"/"path" segment is dropped; list indices are kept.
    """
    parts = [str(part) for part in loc]
    if parts and parts[0] in {"body", "query", "path", "header", "cookie"}:
        parts = parts[1:]
    return ".".join(parts) or "request"


def _clean_message(message: str) -> str:
    """Strip pydantic's "Value error, " prefix from custom validator messages."""
    prefix = "Value error, "
    return message[len(prefix) :] if message.startswith(prefix) else message


def validation_details(exc: RequestValidationError) -> list[ValidationErrorDetail]:
    """Flatten a RequestValidationError into field/message pairs."""
    return [
        ValidationErrorDetail(field=_field_name(error.get("loc", ())), message=_clean_message(error.get("msg", "")))
        for error in exc.errors()
    ]


def error_response(status_code: int, error: str, details: list[ValidationErrorDetail] | None = None) -> JSONResponse:
    """Build a JSON error response with the standard envelope."""
    body = ErrorResponse(error=error, details=details)
    return JSONResponse(status_code=status_code, content=body.model_dump(exclude_none=True))


async def handle_validation_error(request: Request, exc: RequestValidationError) -> JSONResponse:
    """Translate request validation failures into 400 responses."""
    details = validation_details(exc)
    logger.info(
        "request_validation_failed",
        extra={"path": request.url.path, "method": request.method, "fields": [d.field for d in details]},
    )
    return error_response(status.HTTP_400_BAD_REQUEST, ErrorCode.ERR_VALIDATION_FAILED, details)


async def handle_http_exception(request: Request, exc: StarletteHTTPException) -> JSONResponse:
    """Render HTTP errors (including unknown routes) with the standard envelope."""
    if exc.status_code == status.HTTP_404_NOT_FOUND and exc.detail == "Not Found":
        message = f"Route {request.method} {request.url.path} not found"
    else:
        message = str(exc.detail)
    return error_response(exc.status_code, message)


def make_unexpected_error_handler(*, is_production: bool):
    """Build the catch-all handler; production responses hide exception text."""

    async def handle_unexpected_error(request: Request, exc: Exception) -> JSONResponse:
        logger.error("unhandled_error", exc_info=exc, extra={"path": request.url.path, "method": request.method})
        message = ErrorCode.ERR_UNEXPECTED if is_production else str(exc) or ErrorCode.ERR_UNEXPECTED
        return error_response(status.HTTP_500_INTERNAL_SERVER_ERROR, message)

    return handle_unexpected_error


def register_exception_handlers(app: FastAPI, *, is_production: bool) -> None:
    """Attach the error handlers to ``app``."""
    app.add_exception_handler(RequestValidationError, handle_validation_error)
    app.add_exception_handler(StarletteHTTPException, handle_http_exception)
    app.add_exception_handler(Exception, make_unexpected_error_handler(is_production=is_production))
