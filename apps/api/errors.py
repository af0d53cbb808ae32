"""Error response shape `{error, details?}` and app-wide exception handlers."""

from __future__ import annotations

import logging

from fastapi import FastAPI, Request
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse

from smartsummary.exceptions import SmartSummaryError

logger = logging.getLogger("smartsummary.api")


def error_response(status_code: int, error: str, details: str | None = None) -> JSONResponse:
    body: dict[str, str] = {"error": error}
    if details:
        body["details"] = details
    return JSONResponse(status_code=status_code, content=body)


async def _smartsummary_error(request: Request, exc: SmartSummaryError) -> JSONResponse:
    if exc.status_code >= 500:
        logger.error("%s %s failed: %s", request.method, request.url.path, exc)
    return error_response(exc.status_code, exc.message, exc.details)


async def _validation_error(request: Request, exc: RequestValidationError) -> JSONResponse:
    return error_response(400, "Invalid request", str(exc.errors()))


async def _unhandled_error(request: Request, exc: Exception) -> JSONResponse:
    logger.exception("unhandled error on %s %s", request.method, request.url.path)
    return error_response(500, "Something went wrong!", str(exc))


def install_error_handlers(app: FastAPI) -> None:
    app.add_exception_handler(SmartSummaryError, _smartsummary_error)  # type: ignore[arg-type]
    app.add_exception_handler(RequestValidationError, _validation_error)  # type: ignore[arg-type]
    app.add_exception_handler(Exception, _unhandled_error)
