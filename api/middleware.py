"""
Global middleware and error handlers.
"""

from __future__ import annotations

import logging
import time

from fastapi import FastAPI, Request, status
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse

logger = logging.getLogger(__name__)


def register_middleware(app: FastAPI) -> None:
    """Attach any app-level middleware."""

    @app.middleware("http")
    async def request_timer(request: Request, call_next):
        start = time.perf_counter()
        response = await call_next(request)
        elapsed = time.perf_counter() - start
        response.headers["X-Process-Time"] = f"{elapsed:.4f}"
        logger.debug(
            "%s %s → %d — %.3fs",
            request.method, request.url.path, response.status_code, elapsed,
        )
        return response


def register_error_handlers(app: FastAPI) -> None:
    """Unparseable bodies get the same ``{"error": ...}`` 400 as rejected credentials."""

    @app.exception_handler(RequestValidationError)
    async def validation_error_handler(request: Request, exc: RequestValidationError):
        logger.warning("Validation error on %s: %s", request.url.path, exc.errors())
        return JSONResponse(
            status_code=status.HTTP_400_BAD_REQUEST,
            content={"error": _first_error_message(exc)},
        )


def _first_error_message(exc: RequestValidationError) -> str:
    errors = exc.errors()
    if not errors:
        return "Invalid request body"
    first = errors[0]
    field = ".".join(str(loc) for loc in first.get("loc", ()) if loc != "body")
    message = first.get("msg", "Invalid request body")
    return f"{field}: {message}" if field else message
