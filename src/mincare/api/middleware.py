"""HTTP plumbing for the MinCare API.

Requests pass through, outermost first:

1. ``CORSMiddleware``: answers preflights before any other check
2. ``RequestContextMiddleware``: request id, access log, last-resort 500
3. ``APIKeyMiddleware``: shared-secret check when a key is configured

Application errors never reach the 500 guard; they are rendered by
:func:`mincare_error_handler` as ``{"code", "message", "details"}``.
"""

from __future__ import annotations

import secrets
import time
import uuid
from typing import Callable

import structlog
from fastapi import FastAPI, Request, Response
from fastapi.exceptions import RequestValidationError
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse
from starlette.middleware.base import BaseHTTPMiddleware

from mincare.config import get_settings
from mincare.errors import MincareError

logger = structlog.get_logger(__name__)

PUBLIC_PATHS = frozenset({"/", "/health", "/docs", "/openapi.json", "/redoc"})
REQUEST_ID_HEADER = "X-Request-ID"


def _error_body(code: str, message: str, **details) -> dict:
    body: dict = {"code": code, "message": message}
    if details:
        body["details"] = details
    return body


class RequestContextMiddleware(BaseHTTPMiddleware):
    """Bind a request id to the log context and turn crashes into a clean 500.

    The id is taken from an incoming ``X-Request-ID`` header when present and
    echoed back on every response, including the 500.
    """

    async def dispatch(self, request: Request, call_next: Callable) -> Response:
        request_id = request.headers.get(REQUEST_ID_HEADER) or uuid.uuid4().hex[:12]
        structlog.contextvars.bind_contextvars(request_id=request_id)
        started = time.perf_counter()
        try:
            response = await call_next(request)
        except Exception:
            logger.exception("http.unhandled_error", path=request.url.path)
            response = JSONResponse(
                status_code=500,
                content=_error_body("INTERNAL_ERROR", "Internal server error."),
            )
        finally:
            structlog.contextvars.unbind_contextvars("request_id")

        response.headers[REQUEST_ID_HEADER] = request_id
        if request.url.path not in PUBLIC_PATHS:
            logger.info(
                "http.request",
                request_id=request_id,
                method=request.method,
                path=request.url.path,
                status=response.status_code,
                elapsed_ms=round((time.perf_counter() - started) * 1000, 1),
            )
        return response


class APIKeyMiddleware(BaseHTTPMiddleware):
    """Shared-secret guard for everything outside :data:`PUBLIC_PATHS`.

    Accepts ``X-API-Key: <key>`` or ``Authorization: Bearer <key>``.  Inactive
    until ``MINCARE_API_SECRET_KEY`` is set to a real value.
    """

    async def dispatch(self, request: Request, call_next: Callable) -> Response:
        settings = get_settings()
        if not settings.api_key_required or request.url.path in PUBLIC_PATHS:
            return await call_next(request)

        presented = request.headers.get("X-API-Key") or _bearer_token(request)
        if not presented or not secrets.compare_digest(presented, settings.api_secret_key):
            logger.warning("http.unauthorized", path=request.url.path)
            return JSONResponse(
                status_code=401,
                content=_error_body("UNAUTHORIZED", "Invalid or missing API key."),
            )
        return await call_next(request)


def _bearer_token(request: Request) -> str | None:
    scheme, _, token = request.headers.get("Authorization", "").partition(" ")
    if scheme.lower() != "bearer":
        return None
    return token.strip() or None


# ── Exception handlers ────────────────────────────────────────


async def mincare_error_handler(request: Request, exc: MincareError) -> JSONResponse:
    if exc.http_status >= 500:
        logger.warning("http.service_error", path=request.url.path, code=exc.code)
    return JSONResponse(status_code=exc.http_status, content=exc.to_dict())


async def validation_error_handler(
    request: Request, exc: RequestValidationError
) -> JSONResponse:
    """Structured 422 with one entry per offending field."""
    errors = [
        {
            "field": ".".join(str(part) for part in error["loc"] if part != "body"),
            "message": error["msg"],
            "type": error["type"],
        }
        for error in exc.errors()
    ]
    return JSONResponse(
        status_code=422,
        content=_error_body("VALIDATION_ERROR", "Request validation failed.", errors=errors),
    )


def setup_middleware(app: FastAPI) -> None:
    # Starlette wraps in reverse order: the last one added runs first.
    # CORS must be outermost so preflights never reach the API key check.
    app.add_middleware(APIKeyMiddleware)
    app.add_middleware(RequestContextMiddleware)
    app.add_middleware(
        CORSMiddleware,
        allow_origins=get_settings().cors_origin_list,
        allow_credentials=True,
        allow_methods=["*"],
        allow_headers=["*"],
        expose_headers=[REQUEST_ID_HEADER],
    )

    app.add_exception_handler(MincareError, mincare_error_handler)
    app.add_exception_handler(RequestValidationError, validation_error_handler)
