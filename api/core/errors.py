"""
Error taxonomy and the uniform JSON error envelope.

Services return a `Failure` value instead of raising for expected errors
(no such row, bad input). Routers pass whatever the service returned to
`respond`, which is the one place a `Failure` becomes an HTTP response.

Anything raised instead (framework validation, timeouts, DB errors, bugs) is
caught by the handlers registered in `install_exception_handlers`.

Envelope shape:
    {"error": {"message": "...", "status": 404}}
"""

from __future__ import annotations

import asyncio
import logging
from dataclasses import dataclass
from http import HTTPStatus
from typing import Any

import asyncpg
from fastapi import FastAPI, Request, status
from fastapi.encoders import jsonable_encoder
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse
from starlette.exceptions import HTTPException as StarletteHTTPException

logger = logging.getLogger(__name__)

MISSING_DATA = "Missing required data"
INVALID_DATA = "Invalid request data"
INTERNAL_ERROR = "Internal Server Error"
TIMED_OUT = "Request timed out"


@dataclass(frozen=True)
class Failure:
    status: int
    message: str


def not_found(message: str) -> Failure:
    return Failure(status=status.HTTP_404_NOT_FOUND, message=message)


def bad_request(message: str = MISSING_DATA) -> Failure:
    return Failure(status=status.HTTP_400_BAD_REQUEST, message=message)


def error_response(
    status_code: int,
    message: str,
    *,
    headers: dict[str, str] | None = None,
) -> JSONResponse:
    return JSONResponse(
        status_code=status_code,
        content={"error": {"message": message, "status": status_code}},
        headers=headers,
    )


def respond(result: Any, key: str | None = None, *, status_code: int = status.HTTP_200_OK) -> JSONResponse:
    """
    Turn a service result into a response.

    `key` wraps a successful result in an envelope (`{"company": {...}}`);
    without it the result is sent as-is.
    """
    if isinstance(result, Failure):
        return error_response(result.status, result.message)
    content = {key: result} if key else result
    return JSONResponse(status_code=status_code, content=jsonable_encoder(content))


async def _http_exception_handler(_: Request, exc: StarletteHTTPException) -> JSONResponse:
    if isinstance(exc.detail, str) and exc.detail:
        message = exc.detail
    else:
        message = HTTPStatus(exc.status_code).phrase
    return error_response(exc.status_code, message, headers=getattr(exc, "headers", None))


async def _validation_exception_handler(request: Request, exc: RequestValidationError) -> JSONResponse:
    errors = exc.errors()
    only_missing = bool(errors) and all(e.get("type") == "missing" for e in errors)
    logger.info(
        "request_invalid method=%s path=%s errors=%s",
        request.method,
        request.url.path,
        [e.get("loc") for e in errors],
    )
    return error_response(
        status.HTTP_400_BAD_REQUEST,
        MISSING_DATA if only_missing else INVALID_DATA,
    )


async def _timeout_handler(request: Request, _: Exception) -> JSONResponse:
    logger.warning("request_timeout method=%s path=%s", request.method, request.url.path)
    return error_response(status.HTTP_504_GATEWAY_TIMEOUT, TIMED_OUT)


async def _internal_error_handler(request: Request, exc: Exception) -> JSONResponse:
    logger.error(
        "request_failed method=%s path=%s",
        request.method,
        request.url.path,
        exc_info=exc,
    )
    return error_response(status.HTTP_500_INTERNAL_SERVER_ERROR, INTERNAL_ERROR)


def install_exception_handlers(app: FastAPI) -> None:
    app.add_exception_handler(StarletteHTTPException, _http_exception_handler)
    app.add_exception_handler(RequestValidationError, _validation_exception_handler)
    app.add_exception_handler(asyncio.TimeoutError, _timeout_handler)
    app.add_exception_handler(asyncpg.PostgresError, _internal_error_handler)
    app.add_exception_handler(asyncpg.InterfaceError, _internal_error_handler)
    app.add_exception_handler(Exception, _internal_error_handler)
