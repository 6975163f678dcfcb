"""
The single place where failures become HTTP responses.

Every error response uses the envelope ``{"error": true, "message", "cause"}``.
The status code is read from the object describing the failure: a
``Failure`` outcome, an ``HTTPException``, or the fixed 400/500 for
validation and unexpected errors.
"""
from __future__ import annotations

import logging
from typing import Awaitable, Callable, Optional

from fastapi import FastAPI, Request, Response
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse
from sqlalchemy.exc import SQLAlchemyError
from starlette.exceptions import HTTPException as StarletteHTTPException

from .outcomes import Failure
from .schemas import ErrorEnvelope

logger = logging.getLogger(__name__)


# PUBLIC_INTERFACE
def error_response(status_code: int, message: str, cause: Optional[str] = None) -> JSONResponse:
    """Build the JSON error envelope at the given status."""
    envelope = ErrorEnvelope(message=message, cause=cause)
    return JSONResponse(status_code=status_code, content=envelope.model_dump())


# PUBLIC_INTERFACE
def failure_response(failure: Failure) -> JSONResponse:
    """Render a service Failure using the status code it carries."""
    logger.info("Error handler running: %s (%s)", failure.message, failure.kind.value)
    return error_response(failure.status_code, failure.message, failure.cause)


def _summarize_validation(exc: RequestValidationError) -> Optional[str]:
    errors = exc.errors()
    if not errors:
        return None
    first = errors[0]
    location = ".".join(str(part) for part in first.get("loc", ()))
    return f"{location}: {first.get('msg', 'invalid value')}" if location else first.get("msg")


async def validation_exception_handler(request: Request, exc: RequestValidationError) -> JSONResponse:
    """
    Malformed JSON, wrong field types and non-integer ids all answer 400.
    """
    logger.info("Error handler running: request validation failed on %s %s", request.method, request.url.path)
    return error_response(400, "Request validation failed", _summarize_validation(exc))


async def http_exception_handler(request: Request, exc: StarletteHTTPException) -> JSONResponse:
    logger.info("Error handler running: HTTP %s on %s %s", exc.status_code, request.method, request.url.path)
    response = error_response(exc.status_code, str(exc.detail), None)
    if exc.headers:
        response.headers.update(exc.headers)
    return response


async def database_exception_handler(request: Request, exc: SQLAlchemyError) -> JSONResponse:
    logger.exception("Error handler running: database failure on %s %s", request.method, request.url.path)
    return error_response(500, "Database error", type(exc).__name__)


async def catch_unhandled_errors(
    request: Request, call_next: Callable[[Request], Awaitable[Response]]
) -> Response:
    """
    Turn any other exception into the 500 envelope.

    Installed as HTTP middleware inside CORS so the envelope carries the
    CORS headers.
    """
    try:
        return await call_next(request)
    except Exception as exc:
        logger.exception("Error handler running: unhandled error on %s %s", request.method, request.url.path)
        return error_response(500, "Internal server error", type(exc).__name__)


# PUBLIC_INTERFACE
def register_error_handlers(app: FastAPI) -> None:
    """
    Install the error envelope handlers on the application.

    Call before adding CORSMiddleware: middleware added later wraps it.
    """
    app.add_exception_handler(RequestValidationError, validation_exception_handler)
    app.add_exception_handler(StarletteHTTPException, http_exception_handler)
    app.add_exception_handler(SQLAlchemyError, database_exception_handler)
    app.middleware("http")(catch_unhandled_errors)
