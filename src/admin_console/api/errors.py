"""
admin_console.api.errors

Rendering of the error taxonomy as HTTP responses.

Responsibilities:
- Map `ConsoleError` subclasses to their status code and JSON envelope.
- Surface store failures as retryable `internal_error` instead of bare 500s.
- Keep request validation failures in the same envelope.
"""

from __future__ import annotations

from fastapi import FastAPI, Request
from fastapi.encoders import jsonable_encoder
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse
from sqlalchemy.exc import SQLAlchemyError

from admin_console.errors import ConsoleError, InternalError, InvalidRequest, Unauthenticated
from admin_console.observability.logging import get_logger

log = get_logger(__name__)


def _render(exc: ConsoleError, *, extra: dict | None = None) -> JSONResponse:
    headers: dict[str, str] = {}
    if isinstance(exc, Unauthenticated):
        headers["WWW-Authenticate"] = "Bearer"
    if exc.retryable:
        headers["Retry-After"] = "1"
    body = exc.to_dict()
    if extra:
        body.update(extra)
    return JSONResponse(status_code=exc.status_code, content=body, headers=headers or None)


def install_error_handlers(app: FastAPI) -> None:
    @app.exception_handler(ConsoleError)
    async def _console_error(_: Request, exc: ConsoleError) -> JSONResponse:
        return _render(exc)

    @app.exception_handler(SQLAlchemyError)
    async def _store_error(_: Request, exc: SQLAlchemyError) -> JSONResponse:
        log.error("store.error", error=str(exc), error_type=type(exc).__name__)
        return _render(InternalError("store unavailable"))

    @app.exception_handler(RequestValidationError)
    async def _validation_error(_: Request, exc: RequestValidationError) -> JSONResponse:
        err = InvalidRequest("request validation failed")
        err.status_code = 422
        return _render(err, extra={"errors": jsonable_encoder(exc.errors())})
