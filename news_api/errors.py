"""
API error taxonomy and storage-error normalization.

Every failure leaves the service as one of three typed errors, rendered
with the same envelope::

    {"msg": "Bad request", "code": 400, "details": "Invalid order query"}

Validation helpers raise ``BadRequest`` / ``NotFound`` directly.  Errors
that only surface once a statement reaches the database (constraint
violations, malformed literals, unknown identifiers) are classified by
``normalize_db_error`` from the driver's SQLSTATE (PostgreSQL) or message
(SQLite).  Anything unrecognised becomes ``InternalError`` and is logged;
its cause is never echoed back to the caller.
"""
from __future__ import annotations

import logging
from typing import Any

from fastapi import FastAPI, Request
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse
from sqlalchemy.exc import DBAPIError
from starlette.exceptions import HTTPException as StarletteHTTPException

logger = logging.getLogger(__name__)


# ---------------------------------------------------------------------------
# Taxonomy
# ---------------------------------------------------------------------------

class APIError(Exception):
    """Base class for errors that map onto an HTTP response."""

    status_code: int = 500
    msg: str = "Internal server error"

    def __init__(self, details: str | None = None) -> None:
        super().__init__(details or self.msg)
        self.details = details

    def to_dict(self) -> dict[str, Any]:
        body: dict[str, Any] = {"msg": self.msg, "code": self.status_code}
        if self.details is not None:
            body["details"] = self.details
        return body


class BadRequest(APIError):
    status_code = 400
    msg = "Bad request"


class NotFound(APIError):
    status_code = 404
    msg = "Resource not found"


class InternalError(APIError):
    status_code = 500
    msg = "Internal server error"


# ---------------------------------------------------------------------------
# Storage error classification
# ---------------------------------------------------------------------------

# PostgreSQL SQLSTATE -> (error class, details)
_SQLSTATE_MAP: dict[str, tuple[type[APIError], str]] = {
    "22P02": (BadRequest, "Invalid input syntax"),
    "22003": (BadRequest, "Numeric value out of range"),
    "23502": (BadRequest, "Missing required field"),
    "23505": (BadRequest, "Value already exists"),
    "42703": (BadRequest, "Invalid column"),
    "23503": (NotFound, "Referenced resource was not found"),
}

# SQLite reports constraint failures by message only.
_SQLITE_MESSAGES: tuple[tuple[str, type[APIError], str], ...] = (
    ("UNIQUE constraint failed", BadRequest, "Value already exists"),
    ("NOT NULL constraint failed", BadRequest, "Missing required field"),
    ("no such column", BadRequest, "Invalid column"),
    ("datatype mismatch", BadRequest, "Invalid input syntax"),
    ("FOREIGN KEY constraint failed", NotFound, "Referenced resource was not found"),
)


def _sqlstate(orig: BaseException | None) -> str | None:
    # asyncpg (through SQLAlchemy's adapter) and psycopg2 expose ``pgcode``;
    # psycopg 3 exposes ``sqlstate``.
    if orig is None:
        return None
    return getattr(orig, "pgcode", None) or getattr(orig, "sqlstate", None)


def normalize_db_error(exc: DBAPIError) -> APIError:
    """Classify a SQLAlchemy ``DBAPIError`` into the API taxonomy."""
    code = _sqlstate(exc.orig)
    if code in _SQLSTATE_MAP:
        error_cls, details = _SQLSTATE_MAP[code]
        logger.info("Mapped SQLSTATE %s to %s", code, error_cls.__name__)
        return error_cls(details)

    message = str(exc.orig) if exc.orig is not None else str(exc)
    for fragment, error_cls, details in _SQLITE_MESSAGES:
        if fragment in message:
            logger.info("Mapped storage error %r to %s", fragment, error_cls.__name__)
            return error_cls(details)

    logger.error("Unclassified storage error (sqlstate=%s): %s", code, message)
    return InternalError()


def normalize_error(exc: BaseException) -> APIError:
    """Last-resort translation of any exception into an ``APIError``."""
    if isinstance(exc, APIError):
        return exc
    if isinstance(exc, DBAPIError):
        return normalize_db_error(exc)
    return InternalError()


# ---------------------------------------------------------------------------
# FastAPI wiring
# ---------------------------------------------------------------------------

def _response(error: APIError) -> JSONResponse:
    return JSONResponse(status_code=error.status_code, content=error.to_dict())


def _describe_validation_error(exc: RequestValidationError) -> str:
    parts = []
    for err in exc.errors():
        location = ".".join(str(part) for part in err.get("loc", ()))
        parts.append(f"{location}: {err.get('msg')}")
    return "; ".join(parts) or "Invalid request"


def register_exception_handlers(app: FastAPI) -> None:
    """Install the handlers that render every failure as ``{msg, code, details?}``."""

    @app.exception_handler(APIError)
    async def _api_error(request: Request, exc: APIError) -> JSONResponse:
        return _response(exc)

    @app.exception_handler(RequestValidationError)
    async def _validation_error(request: Request, exc: RequestValidationError) -> JSONResponse:
        return _response(BadRequest(_describe_validation_error(exc)))

    @app.exception_handler(DBAPIError)
    async def _db_error(request: Request, exc: DBAPIError) -> JSONResponse:
        error = normalize_error(exc)
        if isinstance(error, InternalError):
            logger.exception("Unhandled storage error on %s %s", request.method, request.url.path)
        return _response(error)

    @app.exception_handler(StarletteHTTPException)
    async def _http_error(request: Request, exc: StarletteHTTPException) -> JSONResponse:
        if exc.status_code == 404:
            content = {"msg": "Endpoint not found", "code": 404}
        elif exc.status_code == 405:
            content = {"msg": "Method not allowed", "code": 405}
        else:
            content = {"msg": str(exc.detail), "code": exc.status_code}
        return JSONResponse(status_code=exc.status_code, content=content)

    @app.exception_handler(Exception)
    async def _unhandled(request: Request, exc: Exception) -> JSONResponse:
        logger.exception("Unhandled error on %s %s", request.method, request.url.path)
        return _response(normalize_error(exc))
