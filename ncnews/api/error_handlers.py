"""Error handlers: every failure leaves the API as ``{"msg": ...}``.

Mapping:
    - ApiError (raised by services)      -> its own status and message
    - request validation failures        -> 400, missing input vs invalid value
    - asyncpg PostgresError by SQLSTATE  -> 400 / 404, see ``normalize_db_error``
    - unknown route / wrong verb         -> 404 "Page not found" / 405
    - anything else                      -> 500, details only in the log
"""

import logging
from typing import Any, Iterable, Mapping, Optional

import asyncpg
from fastapi import FastAPI, Request, status
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse
from starlette.exceptions import HTTPException as StarletteHTTPException

from ncnews.core.errors import (
    DUPLICATE_INPUT,
    INVALID_VALUE,
    REQUIRED_INPUT,
    ApiError,
    BadRequest,
    NotFound,
)

logger = logging.getLogger("ncnews.errors")

PAGE_NOT_FOUND = "Page not found"
METHOD_NOT_ALLOWED = "Method not allowed"
INTERNAL_ERROR = "Internal Server Error"

# constraint names come from ncnews.models.tables
FOREIGN_KEY_MESSAGES = {
    "articles_author_fkey": "Author Not Found",
    "articles_topic_fkey": "Topic Not Found",
    "comments_author_fkey": "Author Not Found",
    "comments_article_id_fkey": "Article ID Not Found",
}

NOT_NULL_VIOLATION = "23502"
FOREIGN_KEY_VIOLATION = "23503"
UNIQUE_VIOLATION = "23505"
DATA_EXCEPTION_CLASS = "22"


def normalize_db_error(exc: Exception) -> Optional[ApiError]:
    """Translate a database error into an ApiError, or None if uncategorized."""
    code = getattr(exc, "sqlstate", None) or ""
    if code == NOT_NULL_VIOLATION:
        return BadRequest(REQUIRED_INPUT)
    if code == UNIQUE_VIOLATION:
        return BadRequest(DUPLICATE_INPUT)
    if code == FOREIGN_KEY_VIOLATION:
        constraint = getattr(exc, "constraint_name", None)
        return NotFound(FOREIGN_KEY_MESSAGES.get(constraint, "Not Found"))
    if code.startswith(DATA_EXCEPTION_CLASS):
        return BadRequest(INVALID_VALUE)
    return None


def _is_missing(error: Mapping[str, Any]) -> bool:
    return error.get("type") == "missing" or ("input" in error and error["input"] is None)


def normalize_validation_errors(errors: Iterable[Mapping[str, Any]]) -> BadRequest:
    errors = list(errors)
    if any(_is_missing(e) for e in errors):
        return BadRequest(REQUIRED_INPUT)
    return BadRequest(INVALID_VALUE)


def _json(exc: ApiError, headers: Optional[Mapping[str, str]] = None) -> JSONResponse:
    return JSONResponse(status_code=exc.status_code, content=exc.to_response(), headers=headers)


def register_error_handlers(app: FastAPI) -> None:
    """Register all global error handlers on the FastAPI app."""

    @app.exception_handler(ApiError)
    async def api_error_handler(request: Request, exc: ApiError):
        logger.info(
            exc.msg,
            extra={"event": "api_error", "status": exc.status_code, "path": request.url.path},
        )
        return _json(exc)

    @app.exception_handler(RequestValidationError)
    async def validation_error_handler(request: Request, exc: RequestValidationError):
        logger.info(
            "Validation error on %s: %s",
            request.url.path,
            exc.errors(),
            extra={"event": "validation_error"},
        )
        return _json(normalize_validation_errors(exc.errors()))

    @app.exception_handler(asyncpg.PostgresError)
    async def db_error_handler(request: Request, exc: asyncpg.PostgresError):
        normalized = normalize_db_error(exc)
        if normalized is None:
            logger.error(
                "Unhandled database error on %s: %s",
                request.url.path,
                exc,
                exc_info=exc,
                extra={"event": "db_error_unhandled", "sqlstate": getattr(exc, "sqlstate", None)},
            )
            return JSONResponse(
                status_code=status.HTTP_500_INTERNAL_SERVER_ERROR, content={"msg": INTERNAL_ERROR}
            )
        logger.warning(
            "Database error normalized to %s",
            normalized.status_code,
            extra={
                "event": "db_error_normalized",
                "sqlstate": getattr(exc, "sqlstate", None),
                "detail": getattr(exc, "detail", None),
                "path": request.url.path,
            },
        )
        return _json(normalized)

    @app.exception_handler(StarletteHTTPException)
    async def http_error_handler(request: Request, exc: StarletteHTTPException):
        if exc.status_code == status.HTTP_404_NOT_FOUND:
            msg = PAGE_NOT_FOUND
        elif exc.status_code == status.HTTP_405_METHOD_NOT_ALLOWED:
            msg = METHOD_NOT_ALLOWED
        else:
            msg = str(exc.detail)
        return JSONResponse(status_code=exc.status_code, content={"msg": msg}, headers=exc.headers)

    @app.exception_handler(Exception)
    async def generic_error_handler(request: Request, exc: Exception):
        logger.error(
            "Unhandled exception on %s: %s",
            request.url.path,
            exc,
            exc_info=exc,
            extra={"event": "unhandled_error"},
        )
        return JSONResponse(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR, content={"msg": INTERNAL_ERROR}
        )
