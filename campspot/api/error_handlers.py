"""Error Handlers: one classification function, applied by every global handler.

Invariants:
    - classify_error() is the only place an exception becomes a status + message
    - CampspotError keeps its own status and message
    - SQLAlchemyError -> DatabaseError (500, generic message); driver detail only in logs
    - Any other exception -> InternalError (500, generic message)
    - RequestValidationError -> 400 naming the missing/empty fields

Design Decisions:
    - SQLAlchemyError gets its own handler so data-layer failures are rendered
      by the exception middleware, like domain errors
    - Any other exception is caught by an HTTP middleware registered before
      CORSMiddleware, so its 500 still carries the CORS headers; the Exception
      handler only covers failures outside that middleware
"""

import logging

from fastapi import FastAPI, Request, status
from fastapi.responses import JSONResponse
from fastapi.exceptions import RequestValidationError
from sqlalchemy.exc import SQLAlchemyError

from campspot.core.errors import (
    CampspotError, DatabaseError, ErrorCategory, ErrorSeverity, InternalError,
)

logger = logging.getLogger(__name__)

# Pydantic error types that mean "the field was not really supplied"
_PRESENCE_ERROR_TYPES = {"missing", "string_too_short"}


def classify_error(exc: Exception) -> CampspotError:
    """Map any exception to the CampspotError that describes its response."""
    if isinstance(exc, CampspotError):
        return exc
    if isinstance(exc, SQLAlchemyError):
        return DatabaseError(type(exc).__name__)
    return InternalError()


def register_error_handlers(app: FastAPI) -> None:
    """Register all global error handlers on the FastAPI app.

    Call before adding CORSMiddleware so error responses pass through it.
    """
    app.add_exception_handler(CampspotError, _classified_error_handler)
    app.add_exception_handler(SQLAlchemyError, _classified_error_handler)
    app.add_exception_handler(RequestValidationError, _validation_error_handler)
    app.add_exception_handler(Exception, _classified_error_handler)
    app.middleware("http")(_unhandled_error_middleware)


async def _unhandled_error_middleware(request: Request, call_next):
    try:
        return await call_next(request)
    except Exception as exc:
        return await _classified_error_handler(request, exc)


async def _classified_error_handler(request: Request, exc: Exception):
    error = classify_error(exc)
    extra = {"error_code": error.code, "path": request.url.path}
    if error.http_status >= 500:
        logger.error(
            f"{type(exc).__name__} on {request.url.path}: {exc}",
            exc_info=exc, extra=extra,
        )
    else:
        logger.warning(f"{error.code}: {error.message}", extra=extra)
    return JSONResponse(
        status_code=error.http_status, content=error.to_response(),
    )


async def _validation_error_handler(
    request: Request, exc: RequestValidationError,
):
    logger.warning(
        f"Validation error on {request.url.path}: {exc.errors()}",
        extra={"error_code": "VALIDATION_ERROR", "path": request.url.path},
    )
    return JSONResponse(
        status_code=status.HTTP_400_BAD_REQUEST,
        content=build_validation_error_response(exc.errors()),
    )


def _field_name(loc) -> str:
    if len(loc) == 1 and loc[0] == "body":
        return "request body"
    return str(loc[-1])


def build_validation_error_response(errors) -> dict:
    """Structured 400 body; the message lists missing fields when that is the cause."""
    missing = [
        _field_name(e["loc"]) for e in errors
        if e["type"] in _PRESENCE_ERROR_TYPES
    ]
    if missing and len(missing) == len(errors):
        message = f"Missing required fields: {', '.join(missing)}"
    else:
        message = "Invalid request data"
    return {
        "error": {
            "code": "VALIDATION_ERROR",
            "message": message,
            "category": ErrorCategory.VALIDATION.value,
            "severity": ErrorSeverity.WARNING.value,
            "details": [
                {
                    "field": ".".join(str(loc) for loc in e["loc"]),
                    "message": e["msg"],
                    "type": e["type"],
                }
                for e in errors
            ],
        },
    }
