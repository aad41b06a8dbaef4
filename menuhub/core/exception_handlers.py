"""JSON error responses for domain, HTTP, validation and unexpected errors.

Register with register_exception_handlers(app). Every terminal menu error
maps to its own status and user-readable message; diagnostics stay in
``details`` and are trimmed outside debug mode where they name internal
endpoints.
"""

import logging
from typing import Any

from fastapi import FastAPI, Request
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse
from starlette.exceptions import HTTPException as StarletteHTTPException

from menuhub.core.config import get_settings
from menuhub.domain.exceptions import MenuhubException

logger = logging.getLogger(__name__)

# Map domain error_code to HTTP status
_ERROR_CODE_STATUS: dict[str, int] = {
    "MALFORMED_SLUG": 400,
    "TENANT_NOT_FOUND": 404,
    "CONNECTION_UNAVAILABLE": 503,
    "VALIDATION_ERROR": 400,
    "EXCHANGE_RATE_MISSING": 400,
    "EXCHANGE_RATE_INVALID": 400,
    "TRANSLATION_FAILED": 502,
}

# Codes whose details are only returned in debug mode
_DEBUG_ONLY_DETAILS = frozenset({"CONNECTION_UNAVAILABLE"})


def status_for(exc: MenuhubException) -> int:
    """HTTP status for a domain exception (500 for unmapped codes)."""
    return _ERROR_CODE_STATUS.get(exc.error_code, 500)


def _menuhub_exception_handler(request: Request, exc: MenuhubException) -> JSONResponse:
    """Return JSON from MenuhubException.to_dict() with its mapped status."""
    status = status_for(exc)
    content = exc.to_dict()
    if exc.error_code in _DEBUG_ONLY_DETAILS and not get_settings().debug:
        content["details"] = {}
    if status >= 500:
        logger.warning("%s on %s: %s", exc.error_code, request.url.path, exc.details)
    return JSONResponse(status_code=status, content=content)


def _validation_exception_handler(
    request: Request, exc: RequestValidationError
) -> JSONResponse:
    """422 listing each invalid query or path parameter."""
    return JSONResponse(
        status_code=422,
        content={
            "error": "VALIDATION_ERROR",
            "message": "Request validation failed",
            "details": jsonable_errors(exc),
        },
    )


def jsonable_errors(exc: RequestValidationError) -> list[dict[str, Any]]:
    """Validation errors without the raw ``ctx``/``input`` objects (not always JSON-safe)."""
    return [
        {"loc": list(err.get("loc", ())), "msg": err.get("msg"), "type": err.get("type")}
        for err in exc.errors()
    ]


def _http_exception_handler(
    request: Request, exc: StarletteHTTPException
) -> JSONResponse:
    """Unknown routes and other framework errors keep their status."""
    return JSONResponse(
        status_code=exc.status_code,
        content={"error": "HTTP_ERROR", "message": exc.detail},
    )


def _generic_exception_handler(request: Request, exc: Exception) -> JSONResponse:
    """Return 500; include the exception text only when debug is True."""
    logger.exception("Unhandled exception: %s", type(exc).__name__)
    detail: Any = str(exc) if get_settings().debug else "Internal server error"
    return JSONResponse(
        status_code=500,
        content={"error": "INTERNAL_ERROR", "message": detail},
    )


def register_exception_handlers(app: FastAPI) -> None:
    """Register all exception handlers on the FastAPI app."""
    app.add_exception_handler(MenuhubException, _menuhub_exception_handler)
    app.add_exception_handler(RequestValidationError, _validation_exception_handler)
    app.add_exception_handler(StarletteHTTPException, _http_exception_handler)
    app.add_exception_handler(Exception, _generic_exception_handler)
