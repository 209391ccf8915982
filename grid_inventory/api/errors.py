from __future__ import annotations

import structlog
from fastapi import FastAPI, Request
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse
from slowapi.errors import RateLimitExceeded
from starlette.exceptions import HTTPException

from grid_inventory.core import exceptions as domain_exceptions

logger = structlog.get_logger(__name__)

_LOCATION_ROOTS = {"body", "query", "path"}


def _format_validation_error(error: dict) -> str:
    loc = [str(part) for part in error.get("loc", ()) if str(part) not in _LOCATION_ROOTS]
    msg = error.get("msg", "invalid value")
    return f"{'.'.join(loc)}: {msg}" if loc else msg


def _http_exception_handler(_: Request, exc: HTTPException) -> JSONResponse:
    # Normalize to a consistent JSON body
    return JSONResponse(
        status_code=exc.status_code, content={"detail": exc.detail}, headers=exc.headers
    )


def _request_validation_handler(_: Request, exc: RequestValidationError) -> JSONResponse:
    # Malformed payloads are a 400 like dynamic-field failures, listing every problem
    errors = [_format_validation_error(e) for e in exc.errors()]
    return JSONResponse(status_code=400, content={"detail": "Invalid request", "errors": errors})


def _domain_validation_handler(
    _: Request, exc: domain_exceptions.ValidationError
) -> JSONResponse:
    return JSONResponse(
        status_code=400,
        content={"detail": str(exc) or "Bad Request", "errors": exc.errors},
    )


def _rate_limit_handler(_: Request, exc: RateLimitExceeded) -> JSONResponse:
    # Decorator-based slowapi limits answer with the same body as the middleware
    return JSONResponse(
        status_code=429,
        content={"detail": "Too Many Requests", "errors": [f"limit {exc.detail} exceeded"]},
    )


def _storage_error_handler(request: Request, exc: domain_exceptions.StorageError) -> JSONResponse:
    logger.error("storage_failure", path=request.url.path, error=str(exc))
    return JSONResponse(status_code=500, content={"detail": "Storage failure"})


def _unhandled_exception_handler(request: Request, exc: Exception) -> JSONResponse:
    # Hide internal details by default
    logger.error("unhandled_exception", path=request.url.path, exc_info=exc)
    return JSONResponse(status_code=500, content={"detail": "Internal Server Error"})


def _domain_error_handler(status_code: int, default_detail: str):
    def _handler(_: Request, exc: domain_exceptions.DomainError) -> JSONResponse:
        detail = str(exc) or default_detail
        return JSONResponse(status_code=status_code, content={"detail": detail})

    return _handler


def install(app: FastAPI) -> None:
    # Register centralized exception handlers
    app.add_exception_handler(HTTPException, _http_exception_handler)
    app.add_exception_handler(RequestValidationError, _request_validation_handler)
    app.add_exception_handler(domain_exceptions.ValidationError, _domain_validation_handler)
    app.add_exception_handler(
        domain_exceptions.NotFoundError, _domain_error_handler(404, "Not Found")
    )
    app.add_exception_handler(
        domain_exceptions.ConflictError, _domain_error_handler(409, "Conflict")
    )
    app.add_exception_handler(domain_exceptions.StorageError, _storage_error_handler)
    app.add_exception_handler(RateLimitExceeded, _rate_limit_handler)
    app.add_exception_handler(Exception, _unhandled_exception_handler)
