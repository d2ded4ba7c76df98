"""Error Handlers - global exception handlers mapping failures to XRPC error envelopes.

Invariants:
    - AnchorError -> {"error": code, "message": message} with the error's HTTP status
    - RequestValidationError (bad JSON, bad query params) -> 400 InvalidRequest
    - Unknown route -> 404 NotFound; wrong HTTP method -> 405 MethodNotAllowed
    - Exception (catch-all) -> 500 InternalServerError, never leaks internal details

Design Decisions:
    - Four-layer handler: domain (AnchorError), validation (Pydantic), routing
      (Starlette HTTPException), catch-all (Exception)
    - Extracted from main.py to keep the entry point small
"""

import logging

from fastapi import FastAPI, Request, status
from fastapi.responses import JSONResponse
from fastapi.exceptions import RequestValidationError
from starlette.exceptions import HTTPException as StarletteHTTPException

from anchor_pds.core.errors import AnchorError, ErrorSeverity, NotFoundError

logger = logging.getLogger(__name__)


def register_error_handlers(app: FastAPI) -> None:
    """Register all global error handlers on the FastAPI app."""
    _register_anchor_error_handler(app)
    _register_validation_error_handler(app)
    _register_http_error_handler(app)
    _register_generic_error_handler(app)


def _register_anchor_error_handler(app: FastAPI) -> None:
    """Register Anchor domain/infrastructure error handler."""

    @app.exception_handler(AnchorError)
    async def anchor_error_handler(request: Request, exc: AnchorError):
        """Handle all Anchor domain/infrastructure errors."""
        log = logger.error if exc.severity == ErrorSeverity.CRITICAL else logger.info
        log(
            f"AnchorError: {exc.message}",
            extra={"error_code": exc.code, "path": request.url.path},
        )
        return JSONResponse(
            status_code=exc.http_status, content=exc.to_response(),
        )


def _register_validation_error_handler(app: FastAPI) -> None:
    """Register Pydantic validation error handler."""

    @app.exception_handler(RequestValidationError)
    async def validation_error_handler(
        request: Request, exc: RequestValidationError,
    ):
        """Handle Pydantic validation errors as InvalidRequest."""
        logger.info(
            f"Validation error on {request.url.path}: {exc.errors()}",
        )
        return JSONResponse(
            status_code=status.HTTP_400_BAD_REQUEST,
            content={
                "error": "InvalidRequest",
                "message": _summarize_validation_errors(exc),
            },
        )


def _register_http_error_handler(app: FastAPI) -> None:
    """Register routing error handler (unknown path, wrong method)."""

    @app.exception_handler(StarletteHTTPException)
    async def http_error_handler(
        request: Request, exc: StarletteHTTPException,
    ):
        if exc.status_code == status.HTTP_404_NOT_FOUND:
            content = NotFoundError().to_response()
        elif exc.status_code == status.HTTP_405_METHOD_NOT_ALLOWED:
            content = {
                "error": "MethodNotAllowed",
                "message": f"Method {request.method} not allowed",
            }
        else:
            content = {"error": "InvalidRequest", "message": str(exc.detail)}
        return JSONResponse(
            status_code=exc.status_code, content=content, headers=exc.headers,
        )


def _register_generic_error_handler(app: FastAPI) -> None:
    """Register catch-all error handler."""

    @app.exception_handler(Exception)
    async def generic_error_handler(request: Request, exc: Exception):
        """Catch-all - never leaks internal details."""
        logger.error(
            f"Unhandled exception on {request.url.path}: {exc}",
            exc_info=True,
        )
        return JSONResponse(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            content={
                "error": "InternalServerError",
                "message": "An unexpected error occurred",
            },
        )


def _summarize_validation_errors(exc: RequestValidationError) -> str:
    """One-line summary: "field: message; field: message"."""
    parts = []
    for e in exc.errors():
        field = ".".join(str(loc) for loc in e["loc"] if loc not in ("body", "query"))
        parts.append(f"{field}: {e['msg']}" if field else e["msg"])
    return "; ".join(parts) or "Invalid request"
