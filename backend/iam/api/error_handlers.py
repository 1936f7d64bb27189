"""Error Handlers — global exception handlers for the IAM API.

Invariants:
    - IamError -> its http_status and error envelope
    - RequestValidationError -> 400 with field-level details
    - Starlette HTTPException (404, 405, ...) -> its status, envelope code HTTP_ERROR
    - Exception (catch-all) -> 500, never leaks internal details

Design Decisions:
    - Four-layer handler: domain, validation, HTTP, catch-all
    - Extracted from main.py to keep the app module small
"""

import logging

from fastapi import FastAPI, Request, status
from fastapi.responses import JSONResponse
from fastapi.exceptions import RequestValidationError
from starlette.exceptions import HTTPException as StarletteHTTPException

from iam.api.responses import respond_error
from iam.core.domain_types import ErrorCode
from iam.core.errors import IamError

logger = logging.getLogger(__name__)


def register_error_handlers(app: FastAPI) -> None:
    """Register all global error handlers on the FastAPI app."""
    _register_iam_error_handler(app)
    _register_validation_error_handler(app)
    _register_http_error_handler(app)
    _register_generic_error_handler(app)


def _register_iam_error_handler(app: FastAPI) -> None:
    """Register IAM domain/infrastructure error handler."""

    @app.exception_handler(IamError)
    async def iam_error_handler(request: Request, exc: IamError):
        """Handle all IAM domain/infrastructure errors."""
        logger.error(
            f"IamError: {exc.message}",
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
        """Handle Pydantic validation errors."""
        logger.warning(
            f"Validation error on {request.url.path}: {exc.errors()}",
        )
        return respond_error(
            status.HTTP_400_BAD_REQUEST,
            ErrorCode.VALIDATION_ERROR.value,
            "Invalid request data",
            _build_validation_details(exc),
        )


def _register_http_error_handler(app: FastAPI) -> None:
    """Register routing/HTTP error handler."""

    @app.exception_handler(StarletteHTTPException)
    async def http_error_handler(
        request: Request, exc: StarletteHTTPException,
    ):
        logger.info(
            f"HTTP {exc.status_code} on {request.url.path}",
            extra={"path": request.url.path, "status_code": exc.status_code},
        )
        response = respond_error(
            exc.status_code, ErrorCode.HTTP_ERROR.value, str(exc.detail),
        )
        if exc.headers:
            response.headers.update(exc.headers)
        return response


def _register_generic_error_handler(app: FastAPI) -> None:
    """Register catch-all error handler."""

    @app.exception_handler(Exception)
    async def generic_error_handler(request: Request, exc: Exception):
        """Catch-all — never leaks internal details."""
        logger.error(
            f"Unhandled exception on {request.url.path}: {exc}",
            exc_info=True,
        )
        return respond_error(
            status.HTTP_500_INTERNAL_SERVER_ERROR,
            ErrorCode.INTERNAL_ERROR.value,
            "An unexpected error occurred",
        )


def _build_validation_details(exc: RequestValidationError) -> list[dict]:
    """Build field-level validation details."""
    return [
        {
            "field": ".".join(str(loc) for loc in e["loc"]),
            "message": e["msg"],
            "type": e["type"],
        }
        for e in exc.errors()
    ]
