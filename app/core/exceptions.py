"""Custom exceptions and FastAPI exception handlers.

Every handler answers with the ``{"success": false, "message": ...}``
envelope from ``app.core.responses``.
"""

from typing import Any

from fastapi import FastAPI, Request
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse
from starlette.exceptions import HTTPException as StarletteHTTPException

from app.core.logging import get_logger
from app.core.responses import error_response

logger = get_logger(__name__)


# =============================================================================
# Exception Classes
# =============================================================================


class StorefrontError(Exception):
    """Base exception for storefront application errors.

    All application-specific exceptions should inherit from this class.
    """

    def __init__(
        self,
        message: str,
        code: str = "INTERNAL_ERROR",
        status_code: int = 500,
        details: dict[str, Any] | None = None,
    ) -> None:
        """Initialize application error.

        Args:
            message: Human-readable error message.
            code: Machine-readable error code.
            status_code: HTTP status code.
            details: Additional error context (logged, never returned).
        """
        super().__init__(message)
        self.message = message
        self.code = code
        self.status_code = status_code
        self.details = details or {}


class NotFoundError(StorefrontError):
    """Resource not found error.

    Use when a product, review, coupon or user id does not exist.
    """

    def __init__(
        self,
        message: str = "Resource not found",
        details: dict[str, Any] | None = None,
    ) -> None:
        super().__init__(
            message=message,
            code="NOT_FOUND",
            status_code=404,
            details=details,
        )


class ValidationMissingError(StorefrontError):
    """A required field is absent from the request."""

    def __init__(
        self,
        message: str = "Required field missing",
        details: dict[str, Any] | None = None,
    ) -> None:
        super().__init__(
            message=message,
            code="VALIDATION_MISSING",
            status_code=400,
            details=details,
        )


class BadRequestError(StorefrontError):
    """Bad request error.

    Use when the request is well-formed but refers to something invalid,
    such as an unknown coupon code.
    """

    def __init__(
        self,
        message: str = "Bad request",
        details: dict[str, Any] | None = None,
    ) -> None:
        super().__init__(
            message=message,
            code="BAD_REQUEST",
            status_code=400,
            details=details,
        )


class UnauthorizedError(StorefrontError):
    """Caller could not be identified."""

    def __init__(
        self,
        message: str = "Please login first",
        details: dict[str, Any] | None = None,
    ) -> None:
        super().__init__(
            message=message,
            code="UNAUTHORIZED",
            status_code=401,
            details=details,
        )


class ConflictError(StorefrontError):
    """Resource conflict error.

    Use when an operation conflicts with existing state (e.g., duplicate
    coupon code).
    """

    def __init__(
        self,
        message: str = "Resource conflict",
        details: dict[str, Any] | None = None,
    ) -> None:
        super().__init__(
            message=message,
            code="CONFLICT",
            status_code=409,
            details=details,
        )


class ConfigurationMissingError(StorefrontError):
    """Credentials for an external service are not configured."""

    def __init__(
        self,
        message: str = "Configuration missing",
        details: dict[str, Any] | None = None,
    ) -> None:
        super().__init__(
            message=message,
            code="CONFIGURATION_MISSING",
            status_code=500,
            details=details,
        )


class UpstreamFailureError(StorefrontError):
    """Object storage or payment gateway call failed."""

    def __init__(
        self,
        message: str = "Upstream service failed",
        details: dict[str, Any] | None = None,
    ) -> None:
        super().__init__(
            message=message,
            code="UPSTREAM_FAILURE",
            status_code=500,
            details=details,
        )


class DatabaseError(StorefrontError):
    """Database operation error."""

    def __init__(
        self,
        message: str = "Database operation failed",
        details: dict[str, Any] | None = None,
    ) -> None:
        super().__init__(
            message=message,
            code="DATABASE_ERROR",
            status_code=500,
            details=details,
        )


# =============================================================================
# Exception Handlers
# =============================================================================


async def storefront_exception_handler(
    _request: Request,
    exc: StorefrontError,
) -> JSONResponse:
    """Handle StorefrontError exceptions with the error envelope.

    Args:
        _request: FastAPI request object.
        exc: The raised exception.

    Returns:
        Error envelope response.
    """
    log = logger.error if exc.status_code >= 500 else logger.warning
    log(
        "app.error_handled",
        error=exc.message,
        error_type=type(exc).__name__,
        error_code=exc.code,
        status_code=exc.status_code,
        details=exc.details,
        exc_info=exc.status_code >= 500,
    )

    return error_response(
        status=exc.status_code,
        message=exc.message,
        error_code=exc.code,
    )


async def validation_exception_handler(
    request: Request,
    exc: RequestValidationError,
) -> JSONResponse:
    """Handle request parsing errors as a missing/invalid field (400).

    Args:
        request: FastAPI request object.
        exc: Pydantic validation error.

    Returns:
        Error envelope naming the offending fields.
    """
    fields: list[str] = []
    for error in exc.errors():
        loc = error.get("loc", [])
        fields.append(".".join(str(part) for part in loc if part not in ("body", "query", "path")))

    logger.warning(
        "app.validation_error",
        error_count=len(fields),
        path=str(request.url.path),
        fields=fields,
    )

    return error_response(
        status=400,
        message=f"Invalid or missing field(s): {', '.join(fields)}",
        error_code="VALIDATION_MISSING",
    )


async def http_exception_handler(
    request: Request,
    exc: StarletteHTTPException,
) -> JSONResponse:
    """Wrap framework HTTP errors (unknown route, bad method) in the envelope.

    Args:
        request: FastAPI request object.
        exc: Starlette HTTP exception.

    Returns:
        Error envelope with the original status code.
    """
    logger.info(
        "app.http_error",
        status_code=exc.status_code,
        path=str(request.url.path),
    )

    return error_response(
        status=exc.status_code,
        message=str(exc.detail),
        error_code="NOT_FOUND" if exc.status_code == 404 else "BAD_REQUEST",
    )


async def unhandled_exception_handler(
    request: Request,
    exc: Exception,
) -> JSONResponse:
    """Handle unexpected exceptions.

    Args:
        request: FastAPI request object.
        exc: The raised exception.

    Returns:
        Generic 500 error envelope.
    """
    logger.error(
        "app.unhandled_error",
        error=str(exc),
        error_type=type(exc).__name__,
        path=str(request.url.path),
        exc_info=True,
    )

    return error_response(
        status=500,
        message="Internal Server Error",
        error_code="INTERNAL_ERROR",
    )


# =============================================================================
# Handler Registration
# =============================================================================


def register_exception_handlers(app: FastAPI) -> None:
    """Register exception handlers with FastAPI app.

    Args:
        app: FastAPI application instance.
    """
    app.add_exception_handler(StorefrontError, storefront_exception_handler)  # type: ignore[arg-type]
    app.add_exception_handler(RequestValidationError, validation_exception_handler)  # type: ignore[arg-type]
    app.add_exception_handler(StarletteHTTPException, http_exception_handler)  # type: ignore[arg-type]
    app.add_exception_handler(Exception, unhandled_exception_handler)
