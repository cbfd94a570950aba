"""
Exception Handlers.

FastAPI exception handlers that convert application exceptions to the
relay error body `{error, details?, code}`. All exceptions are logged
at the backend boundary before the response is written.

Usage:
    from invoice_relay.backend.core.exception_handlers import register_exception_handlers

    app = FastAPI()
    register_exception_handlers(app)
"""

from fastapi import FastAPI, Request
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse

from invoice_relay.backend.core.exceptions import (
    ApplicationError,
    ConfigurationError,
    PayloadTooLargeError,
    ProviderResponseError,
    ProviderUnavailableError,
    ValidationError,
)
from invoice_relay.backend.core.logging import get_logger
from invoice_relay.backend.schemas.relay import RelayErrorResponse

logger = get_logger(__name__)

# Map exception types to HTTP status codes
EXCEPTION_STATUS_MAP: dict[type[ApplicationError], int] = {
    ValidationError: 400,
    PayloadTooLargeError: 413,
    ConfigurationError: 500,
    ProviderResponseError: 500,
    ProviderUnavailableError: 500,
}


def _get_request_id(request: Request) -> str | None:
    """Extract request ID from request state or headers."""
    if hasattr(request.state, "request_id"):
        return request.state.request_id
    return request.headers.get("x-request-id")


def _detailed_errors_enabled() -> bool:
    from invoice_relay.backend.core.config import get_app_config

    return get_app_config().features.api_detailed_errors


def _error_response(status_code: int, body: RelayErrorResponse) -> JSONResponse:
    return JSONResponse(
        status_code=status_code,
        content=body.model_dump(mode="json", exclude_none=True),
    )


async def application_error_handler(
    request: Request,
    exc: ApplicationError,
) -> JSONResponse:
    """
    Handle all ApplicationError subclasses.

    Provider errors carry their details (the provider description or the
    raw response text) into the body; other errors carry only the message.
    """
    status_code = EXCEPTION_STATUS_MAP.get(type(exc), 500)
    request_id = _get_request_id(request)

    details = exc.details if isinstance(exc, ProviderResponseError) else None

    log_extra = {
        "code": exc.code,
        "message": exc.message,
        "status": status_code,
        "path": request.url.path,
        "method": request.method,
    }
    if details:
        log_extra["details"] = details
    if request_id:
        log_extra["request_id"] = request_id

    if status_code >= 500:
        logger.error("Server error", extra=log_extra)
    else:
        logger.warning("Client error", extra=log_extra)

    return _error_response(
        status_code,
        RelayErrorResponse(error=exc.message, details=details or None, code=exc.code),
    )


async def validation_error_handler(
    request: Request,
    exc: RequestValidationError,
) -> JSONResponse:
    """
    Handle FastAPI request validation errors (malformed multipart bodies).

    Reported as a client error with the field problems joined into details.
    """
    request_id = _get_request_id(request)

    errors = exc.errors()
    details = "; ".join(
        f"{'.'.join(str(loc) for loc in err.get('loc', []))}: {err.get('msg', 'invalid')}"
        for err in errors
    )

    logger.warning(
        "Request validation failed",
        extra={
            "path": request.url.path,
            "method": request.method,
            "error_count": len(errors),
            "request_id": request_id,
        },
    )

    return _error_response(
        400,
        RelayErrorResponse(
            error="Request validation failed",
            details=details or None,
            code="VAL_REQUEST_INVALID",
        ),
    )


async def unhandled_exception_handler(
    request: Request,
    exc: Exception,
) -> JSONResponse:
    """
    Handle unexpected exceptions.

    Catches all unhandled exceptions and returns a generic error
    response. The exception type is only exposed when
    features.yaml enables api_detailed_errors.
    """
    request_id = _get_request_id(request)

    logger.exception(
        "Unhandled exception",
        extra={
            "path": request.url.path,
            "method": request.method,
            "exception_type": type(exc).__name__,
            "request_id": request_id,
        },
    )

    return _error_response(
        500,
        RelayErrorResponse(
            error="An unexpected error occurred",
            details=type(exc).__name__ if _detailed_errors_enabled() else None,
            code="SYS_INTERNAL_ERROR",
        ),
    )


def register_exception_handlers(app: FastAPI) -> None:
    """
    Register all exception handlers with the FastAPI app.

    Args:
        app: FastAPI application instance
    """
    app.add_exception_handler(ApplicationError, application_error_handler)
    app.add_exception_handler(RequestValidationError, validation_error_handler)
    app.add_exception_handler(Exception, unhandled_exception_handler)

    logger.debug("Exception handlers registered")
