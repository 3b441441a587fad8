"""
FastAPI exception handlers for structured error responses.

Maps relay exceptions to appropriate HTTP status codes. Every error body
carries an `error` key: a fixed message, or the upstream body for
passthrough errors.
"""

from datetime import datetime, timezone
from typing import Any

import structlog
from fastapi import Request, status
from fastapi.encoders import jsonable_encoder
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse

from sentiment_relay.monitoring.metrics import relay_requests_total
from sentiment_relay.relay.exceptions import (
    InvalidInputError,
    MisconfigurationError,
    NetworkFailureError,
    RelayError,
    UpstreamError,
    UpstreamTimeoutError,
)

logger = structlog.get_logger(__name__)


INVALID_TEXT_MESSAGE = "Invalid text"
SERVER_ERROR_MESSAGE = "Server error"


def _error_content(error: Any, **extra: Any) -> dict:
    return {
        "error": error,
        **extra,
        "timestamp": datetime.now(timezone.utc).isoformat(),
    }


def _endpoint_name(request: Request) -> str:
    return request.url.path.rstrip("/").rsplit("/", 1)[-1] or "root"


async def invalid_input_handler(request: Request, exc: InvalidInputError) -> JSONResponse:
    """
    Handle missing, empty or non-string text.
    
    Maps to 400 Bad Request (client error).
    """
    logger.warning("Invalid input", reason=exc.message, details=exc.details)
    
    return JSONResponse(
        status_code=status.HTTP_400_BAD_REQUEST,
        content=_error_content(INVALID_TEXT_MESSAGE),
    )


async def request_validation_error_handler(
    request: Request, exc: RequestValidationError
) -> JSONResponse:
    """
    Handle request body validation failures.
    
    A body without a usable `text` field is the same client error as
    InvalidInputError, so it gets the same 400 response instead of
    FastAPI's default 422.
    """
    relay_requests_total.labels(endpoint=_endpoint_name(request), status="invalid_input").inc()
    logger.warning("Invalid request body", errors=jsonable_encoder(exc.errors()))
    
    return JSONResponse(
        status_code=status.HTTP_400_BAD_REQUEST,
        content=_error_content(INVALID_TEXT_MESSAGE),
    )


async def misconfiguration_handler(request: Request, exc: MisconfigurationError) -> JSONResponse:
    """
    Handle missing server configuration.
    
    Maps to 500 Internal Server Error (not user-actionable).
    """
    logger.error("Relay misconfigured", error=exc.message)
    
    return JSONResponse(
        status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
        content=_error_content(exc.message),
    )


async def upstream_error_handler(request: Request, exc: UpstreamError) -> JSONResponse:
    """
    Forward an inference endpoint error.
    
    Keeps the upstream status code and wraps the upstream body as `error`.
    """
    logger.warning(
        "Upstream error forwarded",
        status_code=exc.status_code,
        details=exc.details,
    )
    
    return JSONResponse(
        status_code=exc.status_code or status.HTTP_500_INTERNAL_SERVER_ERROR,
        content=_error_content(jsonable_encoder(exc.body)),
    )


async def upstream_timeout_handler(request: Request, exc: UpstreamTimeoutError) -> JSONResponse:
    """
    Handle an inference call that missed its deadline.
    
    Maps to 504 Gateway Timeout.
    """
    logger.error("Upstream timeout", details=exc.details)
    
    return JSONResponse(
        status_code=status.HTTP_504_GATEWAY_TIMEOUT,
        content=_error_content(exc.message),
    )


async def network_failure_handler(request: Request, exc: NetworkFailureError) -> JSONResponse:
    """
    Handle transport-level failures reaching the inference endpoint.
    
    Maps to 500 with the failure message in `details`.
    """
    logger.error("Upstream network failure", error=exc.message, details=exc.details)
    
    return JSONResponse(
        status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
        content=_error_content(SERVER_ERROR_MESSAGE, details=exc.message),
    )


async def relay_error_handler(request: Request, exc: RelayError) -> JSONResponse:
    """Handle relay errors without a more specific handler."""
    logger.error("Relay error", error_type=type(exc).__name__, error=exc.message)
    
    return JSONResponse(
        status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
        content=_error_content(SERVER_ERROR_MESSAGE, details=exc.message),
    )


async def generic_error_handler(request: Request, exc: Exception) -> JSONResponse:
    """
    Handle unexpected errors.
    
    Maps to 500 Internal Server Error.
    """
    logger.exception("Unexpected error", error_type=type(exc).__name__)
    
    return JSONResponse(
        status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
        content=_error_content(SERVER_ERROR_MESSAGE),
    )


# Exception handler mapping for FastAPI app.add_exception_handler()
EXCEPTION_HANDLERS = {
    InvalidInputError: invalid_input_handler,
    RequestValidationError: request_validation_error_handler,
    MisconfigurationError: misconfiguration_handler,
    UpstreamError: upstream_error_handler,
    UpstreamTimeoutError: upstream_timeout_handler,
    NetworkFailureError: network_failure_handler,
    RelayError: relay_error_handler,
    Exception: generic_error_handler,
}
