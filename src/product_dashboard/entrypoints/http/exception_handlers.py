"""FastAPI exception handlers for domain errors.

Translates domain errors to HTTP responses with a structured error format.
"""

import logging
from typing import Any

from fastapi import FastAPI, Request, status
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse

from product_dashboard.domain.errors import DomainError

logger = logging.getLogger(__name__)


# Fetch failures never reach a route: init() reports them in the view
DOMAIN_STATUS_CODES: dict[str, int] = {
    "VALIDATION_ERROR": 422,  # HTTP_422_UNPROCESSABLE_CONTENT
    "CONFLICT": status.HTTP_409_CONFLICT,
}


async def handle_domain_error(request: Request, exc: DomainError) -> JSONResponse:
    """Translate a dashboard domain error into a structured response.

    - VALIDATION_ERROR → 422 (sort toggle on "none")
    - CONFLICT → 409 (reload while a fetch is in flight)
    - Other → 400 Bad Request
    """
    error_dict = exc.to_dict()
    status_code = DOMAIN_STATUS_CODES.get(exc.error_code, status.HTTP_400_BAD_REQUEST)

    # LogRecord reserves "message", so the text goes under "detail"
    logger.info(
        "Dashboard request rejected",
        extra={
            "error_code": exc.error_code,
            "detail": exc.message,
            "status_code": status_code,
            "path": request.url.path,
        },
    )

    response_content: dict[str, Any] = {
        "detail": exc.message,
        "code": exc.error_code,
    }
    if "errors" in error_dict:
        response_content["errors"] = error_dict["errors"]

    return JSONResponse(status_code=status_code, content=response_content)


async def handle_request_validation_error(
    request: Request, exc: RequestValidationError
) -> JSONResponse:
    """Handle FastAPI/Pydantic validation errors.

    Examples:
        - page="abc" (not an integer)
        - field="brand" (not a sortable field)
        - Missing request body

    Args:
        request: FastAPI request object
        exc: Pydantic validation error

    Returns:
        JSON response with 422 status and structured errors
    """
    errors = []

    for error in exc.errors():
        # Drop the 'body' and 'query' prefixes from the location
        field_path = ".".join(str(loc) for loc in error["loc"] if loc not in ("body", "query"))

        errors.append(
            {
                "field": field_path,
                "message": error["msg"],
                "code": error["type"],
            }
        )

    logger.info(
        "Request validation error",
        extra={
            "errors": errors,
            "path": request.url.path,
            "method": request.method,
        },
    )

    return JSONResponse(
        status_code=422,  # HTTP_422_UNPROCESSABLE_CONTENT
        content={
            "detail": "Invalid request parameters",
            "code": "VALIDATION_ERROR",
            "errors": errors,
        },
    )


async def handle_unexpected_error(request: Request, exc: Exception) -> JSONResponse:
    """Catch-all handler for unexpected errors.

    Always logged with full traceback for investigation.

    Args:
        request: FastAPI request object
        exc: Unexpected exception

    Returns:
        JSON response with 500 status and generic error message
    """
    logger.error(
        "Unexpected error occurred",
        exc_info=exc,
        extra={
            "error_type": type(exc).__name__,
            "detail": str(exc),
            "path": request.url.path,
            "method": request.method,
        },
    )

    return JSONResponse(
        status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
        content={
            "detail": "An unexpected error occurred",
            "code": "INTERNAL_ERROR",
        },
    )


def register_exception_handlers(app: FastAPI) -> None:
    """Register all exception handlers with FastAPI app.

    This should be called once during app initialization.

    Args:
        app: FastAPI application instance
    """
    app.add_exception_handler(DomainError, handle_domain_error)  # type: ignore[arg-type]
    app.add_exception_handler(RequestValidationError, handle_request_validation_error)  # type: ignore[arg-type]
    app.add_exception_handler(Exception, handle_unexpected_error)

    logger.info("Exception handlers registered successfully")
