"""Domain error classes.

Protocol-agnostic errors that represent dashboard failures.
Fetch failures are classified once here; protocol adapters translate
the rest (HTTP status codes, display messages).
"""

from typing import Any


class DomainError(Exception):
    """Base class for all domain errors.

    Protocol-agnostic. Contains error information that can be translated
    to HTTP responses or to a display message.
    """

    # Default error code (can be used as i18n key)
    error_code: str = "DOMAIN_ERROR"

    def __init__(self, message: str, **context: Any) -> None:
        """Create a domain error.

        Args:
            message: Human-readable error message (default locale)
            **context: Additional context for error (e.g., field names, values)
        """
        self.message = message
        self.context = context
        super().__init__(message)

    def to_dict(self) -> dict[str, Any]:
        """Convert to structured format for protocol translation."""
        return {
            "message": self.message,
            "code": self.error_code,
            **self.context,
        }


class ValidationError(DomainError):
    """Invalid input that passed the protocol layer.

    Examples:
        - Toggling sort on the "none" field

    Protocol mappings:
        - REST: 422 Unprocessable Entity
    """

    error_code: str = "VALIDATION_ERROR"

    def __init__(
        self,
        message: str | None = None,
        errors: list[dict[str, str]] | None = None,
        **context: Any,
    ) -> None:
        """Create a validation error.

        Args:
            message: Overall validation error message (optional if errors provided)
            errors: List of field-specific errors, each with 'field' and 'message'
                   Example: [{"field": "field", "message": "Must be price or title"}]
            **context: Additional context
        """
        self.errors: list[dict[str, str]] | None
        if errors:
            self.errors = errors
            msg = message or "Validation failed"
        else:
            self.errors = None
            msg = message or "Validation error"

        super().__init__(msg, **context)

    def to_dict(self) -> dict[str, Any]:
        """Convert to structured format."""
        if self.errors:
            return {
                "message": self.message,
                "code": self.error_code,
                "errors": self.errors,
                **self.context,
            }
        return super().to_dict()


class ConflictError(DomainError):
    """Operation conflicts with the current state.

    Protocol mappings:
        - REST: 409 Conflict
    """

    error_code: str = "CONFLICT"


class FetchInProgressError(ConflictError):
    """Raised when a catalog load is requested while one is still pending."""

    def __init__(self) -> None:
        super().__init__("A product fetch is already in progress")


# ==============================================================================
# Product Source Failures
# ==============================================================================


class ProductSourceError(DomainError):
    """Base class for failures while fetching the product catalog.

    All subclasses are terminal for the current fetch attempt: no retry is
    made and the collection is left empty.
    """

    error_code: str = "PRODUCT_SOURCE_ERROR"


class NetworkFailure(ProductSourceError):
    """The catalog API could not be reached (connectivity, DNS, timeout)."""

    error_code: str = "NETWORK_UNAVAILABLE"

    def __init__(self, message: str = "Catalog API unreachable", *, timed_out: bool = False) -> None:
        self.timed_out = timed_out
        super().__init__(message, timed_out=timed_out)


class HttpFailure(ProductSourceError):
    """The catalog API responded with a non-success status code.

    The error code follows the status category:
        - >= 500: SERVER_ERROR
        - 400-499: CLIENT_ERROR
        - anything else: HTTP_ERROR
    """

    def __init__(self, status_code: int) -> None:
        self.status_code = status_code
        super().__init__(f"HTTP error! status: {status_code}", status_code=status_code)

    @property
    def category(self) -> str:
        if self.status_code >= 500:
            return "server"
        if self.status_code >= 400:
            return "client"
        return "other"

    @property
    def error_code(self) -> str:  # type: ignore[override]
        return {
            "server": "SERVER_ERROR",
            "client": "CLIENT_ERROR",
        }.get(self.category, "HTTP_ERROR")


class FormatFailure(ProductSourceError):
    """The response body is not a valid product sequence."""

    error_code: str = "INVALID_FORMAT"

    def __init__(self, message: str = "Invalid data format received from API", **context: Any) -> None:
        super().__init__(message, **context)
