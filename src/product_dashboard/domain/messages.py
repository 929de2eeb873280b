"""Literal display strings."""

from __future__ import annotations

from product_dashboard.domain.errors import (
    FormatFailure,
    HttpFailure,
    NetworkFailure,
    ProductSourceError,
)


LOADING = "Loading products..."
NO_RESULTS = "No products found"

GENERIC_FETCH_ERROR = "An error occurred while loading product data."
NETWORK_UNAVAILABLE = "Unable to connect to the server. Please check your internet connection."
REQUEST_TIMED_OUT = "The request was cancelled because it timed out."
SERVER_ERROR = "Server error. Please try again later."
CLIENT_ERROR = "Invalid request. Please try again."
INVALID_FORMAT = "Invalid data received from the server."

UNTITLED_PRODUCT = "Untitled Product"
NO_PRICE = "N/A"
NO_DESCRIPTION = "No description available"
UNCATEGORIZED = "Uncategorized"

SORT_BY_PRICE = "Sort by price"
SORT_BY_NAME = "Sort by name"
ARROW_ASC = "↑"
ARROW_DESC = "↓"

PAGINATION_INFO = "Showing {first}-{last} of {total} products (Page {current}/{pages})"


def fetch_error_message(error: ProductSourceError) -> str:
    """Classify a fetch failure into the single message shown to the user."""
    if isinstance(error, NetworkFailure):
        return REQUEST_TIMED_OUT if error.timed_out else NETWORK_UNAVAILABLE
    if isinstance(error, HttpFailure):
        if error.category == "server":
            return SERVER_ERROR
        if error.category == "client":
            return CLIENT_ERROR
        return GENERIC_FETCH_ERROR
    if isinstance(error, FormatFailure):
        return INVALID_FORMAT
    return GENERIC_FETCH_ERROR
