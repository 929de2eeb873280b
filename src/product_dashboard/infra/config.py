from __future__ import annotations

import os


DEFAULT_API_BASE_URL = "https://api.escuelajs.co/api/v1"
DEFAULT_TIMEOUT_SECONDS = 10.0


def api_base_url() -> str:
    url = os.getenv("PRODUCT_API_BASE_URL") or DEFAULT_API_BASE_URL

    return url.rstrip("/")


def request_timeout() -> float:
    raw = os.getenv("PRODUCT_API_TIMEOUT_SECONDS")

    if not raw:
        return DEFAULT_TIMEOUT_SECONDS

    try:
        timeout = float(raw)
    except ValueError:
        raise RuntimeError("PRODUCT_API_TIMEOUT_SECONDS must be a number") from None

    if not timeout > 0:  # also rejects NaN
        raise RuntimeError("PRODUCT_API_TIMEOUT_SECONDS must be > 0")

    return timeout
