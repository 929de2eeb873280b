"""httpx implementation of ProductSource."""

from __future__ import annotations

import logging
import math
from decimal import Decimal
from typing import Any

import httpx

from product_dashboard.domain.errors import FormatFailure, HttpFailure, NetworkFailure
from product_dashboard.domain.product import Category, Product
from product_dashboard.infra.config import api_base_url, request_timeout
from product_dashboard.ports.product_source import ProductSource

logger = logging.getLogger(__name__)

PRODUCTS_PATH = "/products"


class HttpProductSource(ProductSource):
    """
    Fetches the catalog from the remote products API.

    - One GET per fetch_all() call, no retries
    - Transport and other request errors become NetworkFailure
    - Non-2xx responses become HttpFailure
    - Undecodable bodies, or anything but a JSON array of objects with
      integer or string ids, become FormatFailure
    - Converts JSON payloads (infrastructure) to Product (domain)
    """

    def __init__(
        self,
        base_url: str | None = None,
        timeout: float | None = None,
        client: httpx.AsyncClient | None = None,
    ) -> None:
        """
        Initialize the source.

        Args:
            base_url: API root; defaults to the configured catalog URL
            timeout: Transport timeout in seconds; defaults to configuration
            client: Pre-built client (tests inject one with a mock transport)
        """
        self._base_url = (base_url or api_base_url()).rstrip("/")
        self._client = client or httpx.AsyncClient(
            timeout=timeout if timeout is not None else request_timeout()
        )

    @property
    def url(self) -> str:
        return f"{self._base_url}{PRODUCTS_PATH}"

    async def fetch_all(self) -> list[Product]:
        try:
            response = await self._client.get(self.url)
        except httpx.TimeoutException as exc:
            raise NetworkFailure(f"Request to {self.url} timed out", timed_out=True) from exc
        except httpx.TransportError as exc:
            raise NetworkFailure(f"Could not reach {self.url}: {exc}") from exc
        except httpx.DecodingError as exc:
            raise FormatFailure("Response body could not be decoded") from exc
        except httpx.RequestError as exc:
            # Redirect loops and other request-level failures
            raise NetworkFailure(f"Request to {self.url} failed: {exc}") from exc

        if not response.is_success:
            raise HttpFailure(response.status_code)

        try:
            payload = response.json()
        except ValueError as exc:
            raise FormatFailure("Response body is not valid JSON") from exc

        if not isinstance(payload, list):
            raise FormatFailure(
                "Invalid data format received from API",
                received=type(payload).__name__,
            )

        return [self._to_domain(item, index) for index, item in enumerate(payload)]

    async def aclose(self) -> None:
        await self._client.aclose()

    def _to_domain(self, item: Any, index: int) -> Product:
        """
        Convert one JSON element to a Product.

        Unknown fields are ignored; missing optional fields stay None.
        """
        if not isinstance(item, dict) or "id" not in item:
            raise FormatFailure("Product entry is not an object with an id", index=index)

        product_id = item["id"]
        # bool is an int subclass; only integer or string ids identify a product
        if isinstance(product_id, bool) or not isinstance(product_id, (int, str)):
            raise FormatFailure("Product id must be an integer or a string", index=index)

        return Product(
            id=product_id,
            title=_optional_str(item.get("title")),
            price=self._to_price(item.get("price"), product_id),
            description=_optional_str(item.get("description")),
            category=_to_category(item.get("category")),
            images=_to_images(item.get("images")),
        )

    def _to_price(self, value: Any, product_id: Any) -> Decimal | None:
        if value is None:
            return None

        # bool is an int subclass; JSON true/false is never a price
        if isinstance(value, bool) or not isinstance(value, (int, float)):
            logger.warning(
                "Ignoring non-numeric price",
                extra={"product_id": product_id, "price": repr(value)},
            )
            return None

        if isinstance(value, float) and not math.isfinite(value):
            logger.warning(
                "Ignoring non-finite price",
                extra={"product_id": product_id, "price": repr(value)},
            )
            return None

        return Decimal(str(value))


def _optional_str(value: Any) -> str | None:
    return value if isinstance(value, str) else None


def _to_images(value: Any) -> tuple[str, ...]:
    if not isinstance(value, list):
        return ()
    return tuple(url for url in value if isinstance(url, str))


def _to_category(value: Any) -> Category | None:
    if isinstance(value, dict) and isinstance(value.get("name"), str):
        return Category(name=value["name"])
    return None
