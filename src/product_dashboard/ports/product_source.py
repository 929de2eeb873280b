from __future__ import annotations

from abc import ABC, abstractmethod

from product_dashboard.domain.product import Product


class ProductSource(ABC):
    """
    Port for retrieving the product catalog.

    Contract:
        - fetch_all() issues exactly one request per call (no retries)
        - Failures are raised as ProductSourceError subclasses
          (NetworkFailure, HttpFailure, FormatFailure), never as transport
          library exceptions
    """

    @abstractmethod
    async def fetch_all(self) -> list[Product]:
        """
        Fetch every product in the catalog.

        Returns:
            Products in the order the API returned them

        Raises:
            NetworkFailure: If the API could not be reached
            HttpFailure: If the API answered with a non-success status
            FormatFailure: If the body is not a product sequence
        """
        ...

    async def aclose(self) -> None:
        """Release transport resources. No-op by default."""
        return None
