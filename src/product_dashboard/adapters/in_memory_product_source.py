from __future__ import annotations

from product_dashboard.domain.errors import ProductSourceError
from product_dashboard.domain.product import Product
from product_dashboard.ports.product_source import ProductSource


class InMemoryProductSource(ProductSource):
    """
    Canonical contract implementation for tests and offline use.

    - Returns products in insertion order
    - Raises the configured failure instead, when one is given
    - Counts fetches so callers can assert no retry happened
    """

    def __init__(
        self,
        products: list[Product] | None = None,
        failure: ProductSourceError | None = None,
    ) -> None:
        self._products = list(products or [])
        self._failure = failure
        self.fetch_count = 0

    async def fetch_all(self) -> list[Product]:
        self.fetch_count += 1

        if self._failure is not None:
            raise self._failure

        return list(self._products)
