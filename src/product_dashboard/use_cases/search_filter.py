from __future__ import annotations

from collections.abc import Sequence

from product_dashboard.domain.product import Product, is_product_sequence


def filter_products(products: Sequence[Product] | None, term: str | None) -> list[Product]:
    """
    Keep products whose title contains the search term.

    - Case-insensitive substring match (casefold on both sides)
    - Empty or missing term returns every product (identity filter)
    - Products without a title never match a non-empty term
    - Order is preserved
    - Missing or non-sequence input degrades to an empty list

    Args:
        products: Collection to filter
        term: Search text, already trimmed by SearchState

    Returns:
        New list with the matching products
    """
    if not is_product_sequence(products):
        return []

    if not term:
        return list(products)

    needle = term.casefold()
    return [
        product for product in products if product.title and needle in product.title.casefold()
    ]
