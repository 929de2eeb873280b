from __future__ import annotations

import unicodedata
from collections.abc import Sequence
from decimal import Decimal

from product_dashboard.domain.dashboard import SortDirection, SortField, SortState
from product_dashboard.domain.product import Product, is_product_sequence


ZERO = Decimal("0")


def sort_by_price(
    products: Sequence[Product] | None, direction: SortDirection = SortDirection.ASC
) -> list[Product]:
    """
    Sort products by price. Missing prices compare as 0.

    Stable in both directions: sorted(reverse=True) keeps equal-price items
    in their original relative order.
    """
    if not is_product_sequence(products):
        return []

    return sorted(
        products,
        key=_price_key,
        reverse=direction == SortDirection.DESC,
    )


def sort_by_name(
    products: Sequence[Product] | None, direction: SortDirection = SortDirection.ASC
) -> list[Product]:
    """
    Sort products alphabetically by title. Missing titles compare as "".

    Comparison is case-insensitive, with accented letters ordered next to
    their base letter ("é" sorts with "e", after it on a tie).
    """
    if not is_product_sequence(products):
        return []

    return sorted(
        products,
        key=_title_key,
        reverse=direction == SortDirection.DESC,
    )


def apply_sorting(products: Sequence[Product] | None, sort_state: SortState) -> list[Product]:
    """Dispatch to the sort matching the current SortState (unsorted for NONE)."""
    if not is_product_sequence(products):
        return []

    if sort_state.field == SortField.PRICE:
        return sort_by_price(products, sort_state.direction)
    if sort_state.field == SortField.TITLE:
        return sort_by_name(products, sort_state.direction)

    return list(products)


def _price_key(product: Product) -> Decimal:
    return product.price if product.price is not None else ZERO


def _title_key(product: Product) -> tuple[str, str]:
    folded = unicodedata.normalize("NFKD", (product.title or "").casefold())
    base = "".join(char for char in folded if not unicodedata.combining(char))
    return base, folded
