from __future__ import annotations

from collections.abc import Sequence
from dataclasses import dataclass, field
from decimal import Decimal


@dataclass(frozen=True, slots=True)
class Category:
    name: str


@dataclass(frozen=True, slots=True)
class Product:
    """A single catalog entry.

    Optional fields are None when the API omitted them; the pipeline never
    fills in defaults on the entity itself.
    """

    id: int | str
    title: str | None = None
    price: Decimal | None = None  # Decimal only, no floats past the boundary
    description: str | None = None
    category: Category | None = None
    images: tuple[str, ...] = field(default_factory=tuple)


def is_product_sequence(value: object) -> bool:
    """True for list/tuple-like collections; pipeline steps treat anything else as empty."""
    return isinstance(value, Sequence) and not isinstance(value, (str, bytes))
