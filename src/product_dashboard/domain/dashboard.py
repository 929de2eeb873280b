from __future__ import annotations

from dataclasses import dataclass, field, replace
from enum import Enum

from product_dashboard.domain.product import Product


ALLOWED_PAGE_SIZES = (5, 10, 20)
DEFAULT_PAGE_SIZE = 10


class SortField(str, Enum):
    NONE = "none"
    PRICE = "price"
    TITLE = "title"


class SortDirection(str, Enum):
    ASC = "asc"
    DESC = "desc"


@dataclass(frozen=True, slots=True)
class SearchState:
    term: str = ""

    def with_term(self, text: str | None) -> SearchState:
        """Return a new state holding the trimmed search text."""
        return SearchState(term=(text or "").strip())


@dataclass(frozen=True, slots=True)
class SortState:
    field: SortField = SortField.NONE
    direction: SortDirection = SortDirection.ASC

    def toggled(self, sort_field: SortField) -> SortState:
        """
        Toggle sorting on a field.

        Same field flips the direction; a different field starts ascending.
        """
        if self.field == sort_field:
            direction = SortDirection.DESC if self.direction == SortDirection.ASC else SortDirection.ASC
            return SortState(field=sort_field, direction=direction)
        return SortState(field=sort_field, direction=SortDirection.ASC)


@dataclass(frozen=True, slots=True)
class PageState:
    current_page: int = 1
    page_size: int = DEFAULT_PAGE_SIZE
    total_items: int = 0
    total_pages: int = 0

    def with_totals(self, total_items: int) -> PageState:
        """
        Recompute totals for a collection size and clamp the current page.

        Invariant: 1 <= current_page <= max(total_pages, 1)
        """
        total_pages = -(-total_items // self.page_size)  # ceil
        current_page = min(max(self.current_page, 1), max(total_pages, 1))
        return replace(
            self,
            current_page=current_page,
            total_items=total_items,
            total_pages=total_pages,
        )


@dataclass(frozen=True, slots=True)
class DashboardState:
    """Aggregate of every user-controlled state slice."""

    search: SearchState = field(default_factory=SearchState)
    sort: SortState = field(default_factory=SortState)
    page: PageState = field(default_factory=PageState)


@dataclass(frozen=True, slots=True)
class PaginationControls:
    visible: bool
    first_item: int
    last_item: int
    has_previous: bool
    has_next: bool
    page_window: tuple[int | None, ...]  # None marks an ellipsis
    info: str


@dataclass(frozen=True, slots=True)
class DashboardView:
    """Everything the display needs for one render. Rebuilt on every trigger."""

    visible_page: tuple[Product, ...]
    page_state: PageState
    search_term: str
    sort_state: SortState
    controls: PaginationControls
