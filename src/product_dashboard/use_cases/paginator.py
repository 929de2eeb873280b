"""
Page slicing over an ordered collection.

Every operation is a pure function of PageState: callers keep the returned
state. go_to_page() and change_page_size() return the *same* state object
when the request is rejected, so `new is old` tells a no-op apart from a
real page change.
"""

from __future__ import annotations

from collections.abc import Sequence
from dataclasses import dataclass, replace

from product_dashboard.domain import messages
from product_dashboard.domain.dashboard import ALLOWED_PAGE_SIZES, PageState, PaginationControls
from product_dashboard.domain.product import Product, is_product_sequence


MAX_VISIBLE_PAGES = 5


@dataclass(frozen=True, slots=True)
class PagedData:
    items: list[Product]
    page_state: PageState


def get_paged_data(collection: Sequence[Product] | None, page_state: PageState) -> PagedData:
    """
    Slice the current page out of a collection.

    Recomputes total_items/total_pages from the collection, clamps
    current_page into [1, max(total_pages, 1)], then returns
    collection[(page - 1) * size : page * size].

    Args:
        collection: Filtered and sorted products
        page_state: Current paging configuration

    Returns:
        PagedData with the page items and the recomputed PageState
    """
    items = list(collection) if is_product_sequence(collection) else []

    state = page_state.with_totals(len(items))
    start = (state.current_page - 1) * state.page_size
    end = start + state.page_size

    return PagedData(items=items[start:end], page_state=state)


def go_to_page(page_state: PageState, page: int) -> PageState:
    """Select a page. Pages outside [1, total_pages] leave the state unchanged."""
    if page < 1 or page > page_state.total_pages:
        return page_state

    return replace(page_state, current_page=page)


def change_page_size(page_state: PageState, page_size: int) -> PageState:
    """
    Change the page size and restart from page 1.

    Sizes outside ALLOWED_PAGE_SIZES leave the state unchanged. Totals are
    left stale on purpose: the caller must re-run the full chain, which
    recomputes them.
    """
    if page_size not in ALLOWED_PAGE_SIZES:
        return page_state

    return replace(page_state, page_size=page_size, current_page=1)


def pagination_controls(page_state: PageState) -> PaginationControls:
    """
    Describe the pagination bar for a page state.

    Hidden when there is nothing to page through (no items or one page).
    """
    total = page_state.total_items
    current = page_state.current_page

    if total == 0:
        first_item, last_item = 0, 0
    else:
        first_item = (current - 1) * page_state.page_size + 1
        last_item = min(current * page_state.page_size, total)

    return PaginationControls(
        visible=total > 0 and page_state.total_pages > 1,
        first_item=first_item,
        last_item=last_item,
        has_previous=current > 1,
        has_next=current < page_state.total_pages,
        page_window=page_window(current, page_state.total_pages),
        info=messages.PAGINATION_INFO.format(
            first=first_item,
            last=last_item,
            total=total,
            current=current,
            pages=page_state.total_pages,
        ),
    )


def page_window(
    current_page: int, total_pages: int, max_visible: int = MAX_VISIBLE_PAGES
) -> tuple[int | None, ...]:
    """
    Page numbers to offer as buttons, None standing for an ellipsis.

    Example (current=6, total=12): (1, None, 4, 5, 6, 7, 8, None, 12)
    """
    if total_pages <= 0:
        return ()

    start = max(1, current_page - max_visible // 2)
    end = min(total_pages, start + max_visible - 1)

    # Near the end the window shifts left to stay full
    if end - start + 1 < max_visible:
        start = max(1, end - max_visible + 1)

    window: list[int | None] = []

    if start > 1:
        window.append(1)
        if start > 2:
            window.append(None)

    window.extend(range(start, end + 1))

    if end < total_pages:
        if end < total_pages - 1:
            window.append(None)
        window.append(total_pages)

    return tuple(window)
