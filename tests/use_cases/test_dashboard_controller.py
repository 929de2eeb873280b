"""
Test suite for the dashboard controller.

Verifies:
- reduce() routes each event to FULL, SLICE or NONE recompute
- dispatch() re-runs exactly the part of the chain the event needs
- init() loads, publishes loading/page/error to the display and guards
  against overlapping fetches
- End-to-end search → sort → paginate behaviour
"""

from __future__ import annotations

import asyncio
from decimal import Decimal
from unittest.mock import Mock, patch

import pytest

from product_dashboard.adapters.in_memory_product_source import InMemoryProductSource
from product_dashboard.adapters.latest_view_display import DisplayStatus, LatestViewDisplay
from product_dashboard.domain import messages
from product_dashboard.domain.dashboard import (
    DashboardState,
    DashboardView,
    PageState,
    SearchState,
    SortDirection,
    SortField,
    SortState,
)
from product_dashboard.domain.errors import (
    FetchInProgressError,
    FormatFailure,
    HttpFailure,
    NetworkFailure,
    ValidationError,
)
from product_dashboard.domain.events import (
    PageSelected,
    PageSizeChanged,
    Recompute,
    SearchChanged,
    SortToggled,
)
from product_dashboard.domain.product import Product
from product_dashboard.ports.display import Display
from product_dashboard.ports.product_source import ProductSource
from product_dashboard.use_cases.dashboard_controller import DashboardController, reduce


SHIRT_TITLES = {
    3: "Classic Red Shirt",
    8: "Oversized sweatSHIRT",
    14: "Linen Shirt",
    21: "Shirt Dress",
}


def _catalog() -> list[Product]:
    """25 products; exactly 4 have "shirt" in the title."""
    products = []
    for i in range(25):
        title = SHIRT_TITLES.get(i, f"Item {i:02d}")
        products.append(Product(id=i, title=title, price=Decimal(i * 7 % 40)))
    return products


@pytest.fixture()
def catalog() -> list[Product]:
    return _catalog()


@pytest.fixture()
def display() -> Mock:
    return Mock(spec=Display)


@pytest.fixture()
def loaded_controller(catalog: list[Product], display: Mock) -> DashboardController:
    controller = DashboardController(InMemoryProductSource(catalog), display)
    asyncio.run(controller.init())
    display.reset_mock()
    return controller


def _last_view(display: Mock) -> DashboardView:
    return display.show_page.call_args.args[0]


# ==============================================================================
# reduce() - Pure Event Routing
# ==============================================================================


def test_reduce_search_is_full_recompute_with_trimmed_term() -> None:
    transition = reduce(DashboardState(), SearchChanged(text="  shirt "))

    assert transition.recompute == Recompute.FULL
    assert transition.state.search.term == "shirt"


def test_reduce_sort_toggle_is_full_recompute() -> None:
    transition = reduce(DashboardState(), SortToggled(field=SortField.PRICE))

    assert transition.recompute == Recompute.FULL
    assert transition.state.sort == SortState(field=SortField.PRICE, direction=SortDirection.ASC)


def test_reduce_sort_toggle_none_is_rejected() -> None:
    with pytest.raises(ValidationError):
        reduce(DashboardState(), SortToggled(field=SortField.NONE))


def test_reduce_valid_page_is_slice_only() -> None:
    state = DashboardState(page=PageState(total_items=23, total_pages=3))

    transition = reduce(state, PageSelected(page=2))

    assert transition.recompute == Recompute.SLICE
    assert transition.state.page.current_page == 2


@pytest.mark.parametrize("page", [0, 4])
def test_reduce_out_of_range_page_is_noop(page: int) -> None:
    state = DashboardState(page=PageState(total_items=23, total_pages=3))

    transition = reduce(state, PageSelected(page=page))

    assert transition.recompute == Recompute.NONE
    assert transition.state is state


def test_reduce_page_size_is_full_recompute_from_page_one() -> None:
    state = DashboardState(page=PageState(current_page=3, total_items=23, total_pages=3))

    transition = reduce(state, PageSizeChanged(page_size=5))

    assert transition.recompute == Recompute.FULL
    assert transition.state.page.page_size == 5
    assert transition.state.page.current_page == 1


def test_reduce_invalid_page_size_is_noop() -> None:
    state = DashboardState()

    transition = reduce(state, PageSizeChanged(page_size=7))

    assert transition.recompute == Recompute.NONE
    assert transition.state is state


def test_reduce_does_not_mutate_input_state() -> None:
    state = DashboardState()

    reduce(state, SearchChanged(text="shirt"))

    assert state.search == SearchState()


def test_reduce_unknown_event_raises() -> None:
    with pytest.raises(TypeError):
        reduce(DashboardState(), object())  # type: ignore[arg-type]


# ==============================================================================
# dispatch() - Which Triggers Re-run the Full Chain
# ==============================================================================


def test_page_select_only_reslices(loaded_controller: DashboardController) -> None:
    with patch.object(
        loaded_controller, "apply_filters", wraps=loaded_controller.apply_filters
    ) as apply_filters, patch.object(
        loaded_controller, "update_display", wraps=loaded_controller.update_display
    ) as update_display:
        result = loaded_controller.on_page_select(2)

    assert result == Recompute.SLICE
    apply_filters.assert_not_called()
    update_display.assert_called_once()


@pytest.mark.parametrize(
    "trigger",
    [
        lambda c: c.on_search_input("shirt"),
        lambda c: c.on_sort_toggle(SortField.TITLE),
        lambda c: c.on_page_size_select(20),
    ],
    ids=["search", "sort", "page-size"],
)
def test_full_recompute_triggers(loaded_controller: DashboardController, trigger) -> None:
    with patch.object(
        loaded_controller, "apply_filters", wraps=loaded_controller.apply_filters
    ) as apply_filters:
        result = trigger(loaded_controller)

    assert result == Recompute.FULL
    apply_filters.assert_called_once()


def test_rejected_events_publish_nothing(
    loaded_controller: DashboardController, display: Mock
) -> None:
    assert loaded_controller.on_page_select(99) == Recompute.NONE
    assert loaded_controller.on_page_size_select(3) == Recompute.NONE

    display.show_page.assert_not_called()


def test_page_select_shows_next_slice(
    loaded_controller: DashboardController, display: Mock, catalog: list[Product]
) -> None:
    loaded_controller.on_page_select(3)

    view = _last_view(display)
    assert list(view.visible_page) == catalog[20:25]
    assert view.page_state.current_page == 3


def test_page_size_change_restarts_from_first_page(
    loaded_controller: DashboardController, display: Mock, catalog: list[Product]
) -> None:
    loaded_controller.on_page_select(3)

    loaded_controller.on_page_size_select(5)

    view = _last_view(display)
    assert view.page_state.current_page == 1
    assert view.page_state.total_pages == 5
    assert list(view.visible_page) == catalog[0:5]


def test_search_clamps_current_page(
    loaded_controller: DashboardController, display: Mock
) -> None:
    loaded_controller.on_page_select(3)

    loaded_controller.on_search_input("shirt")

    view = _last_view(display)
    assert view.page_state.current_page == 1
    assert view.page_state.total_pages == 1


def test_clearing_search_restores_full_collection(
    loaded_controller: DashboardController, display: Mock
) -> None:
    loaded_controller.on_search_input("shirt")
    loaded_controller.on_search_input("   ")

    view = _last_view(display)
    assert view.search_term == ""
    assert view.page_state.total_items == 25


def test_sort_toggle_twice_sorts_descending(
    loaded_controller: DashboardController, display: Mock
) -> None:
    loaded_controller.on_sort_toggle(SortField.PRICE)
    loaded_controller.on_sort_toggle(SortField.PRICE)

    view = _last_view(display)
    prices = [product.price for product in loaded_controller.sorted_products]
    assert view.sort_state == SortState(field=SortField.PRICE, direction=SortDirection.DESC)
    assert prices == sorted(prices, reverse=True)


def test_raw_products_never_reordered(
    loaded_controller: DashboardController, catalog: list[Product]
) -> None:
    loaded_controller.on_sort_toggle(SortField.TITLE)
    loaded_controller.on_search_input("item")

    assert list(loaded_controller.raw_products) == catalog


# ==============================================================================
# init() - Loading
# ==============================================================================


def test_init_publishes_loading_then_first_page(catalog: list[Product], display: Mock) -> None:
    controller = DashboardController(InMemoryProductSource(catalog), display)

    asyncio.run(controller.init())

    method_names = [name for name, _, _ in display.method_calls]
    assert method_names == ["clear_error", "show_loading", "show_page"]
    view = _last_view(display)
    assert len(view.visible_page) == 10
    assert view.page_state.total_items == 25
    assert view.page_state.total_pages == 3
    assert controller.current_view() is view


def test_init_keeps_current_settings(catalog: list[Product], display: Mock) -> None:
    state = DashboardState(search=SearchState(term="shirt"))
    controller = DashboardController(InMemoryProductSource(catalog), display, state=state)

    asyncio.run(controller.init())

    assert _last_view(display).page_state.total_items == 4


def test_init_fetches_once() -> None:
    source = InMemoryProductSource(_catalog())
    controller = DashboardController(source, Mock(spec=Display))

    asyncio.run(controller.init())

    assert source.fetch_count == 1


@pytest.mark.parametrize(
    ("failure", "message"),
    [
        (HttpFailure(503), messages.SERVER_ERROR),
        (HttpFailure(404), messages.CLIENT_ERROR),
        (NetworkFailure(), messages.NETWORK_UNAVAILABLE),
        (NetworkFailure(timed_out=True), messages.REQUEST_TIMED_OUT),
        (FormatFailure(), messages.INVALID_FORMAT),
    ],
)
def test_init_failure_shows_classified_message(failure, message: str, display: Mock) -> None:
    source = InMemoryProductSource(failure=failure)
    controller = DashboardController(source, display)

    asyncio.run(controller.init())

    display.show_error.assert_called_once_with(message)
    display.show_page.assert_not_called()
    assert controller.raw_products == ()
    assert source.fetch_count == 1  # no retry


def test_init_failure_after_success_drops_stale_products(
    catalog: list[Product], display: Mock
) -> None:
    source = InMemoryProductSource(catalog)
    controller = DashboardController(source, display)
    asyncio.run(controller.init())

    source._failure = HttpFailure(500)
    asyncio.run(controller.init())

    assert controller.raw_products == ()
    assert controller.sorted_products == []
    assert controller.current_view() is None


def test_http_503_end_to_end(display: Mock) -> None:
    """Fetch returning 503 → server error shown, loading replaced, collection empty."""
    controller = DashboardController(InMemoryProductSource(failure=HttpFailure(503)), display)

    asyncio.run(controller.init())

    method_names = [name for name, _, _ in display.method_calls]
    assert method_names == ["clear_error", "show_loading", "show_error"]
    display.show_error.assert_called_once_with(messages.SERVER_ERROR)
    assert controller.raw_products == ()
    assert controller.fetch_in_flight is False


def test_overlapping_init_is_refused(catalog: list[Product], display: Mock) -> None:
    class SlowSource(ProductSource):
        def __init__(self) -> None:
            self.release = asyncio.Event()
            self.fetch_count = 0

        async def fetch_all(self) -> list[Product]:
            self.fetch_count += 1
            await self.release.wait()
            return catalog

    async def run() -> None:
        source = SlowSource()
        controller = DashboardController(source, display)

        first = asyncio.create_task(controller.init())
        await asyncio.sleep(0)
        assert controller.fetch_in_flight is True

        with pytest.raises(FetchInProgressError):
            await controller.init()

        source.release.set()
        await first

        assert source.fetch_count == 1
        assert controller.fetch_in_flight is False
        assert len(controller.raw_products) == 25

    asyncio.run(run())


def test_unclassified_error_shows_generic_message(catalog: list[Product]) -> None:
    """An error no adapter classified still ends in the error view, never stuck loading."""
    display = LatestViewDisplay()
    source = Mock(spec=ProductSource)
    source.fetch_all.side_effect = [catalog, RuntimeError("boom")]
    controller = DashboardController(source, display)
    asyncio.run(controller.init())

    asyncio.run(controller.init())

    snapshot = display.snapshot()
    assert snapshot.status == DisplayStatus.ERROR
    assert snapshot.error == messages.GENERIC_FETCH_ERROR
    assert controller.raw_products == ()
    assert controller.sorted_products == []
    assert controller.current_view() is None
    assert controller.fetch_in_flight is False


# ==============================================================================
# End-to-End Pipeline
# ==============================================================================


def test_search_sort_paginate_end_to_end(catalog: list[Product], display: Mock) -> None:
    """25 products, "shirt" matches 4 → price desc → page size 10 → one short page."""
    controller = DashboardController(InMemoryProductSource(catalog), display)
    asyncio.run(controller.init())

    controller.dispatch(SearchChanged(text="shirt"))
    controller.dispatch(SortToggled(field=SortField.PRICE))
    controller.dispatch(SortToggled(field=SortField.PRICE))
    controller.dispatch(PageSizeChanged(page_size=10))

    view = _last_view(display)
    prices = [product.price for product in view.visible_page]

    assert len(view.visible_page) == 4
    assert all("shirt" in product.title.lower() for product in view.visible_page)  # type: ignore[union-attr]
    assert prices == sorted(prices, reverse=True)
    assert view.page_state.total_pages == 1
    assert view.controls.visible is False


def test_events_before_load_render_empty_page(display: Mock) -> None:
    controller = DashboardController(InMemoryProductSource(), display)

    controller.on_search_input("shirt")

    view = _last_view(display)
    assert view.visible_page == ()
    assert view.page_state.total_pages == 0
    assert view.page_state.current_page == 1
    assert view.controls.visible is False
