from __future__ import annotations

import logging
from dataclasses import replace

from product_dashboard.domain import messages
from product_dashboard.domain.dashboard import (
    DashboardState,
    DashboardView,
    SortField,
)
from product_dashboard.domain.errors import (
    FetchInProgressError,
    ProductSourceError,
    ValidationError,
)
from product_dashboard.domain.events import (
    DashboardEvent,
    PageSelected,
    PageSizeChanged,
    Recompute,
    SearchChanged,
    SortToggled,
    Transition,
)
from product_dashboard.domain.product import Product
from product_dashboard.ports.display import Display
from product_dashboard.ports.product_source import ProductSource
from product_dashboard.use_cases.paginator import (
    change_page_size,
    get_paged_data,
    go_to_page,
    pagination_controls,
)
from product_dashboard.use_cases.search_filter import filter_products
from product_dashboard.use_cases.sort_engine import apply_sorting

logger = logging.getLogger(__name__)


def reduce(state: DashboardState, event: DashboardEvent) -> Transition:
    """
    Apply one UI event to the dashboard state.

    Routing:
    - SearchChanged, SortToggled → FULL (filter → sort → paginate)
    - PageSizeChanged → FULL when accepted; slice boundaries shift, so the
      chain restarts from page 1 against the full sorted collection
    - PageSelected → SLICE when accepted; the sorted collection is unchanged
    - Rejected page or page size → NONE, state returned as-is

    Raises:
        ValidationError: If a sort toggle targets the NONE field
        TypeError: If the event is not a known dashboard event
    """
    if isinstance(event, SearchChanged):
        return Transition(
            state=replace(state, search=state.search.with_term(event.text)),
            recompute=Recompute.FULL,
        )

    if isinstance(event, SortToggled):
        if event.field == SortField.NONE:
            raise ValidationError(
                errors=[
                    {
                        "field": "field",
                        "message": "Must be one of: price, title",
                        "code": "INVALID_SORT_FIELD",
                    }
                ]
            )
        return Transition(
            state=replace(state, sort=state.sort.toggled(event.field)),
            recompute=Recompute.FULL,
        )

    if isinstance(event, PageSelected):
        page = go_to_page(state.page, event.page)
        if page is state.page:
            return Transition(state=state, recompute=Recompute.NONE)
        return Transition(state=replace(state, page=page), recompute=Recompute.SLICE)

    if isinstance(event, PageSizeChanged):
        page = change_page_size(state.page, event.page_size)
        if page is state.page:
            return Transition(state=state, recompute=Recompute.NONE)
        return Transition(state=replace(state, page=page), recompute=Recompute.FULL)

    raise TypeError(f"Unknown dashboard event: {type(event).__name__}")


class DashboardController:
    """
    Owns the product collection and the filter/sort/page configuration.

    The visible page is always rebuilt from (raw products, state); nothing
    derived is patched incrementally. State changes go through dispatch()
    only.
    """

    def __init__(
        self,
        product_source: ProductSource,
        display: Display,
        state: DashboardState | None = None,
    ) -> None:
        """
        Initialize controller with its collaborators.

        Args:
            product_source: Where the catalog is fetched from
            display: Render collaborator that receives every published view
            state: Starting state (defaults: no search, unsorted, page 1 of 10)
        """
        self._source = product_source
        self._display = display
        self._state = state or DashboardState()
        self._raw_products: tuple[Product, ...] = ()
        self._sorted_products: list[Product] = []
        self._view: DashboardView | None = None
        self._fetch_in_flight = False

    @property
    def state(self) -> DashboardState:
        return self._state

    @property
    def raw_products(self) -> tuple[Product, ...]:
        return self._raw_products

    @property
    def sorted_products(self) -> list[Product]:
        return list(self._sorted_products)

    @property
    def fetch_in_flight(self) -> bool:
        return self._fetch_in_flight

    def current_view(self) -> DashboardView | None:
        """Latest published view, None before the first render or after a failed load."""
        return self._view

    # ==========================================================================
    # Loading
    # ==========================================================================

    async def init(self) -> None:
        """
        Fetch the catalog and render the first page.

        Failures are classified into one display message (the generic one for
        errors no adapter classified); the collection is left empty so no
        stale products are shown. Only an overlapping call raises.

        Raises:
            FetchInProgressError: If a previous init() has not finished
        """
        # Checked and set before the first await: no other task can interleave
        if self._fetch_in_flight:
            logger.warning("Product fetch refused, another fetch is in flight")
            raise FetchInProgressError()

        self._fetch_in_flight = True
        try:
            self._display.clear_error()
            self._display.show_loading()

            logger.info("Fetching products")
            try:
                products = await self._source.fetch_all()
            except ProductSourceError as exc:
                logger.error(
                    "Dashboard initialization failed",
                    extra={"error_code": exc.error_code, "detail": exc.message},
                )
                self._fail(messages.fetch_error_message(exc))
                return
            except Exception:
                logger.exception("Dashboard initialization failed unexpectedly")
                self._fail(messages.GENERIC_FETCH_ERROR)
                return

            self._raw_products = tuple(products)
            logger.info("Products loaded", extra={"count": len(self._raw_products)})
            self.apply_filters()
        finally:
            self._fetch_in_flight = False

    def _fail(self, message: str) -> None:
        """Drop every loaded product and show the error instead of a page."""
        self._raw_products = ()
        self._sorted_products = []
        self._view = None
        self._display.show_error(message)

    # ==========================================================================
    # Events
    # ==========================================================================

    def dispatch(self, event: DashboardEvent) -> Recompute:
        """Apply an event and run exactly the part of the chain it needs."""
        transition = reduce(self._state, event)
        self._state = transition.state

        if transition.recompute == Recompute.FULL:
            self.apply_filters()
        elif transition.recompute == Recompute.SLICE:
            self.update_display()

        return transition.recompute

    def on_search_input(self, text: str) -> Recompute:
        return self.dispatch(SearchChanged(text=text))

    def on_sort_toggle(self, field: SortField) -> Recompute:
        return self.dispatch(SortToggled(field=field))

    def on_page_select(self, page: int) -> Recompute:
        return self.dispatch(PageSelected(page=page))

    def on_page_size_select(self, page_size: int) -> Recompute:
        return self.dispatch(PageSizeChanged(page_size=page_size))

    # ==========================================================================
    # Pipeline
    # ==========================================================================

    def apply_filters(self) -> DashboardView:
        """Full recompute: filter → sort from raw products, then paginate."""
        term = self._state.search.term
        filtered = filter_products(self._raw_products, term)
        if term:
            logger.info(
                "Search filter applied",
                extra={"term": term, "results": len(filtered)},
            )

        sort_state = self._state.sort
        self._sorted_products = apply_sorting(filtered, sort_state)
        if sort_state.field != SortField.NONE:
            logger.info(
                "Sort applied",
                extra={"field": sort_state.field.value, "direction": sort_state.direction.value},
            )

        return self.update_display()

    def update_display(self) -> DashboardView:
        """Slice-only: paginate the current sorted collection and publish it."""
        paged = get_paged_data(self._sorted_products, self._state.page)
        self._state = replace(self._state, page=paged.page_state)

        view = DashboardView(
            visible_page=tuple(paged.items),
            page_state=paged.page_state,
            search_term=self._state.search.term,
            sort_state=self._state.sort,
            controls=pagination_controls(paged.page_state),
        )
        self._view = view
        self._display.show_page(view)

        logger.info(
            "Display updated",
            extra={
                "shown": len(view.visible_page),
                "page": paged.page_state.current_page,
                "total_pages": paged.page_state.total_pages,
                "total_items": paged.page_state.total_items,
            },
        )
        return view
