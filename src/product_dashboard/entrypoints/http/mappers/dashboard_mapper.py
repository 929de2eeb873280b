from __future__ import annotations

from decimal import Decimal

from product_dashboard.adapters.latest_view_display import DisplaySnapshot
from product_dashboard.domain import messages
from product_dashboard.domain.dashboard import (
    DashboardView,
    SortDirection,
    SortField,
    SortState,
)
from product_dashboard.domain.events import (
    PageSelected,
    PageSizeChanged,
    SearchChanged,
    SortToggled,
)
from product_dashboard.domain.product import Product
from product_dashboard.entrypoints.http.dtos.dashboard import (
    DashboardResponseDTO,
    PageSelectDTO,
    PageSizeSelectDTO,
    PaginationDTO,
    ProductRowDTO,
    SearchInputDTO,
    SortDTO,
    SortToggleDTO,
)


class DashboardMapper:
    """Maps between REST DTOs and dashboard events/views."""

    @staticmethod
    def to_search_event(dto: SearchInputDTO) -> SearchChanged:
        return SearchChanged(text=dto.text)

    @staticmethod
    def to_sort_event(dto: SortToggleDTO) -> SortToggled:
        return SortToggled(field=dto.field)

    @staticmethod
    def to_page_event(dto: PageSelectDTO) -> PageSelected:
        return PageSelected(page=dto.page)

    @staticmethod
    def to_page_size_event(dto: PageSizeSelectDTO) -> PageSizeChanged:
        return PageSizeChanged(page_size=dto.page_size)

    @staticmethod
    def format_price(price: Decimal | None) -> str:
        """
        Render a price for the table.

        Handles Decimal → str conversion at the boundary ("$12.00", or "N/A").
        """
        if price is None:
            return messages.NO_PRICE
        return f"${price:.2f}"

    @staticmethod
    def to_product_row(product: Product) -> ProductRowDTO:
        """
        Converts a domain Product to a table row.

        Missing values are replaced by display placeholders here, never on
        the entity.
        """
        return ProductRowDTO(
            id=product.id,
            title=product.title or messages.UNTITLED_PRODUCT,
            price=DashboardMapper.format_price(product.price),
            description=product.description or messages.NO_DESCRIPTION,
            category=(
                product.category.name
                if product.category and product.category.name
                else messages.UNCATEGORIZED
            ),
            image_url=product.images[0] if product.images else None,
            image_count=len(product.images),
        )

    @staticmethod
    def sort_label(sort_field: SortField, sort_state: SortState) -> str:
        """Button text, with a direction arrow on the active field."""
        base = messages.SORT_BY_PRICE if sort_field == SortField.PRICE else messages.SORT_BY_NAME
        if sort_state.field != sort_field:
            return base
        arrow = messages.ARROW_ASC if sort_state.direction == SortDirection.ASC else messages.ARROW_DESC
        return f"{base} {arrow}"

    @staticmethod
    def to_sort(sort_state: SortState) -> SortDTO:
        return SortDTO(
            field=sort_state.field,
            direction=sort_state.direction,
            price_label=DashboardMapper.sort_label(SortField.PRICE, sort_state),
            name_label=DashboardMapper.sort_label(SortField.TITLE, sort_state),
        )

    @staticmethod
    def to_pagination(view: DashboardView) -> PaginationDTO:
        page = view.page_state
        controls = view.controls
        return PaginationDTO(
            current_page=page.current_page,
            page_size=page.page_size,
            total_items=page.total_items,
            total_pages=page.total_pages,
            visible=controls.visible,
            first_item=controls.first_item,
            last_item=controls.last_item,
            has_previous=controls.has_previous,
            has_next=controls.has_next,
            page_window=list(controls.page_window),
            info=controls.info,
        )

    @staticmethod
    def to_response(snapshot: DisplaySnapshot) -> DashboardResponseDTO:
        """
        Converts the latest published display state to the REST response.

        Loading, idle and error snapshots carry no products.
        """
        view = snapshot.view
        if view is None:
            return DashboardResponseDTO(status=snapshot.status, error=snapshot.error)

        return DashboardResponseDTO(
            status=snapshot.status,
            error=snapshot.error,
            search=view.search_term,
            products=[DashboardMapper.to_product_row(product) for product in view.visible_page],
            pagination=DashboardMapper.to_pagination(view),
            sort=DashboardMapper.to_sort(view.sort_state),
        )
