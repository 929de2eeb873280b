from pydantic import BaseModel, ConfigDict, Field

from product_dashboard.adapters.latest_view_display import DisplayStatus
from product_dashboard.domain.dashboard import SortDirection, SortField


# ==============================================================================
# Requests (UI events)
# ==============================================================================


class SearchInputDTO(BaseModel):
    """Search box content; trimmed by the domain."""

    text: str = Field(
        default="",
        description="Case-insensitive substring matched against product titles",
        examples=["shirt"],
    )


class SortToggleDTO(BaseModel):
    """Sort button press. Same field twice flips the direction."""

    field: SortField = Field(
        description="Field to sort by: price or title",
        examples=["price"],
    )


class PageSelectDTO(BaseModel):
    """Page button press. Pages outside the current range are ignored."""

    page: int = Field(
        description="1-based page number",
        examples=[2],
    )


class PageSizeSelectDTO(BaseModel):
    """Page size selector change. Only 5, 10 and 20 are applied."""

    page_size: int = Field(
        description="Items per page (5, 10 or 20)",
        examples=[20],
    )


# ==============================================================================
# Response (published view)
# ==============================================================================


class ProductRowDTO(BaseModel):
    id: int | str
    title: str
    price: str
    description: str
    category: str
    image_url: str | None = None
    image_count: int = 0


class PaginationDTO(BaseModel):
    current_page: int
    page_size: int
    total_items: int
    total_pages: int
    visible: bool
    first_item: int
    last_item: int
    has_previous: bool
    has_next: bool
    page_window: list[int | None] = Field(
        description="Page buttons to show; null marks an ellipsis",
    )
    info: str


class SortDTO(BaseModel):
    field: SortField
    direction: SortDirection
    price_label: str
    name_label: str


class DashboardResponseDTO(BaseModel):
    status: DisplayStatus
    error: str | None = None
    search: str = ""
    products: list[ProductRowDTO] = Field(default_factory=list)
    pagination: PaginationDTO | None = None
    sort: SortDTO | None = None

    model_config = ConfigDict(
        json_schema_extra={
            "example": {
                "status": "ready",
                "error": None,
                "search": "shirt",
                "products": [
                    {
                        "id": 4,
                        "title": "Classic Grey Hooded Sweatshirt",
                        "price": "$90.00",
                        "description": "Elevate your casual wear with our Classic Grey Hooded Sweatshirt.",
                        "category": "Clothes",
                        "image_url": "https://i.imgur.com/R2PN9Wq.jpeg",
                        "image_count": 3,
                    }
                ],
                "pagination": {
                    "current_page": 1,
                    "page_size": 10,
                    "total_items": 1,
                    "total_pages": 1,
                    "visible": False,
                    "first_item": 1,
                    "last_item": 1,
                    "has_previous": False,
                    "has_next": False,
                    "page_window": [1],
                    "info": "Showing 1-1 of 1 products (Page 1/1)",
                },
                "sort": {
                    "field": "price",
                    "direction": "desc",
                    "price_label": "Sort by price ↓",
                    "name_label": "Sort by name",
                },
            }
        }
    )
